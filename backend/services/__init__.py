"""
Services layer for business logic.

This package contains service modules that encapsulate business logic
separate from the API routes.
"""

from .auto_ban_service import AutoBanService
from .community_service import CommunityService
from .notification_service import NotificationService
from .report_service import ReportCreationResult, ReportService
from .user_service import UserService

__all__ = [
    "AutoBanService",
    "CommunityService",
    "NotificationService",
    "ReportCreationResult",
    "ReportService",
    "UserService",
]
