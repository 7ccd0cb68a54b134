"""
Repository pattern implementation for data access layer.
"""

from .base import BaseRepository
from .community_repository import CommunityRepository
from .notification_repository import NotificationRepository
from .report_repository import ReportRepository
from .user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "CommunityRepository",
    "NotificationRepository",
    "ReportRepository",
    "UserRepository",
]
