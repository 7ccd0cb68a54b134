from datetime import datetime, timezone
from typing import Annotated, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from repositories.db_models import (
    NotificationType,
    ReportCategory,
    ReportStatus,
)

Username = Annotated[str, Field(min_length=1, max_length=50)]


# User Schemas
class UserCreate(BaseModel):
    username: Username


class UserResponse(BaseModel):
    id: int
    username: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UnreadFlags(BaseModel):
    """Per-category unread notification flags of a user."""

    username: str
    community_notifs: bool
    message_notifs: bool

    model_config = ConfigDict(from_attributes=True)


class MarkReadRequest(BaseModel):
    type: NotificationType


# Community Schemas
class CommunityCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: str = Field("", max_length=2000)
    admin: Username


class CommunityResponse(BaseModel):
    id: int
    name: str
    description: str
    admin: str
    participants: List[str]
    moderators: List[str]
    banned: List[str]
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class MembershipRequest(BaseModel):
    community_id: int
    username: Username


class ModeratorRequest(BaseModel):
    community_id: int
    username: Username
    requested_by: Username


# ============================================================================
# Report Schemas
# ============================================================================


class ReportCreate(BaseModel):
    """Schema for reporting a community member."""

    community_id: int
    reported_user: Username
    reporter_user: Username
    reason: str = Field(..., min_length=1, max_length=1000)
    category: ReportCategory


class ReportResponse(BaseModel):
    id: int
    community_id: int
    reported_user: str
    reporter_user: str
    reason: str
    category: ReportCategory
    status: ReportStatus
    reviewed_by: Optional[str] = None
    reviewed_at: Optional[datetime] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AutoBanResult(BaseModel):
    """
    Outcome of an auto-ban evaluation.

    `reason` explains a deliberate non-ban, `error` an evaluation that could
    not complete. Both are None when the threshold was not reached.
    """

    banned: bool
    report_count: Optional[int] = None
    reason: Optional[str] = None
    error: Optional[str] = None


class ReportCreateResponse(BaseModel):
    report: ReportResponse
    auto_ban: AutoBanResult


class ReportsByUserRequest(BaseModel):
    community_id: int
    username: Username


class ReportStatusUpdate(BaseModel):
    """Schema for a moderator reviewing a report."""

    report_id: int
    status: ReportStatus
    reviewed_by: Username

    @field_validator("status")
    @classmethod
    def status_must_be_review_outcome(cls, v: ReportStatus) -> ReportStatus:
        if v == ReportStatus.PENDING:
            raise ValueError("status must be 'reviewed' or 'dismissed'")
        return v


# ============================================================================
# Notification Schemas
# ============================================================================


class NotificationCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    msg: str = Field(..., min_length=1)
    sender: Username
    date_time: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    context_id: Optional[int] = None
    type: NotificationType = NotificationType.OTHER


class NotificationResponse(BaseModel):
    id: int
    title: str
    msg: str
    sender: str
    date_time: datetime
    context_id: Optional[int] = None
    type: NotificationType

    model_config = ConfigDict(from_attributes=True)


class SendNotificationRequest(BaseModel):
    recipients: List[str] = Field(..., min_length=1)
    notification: NotificationCreate
