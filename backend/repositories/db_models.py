"""
Database models using SQLAlchemy 2.0 style with Mapped type hints.

Usernames are the identity used across communities, reports and
notifications, so membership and report rows reference users by username.
"""

import enum
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import (
    Boolean,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from repositories.database import Base


class MemberRole(str, enum.Enum):
    """Set a username belongs to within a community."""

    PARTICIPANT = "participant"
    MODERATOR = "moderator"
    BANNED = "banned"


class ReportCategory(str, enum.Enum):
    """Reasons for reporting a member."""

    SPAM = "spam"
    HARASSMENT = "harassment"
    INAPPROPRIATE = "inappropriate"
    OTHER = "other"


class ReportStatus(str, enum.Enum):
    """Status of a member report."""

    PENDING = "pending"
    REVIEWED = "reviewed"
    DISMISSED = "dismissed"


class NotificationType(str, enum.Enum):
    """Notification category; decides which unread flag a delivery sets."""

    COMMUNITY = "community"
    MESSAGE = "message"
    BAN = "ban"
    OTHER = "other"

    @property
    def unread_flag(self) -> str | None:
        """Name of the User column flipped on delivery, if any."""
        return _UNREAD_FLAGS.get(self)


_UNREAD_FLAGS = {
    NotificationType.COMMUNITY: "community_notifs",
    NotificationType.MESSAGE: "message_notifs",
}


def _utc_now() -> datetime:
    """Return current UTC datetime (timezone-aware)."""
    return datetime.now(timezone.utc)


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    username: Mapped[str] = mapped_column(
        String(50), unique=True, index=True, nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utc_now)

    # Unread notification flags, cleared when the user opens the matching inbox
    community_notifs: Mapped[bool] = mapped_column(
        Boolean, default=False, nullable=False
    )
    message_notifs: Mapped[bool] = mapped_column(
        Boolean, default=False, nullable=False
    )


class Community(Base):
    __tablename__ = "communities"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    description: Mapped[str] = mapped_column(Text, default="", nullable=False)
    admin: Mapped[str] = mapped_column(String(50), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utc_now)

    members: Mapped[List["CommunityMember"]] = relationship(
        "CommunityMember",
        back_populates="community",
        cascade="all, delete-orphan",
    )
    reports: Mapped[List["Report"]] = relationship(
        "Report", back_populates="community"
    )

    def _usernames(self, role: MemberRole) -> list[str]:
        return sorted(m.username for m in self.members if m.role == role)

    @property
    def participants(self) -> list[str]:
        return self._usernames(MemberRole.PARTICIPANT)

    @property
    def moderators(self) -> list[str]:
        return self._usernames(MemberRole.MODERATOR)

    @property
    def banned(self) -> list[str]:
        return self._usernames(MemberRole.BANNED)


class CommunityMember(Base):
    """
    One username in one of a community's sets.

    Unique per (community_id, username, role), so inserting an existing row
    behaves like adding to a set.
    """

    __tablename__ = "community_members"
    __table_args__ = (
        UniqueConstraint(
            "community_id", "username", "role", name="uq_community_member_role"
        ),
        Index("ix_community_members_lookup", "community_id", "username"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    community_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("communities.id", ondelete="CASCADE"), nullable=False
    )
    username: Mapped[str] = mapped_column(String(50), nullable=False)
    role: Mapped[MemberRole] = mapped_column(Enum(MemberRole), nullable=False)
    added_at: Mapped[datetime] = mapped_column(DateTime, default=_utc_now)

    community: Mapped["Community"] = relationship(
        "Community", back_populates="members"
    )


class Report(Base):
    """
    A member's complaint against another member of the same community.

    Reports are unique per (community_id, reporter_user, reported_user) and are
    never deleted; moderators only change their status.
    """

    __tablename__ = "reports"
    __table_args__ = (
        UniqueConstraint(
            "community_id",
            "reporter_user",
            "reported_user",
            name="uq_report_community_reporter_reported",
        ),
        Index("ix_reports_reported", "community_id", "reported_user"),
        Index("ix_reports_status", "community_id", "status"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    community_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("communities.id"), nullable=False
    )
    reported_user: Mapped[str] = mapped_column(String(50), nullable=False)
    reporter_user: Mapped[str] = mapped_column(String(50), nullable=False)
    reason: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[ReportCategory] = mapped_column(
        Enum(ReportCategory), nullable=False
    )
    status: Mapped[ReportStatus] = mapped_column(
        Enum(ReportStatus), default=ReportStatus.PENDING, nullable=False
    )
    reviewed_by: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    reviewed_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utc_now)

    community: Mapped["Community"] = relationship(
        "Community", back_populates="reports"
    )


class Notification(Base):
    """
    An immutable notification record.

    Delivery does not link users to the record; it only flips the recipients'
    unread flags for the notification's type.
    """

    __tablename__ = "notifications"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    msg: Mapped[str] = mapped_column(Text, nullable=False)
    date_time: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    sender: Mapped[str] = mapped_column(String(50), nullable=False)
    context_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    type: Mapped[NotificationType] = mapped_column(
        Enum(NotificationType), nullable=False
    )
