"""
Report-driven auto-moderation.

Once enough distinct members have reported someone in a community, that
member is banned from it. The ban is the authoritative action; telling the
banned user and the community staff about it is best-effort and never undoes
or fails the ban.
"""

from typing import Any

from loguru import logger
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from core.realtime import NotificationEmitter
from models.config import settings
from models.schemas import AutoBanResult, NotificationCreate, NotificationResponse
from repositories.community_repository import CommunityRepository
from repositories.db_models import Notification, NotificationType
from repositories.report_repository import ReportRepository
from services.notification_service import NotificationService

ALREADY_BANNED_REASON = "User is already banned in this community"
PROTECTED_MEMBER_REASON = "Cannot auto-ban community admins or moderators"
NOTIFICATION_EVENT = "notification"


class AutoBanService:
    """Evaluates report volume and applies community bans."""

    @staticmethod
    def check_and_apply_auto_ban(
        db: Session,
        community_id: int,
        reported_user: str,
        emitter: NotificationEmitter | None = None,
    ) -> AutoBanResult:
        """
        Ban a member once enough distinct members have reported them.

        Never raises: database failures come back as `error` on the result.

        Args:
            db: Database session
            community_id: Community the reports were filed in
            reported_user: Username being evaluated
            emitter: Realtime channel for pushing ban notifications

        Returns:
            AutoBanResult describing what happened
        """
        report_repo = ReportRepository(db)
        community_repo = CommunityRepository(db)

        try:
            report_count = report_repo.count_distinct_reporters(
                community_id, reported_user
            )
            if report_count < settings.AUTO_BAN_THRESHOLD:
                return AutoBanResult(banned=False)

            community = community_repo.get_by_id(community_id)
            if community is None:
                return AutoBanResult(banned=False, error="Community not found")

            if reported_user in community.banned:
                return AutoBanResult(banned=False, reason=ALREADY_BANNED_REASON)

            if reported_user == community.admin or reported_user in community.moderators:
                return AutoBanResult(banned=False, reason=PROTECTED_MEMBER_REASON)

            community_name = community.name
            staff = [community.admin] + [
                m for m in community.moderators if m != community.admin
            ]

            community_repo.apply_ban(community_id, reported_user)
        except IntegrityError:
            # Another request banned the same user first
            db.rollback()
            return AutoBanResult(banned=False, reason=ALREADY_BANNED_REASON)
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(
                f"Auto-ban check for {reported_user} in community {community_id} "
                f"failed: {e!r}"
            )
            return AutoBanResult(banned=False, error=f"Error checking auto-ban: {e}")

        logger.info(
            f"Auto-banned {reported_user} from community {community_id} "
            f"after {report_count} distinct reports"
        )

        AutoBanService._notify(
            db,
            recipients=[reported_user],
            payload=NotificationCreate(
                title=f"Banned from {community_name}",
                msg=(
                    f"You have been automatically banned from {community_name} "
                    f"after being reported by {report_count} members."
                ),
                sender=settings.SYSTEM_SENDER,
                context_id=community_id,
                type=NotificationType.COMMUNITY,
            ),
            emitter=emitter,
        )
        AutoBanService._notify(
            db,
            recipients=staff,
            payload=NotificationCreate(
                title=f"Member auto-banned in {community_name}",
                msg=(
                    f"{reported_user} was automatically banned from {community_name} "
                    f"after {report_count} reports."
                ),
                sender=settings.SYSTEM_SENDER,
                context_id=community_id,
                type=NotificationType.COMMUNITY,
            ),
            emitter=emitter,
        )

        return AutoBanResult(banned=True, report_count=report_count)

    @staticmethod
    def _notify(
        db: Session,
        recipients: list[str],
        payload: NotificationCreate,
        emitter: NotificationEmitter | None,
    ) -> None:
        """Send one audience its notification; failures are logged and dropped."""
        try:
            notification = NotificationService.send_notification(
                db, recipients, payload
            )
            if emitter is not None:
                AutoBanService._push(emitter, recipients, notification)
        except Exception as e:
            logger.warning(
                f"Auto-ban notification '{payload.title}' to {recipients} "
                f"not delivered: {e!r}"
            )

    @staticmethod
    def _push(
        emitter: NotificationEmitter,
        recipients: list[str],
        notification: Notification,
    ) -> None:
        data: dict[str, Any] = NotificationResponse.model_validate(
            notification
        ).model_dump(mode="json")
        for username in recipients:
            session_id = emitter.session_for(username)
            if session_id:
                emitter.emit(session_id, NOTIFICATION_EVENT, data)
