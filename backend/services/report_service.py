"""
Service for member report business logic.
"""

from dataclasses import dataclass
from datetime import datetime, timezone

from loguru import logger
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from core.realtime import NotificationEmitter
from models.exceptions import (
    CommunityNotFoundException,
    DuplicateReportException,
    InternalServiceException,
    InvalidReportStatusException,
    NotCommunityMemberException,
    ReportNotFoundException,
    SelfReportException,
)
from models.schemas import AutoBanResult
from repositories.community_repository import CommunityRepository
from repositories.db_models import MemberRole, Report, ReportCategory, ReportStatus
from repositories.report_repository import ReportRepository
from services.auto_ban_service import AutoBanService


@dataclass
class ReportCreationResult:
    """A newly filed report and the auto-ban evaluation it triggered."""

    report: Report
    auto_ban: AutoBanResult


class ReportService:
    """Service for member report operations."""

    @staticmethod
    def create_report(
        db: Session,
        community_id: int,
        reported_user: str,
        reporter_user: str,
        reason: str,
        category: ReportCategory,
        emitter: NotificationEmitter | None = None,
    ) -> ReportCreationResult:
        """
        File a report against a community member.

        The report is committed first; the auto-ban evaluation runs afterwards
        in its own transaction.

        Args:
            db: Database session
            community_id: Community the report is filed in
            reported_user: Username being reported
            reporter_user: Username filing the report
            reason: Free-text explanation
            category: Report category
            emitter: Realtime channel passed through to the auto-ban evaluation

        Returns:
            The created report and the auto-ban outcome

        Raises:
            SelfReportException: If reporter and reported user are the same
            CommunityNotFoundException: If the community does not exist
            NotCommunityMemberException: If either user is not a participant
            DuplicateReportException: If the reporter already reported this user here
            InternalServiceException: On unexpected database failure
        """
        if reporter_user == reported_user:
            raise SelfReportException()

        community_repo = CommunityRepository(db)
        report_repo = ReportRepository(db)

        try:
            if community_repo.get_by_id(community_id) is None:
                raise CommunityNotFoundException()

            if not community_repo.has_role(
                community_id, reporter_user, MemberRole.PARTICIPANT
            ):
                raise NotCommunityMemberException(
                    "You must be a member of this community to report users"
                )

            if not community_repo.has_role(
                community_id, reported_user, MemberRole.PARTICIPANT
            ):
                raise NotCommunityMemberException(
                    "You can only report members of this community"
                )

            if report_repo.get_by_community_and_users(
                community_id, reporter_user, reported_user
            ):
                raise DuplicateReportException()

            report = report_repo.create(
                Report(
                    community_id=community_id,
                    reported_user=reported_user,
                    reporter_user=reporter_user,
                    reason=reason,
                    category=category,
                    status=ReportStatus.PENDING,
                )
            )
        except IntegrityError as e:
            # Unique (community, reporter, reported) lost a race with a parallel request
            report_repo.rollback()
            raise DuplicateReportException() from e
        except SQLAlchemyError as e:
            report_repo.rollback()
            logger.error(f"Creating report in community {community_id} failed: {e!r}")
            raise InternalServiceException(f"Error creating report: {e}") from e

        logger.info(
            f"Report {report.id}: {reporter_user} reported {reported_user} "
            f"in community {community_id} ({category.value})"
        )

        auto_ban = AutoBanService.check_and_apply_auto_ban(
            db, community_id, reported_user, emitter
        )
        return ReportCreationResult(report=report, auto_ban=auto_ban)

    @staticmethod
    def get_reports_by_user(
        db: Session, community_id: int, username: str
    ) -> list[Report]:
        """
        Get every report filed against a member of a community, newest first.

        Raises:
            InternalServiceException: On database failure
        """
        try:
            return ReportRepository(db).get_reports_against_user(community_id, username)
        except SQLAlchemyError as e:
            logger.error(f"Fetching reports for {username} failed: {e!r}")
            raise InternalServiceException(f"Error fetching reports: {e}") from e

    @staticmethod
    def get_pending_reports(db: Session, community_id: int) -> list[Report]:
        """
        Get the moderation queue of a community, newest first.

        Raises:
            InternalServiceException: On database failure
        """
        try:
            return ReportRepository(db).get_pending_for_community(community_id)
        except SQLAlchemyError as e:
            logger.error(
                f"Fetching pending reports for community {community_id} failed: {e!r}"
            )
            raise InternalServiceException(f"Error fetching reports: {e}") from e

    @staticmethod
    def update_report_status(
        db: Session,
        report_id: int,
        status: ReportStatus,
        reviewed_by: str,
    ) -> Report:
        """
        Record a moderator's review of a report.

        Args:
            db: Database session
            report_id: ID of the report
            status: REVIEWED or DISMISSED
            reviewed_by: Username of the reviewing moderator

        Returns:
            Updated report

        Raises:
            InvalidReportStatusException: If status is PENDING
            ReportNotFoundException: If the report does not exist
            InternalServiceException: On database failure
        """
        if status == ReportStatus.PENDING:
            raise InvalidReportStatusException(status.value)

        report_repo = ReportRepository(db)
        try:
            report = report_repo.get_by_id(report_id)
            if report is None:
                raise ReportNotFoundException()

            report.status = status
            report.reviewed_by = reviewed_by
            report.reviewed_at = datetime.now(timezone.utc)
            report_repo.commit()
            report_repo.refresh(report)
        except SQLAlchemyError as e:
            report_repo.rollback()
            logger.error(f"Updating report {report_id} failed: {e!r}")
            raise InternalServiceException(f"Error updating report: {e}") from e

        logger.info(f"Report {report_id} marked {status.value} by {reviewed_by}")
        return report
