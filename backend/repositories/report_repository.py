"""
Repository for member report operations.
"""

from sqlalchemy import func
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from repositories.db_models import Report, ReportStatus


class ReportRepository(BaseRepository[Report]):
    """Repository for report data access."""

    def __init__(self, db: Session):
        super().__init__(Report, db)

    def get_by_community_and_users(
        self,
        community_id: int,
        reporter_user: str,
        reported_user: str,
    ) -> Report | None:
        """
        Find an existing report for a (community, reporter, reported) triple.

        Status is ignored: a dismissed report still blocks a new one.

        Args:
            community_id: ID of the community
            reporter_user: Username of the reporter
            reported_user: Username of the reported member

        Returns:
            Existing report if found, None otherwise
        """
        return (
            self.db.query(Report)
            .filter(
                Report.community_id == community_id,
                Report.reporter_user == reporter_user,
                Report.reported_user == reported_user,
            )
            .first()
        )

    def count_distinct_reporters(self, community_id: int, reported_user: str) -> int:
        """
        Count distinct reporters of a member in a community, any status.

        Args:
            community_id: ID of the community
            reported_user: Username of the reported member

        Returns:
            Number of distinct reporter usernames
        """
        return (
            self.db.query(func.count(func.distinct(Report.reporter_user)))
            .filter(
                Report.community_id == community_id,
                Report.reported_user == reported_user,
            )
            .scalar()
            or 0
        )

    def get_reports_against_user(
        self, community_id: int, reported_user: str
    ) -> list[Report]:
        """Get every report against a member in a community, newest first."""
        return (
            self.db.query(Report)
            .filter(
                Report.community_id == community_id,
                Report.reported_user == reported_user,
            )
            .order_by(Report.created_at.desc(), Report.id.desc())
            .all()
        )

    def get_pending_for_community(self, community_id: int) -> list[Report]:
        """Get pending reports of a community, newest first."""
        return (
            self.db.query(Report)
            .filter(
                Report.community_id == community_id,
                Report.status == ReportStatus.PENDING,
            )
            .order_by(Report.created_at.desc(), Report.id.desc())
            .all()
        )
