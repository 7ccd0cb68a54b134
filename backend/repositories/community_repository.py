"""
Repository for community and membership operations.
"""

from sqlalchemy import delete
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from repositories.db_models import Community, CommunityMember, MemberRole


class CommunityRepository(BaseRepository[Community]):
    """Repository for community data access."""

    def __init__(self, db: Session):
        super().__init__(Community, db)

    def get_by_name(self, name: str) -> Community | None:
        """Get community by its unique name."""
        return self.db.query(Community).filter(Community.name == name).first()

    def has_role(self, community_id: int, username: str, role: MemberRole) -> bool:
        """
        Check whether a username is in one of the community's sets.

        Args:
            community_id: ID of the community
            username: Username to check
            role: Set to look in

        Returns:
            True if a membership row exists
        """
        return (
            self.db.query(CommunityMember.id)
            .filter(
                CommunityMember.community_id == community_id,
                CommunityMember.username == username,
                CommunityMember.role == role,
            )
            .first()
            is not None
        )

    def add_member(self, community_id: int, username: str, role: MemberRole) -> None:
        """
        Add a username to a set if not already present. Does not commit.

        Args:
            community_id: ID of the community
            username: Username to add
            role: Target set
        """
        if not self.has_role(community_id, username, role):
            self.db.add(
                CommunityMember(community_id=community_id, username=username, role=role)
            )

    def remove_member(
        self, community_id: int, username: str, roles: list[MemberRole]
    ) -> int:
        """
        Remove a username from the given sets. Does not commit.

        Args:
            community_id: ID of the community
            username: Username to remove
            roles: Sets to remove it from

        Returns:
            Number of membership rows deleted
        """
        result = self.db.execute(
            delete(CommunityMember)
            .where(
                CommunityMember.community_id == community_id,
                CommunityMember.username == username,
                CommunityMember.role.in_(roles),
            )
            .execution_options(synchronize_session="evaluate")
        )
        return result.rowcount or 0

    def apply_ban(self, community_id: int, username: str) -> None:
        """
        Move a username into the banned set in one transaction.

        Removes participant and moderator rows, adds the banned row and
        commits. The unique membership constraint makes a concurrent ban of
        the same user fail with IntegrityError instead of duplicating the row.

        Args:
            community_id: ID of the community
            username: Username to ban
        """
        self.remove_member(
            community_id, username, [MemberRole.PARTICIPANT, MemberRole.MODERATOR]
        )
        self.add_member(community_id, username, MemberRole.BANNED)
        self.db.commit()
