"""
Service for community membership.

Communities own three username sets: participants, moderators and banned.
The admin is always a participant of their community.
"""

from loguru import logger
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from models.exceptions import (
    BannedFromCommunityException,
    BusinessRuleException,
    CommunityAlreadyExistsException,
    CommunityNotFoundException,
    InsufficientPermissionsException,
    NotCommunityMemberException,
)
from repositories.community_repository import CommunityRepository
from repositories.db_models import Community, MemberRole


class CommunityService:
    """Service for community operations."""

    @staticmethod
    def create_community(
        db: Session, name: str, description: str, admin: str
    ) -> Community:
        """
        Create a community administered by `admin`.

        Raises:
            CommunityAlreadyExistsException: If the name is taken
        """
        repo = CommunityRepository(db)
        if repo.get_by_name(name):
            raise CommunityAlreadyExistsException(name)

        community = Community(name=name, description=description, admin=admin)
        try:
            repo.add(community)
            repo.flush()
            repo.add_member(community.id, admin, MemberRole.PARTICIPANT)
            repo.commit()
        except IntegrityError as e:
            # Unique name taken by a parallel request
            repo.rollback()
            raise CommunityAlreadyExistsException(name) from e
        repo.refresh(community)

        logger.info(f"Community {community.id} '{name}' created by {admin}")
        return community

    @staticmethod
    def get_community(db: Session, community_id: int) -> Community:
        """
        Get a community by ID.

        Raises:
            CommunityNotFoundException: If it does not exist
        """
        community = CommunityRepository(db).get_by_id(community_id)
        if not community:
            raise CommunityNotFoundException()
        return community

    @staticmethod
    def join_community(db: Session, community_id: int, username: str) -> Community:
        """
        Add a user to the participants. Joining twice is a no-op.

        Raises:
            CommunityNotFoundException: If the community does not exist
            BannedFromCommunityException: If the user is banned there
        """
        repo = CommunityRepository(db)
        community = CommunityService.get_community(db, community_id)

        if repo.has_role(community_id, username, MemberRole.BANNED):
            raise BannedFromCommunityException()

        try:
            repo.add_member(community_id, username, MemberRole.PARTICIPANT)
            repo.commit()
        except IntegrityError:
            # A parallel join already inserted the row
            repo.rollback()
        repo.refresh(community)
        return community

    @staticmethod
    def leave_community(db: Session, community_id: int, username: str) -> Community:
        """
        Remove a user from participants and moderators.

        Raises:
            CommunityNotFoundException: If the community does not exist
            BusinessRuleException: If the admin tries to leave
        """
        repo = CommunityRepository(db)
        community = CommunityService.get_community(db, community_id)

        if username == community.admin:
            raise BusinessRuleException("The community admin cannot leave")

        repo.remove_member(
            community_id, username, [MemberRole.PARTICIPANT, MemberRole.MODERATOR]
        )
        repo.commit()
        repo.refresh(community)
        return community

    @staticmethod
    def add_moderator(
        db: Session, community_id: int, username: str, requested_by: str
    ) -> Community:
        """
        Promote a participant to moderator.

        Raises:
            CommunityNotFoundException: If the community does not exist
            InsufficientPermissionsException: If requester is not the admin
            NotCommunityMemberException: If the user is not a participant
        """
        repo = CommunityRepository(db)
        community = CommunityService.get_community(db, community_id)

        if requested_by != community.admin:
            raise InsufficientPermissionsException(
                "Only the community admin can appoint moderators"
            )
        if not repo.has_role(community_id, username, MemberRole.PARTICIPANT):
            raise NotCommunityMemberException(
                "Only members of this community can become moderators"
            )

        try:
            repo.add_member(community_id, username, MemberRole.MODERATOR)
            repo.commit()
        except IntegrityError:
            # A parallel promotion already inserted the row
            repo.rollback()
        repo.refresh(community)

        logger.info(f"{username} appointed moderator of community {community_id}")
        return community
