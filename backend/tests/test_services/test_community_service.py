"""
Unit tests for CommunityService.
"""

from unittest.mock import patch

import pytest

from models.exceptions import (
    BannedFromCommunityException,
    BusinessRuleException,
    CommunityAlreadyExistsException,
    CommunityNotFoundException,
    InsufficientPermissionsException,
    NotCommunityMemberException,
)
from repositories.db_models import MemberRole
from services.community_service import CommunityService


class TestCreateCommunity:
    """Tests for CommunityService.create_community"""

    def test_admin_becomes_participant(self, db_session):
        community = CommunityService.create_community(
            db_session, "Django", "Web framework talk", "ada"
        )

        assert community.id is not None
        assert community.admin == "ada"
        assert community.participants == ["ada"]
        assert community.moderators == []
        assert community.banned == []

    def test_duplicate_name_rejected(self, db_session, test_community):
        with pytest.raises(CommunityAlreadyExistsException):
            CommunityService.create_community(db_session, "Python", "", "someone")

    def test_duplicate_name_lost_race_rejected(self, db_session, test_community):
        """The unique name constraint still rejects a create that passed the check."""
        with patch(
            "services.community_service.CommunityRepository.get_by_name",
            return_value=None,
        ):
            with pytest.raises(CommunityAlreadyExistsException):
                CommunityService.create_community(db_session, "Python", "", "someone")

        db_session.refresh(test_community)
        assert test_community.admin == "admin"


class TestMembership:
    """Tests for joining and leaving."""

    def test_join(self, db_session, test_community):
        community = CommunityService.join_community(
            db_session, test_community.id, "newbie"
        )

        assert "newbie" in community.participants

    def test_join_twice_is_noop(self, db_session, test_community):
        CommunityService.join_community(db_session, test_community.id, "newbie")
        community = CommunityService.join_community(
            db_session, test_community.id, "newbie"
        )

        assert community.participants.count("newbie") == 1

    def test_concurrent_join_is_noop(self, db_session, test_community):
        """A duplicate membership row from a parallel join is ignored."""
        with patch(
            "services.community_service.CommunityRepository.has_role",
            return_value=False,
        ):
            community = CommunityService.join_community(
                db_session, test_community.id, "target"
            )

        assert community.participants.count("target") == 1

    def test_banned_user_cannot_rejoin(self, db_session, test_community, make_member):
        make_member(test_community, "troll", MemberRole.BANNED)

        with pytest.raises(BannedFromCommunityException):
            CommunityService.join_community(db_session, test_community.id, "troll")

    def test_join_missing_community(self, db_session):
        with pytest.raises(CommunityNotFoundException):
            CommunityService.join_community(db_session, 99999, "newbie")

    def test_leave_removes_moderator_role(
        self, db_session, test_community, moderator_user
    ):
        community = CommunityService.leave_community(
            db_session, test_community.id, "moddy"
        )

        assert "moddy" not in community.participants
        assert "moddy" not in community.moderators

    def test_admin_cannot_leave(self, db_session, test_community):
        with pytest.raises(BusinessRuleException):
            CommunityService.leave_community(db_session, test_community.id, "admin")


class TestAddModerator:
    """Tests for CommunityService.add_moderator"""

    def test_admin_appoints_participant(self, db_session, test_community):
        community = CommunityService.add_moderator(
            db_session, test_community.id, "target", requested_by="admin"
        )

        assert community.moderators == ["target"]
        assert "target" in community.participants

    def test_only_admin_can_appoint(self, db_session, test_community):
        with pytest.raises(InsufficientPermissionsException):
            CommunityService.add_moderator(
                db_session, test_community.id, "target", requested_by="target"
            )

    def test_target_must_be_participant(self, db_session, test_community):
        with pytest.raises(NotCommunityMemberException):
            CommunityService.add_moderator(
                db_session, test_community.id, "stranger", requested_by="admin"
            )

    def test_concurrent_promotion_is_noop(
        self, db_session, test_community, moderator_user
    ):
        """A duplicate moderator row from a parallel promotion is ignored."""
        # participant check passes, add_member's presence check misses the row
        with patch(
            "services.community_service.CommunityRepository.has_role",
            side_effect=[True, False],
        ):
            community = CommunityService.add_moderator(
                db_session, test_community.id, "moddy", requested_by="admin"
            )

        assert community.moderators == ["moddy"]
