"""
Tests for ReportRepository and the membership helpers it relies on.
"""

import pytest
from sqlalchemy.exc import IntegrityError

from repositories.community_repository import CommunityRepository
from repositories.db_models import MemberRole, Report, ReportCategory, ReportStatus
from repositories.report_repository import ReportRepository
from repositories.user_repository import UserRepository


def _add_report(db_session, community_id, reporter, reported="target", status=None):
    report = Report(
        community_id=community_id,
        reporter_user=reporter,
        reported_user=reported,
        reason="Off topic",
        category=ReportCategory.OTHER,
        status=status or ReportStatus.PENDING,
    )
    db_session.add(report)
    db_session.commit()
    return report


class TestReportRepository:
    def test_count_distinct_reporters(self, db_session, test_community):
        repo = ReportRepository(db_session)
        _add_report(db_session, test_community.id, "a")
        _add_report(db_session, test_community.id, "b", status=ReportStatus.DISMISSED)
        _add_report(db_session, test_community.id, "c", reported="someone-else")

        assert repo.count_distinct_reporters(test_community.id, "target") == 2
        assert repo.count_distinct_reporters(test_community.id, "nobody") == 0

    def test_unique_report_triple(self, db_session, test_community):
        _add_report(db_session, test_community.id, "a")

        with pytest.raises(IntegrityError):
            _add_report(db_session, test_community.id, "a")
        db_session.rollback()

    def test_get_by_community_and_users(self, db_session, test_community):
        repo = ReportRepository(db_session)
        report = _add_report(db_session, test_community.id, "a")

        assert repo.get_by_community_and_users(test_community.id, "a", "target") == report
        assert repo.get_by_community_and_users(test_community.id, "target", "a") is None

    def test_pending_only(self, db_session, test_community):
        repo = ReportRepository(db_session)
        _add_report(db_session, test_community.id, "a", status=ReportStatus.REVIEWED)
        pending = _add_report(db_session, test_community.id, "b")

        assert repo.get_pending_for_community(test_community.id) == [pending]


class TestCommunityRepository:
    def test_add_member_is_idempotent(self, db_session, test_community):
        repo = CommunityRepository(db_session)

        repo.add_member(test_community.id, "target", MemberRole.PARTICIPANT)
        repo.commit()

        db_session.refresh(test_community)
        assert test_community.participants.count("target") == 1

    def test_apply_ban(self, db_session, test_community, make_member):
        repo = CommunityRepository(db_session)
        make_member(test_community, "target", MemberRole.MODERATOR)

        repo.apply_ban(test_community.id, "target")

        assert repo.has_role(test_community.id, "target", MemberRole.BANNED)
        assert not repo.has_role(test_community.id, "target", MemberRole.PARTICIPANT)
        assert not repo.has_role(test_community.id, "target", MemberRole.MODERATOR)


class TestUserRepository:
    def test_set_flag_counts_matches(self, db_session, make_user):
        make_user("alice")
        make_user("bob")
        repo = UserRepository(db_session)

        matched = repo.set_flag_for_usernames(
            ["alice", "bob", "ghost"], "message_notifs"
        )
        repo.commit()

        assert matched == 2
        assert repo.get_by_username("alice").message_notifs is True

    def test_set_flag_no_usernames(self, db_session):
        assert UserRepository(db_session).set_flag_for_usernames([], "community_notifs") == 0
