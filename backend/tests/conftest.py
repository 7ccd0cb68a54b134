"""
Pytest configuration and fixtures for backend tests.
"""

import os
import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Add backend directory to path for imports
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

# Set test environment variables before importing config
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["CORS_ORIGINS"] = '["http://localhost:3000"]'
os.environ["AUTO_BAN_THRESHOLD"] = "5"
os.environ["SENTRY_DSN"] = ""

from repositories.database import Base, get_db  # noqa: E402
import repositories.db_models as db_models  # noqa: E402

# Test database engine (in-memory SQLite)
TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh in-memory database session for each test."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session):
    """Create a test client with overridden database dependency."""
    from main import app
    from core.realtime import connection_manager
    from helpers.rate_limiter import limiter

    # Reset rate limiter storage before each test to prevent rate limit errors
    limiter.reset()

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
    connection_manager.clear()


def create_user(db_session, username: str) -> db_models.User:
    user = db_models.User(username=username)
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


def add_member(
    db_session,
    community: db_models.Community,
    username: str,
    role: db_models.MemberRole = db_models.MemberRole.PARTICIPANT,
) -> None:
    db_session.add(
        db_models.CommunityMember(
            community_id=community.id, username=username, role=role
        )
    )
    db_session.commit()


@pytest.fixture
def admin_user(db_session) -> db_models.User:
    """Create the community admin."""
    return create_user(db_session, "admin")


@pytest.fixture
def target_user(db_session) -> db_models.User:
    """Create the member who gets reported."""
    return create_user(db_session, "target")


@pytest.fixture
def test_community(db_session, admin_user, target_user) -> db_models.Community:
    """Create a community with the admin and target as participants."""
    community = db_models.Community(
        name="Python", description="All things Python", admin=admin_user.username
    )
    db_session.add(community)
    db_session.commit()
    db_session.refresh(community)

    add_member(db_session, community, admin_user.username)
    add_member(db_session, community, target_user.username)
    db_session.refresh(community)
    return community


@pytest.fixture
def reporters(db_session, test_community) -> list[str]:
    """Create five participants able to report the target."""
    usernames = [f"reporter{i}" for i in range(1, 6)]
    for username in usernames:
        create_user(db_session, username)
        add_member(db_session, test_community, username)
    return usernames


@pytest.fixture
def moderator_user(db_session, test_community) -> db_models.User:
    """Create a moderator of the test community."""
    user = create_user(db_session, "moddy")
    add_member(db_session, test_community, user.username)
    add_member(
        db_session, test_community, user.username, db_models.MemberRole.MODERATOR
    )
    return user


@pytest.fixture
def make_user(db_session):
    """Factory fixture creating users by username."""

    def _make(username: str) -> db_models.User:
        return create_user(db_session, username)

    return _make


@pytest.fixture
def make_member(db_session):
    """Factory fixture adding a username to one of a community's sets."""

    def _make(
        community: db_models.Community,
        username: str,
        role: db_models.MemberRole = db_models.MemberRole.PARTICIPANT,
    ) -> None:
        add_member(db_session, community, username, role)

    return _make
