"""
Repository for user operations.
"""

from sqlalchemy import update
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from repositories.db_models import User


class UserRepository(BaseRepository[User]):
    """Repository for user data access."""

    def __init__(self, db: Session):
        super().__init__(User, db)

    def get_by_username(self, username: str) -> User | None:
        """
        Get user by username.

        Args:
            username: Username to look up

        Returns:
            User if found, None otherwise
        """
        return self.db.query(User).filter(User.username == username).first()

    def username_exists(self, username: str) -> bool:
        """Check whether a username is taken."""
        return (
            self.db.query(User.id).filter(User.username == username).first()
            is not None
        )

    def count_by_usernames(self, usernames: list[str]) -> int:
        """Count how many of the given usernames exist."""
        if not usernames:
            return 0
        return self.db.query(User).filter(User.username.in_(usernames)).count()

    def set_flag_for_usernames(
        self, usernames: list[str], flag: str, value: bool = True
    ) -> int:
        """
        Set one boolean flag on many users in a single UPDATE.

        Does not commit.

        Args:
            usernames: Users to update
            flag: Column name on User (e.g. "community_notifs")
            value: New value

        Returns:
            Number of rows matched by the update
        """
        if not usernames:
            return 0
        result = self.db.execute(
            update(User)
            .where(User.username.in_(usernames))
            .values({flag: value})
            .execution_options(synchronize_session="evaluate")
        )
        return result.rowcount or 0
