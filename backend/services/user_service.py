"""
Service for users and their unread notification flags.
"""

from sqlalchemy.orm import Session

from models.exceptions import UserAlreadyExistsException, UserNotFoundException
from repositories.db_models import NotificationType, User
from repositories.user_repository import UserRepository


class UserService:
    """Service for user operations."""

    @staticmethod
    def create_user(db: Session, username: str) -> User:
        """
        Register a username.

        Raises:
            UserAlreadyExistsException: If the username is taken
        """
        repo = UserRepository(db)
        if repo.username_exists(username):
            raise UserAlreadyExistsException(username)
        return repo.create(User(username=username))

    @staticmethod
    def get_user(db: Session, username: str) -> User:
        """
        Get a user by username.

        Raises:
            UserNotFoundException: If it does not exist
        """
        user = UserRepository(db).get_by_username(username)
        if not user:
            raise UserNotFoundException(username)
        return user

    @staticmethod
    def mark_notifications_read(
        db: Session, username: str, notification_type: NotificationType
    ) -> User:
        """
        Clear the unread flag for one notification type.

        Types without a flag leave the user unchanged.
        """
        user = UserService.get_user(db, username)
        flag = notification_type.unread_flag
        if flag:
            setattr(user, flag, False)
            db.commit()
            db.refresh(user)
        return user
