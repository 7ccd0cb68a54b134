"""
Notification dispatcher.

Persists a notification and fans it out to recipients' unread flags as one
unit of work: either the record exists and every matched recipient's flag is
set, or nothing is written.

Callers that already hold an open unit of work on the session pass
`manage_transaction=False`; the dispatcher then only flushes and leaves
commit/rollback to them.
"""

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models.exceptions import (
    DomainException,
    InvalidNotificationException,
    NotificationDeliveryException,
    NotificationNotFoundException,
    UpdateFailedException,
)
from models.schemas import NotificationCreate
from repositories.db_models import Notification, NotificationType
from repositories.notification_repository import NotificationRepository
from repositories.user_repository import UserRepository


def _error_message(error: Exception) -> str:
    if isinstance(error, DomainException):
        return error.message
    # DBAPI errors wrap a shorter driver message
    return str(getattr(error, "orig", None) or error)


class NotificationService:
    """Service for storing and delivering user notifications."""

    @staticmethod
    def save_notification(
        db: Session,
        payload: NotificationCreate,
        manage_transaction: bool = True,
    ) -> Notification:
        """
        Persist a notification record.

        Args:
            db: Database session
            payload: Notification content
            manage_transaction: Commit here (True) or only flush (False)

        Returns:
            Saved notification with its ID assigned

        Raises:
            SQLAlchemyError: If the record cannot be written
        """
        notification = Notification(**payload.model_dump())
        repo = NotificationRepository(db)
        try:
            repo.add(notification)
            repo.flush()
            if manage_transaction:
                repo.commit()
                repo.refresh(notification)
        except SQLAlchemyError:
            if manage_transaction:
                repo.rollback()
            raise
        return notification

    @staticmethod
    def add_notification_to_users(
        db: Session,
        usernames: list[str],
        notification: Notification,
        manage_transaction: bool = True,
    ) -> None:
        """
        Set the unread flag matching the notification's type on every recipient.

        "community" notifications set `community_notifs`, "message"
        notifications set `message_notifs`; other types set no flag but still
        require at least one recipient to exist.

        Args:
            db: Database session
            usernames: Recipients
            notification: Saved notification
            manage_transaction: Commit/rollback here (True) or leave it to the caller

        Raises:
            InvalidNotificationException: If title, msg, sender or date_time is missing
            UpdateFailedException: If no recipient matched a user
            SQLAlchemyError: If the update itself fails
        """
        if not (
            notification.msg
            and notification.sender
            and notification.date_time
            and notification.title
        ):
            raise InvalidNotificationException()

        flag = NotificationType(notification.type).unread_flag
        user_repo = UserRepository(db)
        try:
            if usernames:
                if flag:
                    matched = user_repo.set_flag_for_usernames(usernames, flag)
                else:
                    matched = user_repo.count_by_usernames(usernames)
                if matched == 0:
                    raise UpdateFailedException()
            if manage_transaction:
                user_repo.commit()
        except (SQLAlchemyError, UpdateFailedException):
            if manage_transaction:
                user_repo.rollback()
            raise

    @staticmethod
    def send_notification(
        db: Session,
        usernames: list[str],
        payload: NotificationCreate,
        manage_transaction: bool = True,
    ) -> Notification:
        """
        Save a notification and deliver it to recipients atomically.

        Args:
            db: Database session
            usernames: Recipients
            payload: Notification content
            manage_transaction: Own the transaction (True) or run inside the caller's

        Returns:
            The saved notification

        Raises:
            NotificationDeliveryException: "1: ..." if saving failed,
                "2: ..." if delivery to recipients failed
        """
        try:
            notification = NotificationService.save_notification(
                db, payload, manage_transaction=False
            )
        except SQLAlchemyError as e:
            if manage_transaction:
                db.rollback()
            logger.error(f"Saving notification '{payload.title}' failed: {e!r}")
            raise NotificationDeliveryException(1, _error_message(e)) from e

        try:
            NotificationService.add_notification_to_users(
                db, usernames, notification, manage_transaction=False
            )
            if manage_transaction:
                db.commit()
                db.refresh(notification)
        except (SQLAlchemyError, DomainException) as e:
            if manage_transaction:
                db.rollback()
            logger.error(
                f"Delivering notification '{payload.title}' to {len(usernames)} "
                f"recipient(s) failed: {e!r}"
            )
            raise NotificationDeliveryException(2, _error_message(e)) from e

        logger.debug(
            f"Notification {notification.id} delivered to {len(usernames)} recipient(s)"
        )
        return notification

    @staticmethod
    def get_notification(db: Session, notification_id: int) -> Notification:
        """
        Get a notification by ID.

        Raises:
            NotificationNotFoundException: If it does not exist
        """
        notification = NotificationRepository(db).get_by_id(notification_id)
        if not notification:
            raise NotificationNotFoundException(notification_id)
        return notification
