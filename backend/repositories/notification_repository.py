"""
Repository for notification records.
"""

from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from repositories.db_models import Notification


class NotificationRepository(BaseRepository[Notification]):
    """Repository for notification data access."""

    def __init__(self, db: Session):
        super().__init__(Notification, db)
