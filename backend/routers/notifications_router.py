"""
Router for notification endpoints.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

import models.schemas as schemas
import repositories.db_models as db_models
from repositories.database import get_db
from services.notification_service import NotificationService

router = APIRouter(prefix="/notification", tags=["notifications"])


@router.post("/send", response_model=schemas.NotificationResponse)
def send_notification(
    request_data: schemas.SendNotificationRequest,
    db: Session = Depends(get_db),
) -> db_models.Notification:
    """
    Save a notification and flag it unread for every recipient.

    Either both happen or neither does.
    """
    return NotificationService.send_notification(
        db=db,
        usernames=request_data.recipients,
        payload=request_data.notification,
    )


@router.get("/{notification_id}", response_model=schemas.NotificationResponse)
def get_notification(
    notification_id: int,
    db: Session = Depends(get_db),
) -> db_models.Notification:
    """Get a notification by ID."""
    return NotificationService.get_notification(db, notification_id)
