"""
Router for user endpoints.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

import models.schemas as schemas
import repositories.db_models as db_models
from repositories.database import get_db
from services.user_service import UserService

router = APIRouter(prefix="/user", tags=["users"])


@router.post("/create", response_model=schemas.UserResponse)
def create_user(
    user_data: schemas.UserCreate,
    db: Session = Depends(get_db),
) -> db_models.User:
    """Register a username."""
    return UserService.create_user(db, user_data.username)


@router.get("/{username}/unread", response_model=schemas.UnreadFlags)
def get_unread_flags(
    username: str,
    db: Session = Depends(get_db),
) -> db_models.User:
    """Get which notification inboxes have unread items."""
    return UserService.get_user(db, username)


@router.post("/{username}/markRead", response_model=schemas.UnreadFlags)
def mark_notifications_read(
    username: str,
    request_data: schemas.MarkReadRequest,
    db: Session = Depends(get_db),
) -> db_models.User:
    """Clear the unread flag of one notification type."""
    return UserService.mark_notifications_read(db, username, request_data.type)
