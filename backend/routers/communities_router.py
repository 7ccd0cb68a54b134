"""
Router for community membership endpoints.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

import models.schemas as schemas
import repositories.db_models as db_models
from repositories.database import get_db
from services.community_service import CommunityService

router = APIRouter(prefix="/community", tags=["communities"])


@router.post("/create", response_model=schemas.CommunityResponse)
def create_community(
    community_data: schemas.CommunityCreate,
    db: Session = Depends(get_db),
) -> db_models.Community:
    """Create a community; the admin joins it as a participant."""
    return CommunityService.create_community(
        db=db,
        name=community_data.name,
        description=community_data.description,
        admin=community_data.admin,
    )


@router.get("/{community_id}", response_model=schemas.CommunityResponse)
def get_community(
    community_id: int,
    db: Session = Depends(get_db),
) -> db_models.Community:
    """Get a community with its participant, moderator and banned sets."""
    return CommunityService.get_community(db, community_id)


@router.post("/join", response_model=schemas.CommunityResponse)
def join_community(
    membership: schemas.MembershipRequest,
    db: Session = Depends(get_db),
) -> db_models.Community:
    """Join a community. Banned users are rejected with 403."""
    return CommunityService.join_community(
        db, membership.community_id, membership.username
    )


@router.post("/leave", response_model=schemas.CommunityResponse)
def leave_community(
    membership: schemas.MembershipRequest,
    db: Session = Depends(get_db),
) -> db_models.Community:
    """Leave a community."""
    return CommunityService.leave_community(
        db, membership.community_id, membership.username
    )


@router.post("/addModerator", response_model=schemas.CommunityResponse)
def add_moderator(
    request_data: schemas.ModeratorRequest,
    db: Session = Depends(get_db),
) -> db_models.Community:
    """Promote a participant to moderator (community admin only)."""
    return CommunityService.add_moderator(
        db,
        request_data.community_id,
        request_data.username,
        request_data.requested_by,
    )
