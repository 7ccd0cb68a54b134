"""
Router for member report endpoints.
"""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

import models.schemas as schemas
import repositories.db_models as db_models
from core.realtime import ConnectionManager, connection_manager
from helpers.rate_limiter import limiter
from models.config import settings
from repositories.database import get_db
from services.report_service import ReportService

router = APIRouter(prefix="/report", tags=["reports"])


def get_connection_manager() -> ConnectionManager:
    """Realtime channel used to push moderation notifications."""
    return connection_manager


@router.post("/create", response_model=schemas.ReportCreateResponse)
@limiter.limit(settings.REPORT_RATE_LIMIT)
def create_report(
    request: Request,
    report_data: schemas.ReportCreate,
    db: Session = Depends(get_db),
    manager: ConnectionManager = Depends(get_connection_manager),
) -> schemas.ReportCreateResponse:
    """
    Report a member of a community.

    One report per reporter per member per community. Filing a report may
    trigger an automatic ban of the reported member; the outcome is returned
    in `auto_ban`.

    Domain exceptions are caught by centralized exception handlers.
    """
    result = ReportService.create_report(
        db=db,
        community_id=report_data.community_id,
        reported_user=report_data.reported_user,
        reporter_user=report_data.reporter_user,
        reason=report_data.reason,
        category=report_data.category,
        emitter=manager,
    )
    return schemas.ReportCreateResponse(
        report=schemas.ReportResponse.model_validate(result.report),
        auto_ban=result.auto_ban,
    )


@router.post("/getByUser", response_model=list[schemas.ReportResponse])
def get_reports_by_user(
    query: schemas.ReportsByUserRequest,
    db: Session = Depends(get_db),
) -> list[db_models.Report]:
    """Get all reports filed against a member of a community, newest first."""
    return ReportService.get_reports_by_user(
        db=db,
        community_id=query.community_id,
        username=query.username,
    )


@router.get("/pending/{community_id}", response_model=list[schemas.ReportResponse])
def get_pending_reports(
    community_id: int,
    db: Session = Depends(get_db),
) -> list[db_models.Report]:
    """Get the pending moderation queue of a community."""
    return ReportService.get_pending_reports(db=db, community_id=community_id)


@router.post("/updateStatus", response_model=schemas.ReportResponse)
def update_report_status(
    update: schemas.ReportStatusUpdate,
    db: Session = Depends(get_db),
) -> db_models.Report:
    """Mark a report reviewed or dismissed."""
    return ReportService.update_report_status(
        db=db,
        report_id=update.report_id,
        status=update.status,
        reviewed_by=update.reviewed_by,
    )
