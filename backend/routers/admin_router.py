from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

import authentication.auth as auth
import models.schemas as schemas
import repositories.db_models as db_models
from helpers.pagination import PaginationPage
from repositories.database import get_db
from services.report_service import ReportService
from services.user_service import UserService
from services.workflow_service import WorkflowService

router = APIRouter(prefix="/admin", tags=["admin"])


# ============================================================================
# Dashboard and listings
# ============================================================================


@router.get("/stats", response_model=schemas.AdminStats)
def get_stats(
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(auth.get_staff_user),
):
    """Report counts for the admin dashboard."""
    return ReportService.get_admin_stats(db)


@router.get("/reports", response_model=schemas.AdminReportListResponse)
def list_reports(
    page: PaginationPage = 1,
    q: Optional[str] = Query(
        None, min_length=1, max_length=100, description="Search title or report number"
    ),
    status: Optional[str] = Query(
        None,
        description="Status filter; 'all' or absent means no filter",
        pattern="^(all|new|under_review|in_progress|resolved|closed|rejected)$",
    ),
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(auth.get_staff_user),
):
    """Get one page of reports, newest first."""
    status_filter = (
        None if status in (None, "all") else db_models.ReportStatus(status)
    )
    return ReportService.list_admin_reports(
        db, page=page, search=q, status=status_filter
    )


@router.get("/users", response_model=schemas.UserListResponse)
def list_citizens(
    page: PaginationPage = 1,
    q: Optional[str] = Query(
        None, min_length=1, max_length=100, description="Search username or name"
    ),
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(auth.get_admin_user),
):
    """Get one page of citizen accounts, newest first."""
    return UserService.list_citizens(db, page=page, search=q)


@router.get("/reports/{report_id}", response_model=schemas.ReportDetail)
def get_report(
    report_id: int,
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(auth.get_staff_user),
):
    """Get a report with its update log and contact details."""
    return ReportService.get_report_detail(db, report_id, viewer=current_user)


# ============================================================================
# Workflow
# ============================================================================


@router.put("/reports/{report_id}/status", response_model=schemas.StatusChangeResponse)
def change_status(
    report_id: int,
    change: schemas.StatusChange,
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(auth.get_current_user),
):
    """
    Change a report's status.

    Writes a status_change entry to the update log in the same transaction.
    Setting the current status again changes nothing.
    Domain exceptions are caught by centralized exception handlers.
    """
    return WorkflowService.change_status(
        db, current_user, report_id, change.status, note=change.note
    )


@router.put("/reports/{report_id}/priority", response_model=schemas.Report)
def change_priority(
    report_id: int,
    change: schemas.PriorityChange,
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(auth.get_current_user),
):
    """Set or clear a report's priority."""
    return WorkflowService.change_priority(
        db, current_user, report_id, change.priority
    )


@router.post("/reports/{report_id}/updates", response_model=schemas.ReportUpdate)
def post_official_update(
    report_id: int,
    update: schemas.OfficialUpdateCreate,
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(auth.get_current_user),
):
    """Post an official announcement on a report."""
    return WorkflowService.post_official_update(
        db, current_user, report_id, update.message
    )
