from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request, Response
from sqlalchemy.orm import Session

import authentication.auth as auth
import models.schemas as schemas
import repositories.db_models as db_models
from helpers.pagination import PaginationLimit, PaginationSkip
from helpers.rate_limiter import limiter
from models.config import settings
from repositories.database import get_db
from services.report_service import ReportService
from services.update_log_service import UpdateLogService
from services.upvote_service import UpvoteService

router = APIRouter(prefix="/reports", tags=["reports"])

# Keep the session cookie small; oldest ids are dropped first
MAX_VIEWED_IDS = 200


@router.get("/", response_model=List[schemas.ReportSummary])
def list_reports(
    skip: PaginationSkip = 0,
    limit: PaginationLimit = settings.FEED_DEFAULT_LIMIT,
    q: Optional[str] = Query(
        None, min_length=1, max_length=100, description="Search title or report number"
    ),
    status: Optional[db_models.ReportStatus] = None,
    report_type: Optional[db_models.ReportType] = None,
    category: Optional[str] = Query(None, max_length=50),
    db: Session = Depends(get_db),
    current_user: db_models.User | None = Depends(auth.get_current_user_optional),
):
    """
    Get the public report feed, newest first.

    Includes user_has_upvoted when authenticated.
    """
    return ReportService.list_feed(
        db,
        skip=skip,
        limit=limit,
        search=q,
        status=status,
        report_type=report_type,
        category=category,
        current_user_id=current_user.id if current_user else None,
    )


@router.post("/", response_model=schemas.Report)
@limiter.limit(settings.REPORT_SUBMISSION_RATE_LIMIT)
def create_report(
    request: Request,
    report: schemas.ReportCreate,
    db: Session = Depends(get_db),
    current_user: db_models.User | None = Depends(auth.get_current_user_optional),
) -> db_models.Report:
    """
    Submit a report. Authentication is optional.

    Unauthenticated submissions are always stored anonymously.
    Domain exceptions are caught by centralized exception handlers.
    """
    return ReportService.create_report(db, report, current_user)


@router.get("/mine", response_model=List[schemas.ReportSummary])
def get_my_reports(
    skip: PaginationSkip = 0,
    limit: PaginationLimit = settings.FEED_DEFAULT_LIMIT,
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(auth.get_current_active_user),
):
    """Get the current user's reports, including anonymous ones."""
    return ReportService.list_user_reports(db, current_user, skip=skip, limit=limit)


@router.get("/changes", response_model=schemas.ReportChanges)
def get_report_changes(
    since: datetime = Query(..., description="ISO 8601 cursor from the previous poll"),
    after_id: Optional[int] = Query(
        None, ge=1, description="cursor_id from the previous poll"
    ),
    limit: PaginationLimit = 100,
    db: Session = Depends(get_db),
):
    """
    Get reports changed after a cursor.

    Clients poll with the returned cursor and re-fetch what changed.
    """
    return ReportService.get_changes(db, since=since, after_id=after_id, limit=limit)


@router.get("/{report_id}", response_model=schemas.ReportDetail)
def get_report(
    report_id: int,
    db: Session = Depends(get_db),
    current_user: db_models.User | None = Depends(auth.get_current_user_optional),
):
    """
    Get a report with its update log.

    Contact details are only returned to officials and admins.
    """
    return ReportService.get_report_detail(db, report_id, viewer=current_user)


@router.post("/{report_id}/upvote", response_model=schemas.UpvoteToggleResponse)
def toggle_upvote(
    report_id: int,
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(auth.get_current_active_user),
):
    """
    Toggle the current user's upvote on a report.

    - If not upvoted: adds the upvote
    - If already upvoted: removes it

    Returns new upvote state and count.
    """
    return UpvoteService.toggle_upvote(db, report_id, current_user.id)


@router.get("/{report_id}/updates", response_model=List[schemas.ReportUpdate])
def get_report_updates(
    report_id: int,
    since: Optional[datetime] = Query(
        None, description="Only entries created after this instant"
    ),
    db: Session = Depends(get_db),
):
    """Get a report's update log in creation order."""
    return UpdateLogService.get_updates(db, report_id, since=since)


@router.post("/{report_id}/comments", response_model=schemas.ReportUpdate)
def add_comment(
    report_id: int,
    comment: schemas.CommentCreate,
    db: Session = Depends(get_db),
    current_user: db_models.User = Depends(auth.get_current_active_user),
):
    """
    Comment on a report.

    Domain exceptions are caught by centralized exception handlers.
    """
    return UpdateLogService.add_comment(db, report_id, current_user, comment.message)


@router.post("/{report_id}/view", response_model=schemas.ViewRecorded)
def record_view(
    report_id: int,
    request: Request,
    response: Response,
    db: Session = Depends(get_db),
):
    """
    Count a view of a report once per browser session.

    The set of viewed reports travels in a session cookie.
    """
    viewed = _read_viewed_ids(request)
    result = ReportService.record_view(
        db, report_id, already_viewed=report_id in viewed
    )
    if result.counted:
        viewed.append(report_id)
        _set_viewed_cookie(response, viewed)
    return result


def _read_viewed_ids(request: Request) -> list[int]:
    raw = request.cookies.get(settings.VIEW_COOKIE_NAME, "")
    return [int(part) for part in raw.split(".") if part.isdigit()]


def _set_viewed_cookie(response: Response, viewed: list[int]) -> None:
    """Set the viewed-reports session cookie (no max_age: dies with the browser)."""
    response.set_cookie(
        key=settings.VIEW_COOKIE_NAME,
        value=".".join(str(report_id) for report_id in viewed[-MAX_VIEWED_IDS:]),
        httponly=True,
        secure=settings.ENVIRONMENT == "production",
        samesite="lax",
    )
