"""
Report Service

Handles report submission, view counting and the read models behind the
public feed, the report detail page and the admin console.
"""

from datetime import datetime
from typing import List, Optional

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

import models.schemas as schemas
import repositories.db_models as db_models
from helpers.pagination import page_offset, total_pages
from helpers.sanitization import sanitize_area_names, sanitize_plain_text
from helpers.time_utils import to_naive_utc
from models.config import settings
from models.exceptions import InvalidReportDraftException, ReportNotFoundException
from repositories.report_repository import ReportRepository
from repositories.report_update_repository import ReportUpdateRepository
from repositories.upvote_repository import UpvoteRepository
from services.catalog_service import CatalogService
from services.update_log_service import UpdateLogService


def format_report_number(report_id: int) -> str:
    """Human-readable sequential number, e.g. CP-000042."""
    return f"{settings.REPORT_NUMBER_PREFIX}-{report_id:06d}"


class ReportService:
    """Service for report submission and report read models."""

    @staticmethod
    def create_report(
        db: Session,
        draft: schemas.ReportCreate,
        actor: Optional[db_models.User] = None,
    ) -> db_models.Report:
        """
        Create a report from a validated draft.

        Status is always ``new`` and counters start at zero. Submissions
        without an authenticated actor are stored anonymously with no creator.

        Args:
            db: Database session
            draft: Submission draft
            actor: Authenticated submitter, or None

        Returns:
            Created report with its report number assigned

        Raises:
            InvalidReportDraftException: If the draft breaks a catalog or content rule
        """
        if not CatalogService.is_valid_category(draft.category):
            raise InvalidReportDraftException(f"Unknown category '{draft.category}'")

        if (
            draft.priority is not None
            and draft.report_type != db_models.ReportType.ISSUE
        ):
            raise InvalidReportDraftException(
                "Priority can only be set on issue reports"
            )

        title = sanitize_plain_text(draft.title)
        description = sanitize_plain_text(draft.description)
        areas = sanitize_area_names(list(draft.affected_areas))

        if not title:
            raise InvalidReportDraftException("Title cannot be empty")
        if len(title) > schemas.TITLE_MAX_LENGTH:
            raise InvalidReportDraftException(
                f"Title must be at most {schemas.TITLE_MAX_LENGTH} characters"
            )
        if not description:
            raise InvalidReportDraftException("Description cannot be empty")
        if len(description) > schemas.DESCRIPTION_MAX_LENGTH:
            raise InvalidReportDraftException(
                f"Description must be at most {schemas.DESCRIPTION_MAX_LENGTH} characters"
            )
        if not areas:
            raise InvalidReportDraftException("At least one affected area is required")

        report = db_models.Report(
            user_id=actor.id if actor else None,
            report_type=draft.report_type,
            category=draft.category,
            title=title,
            description=description,
            affected_areas=areas,
            priority=draft.priority,
            status=db_models.ReportStatus.NEW,
            is_anonymous=draft.is_anonymous if actor else True,
            contact_phone=draft.contact_phone,
            contact_email=str(draft.contact_email) if draft.contact_email else None,
            latitude=draft.latitude,
            longitude=draft.longitude,
            upvotes_count=0,
            updates_count=0,
            views_count=0,
        )

        report_repo = ReportRepository(db)
        try:
            report_repo.add(report)
            report_repo.flush()
            report.report_number = format_report_number(report.id)
            report_repo.commit()
        except SQLAlchemyError:
            report_repo.rollback()
            raise

        report_repo.refresh(report)
        logger.info(
            f"Report {report.report_number} submitted",
            report_id=report.id,
            report_type=report.report_type.value,
            anonymous=report.is_anonymous,
        )
        return report

    @staticmethod
    def get_report(db: Session, report_id: int) -> db_models.Report:
        """
        Get report by ID.

        Raises:
            ReportNotFoundException: If report not found
        """
        report = ReportRepository(db).get_with_author(report_id)
        if report is None:
            raise ReportNotFoundException(report_id)
        return report

    @staticmethod
    def to_summary(
        report: db_models.Report, user_has_upvoted: Optional[bool] = None
    ) -> schemas.ReportSummary:
        """Build a feed item, hiding the author of anonymous reports."""
        summary = schemas.ReportSummary.model_validate(report)
        summary.user_has_upvoted = user_has_upvoted
        if report.is_anonymous:
            summary.author = None
            summary.user_id = None
        return summary

    @staticmethod
    def to_public(report: db_models.Report) -> schemas.Report:
        """Plain report view with the creator blanked on anonymous reports."""
        public = schemas.Report.model_validate(report)
        if report.is_anonymous:
            public.user_id = None
        return public

    @staticmethod
    def list_feed(
        db: Session,
        skip: int = 0,
        limit: Optional[int] = None,
        search: Optional[str] = None,
        status: Optional[db_models.ReportStatus] = None,
        report_type: Optional[db_models.ReportType] = None,
        category: Optional[str] = None,
        current_user_id: Optional[int] = None,
    ) -> List[schemas.ReportSummary]:
        """
        Get the public feed, newest first.

        Includes user_has_upvoted when a user is given, resolved with a
        single batch query for the whole page.
        """
        reports = ReportRepository(db).get_feed(
            skip=skip,
            limit=limit or settings.FEED_DEFAULT_LIMIT,
            search=search,
            status=status,
            report_type=report_type,
            category=category,
        )

        upvoted_ids: set[int] = set()
        if current_user_id is not None:
            upvoted_ids = UpvoteRepository(db).get_upvoted_report_ids(
                current_user_id, [report.id for report in reports]
            )

        return [
            ReportService.to_summary(
                report,
                user_has_upvoted=(
                    report.id in upvoted_ids if current_user_id is not None else None
                ),
            )
            for report in reports
        ]

    @staticmethod
    def list_user_reports(
        db: Session, user: db_models.User, skip: int = 0, limit: int = 50
    ) -> List[schemas.ReportSummary]:
        """Get a user's own reports, including anonymous ones."""
        reports = ReportRepository(db).get_by_user(user.id, skip=skip, limit=limit)
        upvoted_ids = UpvoteRepository(db).get_upvoted_report_ids(
            user.id, [report.id for report in reports]
        )
        return [
            ReportService.to_summary(report, user_has_upvoted=report.id in upvoted_ids)
            for report in reports
        ]

    @staticmethod
    def get_report_detail(
        db: Session,
        report_id: int,
        viewer: Optional[db_models.User] = None,
    ) -> schemas.ReportDetail:
        """
        Get a report with its ordered update log.

        Contact fields are only included for staff viewers.

        Raises:
            ReportNotFoundException: If report not found
        """
        report = ReportService.get_report(db, report_id)
        summary = ReportService.to_summary(
            report,
            user_has_upvoted=(
                UpvoteRepository(db).get_by_report_and_user(report.id, viewer.id)
                is not None
                if viewer is not None
                else None
            ),
        )

        entries = ReportUpdateRepository(db).get_for_report(report.id)
        detail = schemas.ReportDetail(
            **summary.model_dump(),
            updates=[UpdateLogService.to_schema(entry) for entry in entries],
        )
        if viewer is not None and viewer.is_staff:
            detail.contact_phone = report.contact_phone
            detail.contact_email = report.contact_email
        return detail

    @staticmethod
    def record_view(
        db: Session, report_id: int, already_viewed: bool = False
    ) -> schemas.ViewRecorded:
        """
        Count a view of a report, at most once per browsing session.

        The caller decides whether this session already viewed the report;
        deduplication is best-effort and a new session counts again.

        Raises:
            ReportNotFoundException: If report not found
        """
        report_repo = ReportRepository(db)
        report = report_repo.get_by_id(report_id)
        if report is None:
            raise ReportNotFoundException(report_id)

        if already_viewed:
            return schemas.ViewRecorded(counted=False, views_count=report.views_count)

        try:
            report_repo.adjust_counter(report_id, "views_count", 1)
            report_repo.commit()
        except SQLAlchemyError:
            report_repo.rollback()
            raise

        report_repo.refresh(report)
        return schemas.ViewRecorded(counted=True, views_count=report.views_count)

    @staticmethod
    def get_changes(
        db: Session,
        since: datetime,
        after_id: Optional[int] = None,
        limit: int = 100,
    ) -> schemas.ReportChanges:
        """
        Get reports changed after a cursor, for poll-based refresh.

        The cursor is the pair (updated_at, id) of the last report in the
        page, or the given pair when nothing changed. Clients pass both back
        as since and after_id to resume.
        """
        cursor = to_naive_utc(since)
        cursor_id = after_id
        reports = ReportRepository(db).get_changed_since(
            cursor, after_id=after_id, limit=limit
        )
        if reports:
            cursor = reports[-1].updated_at
            cursor_id = reports[-1].id
        return schemas.ReportChanges(
            reports=[ReportService.to_public(report) for report in reports],
            cursor=cursor,
            cursor_id=cursor_id,
        )

    @staticmethod
    def get_admin_stats(db: Session) -> schemas.AdminStats:
        """Dashboard counts for the admin console."""
        report_repo = ReportRepository(db)
        return schemas.AdminStats(
            total_reports=report_repo.count_by_status(),
            new_reports=report_repo.count_by_status([db_models.ReportStatus.NEW]),
            active_cases=report_repo.count_by_status(db_models.ACTIVE_STATUSES),
            resolved_reports=report_repo.count_by_status(
                [db_models.ReportStatus.RESOLVED]
            ),
        )

    @staticmethod
    def list_admin_reports(
        db: Session,
        page: int = 1,
        search: Optional[str] = None,
        status: Optional[db_models.ReportStatus] = None,
    ) -> schemas.AdminReportListResponse:
        """
        Get one page of reports for the admin console.

        Args:
            db: Database session
            page: Page number (1-indexed)
            search: Free text matched on title or report number
            status: Optional status filter (None means all)

        Returns:
            Page of reports with total count and page count
        """
        page_size = settings.ADMIN_PAGE_SIZE
        reports, total = ReportRepository(db).search_paginated(
            search=search,
            status=status,
            skip=page_offset(page, page_size),
            limit=page_size,
        )
        return schemas.AdminReportListResponse(
            reports=[schemas.Report.model_validate(report) for report in reports],
            total=total,
            page=page,
            page_size=page_size,
            total_pages=total_pages(total, page_size),
        )
