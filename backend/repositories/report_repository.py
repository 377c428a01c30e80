"""
Report repository for database operations.
"""

from datetime import datetime
from typing import Iterable, Optional

from sqlalchemy import and_, func, or_
from sqlalchemy.orm import Query, Session, joinedload

import repositories.db_models as db_models
from .base import BaseRepository

# Counter columns that may be adjusted through adjust_counter()
COUNTER_COLUMNS = {
    "upvotes_count": db_models.Report.upvotes_count,
    "updates_count": db_models.Report.updates_count,
    "views_count": db_models.Report.views_count,
}


class ReportRepository(BaseRepository[db_models.Report]):
    """Repository for Report entity database operations."""

    def __init__(self, db: Session):
        """
        Initialize report repository.

        Args:
            db: Database session
        """
        super().__init__(db_models.Report, db)

    def get_with_author(self, report_id: int) -> Optional[db_models.Report]:
        """
        Get report by ID with its author eagerly loaded.

        Args:
            report_id: Report ID

        Returns:
            Report if found, None otherwise
        """
        return (
            self.db.query(db_models.Report)
            .options(joinedload(db_models.Report.author))
            .filter(db_models.Report.id == report_id)
            .first()
        )

    def get_by_report_number(self, report_number: str) -> Optional[db_models.Report]:
        """Get report by its human-readable number."""
        return (
            self.db.query(db_models.Report)
            .filter(db_models.Report.report_number == report_number)
            .first()
        )

    def _filtered_query(
        self,
        search: Optional[str] = None,
        status: Optional[db_models.ReportStatus] = None,
        report_type: Optional[db_models.ReportType] = None,
        category: Optional[str] = None,
    ) -> Query:
        query = self.db.query(db_models.Report)

        if search:
            search_term = f"%{search.lower()}%"
            query = query.filter(
                or_(
                    func.lower(db_models.Report.title).like(search_term),
                    func.lower(db_models.Report.report_number).like(search_term),
                )
            )
        if status is not None:
            query = query.filter(db_models.Report.status == status)
        if report_type is not None:
            query = query.filter(db_models.Report.report_type == report_type)
        if category:
            query = query.filter(db_models.Report.category == category)

        return query

    def get_feed(
        self,
        skip: int = 0,
        limit: int = 50,
        search: Optional[str] = None,
        status: Optional[db_models.ReportStatus] = None,
        report_type: Optional[db_models.ReportType] = None,
        category: Optional[str] = None,
    ) -> list[db_models.Report]:
        """
        Get reports newest first, with optional filters.

        Args:
            skip: Number of records to skip
            limit: Maximum number of records to return
            search: Case-insensitive term matched on title or report number
            status: Optional status equality filter
            report_type: Optional report type filter
            category: Optional category key filter

        Returns:
            List of reports with authors loaded
        """
        return (
            self._filtered_query(search, status, report_type, category)
            .options(joinedload(db_models.Report.author))
            .order_by(db_models.Report.created_at.desc(), db_models.Report.id.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )

    def search_paginated(
        self,
        search: Optional[str] = None,
        status: Optional[db_models.ReportStatus] = None,
        skip: int = 0,
        limit: int = 20,
    ) -> tuple[list[db_models.Report], int]:
        """
        Get one page of reports plus the total count for the same filters.

        Returns:
            Tuple of (reports on this page, total matching reports)
        """
        query = self._filtered_query(search=search, status=status)
        total = query.count()
        reports = (
            query.order_by(db_models.Report.created_at.desc(), db_models.Report.id.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )
        return reports, total

    def get_by_user(
        self, user_id: int, skip: int = 0, limit: int = 50
    ) -> list[db_models.Report]:
        """Get reports submitted by a user, newest first."""
        return (
            self.db.query(db_models.Report)
            .filter(db_models.Report.user_id == user_id)
            .order_by(db_models.Report.created_at.desc(), db_models.Report.id.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )

    def get_changed_since(
        self, since: datetime, after_id: Optional[int] = None, limit: int = 100
    ) -> list[db_models.Report]:
        """
        Get reports changed after an (updated_at, id) cursor, oldest change first.

        With after_id, rows sharing the cursor timestamp but with a higher id
        are still returned, so a page cut inside a timestamp tie resumes there.
        """
        changed = db_models.Report.updated_at > since
        if after_id is not None:
            changed = or_(
                changed,
                and_(
                    db_models.Report.updated_at == since,
                    db_models.Report.id > after_id,
                ),
            )
        return (
            self.db.query(db_models.Report)
            .filter(changed)
            .order_by(db_models.Report.updated_at.asc(), db_models.Report.id.asc())
            .limit(limit)
            .all()
        )

    def count_by_status(
        self, statuses: Optional[Iterable[db_models.ReportStatus]] = None
    ) -> int:
        """
        Count reports, optionally restricted to a set of statuses.

        Args:
            statuses: Statuses to include; None counts every report

        Returns:
            Number of matching reports
        """
        query = self.db.query(func.count(db_models.Report.id))
        if statuses is not None:
            query = query.filter(db_models.Report.status.in_(list(statuses)))
        return query.scalar() or 0

    def adjust_counter(self, report_id: int, counter: str, delta: int) -> int:
        """
        Atomically add ``delta`` to a denormalized counter.

        Issues ``UPDATE reports SET <counter> = <counter> + :delta`` so
        concurrent writers never lose increments. Does not commit.

        Args:
            report_id: Report ID
            counter: One of upvotes_count, updates_count, views_count
            delta: Amount to add (may be negative)

        Returns:
            Number of rows updated (0 if the report does not exist)
        """
        column = COUNTER_COLUMNS[counter]
        return (
            self.db.query(db_models.Report)
            .filter(db_models.Report.id == report_id)
            .update({column: column + delta}, synchronize_session=False)
        )
