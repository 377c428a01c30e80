"""
Update-log repository for database operations.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session, joinedload

import repositories.db_models as db_models
from .base import BaseRepository


class ReportUpdateRepository(BaseRepository[db_models.ReportUpdate]):
    """Repository for the append-only report update log."""

    def __init__(self, db: Session):
        super().__init__(db_models.ReportUpdate, db)

    def get_for_report(
        self, report_id: int, since: Optional[datetime] = None
    ) -> list[db_models.ReportUpdate]:
        """
        Get log entries for a report in creation order.

        Args:
            report_id: Report ID
            since: Only return entries created after this instant

        Returns:
            List of entries with authors loaded
        """
        query = (
            self.db.query(db_models.ReportUpdate)
            .options(joinedload(db_models.ReportUpdate.author))
            .filter(db_models.ReportUpdate.report_id == report_id)
        )
        if since is not None:
            query = query.filter(db_models.ReportUpdate.created_at > since)
        return query.order_by(
            db_models.ReportUpdate.created_at.asc(), db_models.ReportUpdate.id.asc()
        ).all()

    def count_for_report(self, report_id: int) -> int:
        """Count log entries attached to a report."""
        return (
            self.db.query(db_models.ReportUpdate)
            .filter(db_models.ReportUpdate.report_id == report_id)
            .count()
        )
