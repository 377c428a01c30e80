"""
Upvote repository for database operations.
"""

from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

import repositories.db_models as db_models
from models.exceptions import DuplicateUpvoteException
from .base import BaseRepository


class UpvoteRepository(BaseRepository[db_models.ReportUpvote]):
    """Repository for ReportUpvote membership operations."""

    def __init__(self, db: Session):
        """
        Initialize upvote repository.

        Args:
            db: Database session
        """
        super().__init__(db_models.ReportUpvote, db)

    def get_by_report_and_user(
        self, report_id: int, user_id: int
    ) -> Optional[db_models.ReportUpvote]:
        """
        Get upvote membership by report and user.

        Args:
            report_id: Report ID
            user_id: User ID

        Returns:
            Upvote if found, None otherwise
        """
        return (
            self.db.query(db_models.ReportUpvote)
            .filter(
                db_models.ReportUpvote.report_id == report_id,
                db_models.ReportUpvote.user_id == user_id,
            )
            .first()
        )

    def add_upvote(self, report_id: int, user_id: int) -> db_models.ReportUpvote:
        """
        Insert a membership and flush it without committing.

        The (report_id, user_id) unique constraint decides races between
        concurrent toggles. On violation the session transaction is rolled
        back, so callers must not have other pending work staged.

        Args:
            report_id: Report ID
            user_id: User ID

        Returns:
            The flushed upvote

        Raises:
            DuplicateUpvoteException: If the user already upvoted this report
        """
        upvote = db_models.ReportUpvote(report_id=report_id, user_id=user_id)
        self.db.add(upvote)
        try:
            self.db.flush()
        except IntegrityError:
            self.db.rollback()
            raise DuplicateUpvoteException(report_id, user_id)
        return upvote

    def delete_by_report_and_user(self, report_id: int, user_id: int) -> int:
        """
        Delete a membership without committing.

        Returns:
            Number of deleted rows (0 if a concurrent toggle already removed it)
        """
        return (
            self.db.query(db_models.ReportUpvote)
            .filter(
                db_models.ReportUpvote.report_id == report_id,
                db_models.ReportUpvote.user_id == user_id,
            )
            .delete(synchronize_session=False)
        )

    def count_for_report(self, report_id: int) -> int:
        """Count memberships on a report."""
        return (
            self.db.query(db_models.ReportUpvote)
            .filter(db_models.ReportUpvote.report_id == report_id)
            .count()
        )

    def get_upvoted_report_ids(self, user_id: int, report_ids: list[int]) -> set[int]:
        """
        Get which of the given reports a user has upvoted, in one query.

        Args:
            user_id: User ID
            report_ids: Candidate report IDs

        Returns:
            Subset of report_ids the user has upvoted
        """
        if not report_ids:
            return set()

        rows = (
            self.db.query(db_models.ReportUpvote.report_id)
            .filter(
                db_models.ReportUpvote.user_id == user_id,
                db_models.ReportUpvote.report_id.in_(report_ids),
            )
            .all()
        )
        return {report_id for (report_id,) in rows}
