"""
Upvote service for business logic.
"""

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

import models.schemas as schemas
from models.exceptions import DuplicateUpvoteException, ReportNotFoundException
from repositories.report_repository import ReportRepository
from repositories.upvote_repository import UpvoteRepository


class UpvoteService:
    """Service for the per-user upvote ledger."""

    @staticmethod
    def toggle_upvote(
        db: Session, report_id: int, user_id: int
    ) -> schemas.UpvoteToggleResponse:
        """
        Toggle a user's upvote on a report.

        - If upvoted: removes the membership and decrements the counter
        - If not upvoted: adds the membership and increments the counter

        A concurrent toggle that wins the insert race is treated as
        "already upvoted", not as a failure.

        Args:
            db: Database session
            report_id: Report ID
            user_id: User ID

        Returns:
            New upvote state and counter value

        Raises:
            ReportNotFoundException: If report not found
        """
        report_repo = ReportRepository(db)
        upvote_repo = UpvoteRepository(db)

        report = report_repo.get_by_id(report_id)
        if report is None:
            raise ReportNotFoundException(report_id)

        existing = upvote_repo.get_by_report_and_user(report_id, user_id)

        try:
            if existing:
                deleted = upvote_repo.delete_by_report_and_user(report_id, user_id)
                # Only the toggle that actually removed the row decrements
                if deleted:
                    report_repo.adjust_counter(report_id, "upvotes_count", -1)
                upvoted = False
            else:
                try:
                    upvote_repo.add_upvote(report_id, user_id)
                    report_repo.adjust_counter(report_id, "upvotes_count", 1)
                except DuplicateUpvoteException:
                    # add_upvote already rolled back; a concurrent toggle won the insert
                    logger.info(
                        f"Upvote on report {report_id} already recorded",
                        report_id=report_id,
                        user_id=user_id,
                    )
                upvoted = True
            report_repo.commit()
        except SQLAlchemyError:
            report_repo.rollback()
            raise

        report_repo.refresh(report)
        return schemas.UpvoteToggleResponse(
            upvoted=upvoted, upvotes_count=report.upvotes_count
        )

    @staticmethod
    def has_upvoted(db: Session, report_id: int, user_id: int) -> bool:
        """Check whether a user currently upvotes a report."""
        return (
            UpvoteRepository(db).get_by_report_and_user(report_id, user_id) is not None
        )

    @staticmethod
    def get_upvoted_report_ids(
        db: Session, user_id: int, report_ids: list[int]
    ) -> set[int]:
        """Batch lookup used to decorate feed items."""
        return UpvoteRepository(db).get_upvoted_report_ids(user_id, report_ids)
