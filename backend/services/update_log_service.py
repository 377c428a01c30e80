"""
Update Log Service

Appends comments, status-change audit entries and official announcements to
a report's log. Every append bumps the report's updates_count in the same
transaction, so the counter always equals the number of entries.
"""

from datetime import datetime
from typing import List, Optional

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

import models.schemas as schemas
import repositories.db_models as db_models
from helpers.sanitization import sanitize_plain_text
from helpers.time_utils import to_naive_utc
from models.exceptions import ReportNotFoundException, ValidationException
from repositories.report_repository import ReportRepository
from repositories.report_update_repository import ReportUpdateRepository


class UpdateLogService:
    """Service for the append-only report update log."""

    @staticmethod
    def clean_message(message: Optional[str], what: str = "Message") -> str:
        """
        Strip markup and whitespace from a log message and check its length.

        Raises:
            ValidationException: If the message is empty or too long
        """
        cleaned = sanitize_plain_text(message) or ""
        if not cleaned:
            raise ValidationException(f"{what} cannot be empty")
        if len(cleaned) > schemas.MESSAGE_MAX_LENGTH:
            raise ValidationException(
                f"{what} must be at most {schemas.MESSAGE_MAX_LENGTH} characters"
            )
        return cleaned

    @staticmethod
    def append_entry(
        db: Session,
        report_id: int,
        user_id: int,
        update_type: db_models.UpdateType,
        message: str,
        is_official: bool,
        old_status: Optional[db_models.ReportStatus] = None,
        new_status: Optional[db_models.ReportStatus] = None,
    ) -> db_models.ReportUpdate:
        """
        Stage a log entry and the matching counter bump without committing.

        The caller owns the transaction and must commit (or roll back) once
        all of its writes are staged.

        Args:
            db: Database session
            report_id: Report the entry belongs to
            user_id: Author of the entry
            update_type: Kind of entry
            message: Already-cleaned message text
            is_official: Whether the entry is an authoritative staff note
            old_status: Previous status (status_change entries only)
            new_status: New status (status_change entries only)

        Returns:
            The staged entry
        """
        entry = db_models.ReportUpdate(
            report_id=report_id,
            user_id=user_id,
            update_type=update_type,
            message=message,
            is_official=is_official,
            old_status=old_status,
            new_status=new_status,
        )
        ReportUpdateRepository(db).add(entry)
        ReportRepository(db).adjust_counter(report_id, "updates_count", 1)
        return entry

    @staticmethod
    def add_comment(
        db: Session, report_id: int, user: db_models.User, message: str
    ) -> schemas.ReportUpdate:
        """
        Append a citizen comment to a report.

        Args:
            db: Database session
            report_id: Report ID
            user: Authenticated author
            message: Comment text

        Returns:
            The created entry

        Raises:
            ReportNotFoundException: If report not found
            ValidationException: If the comment is empty or too long
        """
        report_repo = ReportRepository(db)
        if report_repo.get_by_id(report_id) is None:
            raise ReportNotFoundException(report_id)

        cleaned = UpdateLogService.clean_message(message, what="Comment")

        try:
            entry = UpdateLogService.append_entry(
                db,
                report_id=report_id,
                user_id=user.id,
                update_type=db_models.UpdateType.COMMENT,
                message=cleaned,
                is_official=False,
            )
            report_repo.commit()
        except SQLAlchemyError:
            report_repo.rollback()
            raise

        report_repo.refresh(entry)
        logger.info(
            f"Comment added to report {report_id}",
            report_id=report_id,
            user_id=user.id,
        )
        return UpdateLogService.to_schema(entry)

    @staticmethod
    def get_updates(
        db: Session, report_id: int, since: Optional[datetime] = None
    ) -> List[schemas.ReportUpdate]:
        """
        List a report's log entries in creation order.

        Raises:
            ReportNotFoundException: If report not found
        """
        if ReportRepository(db).get_by_id(report_id) is None:
            raise ReportNotFoundException(report_id)

        cursor = to_naive_utc(since) if since is not None else None
        entries = ReportUpdateRepository(db).get_for_report(report_id, since=cursor)
        return [UpdateLogService.to_schema(entry) for entry in entries]

    @staticmethod
    def to_schema(entry: db_models.ReportUpdate) -> schemas.ReportUpdate:
        author = entry.author
        return schemas.ReportUpdate(
            id=entry.id,
            report_id=entry.report_id,
            update_type=entry.update_type,
            message=entry.message,
            old_status=entry.old_status,
            new_status=entry.new_status,
            is_official=entry.is_official,
            created_at=entry.created_at,
            author_username=author.username if author else None,
            author_full_name=author.full_name if author else None,
            author_role=author.role if author else None,
        )
