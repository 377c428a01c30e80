"""
Workflow Service

Staff-only operations that move a report through its lifecycle. The role
check runs before any read or write, so a rejected caller never touches data.
"""

from typing import Optional

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

import models.schemas as schemas
import repositories.db_models as db_models
from helpers.sanitization import sanitize_plain_text
from models.exceptions import (
    AuthenticationException,
    InactiveUserException,
    InsufficientPermissionsException,
    NoWorkflowException,
    ReportNotFoundException,
)
from repositories.report_repository import ReportRepository
from services.update_log_service import UpdateLogService


def default_status_message(
    old_status: db_models.ReportStatus, new_status: db_models.ReportStatus
) -> str:
    return f"Status changed from {old_status.value} to {new_status.value}"


class WorkflowService:
    """Service for role-gated report workflow operations."""

    @staticmethod
    def ensure_staff(actor: Optional[db_models.User]) -> db_models.User:
        """
        Require an active admin or official.

        Raises:
            AuthenticationException: If no actor is authenticated
            InactiveUserException: If the account is deactivated
            InsufficientPermissionsException: If the actor is a citizen
        """
        if actor is None:
            raise AuthenticationException("Authentication required")
        if not actor.is_active:
            raise InactiveUserException("Account has been deactivated")
        if not actor.is_staff:
            raise InsufficientPermissionsException(
                "Official or admin permissions required"
            )
        return actor

    @staticmethod
    def _get_report(db: Session, report_id: int) -> db_models.Report:
        report = ReportRepository(db).get_by_id(report_id)
        if report is None:
            raise ReportNotFoundException(report_id)
        return report

    @staticmethod
    def change_status(
        db: Session,
        actor: Optional[db_models.User],
        report_id: int,
        new_status: db_models.ReportStatus,
        note: Optional[str] = None,
    ) -> schemas.StatusChangeResponse:
        """
        Change a report's status and record the audit entry atomically.

        Setting the current status again is a successful no-op with no writes.

        Args:
            db: Database session
            actor: Acting user (None when unauthenticated)
            report_id: Report ID
            new_status: Target status
            note: Optional message; blank means an auto-generated message

        Returns:
            The report, whether it changed, and the audit entry if one was written

        Raises:
            AuthenticationException, InactiveUserException,
            InsufficientPermissionsException: If the actor may not drive workflow
            ReportNotFoundException: If report not found
            NoWorkflowException: If the report is a compliment
        """
        staff = WorkflowService.ensure_staff(actor)
        report = WorkflowService._get_report(db, report_id)

        if not report.has_workflow:
            raise NoWorkflowException()

        old_status = report.status
        if old_status == new_status:
            return schemas.StatusChangeResponse(
                report=schemas.Report.model_validate(report), changed=False
            )

        message = sanitize_plain_text(note) or ""
        if message:
            message = UpdateLogService.clean_message(message, what="Note")
        else:
            message = default_status_message(old_status, new_status)

        report_repo = ReportRepository(db)
        try:
            entry = UpdateLogService.append_entry(
                db,
                report_id=report.id,
                user_id=staff.id,
                update_type=db_models.UpdateType.STATUS_CHANGE,
                message=message,
                is_official=True,
                old_status=old_status,
                new_status=new_status,
            )
            report.status = new_status
            report_repo.commit()
        except SQLAlchemyError:
            report_repo.rollback()
            raise

        report_repo.refresh(report)
        report_repo.refresh(entry)
        logger.info(
            f"Report {report.id} status changed from {old_status.value} to {new_status.value}",
            report_id=report.id,
            actor_id=staff.id,
        )
        return schemas.StatusChangeResponse(
            report=schemas.Report.model_validate(report),
            changed=True,
            update=UpdateLogService.to_schema(entry),
        )

    @staticmethod
    def change_priority(
        db: Session,
        actor: Optional[db_models.User],
        report_id: int,
        new_priority: Optional[db_models.ReportPriority],
    ) -> db_models.Report:
        """
        Set or clear a report's priority.

        Always writes, and produces no update-log entry; the change is only
        recorded in the application log.

        Raises:
            AuthenticationException, InactiveUserException,
            InsufficientPermissionsException: If the actor may not drive workflow
            ReportNotFoundException: If report not found
        """
        staff = WorkflowService.ensure_staff(actor)
        report = WorkflowService._get_report(db, report_id)

        old_priority = report.priority
        report_repo = ReportRepository(db)
        try:
            report.priority = new_priority
            report = report_repo.update(report)
        except SQLAlchemyError:
            report_repo.rollback()
            raise

        logger.info(
            f"Report {report.id} priority changed from "
            f"{old_priority.value if old_priority else None} to "
            f"{new_priority.value if new_priority else None}",
            report_id=report.id,
            actor_id=staff.id,
        )
        return report

    @staticmethod
    def post_official_update(
        db: Session,
        actor: Optional[db_models.User],
        report_id: int,
        message: str,
    ) -> schemas.ReportUpdate:
        """
        Post an authoritative staff announcement on a report.

        Status and priority are left untouched.

        Raises:
            AuthenticationException, InactiveUserException,
            InsufficientPermissionsException: If the actor may not drive workflow
            ReportNotFoundException: If report not found
            ValidationException: If the message is empty or too long
        """
        staff = WorkflowService.ensure_staff(actor)
        report = WorkflowService._get_report(db, report_id)
        cleaned = UpdateLogService.clean_message(message)

        report_repo = ReportRepository(db)
        try:
            entry = UpdateLogService.append_entry(
                db,
                report_id=report.id,
                user_id=staff.id,
                update_type=db_models.UpdateType.OFFICIAL_UPDATE,
                message=cleaned,
                is_official=True,
            )
            report_repo.commit()
        except SQLAlchemyError:
            report_repo.rollback()
            raise

        report_repo.refresh(entry)
        logger.info(
            f"Official update posted on report {report.id}",
            report_id=report.id,
            actor_id=staff.id,
        )
        return UpdateLogService.to_schema(entry)
