"""Tests for WorkflowService."""

import pytest

import repositories.db_models as db_models
from models.exceptions import (
    AuthenticationException,
    InactiveUserException,
    InsufficientPermissionsException,
    NoWorkflowException,
    ReportNotFoundException,
    ValidationException,
)
from services.workflow_service import WorkflowService, default_status_message


def _entries(db_session, report_id):
    return (
        db_session.query(db_models.ReportUpdate)
        .filter(db_models.ReportUpdate.report_id == report_id)
        .order_by(db_models.ReportUpdate.id)
        .all()
    )


class TestChangeStatus:
    """Test cases for status transitions."""

    def test_status_change_with_blank_note(self, db_session, make_report, admin_user):
        """A blank note produces the auto-generated audit message."""
        report = make_report(status=db_models.ReportStatus.UNDER_REVIEW)

        result = WorkflowService.change_status(
            db_session, admin_user, report.id, db_models.ReportStatus.RESOLVED, note=""
        )

        assert result.changed is True
        assert result.report.status == db_models.ReportStatus.RESOLVED
        assert result.report.updates_count == 1
        assert result.update is not None
        assert result.update.update_type == db_models.UpdateType.STATUS_CHANGE
        assert result.update.old_status == db_models.ReportStatus.UNDER_REVIEW
        assert result.update.new_status == db_models.ReportStatus.RESOLVED
        assert result.update.is_official is True
        assert result.update.message == "Status changed from under_review to resolved"
        assert result.update.author_username == admin_user.username

    def test_status_change_with_note(self, db_session, test_report, official_user):
        result = WorkflowService.change_status(
            db_session,
            official_user,
            test_report.id,
            db_models.ReportStatus.IN_PROGRESS,
            note="  Crew scheduled for Thursday  ",
        )

        assert result.update.message == "Crew scheduled for Thursday"
        assert result.update.author_role == db_models.UserRole.OFFICIAL

    def test_markup_only_note_uses_default_message(
        self, db_session, test_report, admin_user
    ):
        result = WorkflowService.change_status(
            db_session,
            admin_user,
            test_report.id,
            db_models.ReportStatus.UNDER_REVIEW,
            note="<b></b>",
        )

        assert result.update.message == "Status changed from new to under_review"

    def test_same_status_is_noop(self, db_session, test_report, admin_user):
        """Re-applying the current status writes nothing."""
        before = test_report.updated_at

        result = WorkflowService.change_status(
            db_session, admin_user, test_report.id, db_models.ReportStatus.NEW
        )

        db_session.refresh(test_report)
        assert result.changed is False
        assert result.update is None
        assert _entries(db_session, test_report.id) == []
        assert test_report.updates_count == 0
        assert test_report.updated_at == before

    def test_any_status_reachable(self, db_session, make_report, admin_user):
        """Transitions are not restricted to a forward path."""
        report = make_report(status=db_models.ReportStatus.CLOSED)

        result = WorkflowService.change_status(
            db_session, admin_user, report.id, db_models.ReportStatus.NEW
        )

        assert result.report.status == db_models.ReportStatus.NEW

    def test_citizen_rejected_without_changes(self, db_session, test_report, test_user):
        with pytest.raises(InsufficientPermissionsException):
            WorkflowService.change_status(
                db_session, test_user, test_report.id, db_models.ReportStatus.CLOSED
            )

        db_session.refresh(test_report)
        assert test_report.status == db_models.ReportStatus.NEW
        assert _entries(db_session, test_report.id) == []

    def test_unauthenticated_rejected(self, db_session, test_report):
        with pytest.raises(AuthenticationException):
            WorkflowService.change_status(
                db_session, None, test_report.id, db_models.ReportStatus.CLOSED
            )

    def test_inactive_staff_rejected(self, db_session, test_report, inactive_admin):
        with pytest.raises(InactiveUserException):
            WorkflowService.change_status(
                db_session, inactive_admin, test_report.id, db_models.ReportStatus.CLOSED
            )

    def test_role_checked_before_existence(self, db_session, test_user):
        """A citizen learns nothing about whether the report exists."""
        with pytest.raises(InsufficientPermissionsException):
            WorkflowService.change_status(
                db_session, test_user, 99999, db_models.ReportStatus.CLOSED
            )

    def test_unknown_report(self, db_session, admin_user):
        with pytest.raises(ReportNotFoundException):
            WorkflowService.change_status(
                db_session, admin_user, 99999, db_models.ReportStatus.CLOSED
            )

    def test_compliment_has_no_workflow(
        self, db_session, compliment_report, admin_user
    ):
        with pytest.raises(NoWorkflowException):
            WorkflowService.change_status(
                db_session,
                admin_user,
                compliment_report.id,
                db_models.ReportStatus.RESOLVED,
            )

        db_session.refresh(compliment_report)
        assert compliment_report.status == db_models.ReportStatus.NEW

    def test_default_status_message(self):
        assert (
            default_status_message(
                db_models.ReportStatus.NEW, db_models.ReportStatus.REJECTED
            )
            == "Status changed from new to rejected"
        )


class TestChangePriority:
    """Test cases for priority changes."""

    def test_priority_set_without_log_entry(self, db_session, test_report, admin_user):
        report = WorkflowService.change_priority(
            db_session, admin_user, test_report.id, db_models.ReportPriority.HIGH
        )

        assert report.priority == db_models.ReportPriority.HIGH
        assert report.updates_count == 0
        assert _entries(db_session, test_report.id) == []

    def test_priority_cleared(self, db_session, make_report, official_user):
        report = make_report(priority=db_models.ReportPriority.URGENT)

        updated = WorkflowService.change_priority(
            db_session, official_user, report.id, None
        )

        assert updated.priority is None

    def test_citizen_cannot_change_priority(self, db_session, test_report, test_user):
        with pytest.raises(InsufficientPermissionsException):
            WorkflowService.change_priority(
                db_session, test_user, test_report.id, db_models.ReportPriority.LOW
            )

        db_session.refresh(test_report)
        assert test_report.priority is None


class TestOfficialUpdate:
    """Test cases for official announcements."""

    def test_official_update_leaves_status(self, db_session, make_report, official_user):
        report = make_report(status=db_models.ReportStatus.IN_PROGRESS)

        entry = WorkflowService.post_official_update(
            db_session, official_user, report.id, "Repairs start Monday."
        )

        db_session.refresh(report)
        assert entry.update_type == db_models.UpdateType.OFFICIAL_UPDATE
        assert entry.is_official is True
        assert entry.old_status is None
        assert entry.new_status is None
        assert report.status == db_models.ReportStatus.IN_PROGRESS
        assert report.updates_count == 1

    def test_official_update_on_compliment_allowed(
        self, db_session, compliment_report, admin_user
    ):
        entry = WorkflowService.post_official_update(
            db_session, admin_user, compliment_report.id, "Thanks, passed on to the crew."
        )
        assert entry.report_id == compliment_report.id

    def test_empty_message_rejected(self, db_session, test_report, admin_user):
        with pytest.raises(ValidationException):
            WorkflowService.post_official_update(
                db_session, admin_user, test_report.id, "   "
            )

    def test_citizen_rejected(self, db_session, test_report, test_user):
        with pytest.raises(InsufficientPermissionsException):
            WorkflowService.post_official_update(
                db_session, test_user, test_report.id, "I am the mayor now"
            )
        assert _entries(db_session, test_report.id) == []


class TestUpdatesCounter:
    """The updates counter tracks the number of log entries."""

    def test_counter_matches_entries(self, db_session, test_report, admin_user):
        WorkflowService.change_status(
            db_session, admin_user, test_report.id, db_models.ReportStatus.UNDER_REVIEW
        )
        WorkflowService.post_official_update(
            db_session, admin_user, test_report.id, "Inspector assigned."
        )
        WorkflowService.change_status(
            db_session, admin_user, test_report.id, db_models.ReportStatus.UNDER_REVIEW
        )
        WorkflowService.change_status(
            db_session, admin_user, test_report.id, db_models.ReportStatus.RESOLVED
        )

        db_session.refresh(test_report)
        assert test_report.updates_count == len(_entries(db_session, test_report.id))
        assert test_report.updates_count == 3
