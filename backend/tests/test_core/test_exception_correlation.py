"""Tests for exception correlation ID behavior."""

import pytest

from core.correlation import reset_correlation_id, set_correlation_id
from models.exceptions import (
    DomainException,
    DuplicateUpvoteException,
    NoWorkflowException,
    ReportNotFoundException,
)


@pytest.fixture
def bound_correlation_id():
    token = set_correlation_id("req00001")
    yield "req00001"
    reset_correlation_id(token)


class TestDomainExceptionCorrelationId:
    """Tests for correlation ID in DomainException."""

    def test_uses_context_correlation_id(self, bound_correlation_id) -> None:
        exc = ReportNotFoundException(42)
        assert exc.correlation_id == bound_correlation_id

    def test_generates_id_without_context(self) -> None:
        exc = DomainException("Test error")
        assert len(exc.correlation_id) == 8

    def test_explicit_overrides_context(self, bound_correlation_id) -> None:
        exc = DomainException("Test error", correlation_id="explicit")
        assert exc.correlation_id == "explicit"


class TestDomainExceptionMessages:
    def test_report_not_found_message(self) -> None:
        exc = ReportNotFoundException(42)
        assert exc.message == "Report with ID 42 not found"
        assert exc.report_id == 42

    def test_duplicate_upvote_keeps_ids(self) -> None:
        exc = DuplicateUpvoteException(3, 9)
        assert (exc.report_id, exc.user_id) == (3, 9)

    def test_no_workflow_default_message(self) -> None:
        assert "Compliments" in NoWorkflowException().message
