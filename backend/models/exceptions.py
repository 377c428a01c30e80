"""
Custom domain exceptions for the application.

These exceptions are raised by the service layer and converted to HTTP exceptions
by centralized exception handlers in main.py, maintaining proper separation of concerns.

The authentication module (auth.py) also uses these domain exceptions to remain
HTTP-agnostic, allowing reuse in non-HTTP contexts (CLI tools, background tasks).
"""

from core.correlation import generate_correlation_id, get_correlation_id


class DomainException(Exception):
    """
    Base class for all domain exceptions.

    Attributes:
        message: Human-readable error message.
        correlation_id: Unique ID for error tracking (auto-generated if not provided).
    """

    def __init__(self, message: str, correlation_id: str | None = None):
        self.message = message
        # Use request correlation ID if available, otherwise generate new one
        self.correlation_id = (
            correlation_id or get_correlation_id() or generate_correlation_id()
        )
        super().__init__(self.message)


class NotFoundException(DomainException):
    """Raised when a requested resource is not found."""

    pass


class PermissionDeniedException(DomainException):
    """Raised when user lacks required permissions."""

    pass


class ValidationException(DomainException):
    """Raised when input validation fails."""

    pass


class ConflictException(DomainException):
    """Raised when operation conflicts with existing data."""

    pass


class AuthenticationException(DomainException):
    """Raised when authentication fails or is required but missing."""

    pass


class AlreadyExistsException(DomainException):
    """Raised when trying to create a resource that already exists."""

    pass


class BusinessRuleException(DomainException):
    """Raised when a business rule is violated."""

    pass


# Specific exceptions for domain entities


class UserNotFoundException(NotFoundException):
    """User not found."""

    pass


class UserAlreadyExistsException(AlreadyExistsException):
    """User already exists."""

    pass


class ReportNotFoundException(NotFoundException):
    """Report not found."""

    def __init__(self, report_id: int) -> None:
        super().__init__(f"Report with ID {report_id} not found")
        self.report_id = report_id


class InvalidCredentialsException(AuthenticationException):
    """Invalid username or password."""

    pass


class InactiveUserException(PermissionDeniedException):
    """User account is inactive."""

    pass


class InsufficientPermissionsException(PermissionDeniedException):
    """User doesn't have sufficient permissions."""

    pass


class DuplicateUpvoteException(ConflictException):
    """User already holds an upvote on this report."""

    def __init__(self, report_id: int, user_id: int) -> None:
        super().__init__(f"User {user_id} has already upvoted report {report_id}")
        self.report_id = report_id
        self.user_id = user_id


class InvalidReportDraftException(ValidationException):
    """Report submission failed validation."""

    pass


class NoWorkflowException(BusinessRuleException):
    """Raised when a workflow operation targets a report type without workflow."""

    def __init__(self, message: str = "Compliments do not have a status workflow"):
        super().__init__(message)
