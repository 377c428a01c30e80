"""
Correlation ID generation and request-scoped storage.

Every request gets a short ID that is echoed in the X-Correlation-ID header,
stamped on each log line and attached to error responses, so a citizen can
quote it when reporting a failed submission.
"""

import uuid
from contextvars import ContextVar, Token

correlation_id_var: ContextVar[str] = ContextVar("correlation_id", default="")


def generate_correlation_id() -> str:
    """
    Generate a short correlation ID.

    Returns:
        8-character lowercase hex string (e.g. "3f9a0c1e").
    """
    return uuid.uuid4().hex[:8]


def get_correlation_id() -> str:
    """Return the correlation ID bound to the current context, or ""."""
    return correlation_id_var.get()


def set_correlation_id(correlation_id: str) -> Token[str]:
    """
    Bind a correlation ID to the current context.

    Args:
        correlation_id: ID to bind.

    Returns:
        Token that can be passed to reset_correlation_id().
    """
    return correlation_id_var.set(correlation_id)


def reset_correlation_id(token: Token[str]) -> None:
    """Restore the correlation ID that was active before set_correlation_id()."""
    correlation_id_var.reset(token)
