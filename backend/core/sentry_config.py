"""
Sentry SDK configuration.

Reporters may submit anonymously, so contact details and identity fields are
scrubbed from events before they leave the process.
"""

import os
from typing import Any

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.loguru import LoguruIntegration
from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration
from sentry_sdk.types import Event, Hint

# Request body keys that may identify a reporter
SCRUBBED_FIELDS = ("contact_email", "contact_phone", "email", "password")

HEALTH_PATHS = ("/api/health", "GET /api/health")


def _before_send(event: Event, hint: Hint) -> Event | None:
    """
    Scrub PII before sending to Sentry.

    Args:
        event: Sentry event.
        hint: Additional context about the event.

    Returns:
        Modified event with PII removed.
    """
    user = event.get("user")
    if user:
        # Keep only ID
        user.pop("email", None)
        user.pop("username", None)
        if "ip_address" in user:
            user["ip_address"] = "{{auto}}"

    request = event.get("request")
    if request and isinstance(request, dict):
        request.pop("cookies", None)
        headers = request.get("headers")
        if isinstance(headers, dict) and "Authorization" in headers:
            headers["Authorization"] = "[Filtered]"
        data = request.get("data")
        if isinstance(data, dict):
            for key in SCRUBBED_FIELDS:
                if key in data:
                    data[key] = "[Filtered]"

    return event


def _before_send_transaction(event: Event, hint: Hint) -> Event | None:
    """Drop health-check transactions."""
    if event.get("transaction", "") in HEALTH_PATHS:
        return None
    return event


def _traces_sampler(sampling_context: dict[str, Any]) -> float:
    """
    Sample admin traffic more heavily than the public feed.

    Args:
        sampling_context: Context about the request being sampled.

    Returns:
        Sample rate between 0.0 and 1.0.
    """
    if sampling_context.get("parent_sampled") is True:
        return 1.0

    path = sampling_context.get("asgi_scope", {}).get("path", "")
    if path == "/api/health":
        return 0.0
    if path.startswith("/api/admin") or path.startswith("/api/auth"):
        return 0.5
    return 0.2


def init_sentry() -> None:
    """
    Initialize Sentry SDK.

    Call this BEFORE creating the FastAPI app instance.
    Sentry is disabled if SENTRY_DSN environment variable is not set.
    """
    dsn = os.getenv("SENTRY_DSN")
    if not dsn:
        return

    sentry_sdk.init(
        dsn=dsn,
        environment=os.getenv("ENVIRONMENT", "development"),
        release=os.getenv("SENTRY_RELEASE", "unknown"),
        send_default_pii=False,
        integrations=[
            FastApiIntegration(transaction_style="endpoint"),
            SqlalchemyIntegration(),
            LoguruIntegration(),
        ],
        traces_sampler=_traces_sampler,
        sample_rate=1.0,
        before_send=_before_send,
        before_send_transaction=_before_send_transaction,
        attach_stacktrace=True,
        max_breadcrumbs=50,
    )
