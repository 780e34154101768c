"""
Sentry Error Tracking Integration

Error and safety-event reporting with sensitive data scrubbing.
Correlates events with conversation session IDs.

PRIVACY: Raw message text and crisis context are stripped before
anything leaves the process.
"""

import re
from typing import Any, Optional

import sentry_sdk
from sentry_sdk.integrations.logging import LoggingIntegration

from counselcare.config.logging_config import get_logger

logger = get_logger(__name__)

# Patterns for sensitive data scrubbing
SENSITIVE_PATTERNS = [
    r"password[\"']?\s*[:=]\s*[\"']?[^\"'\s,}]+",
    r"token[\"']?\s*[:=]\s*[\"']?[^\"'\s,}]+",
    r"secret[\"']?\s*[:=]\s*[\"']?[^\"'\s,}]+",
    r"bearer\s+[a-zA-Z0-9\-._~+/]+=*",
]

SENSITIVE_KEYS = frozenset({
    "password",
    "token",
    "secret",
    "dsn",
    "text",
    "message_text",
    "triggering_context",
    "history",
})


def _scrub_string(value: str) -> str:
    """Scrub sensitive patterns from string."""
    result = value
    for pattern in SENSITIVE_PATTERNS:
        result = re.sub(pattern, "[REDACTED]", result, flags=re.IGNORECASE)
    return result


def _scrub_dict(data: dict) -> dict:
    """Recursively scrub sensitive data from dictionary."""
    result: dict[str, Any] = {}
    for key, value in data.items():
        key_lower = str(key).lower().replace("-", "_")

        if any(sensitive in key_lower for sensitive in SENSITIVE_KEYS):
            result[key] = "[REDACTED]"
        elif isinstance(value, dict):
            result[key] = _scrub_dict(value)
        elif isinstance(value, list):
            result[key] = [
                _scrub_dict(item) if isinstance(item, dict)
                else _scrub_string(item) if isinstance(item, str)
                else item
                for item in value
            ]
        elif isinstance(value, str):
            result[key] = _scrub_string(value)
        else:
            result[key] = value

    return result


def before_send(event: dict, hint: dict) -> Optional[dict]:
    """
    Process event before sending to Sentry.

    - Scrubs extra context and breadcrumb data
    - Drops local variables captured in stack frames
    """
    if "extra" in event:
        event["extra"] = _scrub_dict(event["extra"])

    for breadcrumb in event.get("breadcrumbs", {}).get("values", []):
        if isinstance(breadcrumb.get("message"), str):
            breadcrumb["message"] = _scrub_string(breadcrumb["message"])
        if isinstance(breadcrumb.get("data"), dict):
            breadcrumb["data"] = _scrub_dict(breadcrumb["data"])

    # Frame locals can hold user messages
    for exception in event.get("exception", {}).get("values", []):
        for frame in exception.get("stacktrace", {}).get("frames", []):
            frame.pop("vars", None)

    return event


def init_sentry(
    dsn: str,
    environment: str = "development",
    release: str = "counselcare@0.1.0",
    sample_rate: float = 1.0,
    traces_sample_rate: float = 0.0,
) -> bool:
    """
    Initialize Sentry error tracking.

    Args:
        dsn: Sentry DSN
        environment: Environment name
        release: Release version
        sample_rate: Error sample rate (1.0 = all errors)
        traces_sample_rate: Performance tracing rate

    Returns:
        True if Sentry was initialized
    """
    if not dsn:
        logger.warning("Sentry DSN not configured, error tracking disabled")
        return False

    sentry_sdk.init(
        dsn=dsn,
        environment=environment,
        release=release,
        sample_rate=sample_rate,
        traces_sample_rate=traces_sample_rate,
        before_send=before_send,
        integrations=[
            LoggingIntegration(
                level=None,  # Don't capture logs as breadcrumbs
                event_level=None,  # Don't capture logs as events
            ),
        ],
        send_default_pii=False,
        max_breadcrumbs=50,
    )

    logger.info(
        "Sentry initialized",
        environment=environment,
        release=release,
    )
    return True


def set_session_context(
    session_id: str,
    surface: Optional[str] = None,
    risk_level: Optional[str] = None,
) -> None:
    """Set conversation context for debugging."""
    sentry_sdk.set_context("conversation", {
        "session_id": session_id,
        "surface": surface,
        "risk_level": risk_level,
    })


def capture_safety_event(
    message: str,
    level: str = "warning",
    extra: Optional[dict] = None,
) -> None:
    """
    Capture safety-related event for monitoring.

    Used for tracking crisis escalations.
    """
    with sentry_sdk.new_scope() as scope:
        scope.set_tag("category", "safety")
        if extra:
            for key, value in _scrub_dict(extra).items():
                scope.set_extra(key, value)

        sentry_sdk.capture_message(message, level="error" if level == "error" else "warning")


def capture_exception_with_context(
    exception: BaseException,
    session_id: Optional[str] = None,
    extra: Optional[dict] = None,
) -> Optional[str]:
    """
    Capture exception with additional context.

    Returns: Sentry event ID (None when Sentry is disabled)
    """
    with sentry_sdk.new_scope() as scope:
        if session_id:
            scope.set_tag("session_id", session_id)
        if extra:
            for key, value in _scrub_dict(extra).items():
                scope.set_extra(key, value)

        return sentry_sdk.capture_exception(exception)
