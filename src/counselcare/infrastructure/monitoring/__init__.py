"""Monitoring infrastructure package."""

from counselcare.infrastructure.monitoring.sentry_integration import (
    init_sentry,
    set_session_context,
    capture_safety_event,
    capture_exception_with_context,
)

__all__ = [
    "init_sentry",
    "set_session_context",
    "capture_safety_event",
    "capture_exception_with_context",
]
