"""
CounselCare Logging Configuration

structlog setup shared by every service. Each conversation turn binds
its session and surface so warnings and crisis escalations can be
traced without ever logging what the person wrote.

PRIVACY: Any field whose name mentions message text, history or
crisis context is replaced before rendering, at any nesting depth.
"""

import logging
import sys
from typing import Any, Optional

import structlog

from counselcare import __version__
from counselcare.config.settings import Settings

REDACTED = "[REDACTED]"

# Field-name fragments whose values never reach a log line
REDACTED_FIELDS: frozenset[str] = frozenset({
    "text",
    "history",
    "triggering_context",
    "password",
    "token",
    "secret",
    "dsn",
    "api_key",
    "authorization",
})


def _is_redacted(key: Any) -> bool:
    name = str(key).lower().replace("-", "_")
    return any(fragment in name for fragment in REDACTED_FIELDS)


def _scrub(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: REDACTED if _is_redacted(k) else _scrub(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_scrub(item) for item in value]
    return value


def redact_user_content(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """structlog processor replacing user content and secrets."""
    return _scrub(event_dict)


def add_service(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    event_dict.setdefault("service", "counselcare-core")
    event_dict.setdefault("version", __version__)
    return event_dict


def get_processors(is_development: bool) -> list[Any]:
    """Processor chain, console output in development and JSON elsewhere."""
    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        redact_user_content,
        add_service,
    ]
    if is_development:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))
    else:
        processors.extend([
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ])
    return processors


def configure_logging(settings: Settings) -> None:
    """Configure structlog and the stdlib root logger once at startup."""
    structlog.configure(
        processors=get_processors(settings.env == "development"),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.log_level),
    )
    logging.getLogger("sentry_sdk").setLevel(logging.WARNING)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def bind_session_id(session_id: str, surface: Optional[str] = None) -> None:
    """Bind the conversation being processed to the current context."""
    if surface is None:
        structlog.contextvars.bind_contextvars(session_id=session_id)
    else:
        structlog.contextvars.bind_contextvars(session_id=session_id, surface=surface)


def clear_context() -> None:
    """Drop turn context once the turn completes."""
    structlog.contextvars.clear_contextvars()
