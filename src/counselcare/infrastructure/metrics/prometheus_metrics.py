"""
Prometheus Metrics

Counters and histograms for conversation safety observability.

ARCHITECTURE: Metrics are decoupled from business logic.
Only increment/observe; never block or raise on metrics operations.
"""

import time
from contextlib import contextmanager
from typing import Iterator

from prometheus_client import (
    Counter,
    Histogram,
    Info,
    generate_latest,
    REGISTRY,
)

from counselcare.config.logging_config import get_logger

logger = get_logger(__name__)

# =============================================================================
# CLASSIFICATION METRICS
# =============================================================================

SENTIMENT_CLASSIFICATIONS_TOTAL = Counter(
    "counselcare_sentiment_classifications_total",
    "Messages classified by sentiment label",
    ["label"],  # positive, negative, neutral, crisis
)

RISK_ASSESSMENTS_TOTAL = Counter(
    "counselcare_risk_assessments_total",
    "Risk assessments by level",
    ["risk_level"],  # low, medium, high
)

RESPONSES_SELECTED_TOTAL = Counter(
    "counselcare_responses_selected_total",
    "Responses selected by template category",
    ["surface", "category"],
)

# =============================================================================
# ESCALATION METRICS
# =============================================================================

CRISIS_ESCALATIONS_TOTAL = Counter(
    "counselcare_crisis_escalations_total",
    "Turns routed to the crisis flow",
    ["surface"],
)

CRISIS_EVENTS_LOGGED_TOTAL = Counter(
    "counselcare_crisis_events_logged_total",
    "Crisis events appended to the log",
    ["persisted"],  # true, false
)

# =============================================================================
# PERSISTENCE METRICS
# =============================================================================

PERSISTENCE_FAILURES_TOTAL = Counter(
    "counselcare_persistence_failures_total",
    "Best-effort storage operations that failed",
    ["operation"],  # load, save
)

# =============================================================================
# TURN METRICS
# =============================================================================

TURN_DURATION = Histogram(
    "counselcare_turn_duration_seconds",
    "Time spent processing one conversation turn",
    ["surface"],
    buckets=[0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5],
)

SYSTEM_INFO = Info(
    "counselcare_system",
    "CounselCare core information",
)

SYSTEM_INFO.info({
    "version": "0.1.0",
    "environment": "development",  # Updated at startup
})


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def track_sentiment(label: str) -> None:
    """Record a sentiment classification."""
    SENTIMENT_CLASSIFICATIONS_TOTAL.labels(label=label).inc()


def track_risk_assessment(risk_level: str) -> None:
    """Record risk assessment level."""
    RISK_ASSESSMENTS_TOTAL.labels(risk_level=risk_level).inc()


def track_response(surface: str, category: str) -> None:
    """Record the template category chosen for a turn."""
    RESPONSES_SELECTED_TOTAL.labels(surface=surface, category=category).inc()


def track_escalation(surface: str) -> None:
    """Record a crisis escalation."""
    CRISIS_ESCALATIONS_TOTAL.labels(surface=surface).inc()


def track_crisis_event(persisted: bool) -> None:
    """Record a crisis event and whether it reached storage."""
    CRISIS_EVENTS_LOGGED_TOTAL.labels(persisted=str(persisted).lower()).inc()


def track_persistence_failure(operation: str) -> None:
    """Record a failed storage operation."""
    PERSISTENCE_FAILURES_TOTAL.labels(operation=operation).inc()


@contextmanager
def track_turn(surface: str) -> Iterator[None]:
    """Observe the duration of a conversation turn."""
    start_time = time.perf_counter()
    try:
        yield
    finally:
        TURN_DURATION.labels(surface=surface).observe(time.perf_counter() - start_time)


def update_system_info(environment: str, version: str = "0.1.0") -> None:
    """Update system info metric with current environment."""
    SYSTEM_INFO.info({
        "version": version,
        "environment": environment,
    })


def render_metrics() -> bytes:
    """Render the default registry in Prometheus text format."""
    return generate_latest(REGISTRY)
