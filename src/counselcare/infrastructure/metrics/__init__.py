"""Metrics infrastructure package."""

from counselcare.infrastructure.metrics.prometheus_metrics import (
    # Classification metrics
    SENTIMENT_CLASSIFICATIONS_TOTAL,
    RISK_ASSESSMENTS_TOTAL,
    RESPONSES_SELECTED_TOTAL,
    # Escalation metrics
    CRISIS_ESCALATIONS_TOTAL,
    CRISIS_EVENTS_LOGGED_TOTAL,
    # Persistence metrics
    PERSISTENCE_FAILURES_TOTAL,
    # Turn metrics
    TURN_DURATION,
    # Helpers
    track_sentiment,
    track_risk_assessment,
    track_response,
    track_escalation,
    track_crisis_event,
    track_persistence_failure,
    track_turn,
    update_system_info,
    render_metrics,
)

__all__ = [
    "SENTIMENT_CLASSIFICATIONS_TOTAL",
    "RISK_ASSESSMENTS_TOTAL",
    "RESPONSES_SELECTED_TOTAL",
    "CRISIS_ESCALATIONS_TOTAL",
    "CRISIS_EVENTS_LOGGED_TOTAL",
    "PERSISTENCE_FAILURES_TOTAL",
    "TURN_DURATION",
    "track_sentiment",
    "track_risk_assessment",
    "track_response",
    "track_escalation",
    "track_crisis_event",
    "track_persistence_failure",
    "track_turn",
    "update_system_info",
    "render_metrics",
]
