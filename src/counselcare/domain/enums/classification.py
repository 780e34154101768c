"""
Sentiment and Risk Enumerations

Defines the labels produced by the keyword classifier and the
coarse escalation tiers derived from them.

CLINICAL_REVIEW_REQUIRED: Tier boundaries are keyword based and
must not be read as a clinical risk assessment.
"""

from enum import StrEnum


class SentimentLabel(StrEnum):
    """
    Sentiment classification of a single message.

    CRISIS dominates every other signal: a message containing any
    crisis word or phrase is labelled CRISIS regardless of how many
    positive or negative keywords it also contains.
    """

    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"
    CRISIS = "crisis"


class RiskLevel(StrEnum):
    """
    Escalation tier for a single message.

    Drives whether the crisis flow is triggered.
    """

    LOW = "low"
    """Standard supportive conversation."""

    MEDIUM = "medium"
    """
    Concerning language or negative sentiment.
    - Conversation continues normally
    - Tracked for session statistics
    """

    HIGH = "high"
    """
    Acute risk language detected.

    SAFETY_NOTE: Every HIGH turn is routed to the crisis response,
    logged as a crisis event and surfaced to the presentation layer.
    """

    @property
    def rank(self) -> int:
        """Numeric ordering (LOW < MEDIUM < HIGH)."""
        return _RISK_RANK[self]


_RISK_RANK = {
    RiskLevel.LOW: 0,
    RiskLevel.MEDIUM: 1,
    RiskLevel.HIGH: 2,
}
