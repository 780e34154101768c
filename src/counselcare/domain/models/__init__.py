"""Domain models package."""

from counselcare.domain.models.assessment import (
    LOW_RISK,
    NEUTRAL_SENTIMENT,
    RiskAssessment,
    SentimentResult,
)
from counselcare.domain.models.message import ConversationHistory, Message
from counselcare.domain.models.crisis_event import CrisisEvent
from counselcare.domain.models.session import ConversationSession, ConversationStats

__all__ = [
    # Classification outputs
    "LOW_RISK",
    "NEUTRAL_SENTIMENT",
    "RiskAssessment",
    "SentimentResult",
    # Conversation
    "ConversationHistory",
    "Message",
    "ConversationSession",
    "ConversationStats",
    # Audit
    "CrisisEvent",
]
