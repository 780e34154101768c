"""Domain enums package."""

from counselcare.domain.enums.classification import RiskLevel, SentimentLabel
from counselcare.domain.enums.conversation import (
    ChatSurface,
    ResponseCategory,
    Sender,
    TurnState,
)

__all__ = [
    "RiskLevel",
    "SentimentLabel",
    "ChatSurface",
    "ResponseCategory",
    "Sender",
    "TurnState",
]
