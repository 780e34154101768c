"""
Conversation Session Model

Explicit per-conversation context object. The caller creates one
at conversation start, passes it to the orchestrator on every turn
and discards or persists it at the end.

The orchestrator is the only writer of a session's history.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from counselcare.domain.clock import utc_now
from counselcare.domain.enums.classification import RiskLevel, SentimentLabel
from counselcare.domain.enums.conversation import ChatSurface, Sender, TurnState
from counselcare.domain.models.message import ConversationHistory, Message


@dataclass(frozen=True)
class ConversationStats:
    """
    Summary statistics for a conversation.

    Attributes:
        total_messages: Messages currently retained in history
        user_messages: Retained messages authored by the user
        session_duration_seconds: Time since session start
        sentiment_breakdown: User message count per sentiment label
    """

    total_messages: int
    user_messages: int
    session_duration_seconds: int
    sentiment_breakdown: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "total_messages": self.total_messages,
            "user_messages": self.user_messages,
            "session_duration_seconds": self.session_duration_seconds,
            "sentiment_breakdown": dict(self.sentiment_breakdown),
        }


@dataclass
class ConversationSession:
    """
    State of one continuous conversation.

    Attributes:
        session_id: Opaque caller-supplied identifier
        surface: Chat surface hosting the conversation
        history: Bounded message history
        started_at: Session start time
        country_code: Country used for crisis resources
        message_count: Accepted user turns
        current_sentiment: Sentiment of the latest user message
        current_risk: Risk tier of the latest user message
        escalation_count: Turns routed to the crisis flow
        turn_state: Orchestration state of the current turn
    """

    session_id: str
    surface: ChatSurface = ChatSurface.COMPANION
    history: ConversationHistory = field(default_factory=ConversationHistory)
    started_at: datetime = field(default_factory=utc_now)
    country_code: str = "US"
    message_count: int = 0
    current_sentiment: SentimentLabel = SentimentLabel.NEUTRAL
    current_risk: RiskLevel = RiskLevel.LOW
    escalation_count: int = 0
    turn_state: TurnState = TurnState.IDLE

    def add_message(self, message: Message) -> Message:
        """
        Append a message to the session history.

        Args:
            message: Message to append

        Returns:
            The stored message
        """
        if message.sender == Sender.USER:
            self.message_count += 1
        return self.history.append(message)

    def recent_messages(self, count: int) -> list[Message]:
        return self.history.recent(count)

    @property
    def has_escalated(self) -> bool:
        return self.escalation_count > 0

    def stats(self, now: Optional[datetime] = None) -> ConversationStats:
        """
        Summarize the retained conversation.

        Args:
            now: Reference time for the duration (defaults to current UTC)

        Returns:
            ConversationStats for this session
        """
        user_messages = self.history.by_sender(Sender.USER)

        breakdown: dict[str, int] = {}
        for message in user_messages:
            if message.sentiment is None:
                continue
            label = message.sentiment.label.value
            breakdown[label] = breakdown.get(label, 0) + 1

        end = now or utc_now()
        duration = max(0, int((end - self.started_at).total_seconds()))

        return ConversationStats(
            total_messages=len(self.history),
            user_messages=len(user_messages),
            session_duration_seconds=duration,
            sentiment_breakdown=breakdown,
        )

    def to_dict(self) -> dict:
        """Serialize session metadata (history excluded)."""
        return {
            "session_id": self.session_id,
            "surface": self.surface.value,
            "started_at": self.started_at.isoformat(),
            "country_code": self.country_code,
            "message_count": self.message_count,
            "current_sentiment": self.current_sentiment.value,
            "current_risk": self.current_risk.value,
            "escalation_count": self.escalation_count,
        }
