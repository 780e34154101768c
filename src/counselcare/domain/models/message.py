"""
Conversation Message Models

A Message is one chat turn from either side of the conversation.
ConversationHistory is the bounded, ordered record of a session's
messages.

PRIVACY: Message text may contain sensitive disclosures. Never log
it; persist it only through the storage collaborator.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterator, Optional

from counselcare.domain.clock import utc_now
from counselcare.domain.enums.conversation import Sender
from counselcare.domain.models.assessment import SentimentResult


@dataclass(frozen=True)
class Message:
    """
    A single message in a conversation.

    Immutable once created.

    Attributes:
        text: Message content
        sender: Author (user or system)
        timestamp: When the message was created
        sentiment: Classification, set on user messages only
    """

    text: str
    sender: Sender = Sender.USER
    timestamp: datetime = field(default_factory=utc_now)
    sentiment: Optional[SentimentResult] = None

    def to_dict(self) -> dict:
        """Serialize message to dictionary."""
        return {
            "text": self.text,
            "sender": self.sender.value,
            "timestamp": self.timestamp.isoformat(),
            "sentiment": self.sentiment.to_dict() if self.sentiment else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Message":
        """Create message from dictionary."""
        sentiment = data.get("sentiment")
        return cls(
            text=data.get("text", ""),
            sender=Sender(data.get("sender", Sender.USER)),
            timestamp=datetime.fromisoformat(data["timestamp"]) if "timestamp" in data else utc_now(),
            sentiment=SentimentResult.from_dict(sentiment) if sentiment else None,
        )


class ConversationHistory:
    """
    Bounded, insertion-ordered message history.

    Once more than ``max_size`` messages have been appended the oldest
    are evicted from the front, so the newest ``max_size`` messages
    always remain in their original relative order.

    Usage:
        history = ConversationHistory(max_size=100)
        history.append(Message(text="hello"))
        last_five = history.recent(5)
    """

    DEFAULT_MAX_SIZE: int = 100

    def __init__(
        self,
        messages: Optional[list[Message]] = None,
        max_size: int = DEFAULT_MAX_SIZE,
    ) -> None:
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        self._max_size = max_size
        self._messages: list[Message] = []
        for message in messages or []:
            self.append(message)

    @property
    def max_size(self) -> int:
        return self._max_size

    @property
    def messages(self) -> tuple[Message, ...]:
        return tuple(self._messages)

    def append(self, message: Message) -> Message:
        """
        Append a message, evicting the oldest entries past the cap.

        Args:
            message: Message to store

        Returns:
            The stored message
        """
        self._messages.append(message)
        overflow = len(self._messages) - self._max_size
        if overflow > 0:
            del self._messages[:overflow]
        return message

    def recent(self, count: int) -> list[Message]:
        """Get up to ``count`` most recent messages, oldest first."""
        if count <= 0:
            return []
        return self._messages[-count:]

    def by_sender(self, sender: Sender) -> list[Message]:
        return [m for m in self._messages if m.sender == sender]

    def to_list(self) -> list[dict]:
        return [m.to_dict() for m in self._messages]

    @classmethod
    def from_list(
        cls,
        data: list[dict],
        max_size: int = DEFAULT_MAX_SIZE,
    ) -> "ConversationHistory":
        return cls([Message.from_dict(item) for item in data], max_size=max_size)

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(list(self._messages))

    def __getitem__(self, index: int) -> Message:
        return self._messages[index]
