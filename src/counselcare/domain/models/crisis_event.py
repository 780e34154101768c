"""
Crisis Event Model

Audit record created whenever a conversation turn is escalated.

SAFETY-CRITICAL: Crisis events are append-only. The core never
mutates or deletes them; retention is an external policy.
"""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID, uuid4

from counselcare.domain.clock import utc_now
from counselcare.domain.enums.conversation import ChatSurface
from counselcare.domain.models.message import Message


@dataclass(frozen=True)
class CrisisEvent:
    """
    A logged escalation.

    Attributes:
        session_id: Conversation that escalated
        triggering_context: Most recent messages at escalation time
        source: Chat surface that detected the crisis
        severity: Always "high"
        timestamp: When the event was created
        event_id: Unique event identifier
    """

    session_id: str
    triggering_context: tuple[Message, ...] = ()
    source: ChatSurface = ChatSurface.COMPANION
    severity: str = "high"
    timestamp: datetime = field(default_factory=utc_now)
    event_id: UUID = field(default_factory=uuid4)

    def to_dict(self) -> dict:
        """Serialize event for the crisis log blob."""
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "session_id": self.session_id,
            "severity": self.severity,
            "source": self.source.value,
            "triggering_context": [m.to_dict() for m in self.triggering_context],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CrisisEvent":
        return cls(
            event_id=UUID(data["event_id"]) if "event_id" in data else uuid4(),
            timestamp=datetime.fromisoformat(data["timestamp"]) if "timestamp" in data else utc_now(),
            session_id=data.get("session_id", ""),
            severity=data.get("severity", "high"),
            source=ChatSurface(data.get("source", ChatSurface.COMPANION)),
            triggering_context=tuple(
                Message.from_dict(m) for m in data.get("triggering_context", [])
            ),
        )
