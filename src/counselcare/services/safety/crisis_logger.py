"""
Crisis Event Logger

Append-only audit log of crisis escalations.

SAFETY-CRITICAL: Every qualifying turn is logged. There is no
deduplication or rate limiting here; erring towards a noisy log is
preferred over missing an escalation.

Persistence is best-effort. A failing store is reported upward as a
non-fatal warning and never interrupts the user-facing crisis flow.
"""

import json
from typing import Optional, Sequence

from counselcare.config.logging_config import get_logger
from counselcare.domain.clock import Clock, utc_now
from counselcare.domain.enums.conversation import ChatSurface
from counselcare.domain.models.crisis_event import CrisisEvent
from counselcare.domain.models.message import Message
from counselcare.infrastructure.metrics import track_crisis_event
from counselcare.infrastructure.storage import KeyValueStore, report_persistence_failure

logger = get_logger(__name__)


class CrisisEventLogger:
    """
    Records crisis events in memory and mirrors them to storage.

    The in-process log is owned exclusively by this logger. The
    stored blob under ``log_key`` is a JSON list shared with the
    persistence collaborator; new events are appended to it.

    Usage:
        crisis_logger = CrisisEventLogger(store)
        event = crisis_logger.log_crisis_event("session-1", history.recent(5))
    """

    DEFAULT_LOG_KEY: str = "crisisEvents"
    DEFAULT_CONTEXT_SIZE: int = 5

    def __init__(
        self,
        store: Optional[KeyValueStore] = None,
        log_key: str = DEFAULT_LOG_KEY,
        context_size: int = DEFAULT_CONTEXT_SIZE,
        clock: Clock = utc_now,
    ) -> None:
        """
        Initialize crisis event logger.

        Args:
            store: Persistence collaborator (None keeps events in memory only)
            log_key: Storage key of the crisis log blob
            context_size: Messages kept as triggering context
            clock: Timestamp source
        """
        self._store = store
        self._log_key = log_key
        self._context_size = context_size
        self._clock = clock
        self._event_log: list[CrisisEvent] = []

    def log_crisis_event(
        self,
        session_id: str,
        recent_context: Sequence[Message],
        source: ChatSurface = ChatSurface.COMPANION,
    ) -> CrisisEvent:
        """
        Append a crisis event.

        Never raises on persistence failure.

        Args:
            session_id: Conversation that escalated
            recent_context: Messages preceding the escalation, oldest first
            source: Chat surface that detected the crisis

        Returns:
            The recorded event
        """
        context = tuple(recent_context)[-self._context_size:]
        event = CrisisEvent(
            session_id=session_id,
            triggering_context=context,
            source=source,
            timestamp=self._clock(),
        )
        self._event_log.append(event)

        persisted = self._persist(event)
        track_crisis_event(persisted)

        logger.warning(
            "Crisis event logged",
            event_id=str(event.event_id),
            session_id=session_id,
            source=source.value,
            context_size=len(context),
            persisted=persisted,
        )

        return event

    def _persist(self, event: CrisisEvent) -> bool:
        """Append the event to the stored log blob."""
        if self._store is None:
            return False

        operation = "load"
        try:
            blob = self._store.load(self._log_key)
            events = json.loads(blob) if blob else []
            if not isinstance(events, list):
                raise ValueError("Stored crisis log is not a list")
            events.append(event.to_dict())

            operation = "save"
            self._store.save(self._log_key, json.dumps(events))
        except Exception as e:
            # Collaborator failures of any kind must not reach the crisis flow
            report_persistence_failure(
                e, operation, self._log_key, session_id=event.session_id
            )
            return False

        return True

    def get_events(self, session_id: Optional[str] = None) -> list[CrisisEvent]:
        """
        Get events recorded by this logger.

        Args:
            session_id: Filter by session

        Returns:
            Matching events in logging order
        """
        if session_id is None:
            return list(self._event_log)
        return [e for e in self._event_log if e.session_id == session_id]

    def load_persisted_events(self) -> list[CrisisEvent]:
        """
        Read the full stored crisis log, including other processes' events.

        Returns an empty list when storage is absent or unavailable.
        """
        if self._store is None:
            return []
        try:
            blob = self._store.load(self._log_key)
            return [CrisisEvent.from_dict(item) for item in json.loads(blob)] if blob else []
        except Exception as e:
            report_persistence_failure(e, "load", self._log_key)
            return []
