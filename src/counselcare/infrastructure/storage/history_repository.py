"""
Conversation History Repository

Loads and saves a session's message history through the key-value
store. All operations are best-effort: failures (PersistenceUnavailableError
or any other collaborator error) are reported as non-fatal warnings and
never propagate to the conversation turn.
"""

import json
from typing import Optional

from counselcare.config.logging_config import get_logger
from counselcare.domain.models.message import ConversationHistory
from counselcare.infrastructure.metrics import track_persistence_failure
from counselcare.infrastructure.monitoring import capture_exception_with_context
from counselcare.infrastructure.storage.key_value_store import KeyValueStore

logger = get_logger(__name__)


def report_persistence_failure(
    error: Exception,
    operation: str,
    key: str,
    session_id: Optional[str] = None,
) -> None:
    """
    Report a failed storage operation as a non-fatal warning.

    Logs, counts and forwards the error to Sentry. Never raises.
    """
    logger.warning(
        "Persistence unavailable",
        operation=operation,
        key=key,
        error=str(error),
    )
    track_persistence_failure(operation)
    capture_exception_with_context(
        error,
        session_id=session_id,
        extra={"operation": operation, "key": key},
    )


class ConversationHistoryRepository:
    """
    Per-session history persistence.

    Each session's history is stored as a JSON list under
    ``<key_prefix>:<session_id>``, or ``<key_prefix>:<scope>:<session_id>``
    for a scoped repository. Orchestrators scope by chat surface so the
    same session id on two surfaces keeps two conversations.

    Usage:
        repo = ConversationHistoryRepository(store)
        repo.save("session-1", history)
        restored = repo.load("session-1")
    """

    def __init__(
        self,
        store: KeyValueStore,
        key_prefix: str = "aiConversationHistory",
        max_size: int = ConversationHistory.DEFAULT_MAX_SIZE,
        scope: Optional[str] = None,
    ) -> None:
        self._store = store
        self._key_prefix = key_prefix
        self._max_size = max_size
        self._scope = scope

    @property
    def scope(self) -> Optional[str]:
        return self._scope

    def scoped(self, scope: str) -> "ConversationHistoryRepository":
        """Repository over the same store with keys namespaced by scope."""
        return ConversationHistoryRepository(
            self._store,
            key_prefix=self._key_prefix,
            max_size=self._max_size,
            scope=scope,
        )

    def key_for(self, session_id: str) -> str:
        if self._scope:
            return f"{self._key_prefix}:{self._scope}:{session_id}"
        return f"{self._key_prefix}:{session_id}"

    def load(self, session_id: str) -> Optional[ConversationHistory]:
        """
        Load a session's history.

        Args:
            session_id: Conversation identifier

        Returns:
            Restored history, or None if absent or unreadable
        """
        key = self.key_for(session_id)
        try:
            blob = self._store.load(key)
            if blob is None:
                return None
            return ConversationHistory.from_list(json.loads(blob), max_size=self._max_size)
        except Exception as e:
            # Unreadable or corrupt history starts a fresh conversation
            report_persistence_failure(e, "load", key, session_id=session_id)
            return None

    def save(self, session_id: str, history: ConversationHistory) -> bool:
        """
        Save a session's history.

        Args:
            session_id: Conversation identifier
            history: History to persist

        Returns:
            True if the store accepted the blob
        """
        key = self.key_for(session_id)
        try:
            self._store.save(key, json.dumps(history.to_list()))
        except Exception as e:
            report_persistence_failure(e, "save", key, session_id=session_id)
            return False
        return True
