"""Storage infrastructure package."""

from counselcare.infrastructure.storage.key_value_store import (
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    KeyValueStore,
    PersistenceUnavailableError,
)
from counselcare.infrastructure.storage.history_repository import (
    ConversationHistoryRepository,
    report_persistence_failure,
)

__all__ = [
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "KeyValueStore",
    "PersistenceUnavailableError",
    "ConversationHistoryRepository",
    "report_persistence_failure",
]
