"""
Unit Tests for Crisis Event Logger

Tests append-only logging, context trimming and survival across
persistence failures.
"""

import json

from counselcare.domain.enums.conversation import ChatSurface, Sender
from counselcare.domain.models import Message
from counselcare.infrastructure.storage import InMemoryKeyValueStore
from counselcare.services.safety import CrisisEventLogger


def make_context(count):
    return [Message(text=f"message {i}", sender=Sender.USER) for i in range(count)]


class TestLogging:

    def test_event_fields(self, memory_store, clock):
        crisis_logger = CrisisEventLogger(memory_store, clock=clock)
        expected_timestamp = clock.current

        event = crisis_logger.log_crisis_event("s-1", make_context(2))

        assert event.session_id == "s-1"
        assert event.severity == "high"
        assert event.source == ChatSurface.COMPANION
        assert event.timestamp == expected_timestamp
        assert [m.text for m in event.triggering_context] == ["message 0", "message 1"]

    def test_context_trimmed_to_most_recent(self, memory_store):
        crisis_logger = CrisisEventLogger(memory_store, context_size=5)

        event = crisis_logger.log_crisis_event("s-1", make_context(8))

        assert [m.text for m in event.triggering_context] == [
            f"message {i}" for i in range(3, 8)
        ]

    def test_every_call_appends(self, memory_store):
        """No deduplication of repeated escalations."""
        crisis_logger = CrisisEventLogger(memory_store)

        crisis_logger.log_crisis_event("s-1", make_context(1))
        crisis_logger.log_crisis_event("s-1", make_context(1))

        assert len(crisis_logger.get_events()) == 2
        assert len(json.loads(memory_store.load("crisisEvents"))) == 2

    def test_get_events_filters_by_session(self, memory_store):
        crisis_logger = CrisisEventLogger(memory_store)
        crisis_logger.log_crisis_event("s-1", [])
        crisis_logger.log_crisis_event("s-2", [], source=ChatSurface.CHATBOT)

        events = crisis_logger.get_events("s-2")

        assert [e.session_id for e in events] == ["s-2"]
        assert events[0].source == ChatSurface.CHATBOT


class TestPersistence:

    def test_appends_to_existing_blob(self):
        store = InMemoryKeyValueStore({"crisisEvents": json.dumps([{"legacy": True}])})
        crisis_logger = CrisisEventLogger(store)

        crisis_logger.log_crisis_event("s-1", [])

        stored = json.loads(store.load("crisisEvents"))
        assert len(stored) == 2
        assert stored[0] == {"legacy": True}
        assert stored[1]["session_id"] == "s-1"

    def test_custom_log_key(self, memory_store):
        CrisisEventLogger(memory_store, log_key="audit").log_crisis_event("s-1", [])

        assert memory_store.load("audit") is not None
        assert memory_store.load("crisisEvents") is None

    def test_failing_store_never_raises(self, failing_store):
        crisis_logger = CrisisEventLogger(failing_store)

        event = crisis_logger.log_crisis_event("s-1", make_context(1))

        assert event.session_id == "s-1"
        assert crisis_logger.get_events() == [event]
        assert failing_store.attempts == 1

    def test_without_store_keeps_memory_log(self):
        crisis_logger = CrisisEventLogger()

        event = crisis_logger.log_crisis_event("s-1", [])

        assert crisis_logger.get_events() == [event]
        assert crisis_logger.load_persisted_events() == []

    def test_load_persisted_events(self, memory_store):
        writer = CrisisEventLogger(memory_store)
        event = writer.log_crisis_event("s-1", make_context(2))

        reader = CrisisEventLogger(memory_store)

        assert reader.get_events() == []
        assert reader.load_persisted_events() == [event]

    def test_load_persisted_events_on_failing_store(self, failing_store):
        assert CrisisEventLogger(failing_store).load_persisted_events() == []
