"""
Unit Tests for Storage

Tests the key-value stores and best-effort history persistence.
"""

import json

import pytest

from counselcare.domain.enums.conversation import Sender
from counselcare.domain.models import ConversationHistory, Message
from counselcare.infrastructure.storage import (
    ConversationHistoryRepository,
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    KeyValueStore,
    PersistenceUnavailableError,
)


class TestInMemoryKeyValueStore:

    def test_missing_key_is_none(self, memory_store):
        assert memory_store.load("absent") is None

    def test_save_replaces_value(self, memory_store):
        memory_store.save("k", "1")
        memory_store.save("k", "2")

        assert memory_store.load("k") == "2"
        assert memory_store.keys() == ["k"]

    def test_satisfies_protocol(self, memory_store):
        assert isinstance(memory_store, KeyValueStore)


class TestJsonFileKeyValueStore:

    def test_round_trip(self, tmp_path):
        store = JsonFileKeyValueStore(tmp_path / "data")

        store.save("aiConversationHistory:session/1", '["x"]')

        assert store.load("aiConversationHistory:session/1") == '["x"]'
        assert [p.name for p in (tmp_path / "data").iterdir()] == [
            "aiConversationHistory%3Asession%2F1.json"
        ]

    def test_similar_keys_use_distinct_files(self, tmp_path):
        store = JsonFileKeyValueStore(tmp_path)

        store.save("a:b", "colon")
        store.save("a_b", "underscore")
        store.save("a/b", "slash")

        assert store.load("a:b") == "colon"
        assert store.load("a_b") == "underscore"
        assert store.load("a/b") == "slash"
        assert store.keys() == ["a/b", "a:b", "a_b"]

    def test_non_utf8_file_raises(self, tmp_path):
        store = JsonFileKeyValueStore(tmp_path)
        store.save("k", "placeholder")
        (tmp_path / "k.json").write_bytes(b"\xff\xfe\x00broken")

        with pytest.raises(PersistenceUnavailableError) as exc_info:
            store.load("k")

        assert exc_info.value.operation == "load"

    def test_non_utf8_history_starts_fresh(self, tmp_path):
        store = JsonFileKeyValueStore(tmp_path)
        (tmp_path / "aiConversationHistory%3As-1.json").write_bytes(b"\xff\xfe")

        assert ConversationHistoryRepository(store).load("s-1") is None

    def test_missing_key_is_none(self, tmp_path):
        assert JsonFileKeyValueStore(tmp_path).load("absent") is None

    def test_unwritable_directory_raises(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory", encoding="utf-8")
        store = JsonFileKeyValueStore(blocker)

        with pytest.raises(PersistenceUnavailableError) as exc_info:
            store.save("k", "v")

        assert exc_info.value.operation == "save"
        assert exc_info.value.key == "k"

    def test_satisfies_protocol(self, tmp_path):
        assert isinstance(JsonFileKeyValueStore(tmp_path), KeyValueStore)


class TestConversationHistoryRepository:

    def test_save_and_load(self, memory_store):
        repo = ConversationHistoryRepository(memory_store)
        history = ConversationHistory([
            Message(text="hello", sender=Sender.USER),
            Message(text="Hi there!", sender=Sender.SYSTEM),
        ])

        assert repo.save("s-1", history) is True
        restored = repo.load("s-1")

        assert restored is not None
        assert restored.messages == history.messages

    def test_key_layout(self, memory_store):
        repo = ConversationHistoryRepository(memory_store, key_prefix="history")

        repo.save("s-1", ConversationHistory())

        assert json.loads(memory_store.load("history:s-1")) == []

    def test_scoped_keys_do_not_collide(self, memory_store):
        repo = ConversationHistoryRepository(memory_store, key_prefix="history")
        companion = repo.scoped("companion")
        chatbot = repo.scoped("chatbot")

        companion.save("s-1", ConversationHistory([Message(text="hello")]))

        assert companion.key_for("s-1") == "history:companion:s-1"
        assert chatbot.load("s-1") is None
        assert repo.load("s-1") is None
        assert companion.scope == "companion"

    def test_load_applies_cap(self, memory_store):
        ConversationHistoryRepository(memory_store).save(
            "s-1", ConversationHistory([Message(text=str(i)) for i in range(10)])
        )

        restored = ConversationHistoryRepository(memory_store, max_size=4).load("s-1")

        assert [m.text for m in restored] == ["6", "7", "8", "9"]

    def test_absent_history_is_none(self, memory_store):
        assert ConversationHistoryRepository(memory_store).load("unknown") is None

    def test_corrupt_blob_is_none(self):
        store = InMemoryKeyValueStore({"aiConversationHistory:s-1": "{broken"})

        assert ConversationHistoryRepository(store).load("s-1") is None

    def test_failing_store_never_raises(self, failing_store):
        repo = ConversationHistoryRepository(failing_store)

        assert repo.save("s-1", ConversationHistory()) is False
        assert repo.load("s-1") is None
        assert failing_store.attempts == 2
