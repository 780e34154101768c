"""
Unit Tests for Conversation Models

Tests history retention, message serialization and session
statistics.
"""

from datetime import datetime, timedelta, timezone

import pytest

from counselcare.domain.enums.classification import SentimentLabel
from counselcare.domain.enums.conversation import ChatSurface, Sender, TurnState
from counselcare.domain.models import (
    ConversationHistory,
    ConversationSession,
    CrisisEvent,
    Message,
    SentimentResult,
)

FIXED_NOW = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


class TestConversationHistory:
    """Bounded FIFO retention."""

    def test_oldest_evicted_past_cap(self):
        history = ConversationHistory(max_size=100)

        for i in range(101):
            history.append(Message(text=f"message {i}"))

        assert len(history) == 100
        assert history[0].text == "message 1"
        assert history[-1].text == "message 100"
        assert [m.text for m in history] == [f"message {i}" for i in range(1, 101)]

    def test_initial_messages_respect_cap(self):
        messages = [Message(text=str(i)) for i in range(5)]

        history = ConversationHistory(messages, max_size=3)

        assert [m.text for m in history] == ["2", "3", "4"]

    def test_invalid_cap_rejected(self):
        with pytest.raises(ValueError):
            ConversationHistory(max_size=0)

    def test_recent_returns_oldest_first(self):
        history = ConversationHistory([Message(text=str(i)) for i in range(10)])

        assert [m.text for m in history.recent(3)] == ["7", "8", "9"]
        assert history.recent(0) == []
        assert len(history.recent(50)) == 10

    def test_by_sender(self):
        history = ConversationHistory([
            Message(text="hi", sender=Sender.USER),
            Message(text="hello", sender=Sender.SYSTEM),
        ])

        assert [m.text for m in history.by_sender(Sender.SYSTEM)] == ["hello"]

    def test_list_round_trip(self):
        sentiment = SentimentResult(label=SentimentLabel.NEGATIVE, negative_hits=1)
        history = ConversationHistory([
            Message(text="I'm sad", sender=Sender.USER, timestamp=FIXED_NOW, sentiment=sentiment),
            Message(text="I hear you", sender=Sender.SYSTEM, timestamp=FIXED_NOW),
        ])

        restored = ConversationHistory.from_list(history.to_list())

        assert restored.messages == history.messages


class TestMessage:

    def test_to_dict(self):
        message = Message(text="hello", sender=Sender.SYSTEM, timestamp=FIXED_NOW)

        data = message.to_dict()

        assert data == {
            "text": "hello",
            "sender": "system",
            "timestamp": FIXED_NOW.isoformat(),
            "sentiment": None,
        }

    def test_default_timestamp_is_timezone_aware(self):
        assert Message(text="hello").timestamp.tzinfo is not None


class TestConversationSession:

    def test_user_messages_increment_count(self):
        session = ConversationSession(session_id="s-1")

        session.add_message(Message(text="hi", sender=Sender.USER))
        session.add_message(Message(text="hello", sender=Sender.SYSTEM))

        assert session.message_count == 1
        assert len(session.history) == 2

    def test_defaults(self):
        session = ConversationSession(session_id="s-1")

        assert session.surface == ChatSurface.COMPANION
        assert session.turn_state == TurnState.IDLE
        assert not session.has_escalated

    def test_stats_breakdown(self):
        session = ConversationSession(session_id="s-1", started_at=FIXED_NOW)
        for label in (SentimentLabel.POSITIVE, SentimentLabel.NEGATIVE, SentimentLabel.NEGATIVE):
            session.add_message(
                Message(text="x", sender=Sender.USER, sentiment=SentimentResult(label=label))
            )
            session.add_message(Message(text="reply", sender=Sender.SYSTEM))

        stats = session.stats(now=FIXED_NOW + timedelta(minutes=2))

        assert stats.total_messages == 6
        assert stats.user_messages == 3
        assert stats.session_duration_seconds == 120
        assert stats.sentiment_breakdown == {"positive": 1, "negative": 2}

    def test_to_dict_excludes_history(self):
        session = ConversationSession(session_id="s-1", started_at=FIXED_NOW)

        data = session.to_dict()

        assert data["session_id"] == "s-1"
        assert data["started_at"] == FIXED_NOW.isoformat()
        assert "history" not in data


class TestCrisisEvent:

    def test_dict_round_trip(self):
        event = CrisisEvent(
            session_id="s-1",
            triggering_context=(Message(text="help", timestamp=FIXED_NOW),),
            source=ChatSurface.CHATBOT,
            timestamp=FIXED_NOW,
        )

        restored = CrisisEvent.from_dict(event.to_dict())

        assert restored == event
        assert restored.severity == "high"
