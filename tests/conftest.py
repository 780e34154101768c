"""Tests configuration and fixtures."""

import random
from datetime import datetime, timedelta, timezone
from typing import Optional

import pytest

from counselcare.config import Settings
from counselcare.infrastructure.storage import (
    InMemoryKeyValueStore,
    PersistenceUnavailableError,
)
from counselcare.services.detection import DEFAULT_LEXICON, SentimentClassifier
from counselcare.services.safety import RiskAssessor


FIXED_NOW = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


class FixedClock:
    """Deterministic clock advancing one second per call."""

    def __init__(self, start: datetime = FIXED_NOW, step: timedelta = timedelta(seconds=1)) -> None:
        self.current = start
        self.step = step

    def __call__(self) -> datetime:
        now = self.current
        self.current = now + self.step
        return now


class FailingKeyValueStore:
    """Store whose every operation raises."""

    def __init__(self) -> None:
        self.attempts = 0

    def load(self, key: str) -> Optional[str]:
        self.attempts += 1
        raise PersistenceUnavailableError("storage offline", operation="load", key=key)

    def save(self, key: str, blob: str) -> None:
        self.attempts += 1
        raise PersistenceUnavailableError("storage offline", operation="save", key=key)


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    """Create test settings isolated from the host environment."""
    return Settings(
        env="development",
        log_level="DEBUG",
        storage={"backend": "memory", "directory": str(tmp_path / "store")},
    )


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for reproducible template choice."""
    return random.Random(1234)


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def memory_store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def failing_store() -> FailingKeyValueStore:
    return FailingKeyValueStore()


@pytest.fixture
def classifier() -> SentimentClassifier:
    return SentimentClassifier(DEFAULT_LEXICON)


@pytest.fixture
def risk_assessor() -> RiskAssessor:
    return RiskAssessor(DEFAULT_LEXICON)
