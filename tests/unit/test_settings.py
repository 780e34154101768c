"""
Unit Tests for Settings

Tests defaults and environment overrides.
"""

import pytest
from pydantic import ValidationError

from counselcare.config import Settings, get_settings


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for name in (
        "COUNSELCARE_ENV",
        "COUNSELCARE_LOG_LEVEL",
        "COUNSELCARE_CHAT_HISTORY_RETENTION",
        "COUNSELCARE_STORAGE_BACKEND",
        "COUNSELCARE_SENTRY_DSN",
    ):
        monkeypatch.delenv(name, raising=False)


class TestDefaults:

    def test_chat_defaults(self):
        settings = Settings()

        assert settings.chat.history_retention == 100
        assert settings.chat.crisis_context_size == 5
        assert settings.chat.follow_up_lookback == 5
        assert settings.chat.default_country == "US"

    def test_storage_defaults(self):
        settings = Settings()

        assert settings.storage.backend == "memory"
        assert settings.storage.crisis_log_key == "crisisEvents"
        assert settings.storage.history_key_prefix == "aiConversationHistory"

    def test_sentry_disabled_by_default(self):
        assert Settings().monitoring.dsn.get_secret_value() == ""

    def test_not_production_by_default(self):
        assert not Settings().is_production()


class TestEnvironmentOverrides:

    def test_nested_override(self, monkeypatch):
        monkeypatch.setenv("COUNSELCARE_CHAT_HISTORY_RETENTION", "50")
        monkeypatch.setenv("COUNSELCARE_STORAGE_BACKEND", "file")

        settings = Settings()

        assert settings.chat.history_retention == 50
        assert settings.storage.backend == "file"

    def test_log_level_is_normalized(self, monkeypatch):
        monkeypatch.setenv("COUNSELCARE_LOG_LEVEL", "debug")

        assert Settings().log_level == "DEBUG"

    def test_production_environment(self, monkeypatch):
        monkeypatch.setenv("COUNSELCARE_ENV", "production")

        assert Settings().is_production()

    def test_dsn_is_secret(self, monkeypatch):
        monkeypatch.setenv("COUNSELCARE_SENTRY_DSN", "https://key@sentry.example/1")

        settings = Settings()

        assert "key@sentry" not in repr(settings)
        assert settings.monitoring.dsn.get_secret_value() == "https://key@sentry.example/1"


class TestValidation:

    def test_unknown_backend_rejected(self):
        with pytest.raises(ValidationError):
            Settings(storage={"backend": "redis"})

    def test_retention_must_be_positive(self):
        with pytest.raises(ValidationError):
            Settings(chat={"history_retention": 0})


def test_get_settings_is_cached():
    get_settings.cache_clear()

    assert get_settings() is get_settings()

    get_settings.cache_clear()
