"""
CounselCare Application Settings

Configuration management using Pydantic Settings.
All values can be overridden from environment variables.

SECURITY: Never log or expose settings containing secrets.
"""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ChatSettings(BaseSettings):
    """Conversation limits shared by all chat surfaces."""

    model_config = SettingsConfigDict(env_prefix="COUNSELCARE_CHAT_")

    history_retention: int = Field(
        default=100, ge=1, le=10_000,
        description="Messages kept per conversation before FIFO eviction",
    )
    crisis_context_size: int = Field(
        default=5, ge=1, le=100,
        description="Recent messages attached to each crisis event",
    )
    follow_up_lookback: int = Field(
        default=5, ge=1, le=100,
        description="History entries scanned by contextual follow-up rules",
    )
    default_country: str = Field(
        default="US", min_length=2, max_length=4,
        description="Country used to resolve crisis resources",
    )


class StorageSettings(BaseSettings):
    """Key-value persistence configuration."""

    model_config = SettingsConfigDict(env_prefix="COUNSELCARE_STORAGE_")

    backend: Literal["memory", "file"] = Field(default="memory")
    directory: str = Field(default=".counselcare", description="Root for the file backend")
    crisis_log_key: str = Field(default="crisisEvents")
    history_key_prefix: str = Field(default="aiConversationHistory")


class MonitoringSettings(BaseSettings):
    """Sentry error tracking configuration."""

    model_config = SettingsConfigDict(env_prefix="COUNSELCARE_SENTRY_")

    dsn: SecretStr = Field(default=SecretStr(""), description="Sentry DSN")
    sample_rate: float = Field(default=1.0, ge=0.0, le=1.0)
    traces_sample_rate: float = Field(default=0.0, ge=0.0, le=1.0)


class Settings(BaseSettings):
    """
    Main application settings.

    All configuration is loaded from environment variables with the
    COUNSELCARE_ prefix. Nested groups use their own prefixes.

    Usage:
        settings = get_settings()
        retention = settings.chat.history_retention
    """

    model_config = SettingsConfigDict(
        env_prefix="COUNSELCARE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    env: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Application environment"
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level"
    )
    lexicon_path: Optional[str] = Field(
        default=None,
        description="JSON file replacing the built-in lexicon",
    )
    resources_path: Optional[str] = Field(
        default=None,
        description="JSON file extending the built-in crisis resources",
    )

    # Nested settings
    chat: ChatSettings = Field(default_factory=ChatSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    monitoring: MonitoringSettings = Field(default_factory=MonitoringSettings)

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Accept lowercase level names from the environment."""
        return v.upper() if isinstance(v, str) else v

    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.env == "production"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Uses LRU cache to ensure settings are only loaded once.
    For testing, construct Settings directly and pass it in.

    Returns:
        Settings: Application settings instance
    """
    return Settings()
