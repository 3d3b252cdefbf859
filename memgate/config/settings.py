"""Configuration management for memgate."""

from functools import lru_cache
from pathlib import Path

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..core.domain.exceptions import InvalidConfigurationError
from ..core.domain.rules import CJK_MIN_LENGTH, DEFAULT_MIN_LENGTH, MIN_QUERY_LENGTH


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="MEMGATE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Gate thresholds
    min_query_length: int = MIN_QUERY_LENGTH
    cjk_min_length: int = CJK_MIN_LENGTH
    default_min_length: int = DEFAULT_MIN_LENGTH

    # Retrieval
    expand_risky_queries: bool = True

    # Logging
    log_level: str = "INFO"
    log_json: bool = False
    log_file: Path | None = None

    # Include stack traces in structured error output
    debug: bool = False

    @field_validator("min_query_length", "cjk_min_length", "default_min_length")
    @classmethod
    def validate_positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("length thresholds must be positive")
        return value

    @field_validator("log_level", mode="after")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"unknown log level: {value}")
        return level


def load_settings(**overrides) -> Settings:
    """Build settings from the environment, with optional overrides.

    Raises:
        InvalidConfigurationError: If any value fails validation.
    """
    try:
        return Settings(**overrides)
    except ValidationError as e:
        fields = [".".join(str(part) for part in err["loc"]) for err in e.errors()]
        raise InvalidConfigurationError(
            "Invalid memgate configuration",
            cause=e,
            context={"fields": fields},
        ) from e


@lru_cache
def get_settings() -> Settings:
    """Get or create the settings singleton."""
    return load_settings()
