"""Configuration management for the statforge engine.

This module provides centralized configuration management using pydantic-settings,
supporting environment variables, .env files, and runtime configuration overrides.
The engine itself is pure; settings only supply defaults that callers may
override per call.

Example:
    >>> from statforge.core.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.leaderboard.default_top_n)
    10

Environment Variables:
    STATFORGE_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    STATFORGE_JSON_LOGS: Emit JSON log lines instead of console output
    STATFORGE_ENGINE_BAND_TABLE_PATH: JSON file with a custom rank band table
    STATFORGE_ENGINE_BASE_PERCENTAGE_AT_LEVEL_ZERO: Grant bonus base percentage at level 0
    STATFORGE_INGESTION_STRICT: Reject malformed equivalency leaves instead of dropping them
    STATFORGE_LEADERBOARD_DEFAULT_TOP_N: Default leaderboard size
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from statforge.core.exceptions import ConfigurationError


class EngineSettings(BaseSettings):
    """Configuration for stat resolution.

    Attributes:
        base_percentage_at_level_zero: Grant a bonus target's base percentage
            even when the bonus is assigned at level 0.
        band_table_path: Optional JSON file replacing the default band table.
    """

    model_config = SettingsConfigDict(
        env_prefix="STATFORGE_ENGINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    base_percentage_at_level_zero: bool = Field(
        default=False,
        description="Grant bonus base percentage to level-0 assignments",
    )
    band_table_path: Path | None = Field(
        default=None,
        description="JSON file with a custom rank band table",
    )

    @field_validator("band_table_path", mode="after")
    @classmethod
    def ensure_table_file_exists(cls, value: Path | None) -> Path | None:
        """Reject a band table path that does not point to a file.

        Args:
            value: The configured path, if any.

        Returns:
            The validated path.

        Raises:
            ConfigurationError: If the path is set but is not a file.
        """
        if value is not None and not value.is_file():
            raise ConfigurationError(
                f"Band table file not found: {value}",
                config_key="band_table_path",
            )
        return value


class IngestionSettings(BaseSettings):
    """Configuration for reading stored records.

    Attributes:
        strict: Raise on malformed equivalency leaves instead of dropping them.
    """

    model_config = SettingsConfigDict(
        env_prefix="STATFORGE_INGESTION_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    strict: bool = Field(
        default=True,
        description="Reject malformed equivalency leaves",
    )


class LeaderboardSettings(BaseSettings):
    """Configuration for leaderboard views.

    Attributes:
        default_top_n: Number of rows returned when the caller gives none.
        max_top_n: Upper bound for any requested number of rows.
    """

    model_config = SettingsConfigDict(
        env_prefix="STATFORGE_LEADERBOARD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    default_top_n: int = Field(
        default=10,
        ge=1,
        description="Default number of leaderboard rows",
    )
    max_top_n: int = Field(
        default=100,
        ge=1,
        le=1000,
        description="Maximum number of leaderboard rows",
    )

    @model_validator(mode="after")
    def validate_top_n_bounds(self) -> "LeaderboardSettings":
        """Ensure the default size fits under the maximum.

        Returns:
            Self if validation passes.

        Raises:
            ConfigurationError: If default_top_n > max_top_n.
        """
        if self.default_top_n > self.max_top_n:
            raise ConfigurationError(
                f"default_top_n ({self.default_top_n}) must not exceed "
                f"max_top_n ({self.max_top_n})",
                config_key="default_top_n",
            )
        return self


class Settings(BaseSettings):
    """Main application settings aggregating all configuration domains.

    Attributes:
        app_name: Application name stamped on log entries.
        log_level: Application logging level.
        json_logs: Emit JSON logs.
        engine: Stat resolution settings.
        ingestion: Record ingestion settings.
        leaderboard: Leaderboard settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="STATFORGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    # Logging
    app_name: str = Field(
        default="statforge",
        description="Application name",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    json_logs: bool = Field(
        default=False,
        description="Emit JSON log lines",
    )

    engine: EngineSettings = Field(default_factory=EngineSettings)
    ingestion: IngestionSettings = Field(default_factory=IngestionSettings)
    leaderboard: LeaderboardSettings = Field(default_factory=LeaderboardSettings)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        The application Settings instance.

    Raises:
        ConfigurationError: If configuration is invalid.
    """
    try:
        return Settings()
    except ConfigurationError:
        raise
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load application settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access.

    This is primarily useful for testing or when environment variables
    have changed at runtime.
    """
    get_settings.cache_clear()


__all__ = [
    "EngineSettings",
    "IngestionSettings",
    "LeaderboardSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
