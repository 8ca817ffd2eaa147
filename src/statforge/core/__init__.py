"""Core module providing configuration, logging, and base exceptions.

Exports:
    Exceptions:
        StatforgeError: Base exception for all application errors.
        ConfigurationError: Settings-related errors.
        InvalidConfigurationError: Malformed stored records.

    Configuration:
        Settings: Main application settings class.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up application logging.
        get_logger: Get a configured logger instance.
        character_context: Tag log entries with a character id.
"""

from __future__ import annotations

from statforge.core.config import (
    EngineSettings,
    IngestionSettings,
    LeaderboardSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)
from statforge.core.exceptions import (
    ConfigurationError,
    EngineError,
    EvolutionCycleError,
    EvolutionGraphError,
    IngestionError,
    InvalidConfigurationError,
    StatforgeError,
)
from statforge.core.logging import (
    character_context,
    configure_from_settings,
    configure_logging,
    get_logger,
)


__all__ = [
    # Base exception
    "StatforgeError",
    # Configuration exceptions
    "ConfigurationError",
    # Ingestion exceptions
    "IngestionError",
    "InvalidConfigurationError",
    # Engine exceptions
    "EngineError",
    "EvolutionGraphError",
    "EvolutionCycleError",
    # Configuration
    "Settings",
    "EngineSettings",
    "IngestionSettings",
    "LeaderboardSettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "configure_from_settings",
    "get_logger",
    "character_context",
]
