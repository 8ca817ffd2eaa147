"""Custom exception hierarchy for the statforge engine.

The resolution engine itself favours well-defined fallbacks over failures,
so most of these exceptions surface at the boundaries: loading settings,
ingesting stored records, and editing the skill evolution graph. All
exceptions inherit from StatforgeError, enabling unified error handling
at the application boundary while preserving domain-specific context.

Example:
    >>> from statforge.core.exceptions import InvalidConfigurationError
    >>> raise InvalidConfigurationError("Factor must be numeric", source="species:elf")
"""

from __future__ import annotations

from typing import Any


class StatforgeError(Exception):
    """Base exception for all statforge errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary containing additional error context.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details.

        Returns:
            Formatted error message including any provided details.
        """
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def __repr__(self) -> str:
        """Return a detailed string representation of the exception."""
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigurationError(StatforgeError):
    """Raised when application settings are invalid.

    This includes invalid environment values or incompatible
    configuration combinations.
    """

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error with config key context.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if config_key:
            combined_details["config_key"] = config_key
        super().__init__(message, details=combined_details)


# =============================================================================
# Ingestion Domain Exceptions
# =============================================================================


class IngestionError(StatforgeError):
    """Base exception for errors reading records handed over by storage."""

    def __init__(
        self,
        message: str,
        *,
        source: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize ingestion error with source context.

        Args:
            message: Human-readable error description.
            source: Identifier of the record or file being ingested.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if source:
            combined_details["source"] = source
        super().__init__(message, details=combined_details)


class InvalidConfigurationError(IngestionError):
    """Raised when stored structured data is malformed.

    Covers equivalency tables, modifier lists, band tables and whole
    species/bonus/character rows. Never retried: the record must be
    fixed before it can reach the engine.
    """

    def __init__(
        self,
        message: str,
        *,
        source: str | None = None,
        path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize invalid configuration error with location context.

        Args:
            message: Human-readable error description.
            source: Identifier of the record or file being ingested.
            path: Dotted path to the offending element inside the record.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if path:
            combined_details["path"] = path
        super().__init__(message, source=source, details=combined_details)


# =============================================================================
# Engine Domain Exceptions
# =============================================================================


class EngineError(StatforgeError):
    """Base exception for engine-side errors.

    Stat resolution never raises; this branch covers the editable
    structures built next to it, such as the skill evolution graph.
    """


class EvolutionGraphError(EngineError):
    """Raised when a skill evolution link cannot be created."""

    def __init__(
        self,
        message: str,
        *,
        source_skill: str | None = None,
        target_skill: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize evolution graph error with link context.

        Args:
            message: Human-readable error description.
            source_skill: Skill the link starts from.
            target_skill: Skill the link points to.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if source_skill:
            combined_details["source_skill"] = source_skill
        if target_skill:
            combined_details["target_skill"] = target_skill
        super().__init__(message, details=combined_details)


class EvolutionCycleError(EvolutionGraphError):
    """Raised when a link would make a skill evolve into its own ancestor."""


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
]
