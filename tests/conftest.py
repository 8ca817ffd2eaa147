"""Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests
in the statforge test suite.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pytest


if TYPE_CHECKING:
    from collections.abc import Generator

    from structlog.testing import LogCapture

    from statforge.models import Bonus, Character, Species


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_settings_cache() -> Generator[None, None, None]:
    """Reset the settings cache before and after each test."""
    from statforge.core.config import clear_settings_cache

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def log_capture() -> Generator[LogCapture, None, None]:
    """Capture structlog entries, with bound context merged in."""
    import structlog
    from structlog.testing import LogCapture

    capture = LogCapture()
    structlog.configure(
        processors=[structlog.contextvars.merge_contextvars, capture],
        cache_logger_on_first_use=False,
    )
    yield capture
    structlog.contextvars.clear_contextvars()
    structlog.reset_defaults()


@pytest.fixture
def mock_env_vars(monkeypatch: pytest.MonkeyPatch) -> dict[str, str]:
    """Set up mock environment variables for testing.

    Returns:
        Dictionary of environment variables that were set.
    """
    env_vars = {
        "STATFORGE_LOG_LEVEL": "DEBUG",
        "STATFORGE_INGESTION_STRICT": "false",
        "STATFORGE_LEADERBOARD_DEFAULT_TOP_N": "3",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


@pytest.fixture
def settings() -> Any:
    """Provide default settings unaffected by the environment."""
    from statforge.core.config import Settings

    return Settings()


# =============================================================================
# Species Fixtures
# =============================================================================


@pytest.fixture
def orc() -> Species:
    """Species with +5 Strength every 5 levels and a Dexterity penalty."""
    from statforge.models import Species

    return Species.model_validate(
        {
            "id": "orc",
            "name": "Orc",
            "modifiers": [
                {"targetAttribute": "Strength", "kind": "points", "amount": 5, "everyNLevels": 5},
                {
                    "targetAttribute": "Dexterity",
                    "kind": "percentage",
                    "amount": 10,
                    "polarity": "disadvantage",
                },
            ],
            "equivalencyTable": {"Physical": {"Strength": {"lift_kg": 5}}},
        }
    )


@pytest.fixture
def giant() -> Species:
    """Species with +50% Strength that forbids Mind."""
    from statforge.models import Species

    return Species.model_validate(
        {
            "id": "giant",
            "name": "Giant",
            "allowsDerivedMind": False,
            "modifiers": [
                {"targetAttribute": "Strength", "kind": "percentage", "amount": 50},
            ],
        }
    )


@pytest.fixture
def elf() -> Species:
    """Species with a flat Dexterity bonus and a Mind bonus."""
    from statforge.models import Species

    return Species.model_validate(
        {
            "id": "elf",
            "name": "Elf",
            "modifiers": [
                {"targetAttribute": "Dexterity", "kind": "points", "amount": 2},
                {"targetAttribute": "Mind", "kind": "points", "amount": 1, "everyNLevels": 10},
            ],
        }
    )


@pytest.fixture
def species_catalog(orc: Species, giant: Species, elf: Species) -> dict[str, Species]:
    """Species catalog keyed by id."""
    return {species.id: species for species in (orc, giant, elf)}


# =============================================================================
# Bonus Fixtures
# =============================================================================


@pytest.fixture
def focus_bonus() -> Bonus:
    """Legacy single-target bonus: +1% Strength per level, up to 10."""
    from statforge.models import Bonus

    return Bonus.model_validate(
        {
            "id": "focus",
            "name": "Focus",
            "maxLevel": 10,
            "targetAttribute": "Strength",
            "kind": "percentage",
            "amountPerLevel": 1,
        }
    )


@pytest.fixture
def training_bonus() -> Bonus:
    """Multi-target bonus: +2 Strength and +3 Vitality per level, up to 5."""
    from statforge.models import Bonus

    return Bonus.model_validate(
        {
            "id": "training",
            "name": "Training",
            "maxLevel": 5,
            "targets": [
                {"targetAttribute": "Strength", "kind": "points", "amountPerLevel": 2},
                {"targetAttribute": "Vitality", "kind": "points", "amountPerLevel": 3},
            ],
        }
    )


@pytest.fixture
def aura_bonus() -> Bonus:
    """Percentage bonus with a base percentage on Resistance."""
    from statforge.models import Bonus

    return Bonus.model_validate(
        {
            "id": "aura",
            "maxLevel": 3,
            "targets": [
                {
                    "targetAttribute": "Resistance",
                    "kind": "percentage",
                    "amountPerLevel": 5,
                    "basePercentage": 10,
                },
            ],
        }
    )


@pytest.fixture
def bonus_catalog(focus_bonus: Bonus, training_bonus: Bonus, aura_bonus: Bonus) -> dict[str, Bonus]:
    """Bonus catalog keyed by id."""
    return {bonus.id: bonus for bonus in (focus_bonus, training_bonus, aura_bonus)}


# =============================================================================
# Character Fixtures
# =============================================================================


@pytest.fixture
def sample_character_data() -> dict[str, Any]:
    """Provide sample character data for testing.

    Returns:
        Dictionary of character data.
    """
    return {
        "id": "hero",
        "name": "Kaito",
        "level": 20,
        "speciesIds": ["orc"],
        "stats": {
            "Strength": {"value": 50, "bandLabel": ""},
            "Resistance": 30,
            "Dexterity": 40,
            "Vitality": 25,
            "Intelligence": 40,
            "Wisdom": 90,
        },
        "bonuses": [{"bonusId": "focus", "level": 10}],
    }


@pytest.fixture
def sample_character(sample_character_data: dict[str, Any]) -> Character:
    """Create a sample Character for testing."""
    from statforge.models import Character

    return Character.model_validate(sample_character_data)
