"""Application-wide constants for the statforge engine.

This module defines the fixed rules constants shared by models and engine.
Tunable values live in :mod:`statforge.core.config` instead.
"""

from __future__ import annotations

# =============================================================================
# Character Rules
# =============================================================================

MAX_SPECIES_PER_CHARACTER = 10
"""Maximum number of species a character may reference."""

MIN_CHARACTER_LEVEL = 1
"""Levels below this are clamped before computing modifier steps."""

DEFAULT_STEP_CADENCE = 1
"""Default number of character levels per species points step."""

# =============================================================================
# Arithmetic
# =============================================================================

RESULT_DECIMALS = 2
"""Decimal places kept by composed attribute values and derived metrics."""

PERCENT_SCALE = 100.0
"""Percentage points per unit fraction."""

# =============================================================================
# Loose Key Matching
# =============================================================================

INTELLIGENCE_ALIASES = ("intelligence", "inteligencia")
"""Normalized keys accepted for the Intelligence attribute."""

WISDOM_PREFIXES = ("wisdom", "sabid")
"""Normalized prefixes accepted for the Wisdom attribute."""

MIND_ALIASES = ("mind", "mente")
"""Normalized keys accepted for the Mind attribute."""


__all__ = [
    # Character rules
    "MAX_SPECIES_PER_CHARACTER",
    "MIN_CHARACTER_LEVEL",
    "DEFAULT_STEP_CADENCE",
    # Arithmetic
    "RESULT_DECIMALS",
    "PERCENT_SCALE",
    # Key matching
    "INTELLIGENCE_ALIASES",
    "WISDOM_PREFIXES",
    "MIND_ALIASES",
]
