"""Enumeration types for the statforge engine.

This module defines the enumerations shared by records and engine:
core attribute keys, modifier kinds and polarities, and the skill
classification used by the catalog. Stored records written by older
front-ends use Spanish labels ("Puntos", "Desventaja", ...); those are
accepted case-insensitively through ``_missing_``.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any


def _lookup_alias(enum_cls: type[StrEnum], value: Any, aliases: dict[str, str]) -> Any:
    """Resolve a case-insensitive or legacy label to an enum member."""
    if not isinstance(value, str):
        return None
    key = value.strip().casefold()
    for member in enum_cls:
        if member.value.casefold() == key or member.name.casefold() == key:
            return member
    canonical = aliases.get(key)
    return enum_cls(canonical) if canonical is not None else None


class CoreAttribute(StrEnum):
    """The fixed set of attributes every character sheet carries.

    Characters may add any number of extra attributes on top of these.
    """

    STRENGTH = "Strength"
    RESISTANCE = "Resistance"
    DEXTERITY = "Dexterity"
    MIND = "Mind"
    VITALITY = "Vitality"
    INTELLIGENCE = "Intelligence"
    WISDOM = "Wisdom"


class ModifierKind(StrEnum):
    """How a modifier contributes to an attribute."""

    POINTS = "points"
    PERCENTAGE = "percentage"

    @classmethod
    def _missing_(cls, value: object) -> "ModifierKind | None":
        return _lookup_alias(
            cls,
            value,
            {"puntos": "points", "porcentaje": "percentage", "percent": "percentage"},
        )


class Polarity(StrEnum):
    """Sign of a species percentage modifier."""

    ADVANTAGE = "advantage"
    DISADVANTAGE = "disadvantage"

    @classmethod
    def _missing_(cls, value: object) -> "Polarity | None":
        return _lookup_alias(
            cls,
            value,
            {"ventaja": "advantage", "desventaja": "disadvantage"},
        )

    @property
    def sign(self) -> int:
        """Multiplier applied to the modifier magnitude.

        Returns:
            1 for advantages, -1 for disadvantages.
        """
        return -1 if self is Polarity.DISADVANTAGE else 1


class SkillClass(StrEnum):
    """Skill activation style."""

    ACTIVE = "active"
    PASSIVE = "passive"
    GROWTH = "growth"

    @classmethod
    def _missing_(cls, value: object) -> "SkillClass | None":
        return _lookup_alias(
            cls,
            value,
            {"activa": "active", "pasiva": "passive", "crecimiento": "growth"},
        )


class SkillTier(StrEnum):
    """Skill power tier, from F up to SSS+.

    Members are declared in ascending order; ``rank`` exposes that order
    for sorting.
    """

    F = "F"
    E = "E"
    D = "D"
    C = "C"
    B_MINUS = "B-"
    B = "B"
    B_PLUS = "B+"
    A_MINUS = "A-"
    A = "A"
    A_PLUS = "A+"
    S_MINUS = "S-"
    S = "S"
    S_PLUS = "S+"
    SS_MINUS = "SS-"
    SS = "SS"
    SS_PLUS = "SS+"
    SSS_MINUS = "SSS-"
    SSS = "SSS"
    SSS_PLUS = "SSS+"

    @property
    def rank(self) -> int:
        """Position of the tier in ascending order (F is 0)."""
        return list(SkillTier).index(self)


__all__ = [
    "CoreAttribute",
    "ModifierKind",
    "Polarity",
    "SkillClass",
    "SkillTier",
]
