"""Species modifier composition.

Every modifier of every referenced species is summed into one flat offset
and one percentage fraction before anything is applied, so the result does
not depend on the order the species are listed in.
"""

from __future__ import annotations

import math
from collections.abc import Iterable

from statforge.core.constants import MIN_CHARACTER_LEVEL, PERCENT_SCALE
from statforge.core.logging import get_logger
from statforge.engine.arithmetic import ModifierTotals, finite_or_zero
from statforge.models.enums import ModifierKind
from statforge.models.species import Species, SpeciesModifier


logger = get_logger(__name__)


def points_steps(level: int, every_n_levels: int) -> int:
    """Count completed points steps at a character level.

    Args:
        level: Character level (clamped to at least 1).
        every_n_levels: Levels per step (at least 1).

    Returns:
        ``floor(level / every_n_levels)``.
    """
    return math.floor(max(MIN_CHARACTER_LEVEL, level) / max(1, every_n_levels))


def modifier_contribution(modifier: SpeciesModifier, level: int) -> ModifierTotals:
    """Contribution of a single species modifier.

    Points accrue ``amount`` per completed step. Percentages use the
    magnitude of ``amount`` with the sign of the polarity and ignore level.
    """
    amount = finite_or_zero(modifier.amount)
    if modifier.kind is ModifierKind.POINTS:
        return ModifierTotals(flat=amount * points_steps(level, modifier.every_n_levels))
    return ModifierTotals(percent_fraction=modifier.polarity.sign * abs(amount) / PERCENT_SCALE)


def species_contribution(
    attribute: str,
    species_list: Iterable[Species],
    character_level: int,
) -> ModifierTotals:
    """Sum the species modifiers targeting one attribute.

    Args:
        attribute: Attribute key (exact, case-sensitive).
        species_list: The character's referenced species.
        character_level: Character level.

    Returns:
        Accumulated flat and percentage totals.
    """
    flat = 0.0
    percent = 0.0
    for species in species_list:
        for modifier in species.modifiers_for(attribute):
            part = modifier_contribution(modifier, character_level)
            flat += part.flat
            percent += part.percent_fraction
    return ModifierTotals(flat=flat, percent_fraction=percent)


def compose_species(
    base_value: float,
    attribute: str,
    species_list: Iterable[Species],
    character_level: int,
) -> float:
    """Apply species modifiers to a base attribute value.

    Args:
        base_value: Raw attribute value.
        attribute: Attribute key.
        species_list: The character's referenced species.
        character_level: Character level.

    Returns:
        ``round2(base * (1 + pct) + flat)``.

    Example:
        >>> from statforge.models import Species, SpeciesModifier
        >>> orc = Species(id="orc", modifiers=[
        ...     SpeciesModifier(target_attribute="Strength", amount=5, every_n_levels=5)])
        >>> compose_species(50, "Strength", [orc], 20)
        70.0
    """
    totals = species_contribution(attribute, species_list, character_level)
    return totals.apply(finite_or_zero(base_value))


__all__ = [
    "points_steps",
    "modifier_contribution",
    "species_contribution",
    "compose_species",
]
