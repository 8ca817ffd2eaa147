"""Bonus modifier composition.

Each assignment references a bonus by id at some level. Unknown bonuses
are skipped, levels are clamped to the bonus's range, and assignments that
end up at level 0 contribute nothing. Percentage targets are accumulated
in percentage points and converted to a fraction once at the end.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from statforge.core.constants import PERCENT_SCALE
from statforge.core.logging import get_logger
from statforge.engine.arithmetic import ModifierTotals, finite_or_zero
from statforge.models.bonuses import Bonus
from statforge.models.character import BonusAssignment
from statforge.models.enums import ModifierKind


logger = get_logger(__name__)


def clamp_level(level: int, max_level: int) -> int:
    """Clamp an assignment level to ``[0, max_level]``."""
    return max(0, min(level, max(0, max_level)))


def index_by_id(bonuses: Iterable[Bonus]) -> dict[str, Bonus]:
    """Index a bonus catalog by id; later duplicates win."""
    return {bonus.id: bonus for bonus in bonuses}


def compose_bonuses(
    attribute: str,
    assignments: Iterable[BonusAssignment],
    catalog: Mapping[str, Bonus] | Iterable[Bonus],
    *,
    base_percentage_at_level_zero: bool = False,
) -> ModifierTotals:
    """Sum the contributions of a character's bonuses to one attribute.

    Args:
        attribute: Attribute key (exact, case-sensitive).
        assignments: The character's bonus assignments.
        catalog: Bonuses by id, or an iterable of bonuses.
        base_percentage_at_level_zero: Grant a target's base percentage to
            assignments clamped to level 0 (older saved sheets were
            computed this way).

    Returns:
        Accumulated flat points and percentage fraction.

    Example:
        >>> from statforge.models import Bonus, BonusAssignment
        >>> focus = Bonus.model_validate({"id": "focus", "maxLevel": 10,
        ...     "targetAttribute": "Strength", "kind": "percentage", "amountPerLevel": 1})
        >>> compose_bonuses("Strength", [BonusAssignment(bonus_id="focus", level=10)], [focus])
        ModifierTotals(flat=0.0, percent_fraction=0.1)
    """
    by_id = catalog if isinstance(catalog, Mapping) else index_by_id(catalog)

    flat = 0.0
    percent_points = 0.0
    for assignment in assignments:
        bonus = by_id.get(assignment.bonus_id)
        if bonus is None:
            logger.debug("Skipping unknown bonus", bonus_id=assignment.bonus_id)
            continue

        level = clamp_level(assignment.level, bonus.max_level)
        if level <= 0 and not base_percentage_at_level_zero:
            continue

        for target in bonus.targets_for(attribute):
            per_level = finite_or_zero(target.amount_per_level)
            if target.kind is ModifierKind.POINTS:
                flat += per_level * level
            else:
                percent_points += per_level * level
                if target.base_percentage is not None:
                    percent_points += finite_or_zero(target.base_percentage)

    return ModifierTotals(flat=flat, percent_fraction=percent_points / PERCENT_SCALE)


__all__ = [
    "clamp_level",
    "index_by_id",
    "compose_bonuses",
]
