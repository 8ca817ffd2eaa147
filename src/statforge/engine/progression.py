"""Skill progression previews.

Pure formulas for the percentage tag and the tiered damage of a skill at
a given level. Levels below 1 are treated as level 1.
"""

from __future__ import annotations

import math

from statforge.models.progression import (
    DamageProgression,
    EveryNLevelsPolicy,
    MilestonePolicy,
    TagProgression,
)


def _cap(value: float, ceiling: float | None) -> float:
    return value if ceiling is None else min(value, ceiling)


def tag_percentage(
    base: float,
    per_level: float,
    level: int,
    cap: float | None = None,
) -> float:
    """Linear tag value at a level.

    Args:
        base: Value at level 1.
        per_level: Increase for every level above 1.
        level: Skill level.
        cap: Optional upper bound.

    Returns:
        ``min(base + per_level * (level - 1), cap)``.

    Example:
        >>> tag_percentage(10, 2.5, 5)
        20.0
        >>> tag_percentage(10, 2.5, 50, cap=60)
        60
    """
    return _cap(base + per_level * (max(1, level) - 1), cap)


def tag_value(tag: TagProgression, level: int) -> float:
    """Evaluate a :class:`TagProgression` at a level."""
    return tag_percentage(tag.base, tag.per_level, level, tag.cap)


def every_n_levels_damage(policy: EveryNLevelsPolicy, level: int) -> float:
    """Damage that steps up every ``n`` levels after level 1.

    Args:
        policy: The step policy.
        level: Skill level.

    Returns:
        ``base + add * stacks``, limited by ``max_stacks`` and ``ceiling``.
    """
    stacks = math.floor((max(1, level) - 1) / policy.n)
    if policy.max_stacks is not None:
        stacks = min(stacks, policy.max_stacks)
    return _cap(policy.base + policy.add * stacks, policy.ceiling)


def milestone_damage(policy: MilestonePolicy, level: int) -> float:
    """Damage driven by milestones reached at a level.

    Milestones apply in ascending level order; milestones sharing a level
    keep their table order. A milestone with both effects overrides first,
    then adds.

    Args:
        policy: The milestone policy.
        level: Skill level.

    Returns:
        The damage after every reached milestone, capped by ``ceiling``.
    """
    current = max(1, level)
    damage = policy.base
    for milestone in sorted(policy.milestones, key=lambda m: m.level):
        if milestone.level > current:
            break
        if milestone.override is not None:
            damage = milestone.override
        if milestone.add is not None:
            damage += milestone.add
    return _cap(damage, policy.ceiling)


def tiered_damage(policy: DamageProgression, level: int) -> float:
    """Evaluate either damage policy at a level."""
    if isinstance(policy, EveryNLevelsPolicy):
        return every_n_levels_damage(policy, level)
    return milestone_damage(policy, level)


__all__ = [
    "tag_percentage",
    "tag_value",
    "every_n_levels_damage",
    "milestone_damage",
    "tiered_damage",
]
