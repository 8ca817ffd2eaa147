"""Tests for skill progression previews."""

from __future__ import annotations

import pytest

from statforge.engine.progression import (
    every_n_levels_damage,
    milestone_damage,
    tag_percentage,
    tag_value,
    tiered_damage,
)
from statforge.models import EveryNLevelsPolicy, Milestone, MilestonePolicy, TagProgression


class TestTagPercentage:
    """Tests for linear tag progression."""

    @pytest.mark.parametrize(
        "level,expected",
        [(1, 10.0), (5, 20.0), (0, 10.0), (-4, 10.0)],
    )
    def test_linear(self, level: int, expected: float) -> None:
        """Test base plus per-level growth from level 1."""
        assert tag_percentage(10, 2.5, level) == expected

    def test_cap(self) -> None:
        """Test that the cap bounds the value."""
        assert tag_percentage(10, 2.5, 50, cap=60) == 60

    def test_tag_value(self) -> None:
        """Test evaluating a TagProgression record."""
        tag = TagProgression(base=5, per_level=1, cap=7)

        assert tag_value(tag, 2) == 6
        assert tag_value(tag, 10) == 7


class TestEveryNLevelsDamage:
    """Tests for step damage."""

    @pytest.mark.parametrize(
        "level,expected",
        [(1, 10.0), (3, 10.0), (4, 14.0), (7, 18.0), (0, 10.0)],
    )
    def test_steps_after_level_one(self, level: int, expected: float) -> None:
        """Test a step every 3 levels counted from level 1."""
        policy = EveryNLevelsPolicy(base=10, add=4, n=3)
        assert every_n_levels_damage(policy, level) == expected

    def test_max_stacks(self) -> None:
        """Test the stack limit."""
        policy = EveryNLevelsPolicy(base=10, add=4, n=1, max_stacks=2)
        assert every_n_levels_damage(policy, 50) == 18.0

    def test_ceiling(self) -> None:
        """Test the damage ceiling."""
        policy = EveryNLevelsPolicy(base=10, add=4, n=1, ceiling=15)
        assert every_n_levels_damage(policy, 50) == 15


class TestMilestoneDamage:
    """Tests for milestone damage."""

    def test_milestones_reached(self) -> None:
        """Test applying only milestones at or below the level."""
        policy = MilestonePolicy(
            base=10,
            milestones=[
                Milestone(level=10, add=5),
                Milestone(level=3, override=20),
            ],
        )

        assert milestone_damage(policy, 2) == 10
        assert milestone_damage(policy, 3) == 20
        assert milestone_damage(policy, 10) == 25

    def test_same_level_table_order(self) -> None:
        """Test that milestones at the same level apply in table order."""
        add_then_override = MilestonePolicy(
            base=10,
            milestones=[Milestone(level=5, add=3), Milestone(level=5, override=50)],
        )
        override_then_add = MilestonePolicy(
            base=10,
            milestones=[Milestone(level=5, override=50), Milestone(level=5, add=3)],
        )

        assert milestone_damage(add_then_override, 5) == 50
        assert milestone_damage(override_then_add, 5) == 53

    def test_override_before_add(self) -> None:
        """Test a milestone carrying both effects."""
        policy = MilestonePolicy(base=10, milestones=[Milestone(level=2, override=30, add=4)])

        assert milestone_damage(policy, 2) == 34

    def test_ceiling(self) -> None:
        """Test the damage ceiling."""
        policy = MilestonePolicy(base=10, milestones=[Milestone(level=1, add=100)], ceiling=40)

        assert milestone_damage(policy, 1) == 40


class TestTieredDamage:
    """Tests for policy dispatch."""

    def test_dispatch(self) -> None:
        """Test both policy kinds through one entry point."""
        steps = EveryNLevelsPolicy(base=1, add=1, n=1)
        milestones = MilestonePolicy(base=1, milestones=[Milestone(level=2, add=9)])

        assert tiered_damage(steps, 3) == 3
        assert tiered_damage(milestones, 3) == 10
