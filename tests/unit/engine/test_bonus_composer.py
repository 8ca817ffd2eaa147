"""Tests for bonus modifier composition."""

from __future__ import annotations

import pytest

from statforge.engine.arithmetic import ModifierTotals
from statforge.engine.bonus_composer import clamp_level, compose_bonuses, index_by_id
from statforge.models import Bonus, BonusAssignment


def _assign(bonus_id: str, level: int) -> BonusAssignment:
    return BonusAssignment(bonus_id=bonus_id, level=level)


class TestClampLevel:
    """Tests for level clamping."""

    @pytest.mark.parametrize(
        "level,max_level,expected",
        [(3, 5, 3), (10, 5, 5), (-2, 5, 0), (0, 5, 0), (4, 0, 0)],
    )
    def test_clamp(self, level: int, max_level: int, expected: int) -> None:
        """Test clamping into [0, max_level]."""
        assert clamp_level(level, max_level) == expected


class TestComposeBonuses:
    """Tests for compose_bonuses."""

    def test_percentage_per_level(self, bonus_catalog: dict[str, Bonus]) -> None:
        """Test +1% per level at level 10 gives a 0.10 fraction."""
        totals = compose_bonuses("Strength", [_assign("focus", 10)], bonus_catalog)

        assert totals.flat == 0.0
        assert totals.percent_fraction == pytest.approx(0.10)

    def test_points_per_level(self, bonus_catalog: dict[str, Bonus]) -> None:
        """Test points scale with the assigned level."""
        totals = compose_bonuses("Vitality", [_assign("training", 4)], bonus_catalog)

        assert totals == ModifierTotals(flat=12.0, percent_fraction=0.0)

    def test_clamped_to_max_level(self, bonus_catalog: dict[str, Bonus]) -> None:
        """Test that max_level + 5 contributes exactly as max_level."""
        at_max = compose_bonuses("Strength", [_assign("training", 5)], bonus_catalog)
        above = compose_bonuses("Strength", [_assign("training", 10)], bonus_catalog)

        assert above == at_max == ModifierTotals(flat=10.0)

    def test_unknown_bonus_skipped(self, bonus_catalog: dict[str, Bonus]) -> None:
        """Test that an unknown bonus id contributes nothing."""
        totals = compose_bonuses("Strength", [_assign("ghost", 3)], bonus_catalog)

        assert totals == ModifierTotals()

    def test_level_zero_skipped(self, bonus_catalog: dict[str, Bonus]) -> None:
        """Test that a level-0 assignment contributes nothing, base percentage included."""
        for level in (0, -4):
            totals = compose_bonuses("Resistance", [_assign("aura", level)], bonus_catalog)
            assert totals == ModifierTotals()

    def test_base_percentage_once(self, bonus_catalog: dict[str, Bonus]) -> None:
        """Test that the base percentage is added once per assignment."""
        totals = compose_bonuses("Resistance", [_assign("aura", 2)], bonus_catalog)

        # 5 * 2 + 10 percentage points
        assert totals.percent_fraction == pytest.approx(0.20)

    def test_base_percentage_at_level_zero_option(self, bonus_catalog: dict[str, Bonus]) -> None:
        """Test the option granting the base percentage at level 0."""
        totals = compose_bonuses(
            "Resistance",
            [_assign("aura", 0)],
            bonus_catalog,
            base_percentage_at_level_zero=True,
        )

        assert totals.percent_fraction == pytest.approx(0.10)

    def test_assignments_accumulate(self, bonus_catalog: dict[str, Bonus]) -> None:
        """Test several assignments on the same attribute."""
        totals = compose_bonuses(
            "Strength",
            [_assign("focus", 5), _assign("training", 2), _assign("focus", 5)],
            bonus_catalog,
        )

        assert totals.flat == 4.0
        assert totals.percent_fraction == pytest.approx(0.10)

    def test_catalog_as_iterable(self, focus_bonus: Bonus) -> None:
        """Test passing the catalog as a plain list."""
        totals = compose_bonuses("Strength", [_assign("focus", 3)], [focus_bonus])

        assert totals.percent_fraction == pytest.approx(0.03)

    def test_index_by_id(self, focus_bonus: Bonus, aura_bonus: Bonus) -> None:
        """Test indexing a catalog by id."""
        assert set(index_by_id([focus_bonus, aura_bonus])) == {"focus", "aura"}
