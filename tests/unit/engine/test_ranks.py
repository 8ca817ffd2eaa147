"""Tests for rank band classification."""

from __future__ import annotations

import pytest

from statforge.engine.ranks import RankClassification, band_label, classify, normalize_rank_input
from statforge.models import DEFAULT_BAND_TABLE, BandTable, RankBand


class TestNormalizeRankInput:
    """Tests for the classifier's input normalization."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (None, 0),
            (-5, 0),
            (float("nan"), 0),
            (float("inf"), 0),
            (True, 0),
            (19.99, 19),
            (20, 20),
        ],
    )
    def test_normalization(self, value: float | None, expected: int) -> None:
        """Test truncation and the fallback to 0."""
        assert normalize_rank_input(value) == expected


class TestClassify:
    """Tests for classify with the default table."""

    @pytest.mark.parametrize(
        "value,label",
        [
            (0, "Human Low"),
            (1, "Human Low"),
            (4, "Human Low"),
            (5, "Human Mid"),
            (19.9, "Human Elite"),
            (20, "Genin Low"),
            (52, "Chunin Low"),
            (89, "Chunin Elite"),
            (499, "Kage Elite"),
            (500, "Tailed Beast Low"),
            (4999, "Catastrophe Elite"),
            (5000, "Deity Low"),
            (15000, "Deity Elite"),
            (10**9, "Deity Elite"),
        ],
    )
    def test_default_thresholds(self, value: float, label: str) -> None:
        """Test labels at and around band boundaries."""
        assert classify(value).label == label

    def test_result_fields(self) -> None:
        """Test tier and position are reported."""
        result = classify(215)

        assert result == RankClassification(label="Kage Low", tier="Kage", position=16)

    @pytest.mark.parametrize("value", [-1, float("nan"), float("-inf")])
    def test_invalid_input_is_lowest(self, value: float) -> None:
        """Test that unusable input lands in the lowest band."""
        assert classify(value).label == "Human Low"

    def test_band_label_shortcut(self) -> None:
        """Test the label-only helper."""
        assert band_label(42) == "Chunin Low"

    def test_totality(self) -> None:
        """Test that every value from 0 to 20000 gets a label."""
        labels = set(DEFAULT_BAND_TABLE.labels)
        for value in range(0, 20001):
            assert classify(value).label in labels

    def test_monotonic(self) -> None:
        """Test that a larger value never gets a lower band."""
        previous = 0
        for value in range(0, 20001, 7):
            position = classify(value).position
            assert position >= previous
            previous = position


class TestClassifyCustomTable:
    """Tests for classify with custom and malformed tables."""

    def test_custom_table(self) -> None:
        """Test a small well-formed table."""
        table = BandTable(
            bands=[
                RankBand(label="Weak", tier="Weak", min=1, max=9),
                RankBand(label="Strong", tier="Strong", min=10),
            ]
        )

        assert classify(9, table).label == "Weak"
        assert classify(10, table).label == "Strong"
        assert classify(0, table).label == "Weak"

    def test_gap_falls_back_to_top_band(self) -> None:
        """Test that a value in a gap lands in the highest band."""
        table = BandTable(
            bands=[
                RankBand(label="Low", tier="Low", min=1, max=5),
                RankBand(label="High", tier="High", min=10, max=20),
            ]
        )

        result = classify(7, table)

        assert result.label == "High"
        assert result.position == 1
