"""Rounding helpers and the flat/percentage modifier pair.

Composed values round halves upward (``floor(x + 0.5)``) to two decimals,
not to even as the built-in ``round`` does.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from statforge.core.constants import RESULT_DECIMALS


def round_half_up(value: float, decimals: int = 0) -> float:
    """Round with halves going up.

    Non-finite input, including a result that overflowed to infinity,
    becomes 0. Finite values too large to scale have no fractional part
    and are returned as they are.

    Args:
        value: Number to round.
        decimals: Decimal places to keep.

    Returns:
        The rounded number.

    Example:
        >>> round_half_up(2.5)
        3.0
        >>> round_half_up(0.125, 2)
        0.13
        >>> round_half_up(float("inf"), 2)
        0.0
    """
    factor = 10**decimals
    scaled = value * factor
    if not math.isfinite(scaled):
        return finite_or_zero(value)
    return math.floor(scaled + 0.5) / factor


def round2(value: float) -> float:
    """Round a composed value to the result precision (two decimals)."""
    return round_half_up(value, RESULT_DECIMALS)


def finite_or_zero(value: object) -> float:
    """Coerce a number to a finite float, mapping anything else to 0.

    Booleans are not treated as numbers.

    Args:
        value: Candidate number.

    Returns:
        ``float(value)`` when finite, otherwise 0.0.
    """
    if isinstance(value, bool) or not isinstance(value, int | float):
        return 0.0
    number = float(value)
    return number if math.isfinite(number) else 0.0


@dataclass(frozen=True)
class ModifierTotals:
    """Accumulated flat offset and percentage factor for one attribute.

    Attributes:
        flat: Sum of flat contributions.
        percent_fraction: Sum of percentage contributions as a fraction
            (0.10 means +10%).
    """

    flat: float = 0.0
    percent_fraction: float = 0.0

    def apply(self, value: float) -> float:
        """Apply the affine transform ``value * (1 + pct) + flat``.

        Args:
            value: Input value.

        Returns:
            The transformed value rounded to two decimals.
        """
        return round2(value * (1 + self.percent_fraction) + self.flat)


__all__ = [
    "round_half_up",
    "round2",
    "finite_or_zero",
    "ModifierTotals",
]
