"""Rank band classification.

Maps a numeric attribute value to its labeled band. Classification never
fails: unusable input is treated as 0, and a value that falls through a
malformed table lands in the top band.

Example:
    >>> from statforge.engine.ranks import classify
    >>> classify(52).label
    'Chunin Low'
    >>> classify(-3).label
    'Human Low'
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from statforge.core.logging import get_logger
from statforge.models.attributes import DEFAULT_BAND_TABLE, BandTable


logger = get_logger(__name__)


@dataclass(frozen=True)
class RankClassification:
    """The band an attribute value falls in.

    Attributes:
        label: Full band label (e.g. 'Kage Elite').
        tier: Coarse tier of the band (e.g. 'Kage').
        position: Zero-based index of the band in ascending order.
    """

    label: str
    tier: str
    position: int


def normalize_rank_input(value: float | int | None) -> int:
    """Turn a raw value into the integer the classifier walks with.

    Args:
        value: Raw attribute value.

    Returns:
        The value truncated toward zero; 0 for None, negative or
        non-finite input.
    """
    if value is None or isinstance(value, bool):
        return 0
    number = float(value)
    if not math.isfinite(number) or number < 0:
        return 0
    return math.trunc(number)


def classify(value: float | int | None, table: BandTable | None = None) -> RankClassification:
    """Classify a value into its rank band.

    Args:
        value: Attribute value to classify.
        table: Band table to use; defaults to :data:`DEFAULT_BAND_TABLE`.

    Returns:
        The matching classification.
    """
    bands = table or DEFAULT_BAND_TABLE
    number = normalize_rank_input(value)

    if number == 0:
        band = bands.lowest
        return RankClassification(label=band.label, tier=band.tier, position=0)

    for position, band in enumerate(bands.bands):
        if band.contains(number):
            return RankClassification(label=band.label, tier=band.tier, position=position)

    band = bands.highest
    logger.debug("No band matched, using top band", value=number, band=band.label)
    return RankClassification(
        label=band.label,
        tier=band.tier,
        position=len(bands.bands) - 1,
    )


def band_label(value: float | int | None, table: BandTable | None = None) -> str:
    """Shorthand for ``classify(value, table).label``."""
    return classify(value, table).label


__all__ = [
    "RankClassification",
    "normalize_rank_input",
    "classify",
    "band_label",
]
