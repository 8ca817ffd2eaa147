"""Derived Mind attribute.

Mind is not entered by hand. It is the rounded geometric mean of
Intelligence and Wisdom, and only exists for characters whose species all
allow it. Stored sheets use English or legacy Spanish keys with arbitrary
casing and accents, so the source attributes are found by loose matching.
"""

from __future__ import annotations

import math
import unicodedata
from collections.abc import Iterable, Mapping

from statforge.core.constants import INTELLIGENCE_ALIASES, MIND_ALIASES, WISDOM_PREFIXES
from statforge.core.logging import get_logger
from statforge.engine.arithmetic import finite_or_zero, round_half_up
from statforge.models.attributes import AttributeValue
from statforge.models.species import Species


logger = get_logger(__name__)


def normalize_key(key: str) -> str:
    """Fold an attribute key for loose comparison.

    Strips accents, surrounding whitespace and case.

    Example:
        >>> normalize_key(" Sabiduría ")
        'sabiduria'
    """
    decomposed = unicodedata.normalize("NFKD", key)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return stripped.strip().casefold()


def _find_key(stats: Mapping[str, object], matches) -> str | None:
    for key in stats:
        if matches(normalize_key(key)):
            return key
    return None


def find_intelligence_key(stats: Mapping[str, object]) -> str | None:
    """Find the key holding Intelligence, if any."""
    return _find_key(stats, lambda folded: folded in INTELLIGENCE_ALIASES)


def find_wisdom_key(stats: Mapping[str, object]) -> str | None:
    """Find the key holding Wisdom, if any.

    Matches any key starting with 'wisdom' or 'sabid'.
    """
    return _find_key(stats, lambda folded: folded.startswith(WISDOM_PREFIXES))


def find_mind_key(stats: Mapping[str, object]) -> str | None:
    """Find the key holding Mind, if any."""
    return _find_key(stats, lambda folded: folded in MIND_ALIASES)


def is_mind_attribute(attribute: str) -> bool:
    """Check whether an attribute key names Mind."""
    return normalize_key(attribute) in MIND_ALIASES


def mind_enabled(species_list: Iterable[Species]) -> bool:
    """Apply the Mind eligibility rule.

    Mind is enabled only if every referenced species allows it; a
    character with no species is eligible.

    Args:
        species_list: The character's referenced species.

    Returns:
        True if Mind may be derived.
    """
    return all(species.allows_derived_mind for species in species_list)


def compute_mind(intelligence: float, wisdom: float) -> int:
    """Compute Mind from Intelligence and Wisdom.

    Negative and non-finite inputs count as 0.

    Args:
        intelligence: Intelligence value.
        wisdom: Wisdom value.

    Returns:
        ``round(sqrt(intelligence * wisdom))`` with halves rounded up.

    Example:
        >>> compute_mind(40, 90)
        60
        >>> compute_mind(0, 500)
        0
    """
    i = max(0.0, finite_or_zero(intelligence))
    w = max(0.0, finite_or_zero(wisdom))
    return int(round_half_up(math.sqrt(i * w)))


def derive_mind(
    stats: Mapping[str, AttributeValue],
    species_list: Iterable[Species],
) -> int:
    """Derive a character's Mind from its raw stats.

    Args:
        stats: Raw attribute values by key.
        species_list: The character's referenced species.

    Returns:
        The derived Mind, or 0 when a species forbids it.
    """
    if not mind_enabled(species_list):
        return 0

    int_key = find_intelligence_key(stats)
    wis_key = find_wisdom_key(stats)
    intelligence = stats[int_key].value if int_key is not None else 0.0
    wisdom = stats[wis_key].value if wis_key is not None else 0.0
    if int_key is None or wis_key is None:
        logger.debug("Mind source attribute missing", intelligence=int_key, wisdom=wis_key)
    return compute_mind(intelligence, wisdom)


__all__ = [
    "normalize_key",
    "find_intelligence_key",
    "find_wisdom_key",
    "find_mind_key",
    "is_mind_attribute",
    "mind_enabled",
    "compute_mind",
    "derive_mind",
]
