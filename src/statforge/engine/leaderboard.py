"""Attribute leaderboards.

Ranks a roster of characters by one attribute, either by effective value
or by the raw stored value.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from statforge.core.config import Settings, get_settings
from statforge.core.logging import character_context, get_logger
from statforge.engine.arithmetic import finite_or_zero
from statforge.engine.bonus_composer import index_by_id
from statforge.engine.derived import derive_mind, is_mind_attribute
from statforge.engine.ranks import classify
from statforge.engine.resolver import (
    BonusCatalog,
    SpeciesCatalog,
    index_species,
    referenced_species,
    resolve_attribute,
)
from statforge.models.attributes import BandTable
from statforge.models.character import Character


logger = get_logger(__name__)


@dataclass(frozen=True)
class LeaderboardEntry:
    """One leaderboard row.

    Attributes:
        rank: 1-based position.
        character_id: Character id.
        name: Character name.
        principal_species: Name of the principal species, or '' if none.
        value: Ranked value.
        band_label: Band of the ranked value.
    """

    rank: int
    character_id: str
    name: str
    principal_species: str
    value: float
    band_label: str


def build_leaderboard(
    characters: Iterable[Character],
    attribute: str,
    bonus_catalog: BonusCatalog,
    species_catalog: SpeciesCatalog,
    *,
    use_effective: bool = True,
    top_n: int | None = None,
    band_table: BandTable | None = None,
    settings: Settings | None = None,
) -> list[LeaderboardEntry]:
    """Rank characters by one attribute.

    Higher values come first; ties are ordered by principal species name,
    then character name.

    Args:
        characters: The roster.
        attribute: Attribute key to rank by.
        bonus_catalog: Bonuses by id, or an iterable of bonuses.
        species_catalog: Species by id, or an iterable of species.
        use_effective: Rank by effective value instead of the stored value.
        top_n: Number of rows; defaults to ``leaderboard.default_top_n`` and
            is clamped to ``[1, leaderboard.max_top_n]``.
        band_table: Band table for labels; defaults to the built-in one.
        settings: Settings to read defaults from.

    Returns:
        The top rows in rank order.
    """
    settings = settings or get_settings()
    limit = settings.leaderboard.default_top_n if top_n is None else top_n
    limit = max(1, min(limit, settings.leaderboard.max_top_n))

    bonuses = bonus_catalog if isinstance(bonus_catalog, Mapping) else index_by_id(bonus_catalog)
    species_by_id = index_species(species_catalog)

    rows: list[tuple[float, str, str, Character]] = []
    for character in characters:
        with character_context(character.id):
            species_list = referenced_species(character, species_by_id)
            principal = species_list[0].name if species_list else ""
            if use_effective:
                value = resolve_attribute(
                    character, attribute, bonuses, species_by_id, settings=settings
                ).effective
            elif is_mind_attribute(attribute):
                value = float(derive_mind(character.stats, species_list))
            else:
                value = finite_or_zero(character.base_value(attribute))
        rows.append((value, principal, character.name, character))

    rows.sort(key=lambda row: (-row[0], row[1], row[2]))
    logger.debug("Leaderboard built", attribute=attribute, candidates=len(rows), limit=limit)

    return [
        LeaderboardEntry(
            rank=position,
            character_id=character.id,
            name=name,
            principal_species=principal,
            value=value,
            band_label=classify(value, band_table).label,
        )
        for position, (value, principal, name, character) in enumerate(rows[:limit], start=1)
    ]


__all__ = [
    "LeaderboardEntry",
    "build_leaderboard",
]
