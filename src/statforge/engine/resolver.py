"""Effective attribute resolution.

An attribute resolves in two affine stages: species modifiers are applied
to the base value, then bonus modifiers are applied to that intermediate
result. Both stages round to two decimals. The stages are not merged, so a
+50% species modifier followed by a +10 points bonus on a base of 100
gives 160, not 165.

Example:
    >>> from statforge.engine.resolver import resolve
    >>> from statforge.models import Character, Species
    >>> giant = Species(
    ...     id="giant",
    ...     modifiers=[{"targetAttribute": "Strength", "kind": "percentage", "amount": 50}],
    ... )
    >>> hero = Character(id="c1", species_ids=["giant"], stats={"Strength": 100})
    >>> resolve(hero, "Strength", [], [giant])
    150.0
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from statforge.core.config import Settings, get_settings
from statforge.core.logging import character_context, get_logger
from statforge.engine.arithmetic import finite_or_zero
from statforge.engine.bonus_composer import compose_bonuses, index_by_id
from statforge.engine.derived import derive_mind, is_mind_attribute, mind_enabled
from statforge.engine.ranks import classify
from statforge.engine.species_composer import compose_species
from statforge.models.attributes import AttributeValue, BandTable
from statforge.models.bonuses import Bonus
from statforge.models.character import Character
from statforge.models.enums import CoreAttribute
from statforge.models.species import Species


logger = get_logger(__name__)

BonusCatalog = Mapping[str, Bonus] | Iterable[Bonus]
SpeciesCatalog = Mapping[str, Species] | Iterable[Species]


@dataclass(frozen=True)
class ResolvedAttribute:
    """One attribute traced through both composition stages.

    Attributes:
        key: Attribute key.
        base: Raw (or derived, for Mind) value.
        intermediate: Value after species modifiers.
        effective: Value after bonus modifiers.
        band_label: Band of the effective value.
        tier: Tier of the effective value.
    """

    key: str
    base: float
    intermediate: float
    effective: float
    band_label: str
    tier: str


@dataclass(frozen=True)
class CharacterSheet:
    """All resolved attributes of one character.

    Attributes:
        character_id: The character's id.
        principal_species: First referenced species found in the catalog.
        mind_enabled: Whether the character's species allow Mind.
        attributes: Resolved attributes in sheet order.
    """

    character_id: str
    principal_species: Species | None
    mind_enabled: bool
    attributes: tuple[ResolvedAttribute, ...]

    def effective_values(self) -> dict[str, float]:
        """Effective values keyed by attribute."""
        return {item.key: item.effective for item in self.attributes}

    def get(self, key: str) -> ResolvedAttribute | None:
        """Look up a resolved attribute by exact key."""
        for item in self.attributes:
            if item.key == key:
                return item
        return None


def index_species(catalog: SpeciesCatalog) -> Mapping[str, Species]:
    """Index a species catalog by id unless it already is a mapping."""
    if isinstance(catalog, Mapping):
        return catalog
    return {species.id: species for species in catalog}


def referenced_species(character: Character, species_catalog: SpeciesCatalog) -> list[Species]:
    """Resolve a character's species ids in reference order.

    Unknown ids are dropped, and a species referenced twice counts once.

    Args:
        character: The character.
        species_catalog: Species by id, or an iterable of species.

    Returns:
        The referenced species, principal first.
    """
    by_id = index_species(species_catalog)
    found: list[Species] = []
    seen: set[str] = set()
    for species_id in character.species_ids:
        if species_id in seen:
            continue
        seen.add(species_id)
        species = by_id.get(species_id)
        if species is None:
            logger.debug("Skipping unknown species", character_id=character.id, species_id=species_id)
            continue
        found.append(species)
    return found


def _trace(
    character: Character,
    attribute: str,
    bonuses: Mapping[str, Bonus],
    species_list: list[Species],
    settings: Settings,
    band_table: BandTable | None,
) -> ResolvedAttribute:
    if is_mind_attribute(attribute):
        if not mind_enabled(species_list):
            band = classify(0, band_table)
            return ResolvedAttribute(attribute, 0.0, 0.0, 0.0, band.label, band.tier)
        base = float(derive_mind(character.stats, species_list))
    else:
        base = finite_or_zero(character.base_value(attribute))

    intermediate = compose_species(base, attribute, species_list, character.level)
    totals = compose_bonuses(
        attribute,
        character.bonuses,
        bonuses,
        base_percentage_at_level_zero=settings.engine.base_percentage_at_level_zero,
    )
    effective = totals.apply(intermediate)
    band = classify(effective, band_table)
    return ResolvedAttribute(attribute, base, intermediate, effective, band.label, band.tier)


def resolve_attribute(
    character: Character,
    attribute: str,
    bonus_catalog: BonusCatalog,
    species_catalog: SpeciesCatalog,
    *,
    band_table: BandTable | None = None,
    settings: Settings | None = None,
) -> ResolvedAttribute:
    """Resolve one attribute and keep the intermediate values.

    Args:
        character: The character.
        attribute: Attribute key (exact, case-sensitive).
        bonus_catalog: Bonuses by id, or an iterable of bonuses.
        species_catalog: Species by id, or an iterable of species.
        band_table: Band table for the label; defaults to the built-in one.
        settings: Settings to read engine options from.

    Returns:
        The traced attribute.
    """
    with character_context(character.id):
        return _trace(
            character,
            attribute,
            bonus_catalog if isinstance(bonus_catalog, Mapping) else index_by_id(bonus_catalog),
            referenced_species(character, species_catalog),
            settings or get_settings(),
            band_table,
        )


def resolve(
    character: Character,
    attribute: str,
    bonus_catalog: BonusCatalog,
    species_catalog: SpeciesCatalog,
    *,
    settings: Settings | None = None,
) -> float:
    """Compute the effective value of one attribute.

    Missing attributes resolve from a base of 0. Mind is derived from
    Intelligence and Wisdom, and is 0 when a species forbids it.

    Args:
        character: The character.
        attribute: Attribute key (exact, case-sensitive).
        bonus_catalog: Bonuses by id, or an iterable of bonuses.
        species_catalog: Species by id, or an iterable of species.
        settings: Settings to read engine options from.

    Returns:
        The effective value rounded to two decimals.
    """
    return resolve_attribute(
        character, attribute, bonus_catalog, species_catalog, settings=settings
    ).effective


def sheet_keys(character: Character, extra_attributes: Iterable[str] = ()) -> list[str]:
    """Attribute keys shown on a sheet: core, then extras, then stored keys."""
    keys: list[str] = []
    for key in [*CoreAttribute, *extra_attributes, *character.stats]:
        key = str(key)
        if key not in keys:
            keys.append(key)
    return keys


def resolve_sheet(
    character: Character,
    bonus_catalog: BonusCatalog,
    species_catalog: SpeciesCatalog,
    *,
    extra_attributes: Iterable[str] = (),
    band_table: BandTable | None = None,
    settings: Settings | None = None,
) -> CharacterSheet:
    """Resolve every attribute of a character.

    Args:
        character: The character.
        bonus_catalog: Bonuses by id, or an iterable of bonuses.
        species_catalog: Species by id, or an iterable of species.
        extra_attributes: Additional attribute keys to include.
        band_table: Band table for labels; defaults to the built-in one.
        settings: Settings to read engine options from.

    Returns:
        The resolved sheet.
    """
    settings = settings or get_settings()
    bonuses = bonus_catalog if isinstance(bonus_catalog, Mapping) else index_by_id(bonus_catalog)

    with character_context(character.id):
        species_list = referenced_species(character, species_catalog)
        attributes = tuple(
            _trace(character, key, bonuses, species_list, settings, band_table)
            for key in sheet_keys(character, extra_attributes)
        )
        logger.debug("Sheet resolved", attributes=len(attributes))
    return CharacterSheet(
        character_id=character.id,
        principal_species=species_list[0] if species_list else None,
        mind_enabled=mind_enabled(species_list),
        attributes=attributes,
    )


def refresh_band_labels(
    stats: Mapping[str, AttributeValue],
    band_table: BandTable | None = None,
) -> dict[str, AttributeValue]:
    """Recompute the cached band label of every stored value.

    Args:
        stats: Attribute values by key.
        band_table: Band table to use; defaults to the built-in one.

    Returns:
        New attribute values with up-to-date labels.
    """
    return {
        key: entry.model_copy(update={"band_label": classify(entry.value, band_table).label})
        for key, entry in stats.items()
    }


__all__ = [
    "ResolvedAttribute",
    "CharacterSheet",
    "index_species",
    "referenced_species",
    "resolve_attribute",
    "resolve",
    "sheet_keys",
    "resolve_sheet",
    "refresh_band_labels",
]
