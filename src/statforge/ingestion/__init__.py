"""Ingestion boundary for stored records.

Decodes JSON-valued columns handed over by storage and validates rows into
the frozen records the engine consumes.
"""

from __future__ import annotations

from statforge.ingestion.parsers import (
    configured_band_table,
    load_band_table,
    load_bonus,
    load_bonus_catalog,
    load_character,
    load_character_catalog,
    load_evolution_link,
    load_skill,
    load_skill_catalog,
    load_species,
    load_species_catalog,
    parse_equivalency_table,
    parse_modifier_list,
)


__all__ = [
    "parse_equivalency_table",
    "parse_modifier_list",
    "load_species",
    "load_bonus",
    "load_character",
    "load_skill",
    "load_evolution_link",
    "load_species_catalog",
    "load_bonus_catalog",
    "load_character_catalog",
    "load_skill_catalog",
    "load_band_table",
    "configured_band_table",
]
