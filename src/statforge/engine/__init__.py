"""Stat resolution engine.

Pure functions over frozen record snapshots: rank classification, derived
Mind, species and bonus composition, effective attribute resolution,
equivalency metrics, progression previews, leaderboards and the skill
evolution graph.

Submodules:
    arithmetic: Half-up rounding and modifier totals.
    ranks: Rank band classification.
    derived: Derived Mind attribute.
    species_composer: Species modifier composition.
    bonus_composer: Bonus modifier composition.
    resolver: Effective attribute and sheet resolution.
    equivalency: Equivalency table merging and metrics.
    progression: Skill tag and damage previews.
    leaderboard: Attribute leaderboards.
    evolution: Skill evolution graph.
"""

from __future__ import annotations

# =============================================================================
# Arithmetic & Ranks
# =============================================================================
from statforge.engine.arithmetic import ModifierTotals, finite_or_zero, round2, round_half_up
from statforge.engine.ranks import RankClassification, band_label, classify, normalize_rank_input

# =============================================================================
# Composition
# =============================================================================
from statforge.engine.derived import (
    compute_mind,
    derive_mind,
    find_intelligence_key,
    find_mind_key,
    find_wisdom_key,
    is_mind_attribute,
    mind_enabled,
)
from statforge.engine.species_composer import compose_species, points_steps, species_contribution
from statforge.engine.bonus_composer import clamp_level, compose_bonuses, index_by_id
from statforge.engine.resolver import (
    CharacterSheet,
    ResolvedAttribute,
    index_species,
    referenced_species,
    refresh_band_labels,
    resolve,
    resolve_attribute,
    resolve_sheet,
)

# =============================================================================
# Projections
# =============================================================================
from statforge.engine.equivalency import (
    DerivedMetric,
    derive,
    derive_for_character,
    merge_equivalency_tables,
)
from statforge.engine.progression import (
    every_n_levels_damage,
    milestone_damage,
    tag_percentage,
    tag_value,
    tiered_damage,
)
from statforge.engine.leaderboard import LeaderboardEntry, build_leaderboard
from statforge.engine.evolution import SkillEvolutionGraph


__all__ = [
    # Arithmetic
    "ModifierTotals",
    "finite_or_zero",
    "round2",
    "round_half_up",
    # Ranks
    "RankClassification",
    "band_label",
    "classify",
    "normalize_rank_input",
    # Derived
    "compute_mind",
    "derive_mind",
    "find_intelligence_key",
    "find_mind_key",
    "find_wisdom_key",
    "is_mind_attribute",
    "mind_enabled",
    # Composition
    "compose_species",
    "points_steps",
    "species_contribution",
    "clamp_level",
    "compose_bonuses",
    "index_by_id",
    # Resolution
    "CharacterSheet",
    "ResolvedAttribute",
    "index_species",
    "referenced_species",
    "refresh_band_labels",
    "resolve",
    "resolve_attribute",
    "resolve_sheet",
    # Projections
    "DerivedMetric",
    "derive",
    "derive_for_character",
    "merge_equivalency_tables",
    "every_n_levels_damage",
    "milestone_damage",
    "tag_percentage",
    "tag_value",
    "tiered_damage",
    "LeaderboardEntry",
    "build_leaderboard",
    "SkillEvolutionGraph",
]
