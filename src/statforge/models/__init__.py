"""Pydantic V2 records for the statforge engine.

All records are frozen snapshots handed to the engine per call. They accept
snake_case, camelCase and the legacy persisted field names.

Submodules:
    enums: Core attributes, modifier kinds, polarities, skill classes and tiers.
    attributes: Attribute values and rank band tables.
    species: Species and species modifiers.
    bonuses: Bonus records (legacy and multi-target) and the normalized Bonus.
    character: Characters and their assignments.
    progression: Skill progression policies.
    skills: Skills and evolution links.

Example:
    >>> from statforge.models import Character, Species, SpeciesModifier
    >>> elf = Species(id="elf", modifiers=[SpeciesModifier(target_attribute="Dexterity", amount=5)])
    >>> hero = Character(id="c1", species_ids=["elf"], stats={"Dexterity": 40})
"""

from __future__ import annotations

# =============================================================================
# Enumerations
# =============================================================================
from statforge.models.enums import (
    CoreAttribute,
    ModifierKind,
    Polarity,
    SkillClass,
    SkillTier,
)

# =============================================================================
# Attributes & Bands
# =============================================================================
from statforge.models.attributes import (
    DEFAULT_BAND_TABLE,
    AttributeValue,
    BandTable,
    RankBand,
)

# =============================================================================
# Species & Bonuses
# =============================================================================
from statforge.models.species import EquivalencyTable, Species, SpeciesModifier
from statforge.models.bonuses import (
    Bonus,
    BonusRecord,
    BonusTarget,
    LegacyBonusRecord,
    MultiTargetBonusRecord,
    normalize_bonus,
)

# =============================================================================
# Characters
# =============================================================================
from statforge.models.character import BonusAssignment, Character, SkillAssignment

# =============================================================================
# Skills & Progression
# =============================================================================
from statforge.models.progression import (
    DamageProgression,
    EveryNLevelsPolicy,
    Milestone,
    MilestonePolicy,
    TagProgression,
)
from statforge.models.skills import EvolutionLink, Skill


__all__ = [
    # Enums
    "CoreAttribute",
    "ModifierKind",
    "Polarity",
    "SkillClass",
    "SkillTier",
    # Attributes
    "AttributeValue",
    "RankBand",
    "BandTable",
    "DEFAULT_BAND_TABLE",
    # Species & Bonuses
    "EquivalencyTable",
    "Species",
    "SpeciesModifier",
    "Bonus",
    "BonusRecord",
    "BonusTarget",
    "LegacyBonusRecord",
    "MultiTargetBonusRecord",
    "normalize_bonus",
    # Characters
    "BonusAssignment",
    "SkillAssignment",
    "Character",
    # Skills & Progression
    "TagProgression",
    "EveryNLevelsPolicy",
    "Milestone",
    "MilestonePolicy",
    "DamageProgression",
    "Skill",
    "EvolutionLink",
]
