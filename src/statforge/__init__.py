"""statforge - Stat Resolution Engine for role-playing characters.

Computes a character's effective attributes from layered, stacking
modifiers: raw values, up to ten species and any number of leveled
bonuses. Also classifies values into rank bands, projects equivalency
metrics and previews skill progressions.

RESOLUTION ORDER:
- Base value (Mind is derived from Intelligence and Wisdom)
- Species modifiers, summed across species, applied once
- Bonus modifiers, applied to the species result

Example:
    >>> from statforge import Character, Species, SpeciesModifier, resolve
    >>> orc = Species(id="orc", modifiers=[
    ...     SpeciesModifier(target_attribute="Strength", amount=5, every_n_levels=5)])
    >>> hero = Character(id="c1", level=20, species_ids=["orc"], stats={"Strength": 50})
    >>> resolve(hero, "Strength", [], [orc])
    70.0

Modules:
    core: Configuration, logging, constants and exceptions.
    models: Pydantic V2 records (species, bonuses, characters, skills).
    engine: Pure resolution, classification and projection functions.
    ingestion: Decoding and validation of stored rows.
"""

from __future__ import annotations

# Core
from statforge.core.config import Settings, get_settings
from statforge.core.exceptions import StatforgeError
from statforge.core.logging import configure_logging, get_logger

# Records
from statforge.models import (
    DEFAULT_BAND_TABLE,
    BandTable,
    Bonus,
    BonusAssignment,
    Character,
    CoreAttribute,
    ModifierKind,
    Polarity,
    Skill,
    Species,
    SpeciesModifier,
)

# Engine
from statforge.engine import (
    CharacterSheet,
    SkillEvolutionGraph,
    build_leaderboard,
    classify,
    compute_mind,
    derive,
    merge_equivalency_tables,
    resolve,
    resolve_sheet,
)


__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Core
    "Settings",
    "get_settings",
    "StatforgeError",
    "configure_logging",
    "get_logger",
    # Records
    "DEFAULT_BAND_TABLE",
    "BandTable",
    "Bonus",
    "BonusAssignment",
    "Character",
    "CoreAttribute",
    "ModifierKind",
    "Polarity",
    "Skill",
    "Species",
    "SpeciesModifier",
    # Engine
    "CharacterSheet",
    "SkillEvolutionGraph",
    "build_leaderboard",
    "classify",
    "compute_mind",
    "derive",
    "merge_equivalency_tables",
    "resolve",
    "resolve_sheet",
]
