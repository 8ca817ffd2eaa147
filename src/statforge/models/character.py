"""Character records.

A character is an immutable snapshot: raw attribute values, the species it
references (first one is the principal species), and its bonus and skill
assignments. Nothing here is computed; see :mod:`statforge.engine.resolver`.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import AliasChoices, BaseModel, Field, field_validator

from statforge.core.constants import MAX_SPECIES_PER_CHARACTER
from statforge.models.attributes import RECORD_CONFIG, AttributeValue


class BonusAssignment(BaseModel):
    """A bonus assigned to a character at some level.

    The level is stored as given; the composer clamps it to the bonus's
    ``[0, max_level]`` range.
    """

    model_config = RECORD_CONFIG

    bonus_id: str = Field(min_length=1, validation_alias=AliasChoices("bonusId", "bonus_id"))
    level: int = Field(default=0, validation_alias=AliasChoices("level", "nivel"))


class SkillAssignment(BaseModel):
    """A skill known by a character at some level."""

    model_config = RECORD_CONFIG

    skill_id: str = Field(min_length=1, validation_alias=AliasChoices("skillId", "skill_id"))
    level: int = Field(default=1, validation_alias=AliasChoices("level", "nivel"))


class Character(BaseModel):
    """A character snapshot.

    Attributes:
        id: Unique identifier.
        name: Display name.
        description: Free text.
        level: Character level (values below 1 are clamped by the engine).
        species_ids: Referenced species, principal first.
        stats: Raw attribute values by key.
        bonuses: Bonus assignments.
        skills: Skill assignments.

    Example:
        >>> hero = Character(id="c1", level=20, stats={"Strength": 50})
        >>> hero.base_value("Strength")
        50.0
    """

    model_config = RECORD_CONFIG

    id: str = Field(min_length=1)
    name: str = Field(default="", validation_alias=AliasChoices("name", "nombre"))
    description: str = Field(
        default="",
        validation_alias=AliasChoices("description", "descripcion"),
    )
    level: int = Field(default=1, validation_alias=AliasChoices("level", "nivel"))
    species_ids: tuple[str, ...] = Field(
        default=(),
        max_length=MAX_SPECIES_PER_CHARACTER,
        validation_alias=AliasChoices("speciesIds", "species_ids", "species"),
    )
    stats: dict[str, AttributeValue] = Field(default_factory=dict)
    bonuses: tuple[BonusAssignment, ...] = Field(
        default=(),
        validation_alias=AliasChoices("bonuses", "bonos", "assignments"),
    )
    skills: tuple[SkillAssignment, ...] = Field(
        default=(),
        validation_alias=AliasChoices("skills", "habilidades"),
    )

    @field_validator("species_ids", mode="before")
    @classmethod
    def coerce_species_ids(cls, value: Any) -> Any:
        """Accept a single id, or None, where a list is expected."""
        if value is None:
            return ()
        if isinstance(value, str):
            return (value,) if value else ()
        return value

    @field_validator("stats", mode="before")
    @classmethod
    def coerce_stats(cls, value: Any) -> Any:
        """Accept bare numbers as attribute values.

        Booleans are wrapped like numbers so that ``AttributeValue`` refuses
        them.
        """
        if value is None:
            return {}
        if isinstance(value, Mapping):
            return {
                key: {"value": raw} if isinstance(raw, int | float) else raw
                for key, raw in value.items()
            }
        return value

    @property
    def principal_species_id(self) -> str | None:
        """The first referenced species id, if any."""
        return self.species_ids[0] if self.species_ids else None

    def base_value(self, attribute: str) -> float:
        """Get the raw value of an attribute.

        Args:
            attribute: Attribute key (exact, case-sensitive).

        Returns:
            The stored value, or 0.0 for unknown attributes.
        """
        entry = self.stats.get(attribute)
        return entry.value if entry is not None else 0.0


__all__ = [
    "BonusAssignment",
    "SkillAssignment",
    "Character",
]
