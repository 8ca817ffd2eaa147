"""Skill catalog records and evolution links."""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, Field, model_validator

from statforge.models.attributes import RECORD_CONFIG
from statforge.models.enums import SkillClass, SkillTier
from statforge.models.progression import DamageProgression, TagProgression


class Skill(BaseModel):
    """A skill in the catalog.

    Attributes:
        id: Unique identifier.
        name: Display name.
        level: Current level.
        max_level: Highest level.
        increment: Free-text description of per-level growth (e.g. '+20 ch / 15%').
        skill_class: Active, passive or growth.
        tier: Power tier.
        definition: Free-text rules text.
        character_ids: Characters that know the skill.
        tag: Optional percentage tag progression.
        damage: Optional tiered damage progression.
    """

    model_config = RECORD_CONFIG

    id: str = Field(min_length=1)
    name: str = Field(default="", validation_alias=AliasChoices("name", "nombre"))
    level: int = Field(default=1, ge=0, validation_alias=AliasChoices("level", "nivel"))
    max_level: int = Field(
        default=10,
        ge=1,
        validation_alias=AliasChoices("maxLevel", "max_level", "nivelMax"),
    )
    increment: str = Field(default="", validation_alias=AliasChoices("increment", "incremento"))
    skill_class: SkillClass = Field(
        default=SkillClass.ACTIVE,
        validation_alias=AliasChoices("skillClass", "skill_class", "clase"),
    )
    tier: SkillTier = SkillTier.F
    definition: str = Field(
        default="",
        validation_alias=AliasChoices("definition", "definicion"),
    )
    character_ids: tuple[str, ...] = Field(
        default=(),
        validation_alias=AliasChoices("characterIds", "character_ids", "personajes"),
    )
    tag: TagProgression | None = None
    damage: DamageProgression | None = None


class EvolutionLink(BaseModel):
    """A directed link from a skill to the skill it evolves into."""

    model_config = RECORD_CONFIG

    source: str = Field(
        min_length=1,
        validation_alias=AliasChoices("source", "from", "from_skill"),
    )
    target: str = Field(
        min_length=1,
        validation_alias=AliasChoices("target", "to", "to_skill"),
    )

    @model_validator(mode="after")
    def reject_self_link(self) -> "EvolutionLink":
        if self.source == self.target:
            msg = f"Skill {self.source!r} cannot evolve into itself"
            raise ValueError(msg)
        return self


__all__ = [
    "Skill",
    "EvolutionLink",
]
