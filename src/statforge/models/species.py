"""Species records and their per-attribute modifiers.

A species carries a list of modifiers and a partial equivalency table. A
character may stack several species; every modifier of every referenced
species contributes to the same accumulators before they are applied.
"""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, Field, field_validator

from statforge.core.constants import DEFAULT_STEP_CADENCE
from statforge.models.attributes import RECORD_CONFIG
from statforge.models.enums import ModifierKind, Polarity


EquivalencyTable = dict[str, dict[str, dict[str, float]]]
"""Nested mapping ``category -> attribute -> metric name -> factor``."""


class SpeciesModifier(BaseModel):
    """A species-level modifier on one attribute.

    ``POINTS`` modifiers accrue ``amount`` once per ``every_n_levels``
    character levels. ``PERCENTAGE`` modifiers are a fixed number of
    percentage points whose sign comes from ``polarity``.

    Attributes:
        target_attribute: Attribute key the modifier applies to.
        kind: Points or percentage.
        amount: Points per step, or percentage points.
        every_n_levels: Levels per points step.
        polarity: Advantage or disadvantage (percentage only).
    """

    model_config = RECORD_CONFIG

    target_attribute: str = Field(
        min_length=1,
        validation_alias=AliasChoices("targetAttribute", "target_attribute", "stat"),
    )
    kind: ModifierKind = Field(
        default=ModifierKind.POINTS,
        validation_alias=AliasChoices("kind", "modo"),
    )
    amount: float = Field(
        default=0.0,
        allow_inf_nan=False,
        validation_alias=AliasChoices("amount", "cantidad"),
    )
    every_n_levels: int = Field(
        default=DEFAULT_STEP_CADENCE,
        ge=1,
        validation_alias=AliasChoices("everyNLevels", "every_n_levels"),
    )
    polarity: Polarity = Field(default=Polarity.ADVANTAGE)

    @field_validator("every_n_levels", mode="before")
    @classmethod
    def default_cadence(cls, value: Any) -> Any:
        """Treat a missing cadence as one step per level."""
        return DEFAULT_STEP_CADENCE if value is None else value


class Species(BaseModel):
    """A playable species.

    Attributes:
        id: Unique identifier.
        name: Display name.
        description: Free text.
        allows_derived_mind: Whether characters of this species may have Mind.
        modifiers: Attribute modifiers granted by the species.
        equivalency_table: Species overrides for the global equivalency table.
    """

    model_config = RECORD_CONFIG

    id: str = Field(min_length=1)
    name: str = Field(default="", validation_alias=AliasChoices("name", "nombre"))
    description: str = Field(
        default="",
        validation_alias=AliasChoices("description", "descripcion"),
    )
    allows_derived_mind: bool = Field(
        default=True,
        validation_alias=AliasChoices(
            "allowsDerivedMind", "allows_derived_mind", "allowMind", "allow_mind"
        ),
    )
    modifiers: tuple[SpeciesModifier, ...] = Field(
        default=(),
        validation_alias=AliasChoices("modifiers", "baseMods", "base_mods"),
    )
    equivalency_table: EquivalencyTable = Field(
        default_factory=dict,
        validation_alias=AliasChoices(
            "equivalencyTable", "equivalency_table", "equivalencias"
        ),
    )

    @field_validator("modifiers", mode="before")
    @classmethod
    def default_modifiers(cls, value: Any) -> Any:
        return () if value is None else value

    @field_validator("equivalency_table", mode="before")
    @classmethod
    def default_table(cls, value: Any) -> Any:
        return {} if value is None else value

    def modifiers_for(self, attribute: str) -> list[SpeciesModifier]:
        """Get the modifiers targeting one attribute.

        Args:
            attribute: Attribute key (exact, case-sensitive).

        Returns:
            Matching modifiers in declaration order.
        """
        return [m for m in self.modifiers if m.target_attribute == attribute]


__all__ = [
    "EquivalencyTable",
    "SpeciesModifier",
    "Species",
]
