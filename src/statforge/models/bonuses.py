"""Bonus records in their legacy and multi-target shapes.

Stored bonuses come in two shapes. Older rows describe a single target
inline (``targetAttribute``/``kind``/``amountPerLevel`` on the bonus
itself); newer rows carry a ``targets`` list. Both are constructors of the
:data:`BonusRecord` sum type and are normalized into :class:`Bonus`, whose
``targets`` list is uniform, as soon as they are validated. Nothing past
this module branches on shape.

Example:
    >>> bonus = Bonus.model_validate(
    ...     {"id": "b1", "maxLevel": 5, "targetAttribute": "Strength",
    ...      "kind": "points", "amountPerLevel": 2}
    ... )
    >>> len(bonus.targets)
    1
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated, Any, Union

from pydantic import (
    AliasChoices,
    BaseModel,
    Discriminator,
    Field,
    Tag,
    TypeAdapter,
    model_validator,
)

from statforge.models.attributes import RECORD_CONFIG
from statforge.models.enums import ModifierKind


_TARGET_ATTRIBUTE = AliasChoices("targetAttribute", "target_attribute", "stat", "objetivo")
_KIND = AliasChoices("kind", "modo")
_AMOUNT_PER_LEVEL = AliasChoices(
    "amountPerLevel", "amount_per_level", "cantidadPorNivel", "cantidad_por_nivel"
)
_BASE_PERCENTAGE = AliasChoices("basePercentage", "base_percentage", "porcentajeBase")
_MAX_LEVEL = AliasChoices("maxLevel", "max_level", "nivelMax", "nivel_max")
_TARGETS = AliasChoices("targets", "objetivos")
_NAME = AliasChoices("name", "nombre")
_DESCRIPTION = AliasChoices("description", "descripcion")


class BonusTarget(BaseModel):
    """One attribute affected by a bonus.

    Attributes:
        target_attribute: Attribute key the target applies to.
        kind: Points or percentage.
        amount_per_level: Points or percentage points granted per bonus level.
        base_percentage: Percentage points granted once for having the bonus.
    """

    model_config = RECORD_CONFIG

    target_attribute: str = Field(min_length=1, validation_alias=_TARGET_ATTRIBUTE)
    kind: ModifierKind = Field(default=ModifierKind.POINTS, validation_alias=_KIND)
    amount_per_level: float = Field(
        default=0.0, allow_inf_nan=False, validation_alias=_AMOUNT_PER_LEVEL
    )
    base_percentage: float | None = Field(
        default=None, allow_inf_nan=False, validation_alias=_BASE_PERCENTAGE
    )


class LegacyBonusRecord(BaseModel):
    """Single-target bonus row with the target fields inlined."""

    model_config = RECORD_CONFIG

    id: str = Field(min_length=1)
    name: str = Field(default="", validation_alias=_NAME)
    description: str = Field(default="", validation_alias=_DESCRIPTION)
    max_level: int = Field(default=1, ge=0, validation_alias=_MAX_LEVEL)
    target_attribute: str = Field(min_length=1, validation_alias=_TARGET_ATTRIBUTE)
    kind: ModifierKind = Field(default=ModifierKind.POINTS, validation_alias=_KIND)
    amount_per_level: float = Field(
        default=0.0, allow_inf_nan=False, validation_alias=_AMOUNT_PER_LEVEL
    )
    base_percentage: float | None = Field(
        default=None, allow_inf_nan=False, validation_alias=_BASE_PERCENTAGE
    )

    def targets(self) -> tuple[BonusTarget, ...]:
        """The inline target as a one-element target list."""
        return (
            BonusTarget(
                target_attribute=self.target_attribute,
                kind=self.kind,
                amount_per_level=self.amount_per_level,
                base_percentage=self.base_percentage,
            ),
        )


class MultiTargetBonusRecord(BaseModel):
    """Bonus row carrying an explicit list of targets."""

    model_config = RECORD_CONFIG

    id: str = Field(min_length=1)
    name: str = Field(default="", validation_alias=_NAME)
    description: str = Field(default="", validation_alias=_DESCRIPTION)
    max_level: int = Field(default=1, ge=0, validation_alias=_MAX_LEVEL)
    target_list: tuple[BonusTarget, ...] = Field(default=(), validation_alias=_TARGETS)

    def targets(self) -> tuple[BonusTarget, ...]:
        return self.target_list


def bonus_shape(raw: Any) -> str:
    """Tell which constructor of :data:`BonusRecord` a raw row belongs to.

    A row is multi-target when it carries a non-empty targets list, or when
    it has no inline target at all.

    Args:
        raw: A mapping or an already-built record.

    Returns:
        ``"legacy"`` or ``"multi_target"``.
    """
    if isinstance(raw, LegacyBonusRecord):
        return "legacy"
    if isinstance(raw, MultiTargetBonusRecord):
        return "multi_target"
    if isinstance(raw, Mapping):
        targets = raw.get("targets", raw.get("objetivos"))
        if isinstance(targets, list | tuple) and targets:
            return "multi_target"
        if any(key in raw for key in _TARGET_ATTRIBUTE.choices):
            return "legacy"
    return "multi_target"


BonusRecord = Annotated[
    Union[
        Annotated[LegacyBonusRecord, Tag("legacy")],
        Annotated[MultiTargetBonusRecord, Tag("multi_target")],
    ],
    Discriminator(bonus_shape),
]
"""Sum type over the two stored bonus shapes."""

_BONUS_RECORD_ADAPTER: TypeAdapter[Any] = TypeAdapter(BonusRecord)


class Bonus(BaseModel):
    """A bonus normalized to a uniform target list.

    Validating a raw row of either stored shape yields the same model.

    Attributes:
        id: Unique identifier.
        name: Display name.
        description: Free text.
        max_level: Highest level an assignment may use.
        targets: Attributes affected by the bonus.
    """

    model_config = RECORD_CONFIG

    id: str = Field(min_length=1)
    name: str = ""
    description: str = ""
    max_level: int = Field(default=1, ge=0)
    targets: tuple[BonusTarget, ...] = ()

    @model_validator(mode="before")
    @classmethod
    def normalize_shape(cls, data: Any) -> Any:
        """Route raw rows through the record sum type."""
        if isinstance(data, LegacyBonusRecord | MultiTargetBonusRecord):
            return _record_fields(data)
        if isinstance(data, Mapping):
            return _record_fields(_BONUS_RECORD_ADAPTER.validate_python(data))
        return data

    def targets_for(self, attribute: str) -> list[BonusTarget]:
        """Get the targets affecting one attribute.

        Args:
            attribute: Attribute key (exact, case-sensitive).

        Returns:
            Matching targets in declaration order.
        """
        return [t for t in self.targets if t.target_attribute == attribute]


def _record_fields(record: LegacyBonusRecord | MultiTargetBonusRecord) -> dict[str, Any]:
    return {
        "id": record.id,
        "name": record.name,
        "description": record.description,
        "max_level": record.max_level,
        "targets": record.targets(),
    }


def normalize_bonus(record: LegacyBonusRecord | MultiTargetBonusRecord | Mapping[str, Any]) -> Bonus:
    """Normalize either stored bonus shape into a :class:`Bonus`.

    Args:
        record: A record of either shape, or a raw mapping.

    Returns:
        The normalized bonus.
    """
    return Bonus.model_validate(record)


__all__ = [
    "BonusTarget",
    "LegacyBonusRecord",
    "MultiTargetBonusRecord",
    "BonusRecord",
    "Bonus",
    "bonus_shape",
    "normalize_bonus",
]
