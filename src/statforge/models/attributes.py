"""Attribute values and rank band tables.

An attribute value pairs a number with a cached band label; the label is
always re-derivable through the rank classifier and is never trusted over
the number. A band table is the ordered list of labeled integer ranges the
classifier walks.
"""

from __future__ import annotations

from typing import Annotated

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel


RECORD_CONFIG = ConfigDict(
    frozen=True,
    extra="ignore",
    populate_by_name=True,
    alias_generator=to_camel,
)
"""Shared pydantic config for stored records: immutable, camelCase aware."""


class AttributeValue(BaseModel):
    """A raw attribute value with its cached band label.

    Attributes:
        value: The numeric attribute value.
        band_label: Cached classification of ``value``.
    """

    model_config = RECORD_CONFIG

    value: float = Field(
        default=0.0,
        description="Numeric attribute value",
        validation_alias=AliasChoices("value", "valor"),
    )
    band_label: str = Field(
        default="",
        description="Cached band label",
        validation_alias=AliasChoices("bandLabel", "band_label", "rango"),
    )

    @field_validator("value", mode="before")
    @classmethod
    def reject_bool(cls, value: object) -> object:
        """Refuse booleans, which pydantic would otherwise read as 0 or 1."""
        if isinstance(value, bool):
            raise ValueError("Attribute value must be a number, not a boolean")
        return value


class RankBand(BaseModel):
    """One labeled closed interval of a band table.

    Attributes:
        label: Full band label (e.g. 'Genin High').
        tier: The coarse tier the band belongs to (e.g. 'Genin').
        min: Inclusive lower bound.
        max: Inclusive upper bound, or None for the open-ended top band.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    label: str = Field(min_length=1)
    tier: str = Field(min_length=1)
    min: Annotated[int, Field(ge=0)]
    max: Annotated[int, Field(ge=0)] | None = None

    @model_validator(mode="after")
    def validate_bounds(self) -> "RankBand":
        """Ensure the upper bound is not below the lower bound."""
        if self.max is not None and self.max < self.min:
            msg = f"Band {self.label!r} has max {self.max} below min {self.min}"
            raise ValueError(msg)
        return self

    def contains(self, value: int) -> bool:
        """Check whether an integer falls inside this band.

        Args:
            value: Integer to test.

        Returns:
            True if ``min <= value <= max`` (no upper bound for the top band).
        """
        return value >= self.min and (self.max is None or value <= self.max)


class BandTable(BaseModel):
    """An ordered rank band table.

    Bands are kept sorted by ascending ``min`` (stable for equal minimums).
    A well-formed table starts at 1, has no gaps or overlaps and ends with
    an open-ended band; :meth:`coverage_issues` lists any violations.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    bands: tuple[RankBand, ...] = Field(min_length=1)

    @field_validator("bands", mode="after")
    @classmethod
    def sort_bands(cls, bands: tuple[RankBand, ...]) -> tuple[RankBand, ...]:
        """Order bands by ascending lower bound."""
        return tuple(sorted(bands, key=lambda band: band.min))

    @property
    def lowest(self) -> RankBand:
        """The band with the smallest lower bound."""
        return self.bands[0]

    @property
    def highest(self) -> RankBand:
        """The band with the largest lower bound."""
        return self.bands[-1]

    @property
    def labels(self) -> list[str]:
        """Band labels in ascending order."""
        return [band.label for band in self.bands]

    def position(self, label: str) -> int:
        """Index of a label in ascending order.

        Args:
            label: Band label to locate.

        Returns:
            Zero-based position, or -1 if the label is not in the table.
        """
        for index, band in enumerate(self.bands):
            if band.label == label:
                return index
        return -1

    def coverage_issues(self) -> list[str]:
        """Describe gaps, overlaps and open ends in the table.

        Returns:
            Human-readable problems; empty for a well-formed table.
        """
        issues: list[str] = []
        if self.lowest.min > 1:
            issues.append(f"values 1..{self.lowest.min - 1} are not covered")
        for current, following in zip(self.bands, self.bands[1:]):
            if current.max is None:
                issues.append(f"band {current.label!r} is open-ended but not last")
                continue
            if following.min > current.max + 1:
                issues.append(
                    f"gap between {current.label!r} and {following.label!r} "
                    f"({current.max + 1}..{following.min - 1})"
                )
            elif following.min <= current.max:
                issues.append(f"{current.label!r} overlaps {following.label!r}")
        if self.highest.max is not None:
            issues.append(f"top band {self.highest.label!r} is not open-ended")
        return issues


_DEFAULT_ROWS: tuple[tuple[str, int, int | None], ...] = (
    # (tier, min, max); grades run Low, Mid, High, Elite within each tier
    ("Human", 1, 4), ("Human", 5, 9), ("Human", 10, 14), ("Human", 15, 19),
    ("Genin", 20, 24), ("Genin", 25, 29), ("Genin", 30, 34), ("Genin", 35, 39),
    ("Chunin", 40, 54), ("Chunin", 55, 69), ("Chunin", 70, 79), ("Chunin", 80, 89),
    ("Jonin", 90, 119), ("Jonin", 120, 149), ("Jonin", 150, 179), ("Jonin", 180, 209),
    ("Kage", 210, 279), ("Kage", 280, 349), ("Kage", 350, 424), ("Kage", 425, 499),
    ("Tailed Beast", 500, 999), ("Tailed Beast", 1000, 1499),
    ("Tailed Beast", 1500, 1999), ("Tailed Beast", 2000, 2499),
    ("Catastrophe", 2500, 2999), ("Catastrophe", 3000, 3499),
    ("Catastrophe", 3500, 3999), ("Catastrophe", 4000, 4999),
    ("Deity", 5000, 7499), ("Deity", 7500, 9999), ("Deity", 10000, 14999), ("Deity", 15000, None),
)

_GRADES = ("Low", "Mid", "High", "Elite")

DEFAULT_BAND_TABLE = BandTable(
    bands=tuple(
        RankBand(label=f"{tier} {_GRADES[index % 4]}", tier=tier, min=low, max=high)
        for index, (tier, low, high) in enumerate(_DEFAULT_ROWS)
    )
)
"""Default 32-band table: eight tiers of four grades, 1 to 15000+."""


__all__ = [
    "RECORD_CONFIG",
    "AttributeValue",
    "RankBand",
    "BandTable",
    "DEFAULT_BAND_TABLE",
]
