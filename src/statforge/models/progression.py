"""Progression policies for skill previews.

These records describe how a skill's percentage tag or damage grows with
level. They are evaluated by :mod:`statforge.engine.progression` for
preview only and never feed back into stat resolution.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import AliasChoices, BaseModel, Field, model_validator

from statforge.models.attributes import RECORD_CONFIG


class TagProgression(BaseModel):
    """Linear percentage tag with an optional cap.

    Attributes:
        base: Value at level 1.
        per_level: Increase for every level above 1.
        cap: Optional upper bound.
    """

    model_config = RECORD_CONFIG

    base: float = Field(default=0.0, allow_inf_nan=False)
    per_level: float = Field(default=0.0, allow_inf_nan=False)
    cap: float | None = Field(default=None, allow_inf_nan=False)


class EveryNLevelsPolicy(BaseModel):
    """Damage that grows by a fixed step every ``n`` levels.

    Attributes:
        base: Damage at level 1.
        add: Damage added per completed step.
        n: Levels per step.
        max_stacks: Optional limit on the number of steps.
        ceiling: Optional upper bound on the result.
    """

    model_config = RECORD_CONFIG

    kind: Literal["every_n_levels"] = "every_n_levels"
    base: float = Field(default=0.0, allow_inf_nan=False)
    add: float = Field(
        default=0.0,
        allow_inf_nan=False,
        validation_alias=AliasChoices("add", "suma"),
    )
    n: int = Field(default=1, ge=1)
    max_stacks: int | None = Field(default=None, ge=0)
    ceiling: float | None = Field(default=None, allow_inf_nan=False)


class Milestone(BaseModel):
    """A level threshold that overrides and/or adds to the running damage.

    When both are present the override is applied first.
    """

    model_config = RECORD_CONFIG

    level: int = Field(ge=0)
    override: float | None = Field(default=None, allow_inf_nan=False)
    add: float | None = Field(
        default=None,
        allow_inf_nan=False,
        validation_alias=AliasChoices("add", "suma"),
    )

    @model_validator(mode="after")
    def require_effect(self) -> "Milestone":
        """Reject milestones that change nothing."""
        if self.override is None and self.add is None:
            msg = f"Milestone at level {self.level} needs an override or an add"
            raise ValueError(msg)
        return self


class MilestonePolicy(BaseModel):
    """Damage driven by an explicit milestone table.

    Attributes:
        base: Damage before any milestone applies.
        milestones: Milestones in table order.
        ceiling: Optional upper bound on the result.
    """

    model_config = RECORD_CONFIG

    kind: Literal["milestones"] = "milestones"
    base: float = Field(default=0.0, allow_inf_nan=False)
    milestones: tuple[Milestone, ...] = ()
    ceiling: float | None = Field(default=None, allow_inf_nan=False)


DamageProgression = Annotated[
    Union[EveryNLevelsPolicy, MilestonePolicy],
    Field(discriminator="kind"),
]
"""Either tiered damage policy, discriminated by ``kind``."""


__all__ = [
    "TagProgression",
    "EveryNLevelsPolicy",
    "Milestone",
    "MilestonePolicy",
    "DamageProgression",
]
