"""Equivalency metrics.

An equivalency table turns effective attributes into flavor metrics
("lifts 3.5 tons", "runs 40 km/h"): each leaf multiplies one attribute by
a factor. Species may override individual leaves of the global table.
"""

from __future__ import annotations

import copy
import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

from statforge.core.logging import get_logger
from statforge.engine.arithmetic import finite_or_zero, round2
from statforge.models.species import EquivalencyTable, Species


if TYPE_CHECKING:
    from statforge.engine.resolver import CharacterSheet


logger = get_logger(__name__)


@dataclass(frozen=True, order=True)
class DerivedMetric:
    """One computed equivalency leaf.

    Attributes:
        category: Top-level grouping (e.g. 'Physical').
        attribute: Attribute the factor multiplies.
        metric_name: Name of the metric.
        value: Effective attribute times factor, rounded to two decimals.
    """

    category: str
    attribute: str
    metric_name: str
    value: float


def merge_equivalency_tables(
    global_table: EquivalencyTable,
    species_list: Iterable[Species],
) -> EquivalencyTable:
    """Overlay species equivalencies on the global table.

    Species are applied in reference order and each leaf is replaced
    individually, so later species win per leaf and untouched siblings keep
    their global values. The global table is not modified.

    Args:
        global_table: The shared equivalency table.
        species_list: The character's referenced species.

    Returns:
        A new merged table.

    Example:
        >>> merged = merge_equivalency_tables({"A": {"B": {"C": 2, "D": 1}}},
        ...     [Species(id="s", equivalency_table={"A": {"B": {"C": 5}}})])
        >>> merged["A"]["B"]
        {'C': 5, 'D': 1}
    """
    merged: EquivalencyTable = copy.deepcopy(global_table)
    for species in species_list:
        for category, attributes in species.equivalency_table.items():
            target_category = merged.setdefault(category, {})
            for attribute, metrics in attributes.items():
                target_category.setdefault(attribute, {}).update(metrics)
    return merged


def derive(
    effective_attributes: Mapping[str, float],
    table: EquivalencyTable,
) -> list[DerivedMetric]:
    """Compute every metric of an equivalency table.

    Attributes missing from ``effective_attributes``, or not finite, count
    as 0. Leaves whose factor is not a finite number are skipped.

    Args:
        effective_attributes: Effective values by attribute key.
        table: Equivalency table to evaluate.

    Returns:
        Metrics sorted by category, attribute and metric name.
    """
    metrics: list[DerivedMetric] = []
    for category, attributes in table.items():
        for attribute, leaves in attributes.items():
            value = finite_or_zero(effective_attributes.get(attribute, 0.0))
            for metric_name, factor in leaves.items():
                if (
                    isinstance(factor, bool)
                    or not isinstance(factor, int | float)
                    or not math.isfinite(factor)
                ):
                    logger.debug(
                        "Skipping equivalency leaf",
                        category=category,
                        attribute=attribute,
                        metric=metric_name,
                    )
                    continue
                metrics.append(
                    DerivedMetric(category, attribute, metric_name, round2(value * factor))
                )
    metrics.sort(key=lambda m: (m.category, m.attribute, m.metric_name))
    return metrics


def derive_for_character(
    sheet: CharacterSheet,
    global_table: EquivalencyTable,
    species_list: Iterable[Species],
) -> list[DerivedMetric]:
    """Derive metrics for a resolved sheet with its species overrides.

    Args:
        sheet: The resolved sheet.
        global_table: The shared equivalency table.
        species_list: The character's referenced species.

    Returns:
        Sorted metrics.
    """
    table = merge_equivalency_tables(global_table, species_list)
    return derive(sheet.effective_values(), table)


__all__ = [
    "DerivedMetric",
    "merge_equivalency_tables",
    "derive",
    "derive_for_character",
]
