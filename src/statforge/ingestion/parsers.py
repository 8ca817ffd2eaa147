"""Parsers for stored records.

Storage hands over rows whose structured columns (modifier lists,
equivalency tables, bonus targets, character stats) may still be JSON
text. This module decodes those columns, validates the rows into frozen
records and reports malformed data as :class:`InvalidConfigurationError`.
Invalid data is never retried; the row must be fixed.

Example:
    >>> from statforge.ingestion import load_species
    >>> elf = load_species({"id": "elf", "nombre": "Elf",
    ...     "base_mods": '[{"stat": "Dexterity", "modo": "Puntos", "cantidad": 5}]'})
    >>> elf.modifiers[0].amount
    5.0
"""

from __future__ import annotations

import json
import math
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from statforge.core.config import Settings, get_settings
from statforge.core.exceptions import InvalidConfigurationError
from statforge.core.logging import get_logger
from statforge.models.attributes import DEFAULT_BAND_TABLE, BandTable
from statforge.models.bonuses import Bonus
from statforge.models.character import Character
from statforge.models.skills import EvolutionLink, Skill
from statforge.models.species import EquivalencyTable, Species, SpeciesModifier


logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

_MODIFIER_LIST_ADAPTER = TypeAdapter(list[SpeciesModifier])

_SPECIES_MODIFIER_KEYS = ("modifiers", "baseMods", "base_mods")
_SPECIES_TABLE_KEYS = ("equivalencyTable", "equivalency_table", "equivalencias")
_BONUS_JSON_KEYS = ("targets", "objetivos")
_CHARACTER_JSON_KEYS = (
    "stats",
    "speciesIds",
    "species_ids",
    "species",
    "bonuses",
    "bonos",
    "assignments",
    "skills",
    "habilidades",
)
_SKILL_JSON_KEYS = ("tag", "damage", "characterIds", "character_ids", "personajes")


# =============================================================================
# JSON Helpers
# =============================================================================


def _decode(raw: Any, *, source: str | None, path: str | None = None) -> Any:
    """Decode JSON text; pass anything else through."""
    if isinstance(raw, bytes | bytearray):
        raw = raw.decode("utf-8")
    if not isinstance(raw, str):
        return raw
    if not raw.strip():
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise InvalidConfigurationError(
            f"Malformed JSON: {exc.msg}",
            source=source,
            path=path,
            details={"line": exc.lineno, "column": exc.colno},
        ) from exc


def _decode_row(
    row: Mapping[str, Any] | str | bytes,
    json_keys: Iterable[str],
    *,
    source: str | None,
) -> dict[str, Any]:
    """Decode a row and its JSON-valued columns into a plain dict."""
    decoded = _decode(row, source=source)
    if not isinstance(decoded, Mapping):
        raise InvalidConfigurationError(
            f"Expected a record object, got {type(decoded).__name__}",
            source=source,
        )
    data = dict(decoded)
    for key in json_keys:
        if key in data:
            data[key] = _decode(data[key], source=source, path=key)
    return data


def _row_source(data: Mapping[str, Any], kind: str, source: str | None) -> str:
    return source or f"{kind}:{data.get('id', '?')}"


def _validate(model: type[ModelT], data: Mapping[str, Any], *, source: str) -> ModelT:
    try:
        return model.model_validate(data)
    except PydanticValidationError as exc:
        logger.warning("Rejected stored record", source=source, errors=exc.error_count())
        raise InvalidConfigurationError(
            f"Invalid {model.__name__} record",
            source=source,
            details={"errors": exc.errors(include_url=False, include_input=False)},
        ) from exc


def _is_number(value: Any) -> bool:
    return (
        not isinstance(value, bool)
        and isinstance(value, int | float)
        and math.isfinite(value)
    )


# =============================================================================
# Structured Columns
# =============================================================================


def parse_equivalency_table(
    raw: Mapping[str, Any] | str | bytes | None,
    *,
    source: str | None = None,
    strict: bool | None = None,
) -> EquivalencyTable:
    """Validate an equivalency table.

    The table must nest three object levels (category, attribute, metric)
    ending in finite numeric factors. In strict mode any malformed element
    raises; otherwise it is dropped and logged.

    Args:
        raw: JSON text, a mapping, or None for an empty table.
        source: Identifier used in errors and logs.
        strict: Override ``ingestion.strict`` from settings.

    Returns:
        The validated table.

    Raises:
        InvalidConfigurationError: On malformed JSON, or on a malformed
            element in strict mode.
    """
    if strict is None:
        strict = get_settings().ingestion.strict

    def reject(message: str, path: str) -> None:
        if strict:
            raise InvalidConfigurationError(message, source=source, path=path)
        logger.warning("Dropping equivalency element", source=source, path=path, reason=message)

    decoded = _decode(raw, source=source)
    if decoded is None:
        return {}
    if not isinstance(decoded, Mapping):
        raise InvalidConfigurationError(
            "Equivalency table must be an object", source=source
        )

    table: EquivalencyTable = {}
    for category, attributes in decoded.items():
        if not isinstance(attributes, Mapping):
            reject("Category must be an object", str(category))
            continue
        parsed_category: dict[str, dict[str, float]] = {}
        for attribute, metrics in attributes.items():
            attribute_path = f"{category}.{attribute}"
            if not isinstance(metrics, Mapping):
                reject("Attribute entry must be an object", attribute_path)
                continue
            parsed_metrics: dict[str, float] = {}
            for metric, factor in metrics.items():
                if not _is_number(factor):
                    reject(f"Factor must be a finite number, got {factor!r}", f"{attribute_path}.{metric}")
                    continue
                parsed_metrics[str(metric)] = float(factor)
            parsed_category[str(attribute)] = parsed_metrics
        table[str(category)] = parsed_category
    return table


def parse_modifier_list(
    raw: Iterable[Any] | str | bytes | None,
    *,
    source: str | None = None,
) -> list[SpeciesModifier]:
    """Validate a species modifier list.

    Args:
        raw: JSON text, a list of modifier objects, or None.
        source: Identifier used in errors.

    Returns:
        The validated modifiers.

    Raises:
        InvalidConfigurationError: If the list or any modifier is malformed.
    """
    decoded = _decode(raw, source=source)
    if decoded is None:
        return []
    if isinstance(decoded, Mapping) or not isinstance(decoded, Iterable):
        raise InvalidConfigurationError("Modifier list must be an array", source=source)
    try:
        return _MODIFIER_LIST_ADAPTER.validate_python(list(decoded))
    except PydanticValidationError as exc:
        raise InvalidConfigurationError(
            "Invalid species modifier",
            source=source,
            details={"errors": exc.errors(include_url=False, include_input=False)},
        ) from exc


# =============================================================================
# Record Loaders
# =============================================================================


def load_species(
    row: Mapping[str, Any] | str | bytes,
    *,
    source: str | None = None,
    strict: bool | None = None,
) -> Species:
    """Validate a stored species row.

    Args:
        row: The row as a mapping or JSON text.
        source: Identifier used in errors; defaults to ``species:<id>``.
        strict: Override ``ingestion.strict`` for the equivalency column.

    Returns:
        The species.

    Raises:
        InvalidConfigurationError: If the row is malformed.
    """
    data = _decode_row(row, (), source=source)
    source = _row_source(data, "species", source)
    for key in _SPECIES_MODIFIER_KEYS:
        if key in data:
            data[key] = parse_modifier_list(data[key], source=source)
    for key in _SPECIES_TABLE_KEYS:
        if key in data:
            data[key] = parse_equivalency_table(data[key], source=source, strict=strict)
    return _validate(Species, data, source=source)


def load_bonus(row: Mapping[str, Any] | str | bytes, *, source: str | None = None) -> Bonus:
    """Validate a stored bonus row of either shape.

    Raises:
        InvalidConfigurationError: If the row is malformed.
    """
    data = _decode_row(row, _BONUS_JSON_KEYS, source=source)
    return _validate(Bonus, data, source=_row_source(data, "bonus", source))


def load_character(
    row: Mapping[str, Any] | str | bytes,
    *,
    source: str | None = None,
) -> Character:
    """Validate a stored character row.

    Raises:
        InvalidConfigurationError: If the row is malformed.
    """
    data = _decode_row(row, _CHARACTER_JSON_KEYS, source=source)
    return _validate(Character, data, source=_row_source(data, "character", source))


def load_skill(row: Mapping[str, Any] | str | bytes, *, source: str | None = None) -> Skill:
    """Validate a stored skill row.

    Raises:
        InvalidConfigurationError: If the row is malformed.
    """
    data = _decode_row(row, _SKILL_JSON_KEYS, source=source)
    return _validate(Skill, data, source=_row_source(data, "skill", source))


def load_evolution_link(
    row: Mapping[str, Any] | str | bytes,
    *,
    source: str | None = None,
) -> EvolutionLink:
    """Validate a stored evolution link row.

    Raises:
        InvalidConfigurationError: If the row is malformed.
    """
    data = _decode_row(row, (), source=source)
    return _validate(EvolutionLink, data, source=source or "evolution_link")


def _catalog(rows: Iterable[Any], loader, **kwargs: Any) -> dict[str, Any]:
    catalog: dict[str, Any] = {}
    for record in (loader(row, **kwargs) for row in rows):
        if record.id in catalog:
            logger.warning("Duplicate record id, keeping last", record_id=record.id)
        catalog[record.id] = record
    return catalog


def load_species_catalog(
    rows: Iterable[Mapping[str, Any]],
    *,
    strict: bool | None = None,
) -> dict[str, Species]:
    """Load species rows into a catalog keyed by id."""
    return _catalog(rows, load_species, strict=strict)


def load_bonus_catalog(rows: Iterable[Mapping[str, Any]]) -> dict[str, Bonus]:
    """Load bonus rows into a catalog keyed by id."""
    return _catalog(rows, load_bonus)


def load_character_catalog(rows: Iterable[Mapping[str, Any]]) -> dict[str, Character]:
    """Load character rows into a roster keyed by id."""
    return _catalog(rows, load_character)


def load_skill_catalog(rows: Iterable[Mapping[str, Any]]) -> dict[str, Skill]:
    """Load skill rows into a catalog keyed by id."""
    return _catalog(rows, load_skill)


# =============================================================================
# Band Tables
# =============================================================================


def load_band_table(path: str | Path) -> BandTable:
    """Load a custom rank band table from a JSON file.

    The file holds either a list of bands or an object with a ``bands``
    list. Each band has ``label``, ``tier``, ``min`` and optional ``max``.

    Args:
        path: Path to the JSON file.

    Returns:
        The band table.

    Raises:
        InvalidConfigurationError: If the file cannot be read, is not valid
            JSON, or describes a table with gaps or overlaps.
    """
    path = Path(path)
    source = str(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise InvalidConfigurationError(
            f"Cannot read band table: {exc}", source=source
        ) from exc

    decoded = _decode(text, source=source)
    if isinstance(decoded, list):
        decoded = {"bands": decoded}
    if not isinstance(decoded, Mapping):
        raise InvalidConfigurationError("Band table must be a list or an object", source=source)

    table = _validate(BandTable, decoded, source=source)
    issues = table.coverage_issues()
    if issues:
        logger.warning("Rejected band table", source=source, issues=issues)
        raise InvalidConfigurationError(
            "Band table does not cover values contiguously",
            source=source,
            details={"issues": issues},
        )
    logger.info("Band table loaded", source=source, bands=len(table.bands))
    return table


def configured_band_table(settings: Settings | None = None) -> BandTable:
    """The band table named by ``engine.band_table_path``, or the default."""
    settings = settings or get_settings()
    if settings.engine.band_table_path is None:
        return DEFAULT_BAND_TABLE
    return load_band_table(settings.engine.band_table_path)


__all__ = [
    "parse_equivalency_table",
    "parse_modifier_list",
    "load_species",
    "load_bonus",
    "load_character",
    "load_skill",
    "load_evolution_link",
    "load_species_catalog",
    "load_bonus_catalog",
    "load_character_catalog",
    "load_skill_catalog",
    "load_band_table",
    "configured_band_table",
]
