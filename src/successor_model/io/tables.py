"""Table file I/O for successor distributions.

These helpers are the boundary between files on disk and the in-memory
:class:`~successor_model.core.distribution.Distribution` tables. They check
file structure only; CDF invariants are enforced when a predictor is built.

Two entry formats are supported:

``cumulative``
    Each entry carries its cumulative probability, e.g.
    ``{"the": [["cat", 0.1], ["dog", 0.5], ["lizard", 1.0]]}``.
``weights``
    Each entry carries a non-negative raw weight, e.g.
    ``{"the": {"cat": 1, "dog": 4, "lizard": 5}}``; weights are normalized
    per key.
"""

from __future__ import annotations

import csv
from collections.abc import Mapping, Sequence
import logging
from pathlib import Path
from typing import Any

from successor_model.core.config_loading import (
    load_config_mapping,
    validate_allowed_keys,
    validate_required_keys,
)
from successor_model.core.distribution import CumulativeEntry, Distribution

logger = logging.getLogger(__name__)

TABLE_FORMATS: tuple[str, ...] = ("cumulative", "weights")

_VALUE_FIELDS = {"cumulative": "cumulative_probability", "weights": "weight"}


def table_from_mapping(
    raw: Mapping[Any, Any],
    *,
    format: str = "cumulative",
) -> dict[Any, Distribution[Any]]:
    """Parse a decoded JSON/YAML table mapping.

    Parameters
    ----------
    raw : Mapping[Any, Any]
        Mapping from context key to a list of entries. An entry is either a
        ``[label, value]`` pair or an object with ``label`` and
        ``cumulative_probability`` (or ``weight``) fields. In ``weights``
        format a key may also map to a ``{label: weight}`` object.
    format : {"cumulative", "weights"}, optional
        Meaning of entry values.

    Returns
    -------
    dict[Any, Distribution[Any]]
        Unvalidated table in ``raw`` order.

    Raises
    ------
    ValueError
        If the structure is malformed or ``format`` is unknown.
    """

    _check_format(format)
    if not isinstance(raw, Mapping):
        raise ValueError(f"table must be a mapping of key -> entries; got {type(raw).__name__}")

    table: dict[Any, Distribution[Any]] = {}
    for key, raw_entries in raw.items():
        field_name = f"table[{key!r}]"
        if format == "weights" and isinstance(raw_entries, Mapping):
            pairs = [
                (label, _coerce_number(value, field_name=f"{field_name}[{label!r}]"))
                for label, value in raw_entries.items()
            ]
        else:
            if isinstance(raw_entries, (str, bytes)) or not isinstance(raw_entries, Sequence):
                raise ValueError(f"{field_name} must be a list of entries")
            pairs = [
                _parse_entry(item, field_name=f"{field_name}[{index}]", value_field=_VALUE_FIELDS[format])
                for index, item in enumerate(raw_entries)
            ]
        table[key] = _build_distribution(pairs, format=format, field_name=field_name)
    return table


def table_to_mapping(table: Mapping[Any, Distribution[Any]]) -> dict[Any, list[list[Any]]]:
    """Return a JSON/YAML-ready ``{key: [[label, cumulative_probability], ...]}``."""

    return {
        key: [[entry.label, entry.cumulative_probability] for entry in distribution]
        for key, distribution in table.items()
    }


def load_table(path: str | Path, *, format: str = "cumulative") -> dict[Any, Distribution[Any]]:
    """Load a table from a JSON, YAML or CSV file.

    Parameters
    ----------
    path : str | pathlib.Path
        Table file. JSON/YAML roots are parsed with :func:`table_from_mapping`;
        CSV files need ``key`` and ``label`` columns plus a
        ``cumulative_probability`` (or, in ``weights`` format, ``weight``)
        column.
    format : {"cumulative", "weights"}, optional
        Meaning of entry values.

    Returns
    -------
    dict[Any, Distribution[Any]]
        Unvalidated table.
    """

    _check_format(format)
    table_path = Path(path)
    if table_path.suffix.lower() == ".csv":
        table = read_table_csv(table_path, format=format)
    else:
        table = table_from_mapping(load_config_mapping(table_path), format=format)
    logger.debug("loaded %d keys from %s (%s format)", len(table), table_path, format)
    return table


def read_table_csv(path: str | Path, *, format: str = "cumulative") -> dict[Any, Distribution[Any]]:
    """Read a long-form CSV table, one row per ``(key, label)`` entry.

    Rows of one key keep file order; keys keep first-appearance order.
    """

    _check_format(format)
    value_field = _VALUE_FIELDS[format]
    grouped: dict[str, list[tuple[str, float]]] = {}
    with Path(path).open("r", encoding="utf-8", newline="") as handle:
        reader = csv.DictReader(handle)
        _require_columns(reader.fieldnames, required=("key", "label", value_field))
        for row_index, row in enumerate(reader):
            value = _coerce_number(row[value_field], field_name=f"row {row_index} {value_field}")
            grouped.setdefault(row["key"], []).append((row["label"], value))

    return {
        key: _build_distribution(pairs, format=format, field_name=f"table[{key!r}]")
        for key, pairs in grouped.items()
    }


def write_table_csv(table: Mapping[Any, Distribution[Any]], path: str | Path) -> Path:
    """Write a table as long-form CSV with cumulative probabilities.

    Parameters
    ----------
    table : Mapping[Any, Distribution[Any]]
        Table to write.
    path : str | pathlib.Path
        Destination CSV path.

    Returns
    -------
    pathlib.Path
        Output CSV path.

    Raises
    ------
    ValueError
        If ``table`` is empty.
    """

    if not table:
        raise ValueError("table must not be empty")

    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", encoding="utf-8", newline="") as handle:
        writer = csv.DictWriter(handle, fieldnames=["key", "label", "cumulative_probability"])
        writer.writeheader()
        for key, distribution in table.items():
            for entry in distribution:
                writer.writerow(
                    {
                        "key": key,
                        "label": entry.label,
                        "cumulative_probability": repr(entry.cumulative_probability),
                    }
                )
    return output_path


def _parse_entry(item: Any, *, field_name: str, value_field: str) -> tuple[Any, float]:
    """Parse one pair or object entry into ``(label, value)``."""

    if isinstance(item, Mapping):
        validate_allowed_keys(item, field_name=field_name, allowed_keys=("label", value_field))
        validate_required_keys(item, field_name=field_name, required_keys=("label", value_field))
        return item["label"], _coerce_number(item[value_field], field_name=f"{field_name}.{value_field}")

    if isinstance(item, (str, bytes)) or not isinstance(item, Sequence) or len(item) != 2:
        raise ValueError(f"{field_name} must be a [label, {value_field}] pair or an object")
    label, value = item
    return label, _coerce_number(value, field_name=f"{field_name}[1]")


def _build_distribution(
    pairs: list[tuple[Any, float]],
    *,
    format: str,
    field_name: str,
) -> Distribution[Any]:
    """Build one distribution from parsed pairs."""

    if format == "cumulative" or not pairs:
        # empty lists are left for the validator to report
        return Distribution(
            entries=tuple(CumulativeEntry(label=label, cumulative_probability=value) for label, value in pairs)
        )
    try:
        return Distribution.from_weights(pairs)
    except ValueError as exc:
        raise ValueError(f"{field_name}: {exc}") from exc


def _coerce_number(value: Any, *, field_name: str) -> float:
    """Coerce numeric text or numbers to float, rejecting booleans."""

    if isinstance(value, bool):
        raise ValueError(f"{field_name} must be a number; got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{field_name} must be a number; got {value!r}") from exc


def _check_format(format: str) -> None:
    if format not in TABLE_FORMATS:
        raise ValueError(f"format must be one of {TABLE_FORMATS}; got {format!r}")


def _require_columns(fieldnames: Sequence[str] | None, *, required: tuple[str, ...]) -> None:
    """Require all expected columns to exist in CSV header."""

    if fieldnames is None:
        raise ValueError("CSV file must include a header row")
    missing = [name for name in required if name not in set(fieldnames)]
    if missing:
        raise ValueError(f"CSV file missing required columns: {missing}")


__all__ = [
    "TABLE_FORMATS",
    "load_table",
    "read_table_csv",
    "table_from_mapping",
    "table_to_mapping",
    "write_table_csv",
]
