"""Tests for successor table file I/O."""

from __future__ import annotations

import json

import pytest

from successor_model.core.distribution import Distribution
from successor_model.core.errors import EmptyDistributionError, NonAscendingError
from successor_model.core.validation import validate_table
from successor_model.examples import example_table
from successor_model.io import (
    load_table,
    read_table_csv,
    table_from_mapping,
    table_to_mapping,
    write_table_csv,
)


def test_table_from_mapping_parses_pair_lists() -> None:
    """Pair lists should become cumulative distributions."""

    table = table_from_mapping({"the": [["cat", 0.1], ["dog", 0.5], ["lizard", 1.0]]})

    assert table["the"] == Distribution.from_pairs([("cat", 0.1), ("dog", 0.5), ("lizard", 1.0)])


def test_table_from_mapping_parses_object_entries() -> None:
    """Object entries with label/cumulative_probability fields are accepted."""

    table = table_from_mapping(
        {
            "cat": [
                {"label": "sat", "cumulative_probability": 0.6},
                {"label": "ate", "cumulative_probability": "1.0"},
            ]
        }
    )

    assert table["cat"].labels == ("sat", "ate")
    assert table["cat"].thresholds == (0.6, 1.0)


def test_table_from_mapping_weights_format() -> None:
    """Weights format accepts both label maps and pair lists."""

    table = table_from_mapping(
        {
            "the": {"cat": 1, "dog": 4, "lizard": 5},
            "cat": [["sat", 3], {"label": "ate", "weight": 2}],
        },
        format="weights",
    )

    assert table["the"].thresholds[0] == pytest.approx(0.1)
    assert table["cat"].thresholds == (pytest.approx(0.6), 1.0)
    validate_table(table)


def test_table_from_mapping_leaves_cdf_checks_to_validator() -> None:
    """Structurally fine but malformed CDFs parse and fail validation later."""

    table = table_from_mapping({"foo": [["a", 0.5], ["b", 0.4], ["c", 1.0]], "bar": []})

    assert len(table["bar"]) == 0
    with pytest.raises(NonAscendingError):
        validate_table(table)
    with pytest.raises(EmptyDistributionError):
        validate_table({"bar": table["bar"]})


@pytest.mark.parametrize(
    ("raw", "message"),
    [
        ([["cat", 1.0]], "table must be a mapping"),
        ({"the": "cat"}, r"table\['the'\] must be a list of entries"),
        ({"the": [["cat"]]}, r"table\['the'\]\[0\] must be a \[label, cumulative_probability\] pair"),
        ({"the": [["cat", "high"]]}, "must be a number"),
        ({"the": [["cat", True]]}, "must be a number"),
        ({"the": [{"label": "cat"}]}, "missing required keys"),
        ({"the": [{"label": "cat", "cumulative_probability": 1.0, "extra": 1}]}, "unknown keys"),
    ],
)
def test_table_from_mapping_rejects_malformed_structure(raw, message: str) -> None:
    """Structural problems should name the offending field."""

    with pytest.raises(ValueError, match=message):
        table_from_mapping(raw)


def test_table_from_mapping_rejects_bad_weights() -> None:
    """Weight errors are reported with the key path."""

    with pytest.raises(ValueError, match=r"table\['the'\]: weights must be non-negative"):
        table_from_mapping({"the": {"cat": -1, "dog": 2}}, format="weights")


def test_table_from_mapping_rejects_unknown_format() -> None:
    """Only cumulative and weights formats exist."""

    with pytest.raises(ValueError, match="format must be one of"):
        table_from_mapping({"the": [["cat", 1.0]]}, format="counts")


def test_load_table_json_and_yaml(tmp_path) -> None:
    """JSON and YAML table files should load identically."""

    json_path = tmp_path / "table.json"
    json_path.write_text(json.dumps(table_to_mapping(example_table())), encoding="utf-8")
    yaml_path = tmp_path / "table.yaml"
    yaml_path.write_text("the:\n  - [cat, 0.1]\n  - [dog, 0.5]\n  - [lizard, 1.0]\n", encoding="utf-8")

    from_json = load_table(json_path)
    from_yaml = load_table(yaml_path)

    assert from_json == example_table()
    assert from_yaml["the"] == example_table()["the"]


def test_csv_round_trip_preserves_order(tmp_path) -> None:
    """CSV export followed by import should reproduce the table."""

    path = write_table_csv(example_table(), tmp_path / "nested" / "table.csv")

    loaded = load_table(path)

    assert list(loaded) == ["the", "cat", "alphabet"]
    assert loaded == example_table()


def test_read_table_csv_weights_format(tmp_path) -> None:
    """CSV weight columns should be normalized per key."""

    path = tmp_path / "weights.csv"
    path.write_text("key,label,weight\nthe,cat,1\nthe,dog,3\ncat,sat,2\n", encoding="utf-8")

    table = read_table_csv(path, format="weights")

    assert table["the"].thresholds == (0.25, 1.0)
    assert table["cat"].thresholds == (1.0,)


def test_read_table_csv_requires_columns(tmp_path) -> None:
    """Missing CSV columns should fail fast."""

    path = tmp_path / "bad.csv"
    path.write_text("key,label\nthe,cat\n", encoding="utf-8")

    with pytest.raises(ValueError, match="CSV file missing required columns"):
        read_table_csv(path)

    empty = tmp_path / "empty.csv"
    empty.write_text("", encoding="utf-8")
    with pytest.raises(ValueError, match="header row"):
        read_table_csv(empty)


def test_read_table_csv_rejects_bad_number(tmp_path) -> None:
    """Non-numeric CSV values report their row."""

    path = tmp_path / "bad.csv"
    path.write_text("key,label,cumulative_probability\nthe,cat,x\n", encoding="utf-8")

    with pytest.raises(ValueError, match="row 0 cumulative_probability must be a number"):
        read_table_csv(path)


def test_write_table_csv_rejects_empty_table(tmp_path) -> None:
    """Empty tables have nothing to write."""

    with pytest.raises(ValueError, match="table must not be empty"):
        write_table_csv({}, tmp_path / "empty.csv")


def test_load_table_rejects_unsupported_suffix(tmp_path) -> None:
    """Unknown table file suffixes fail fast."""

    path = tmp_path / "table.toml"
    path.write_text("a = 1\n", encoding="utf-8")

    with pytest.raises(ValueError, match="unsupported config file extension"):
        load_table(path)
