"""Tests for the successor prediction CLI."""

from __future__ import annotations

import json

import pytest

from successor_model.cli import run_predict_cli
from successor_model.examples import example_table
from successor_model.io import table_to_mapping


def test_cli_example_prints_predictions(capsys) -> None:
    """Example table predictions should print one label per line."""

    code = run_predict_cli(["--example", "--key", "the", "--count", "5", "--seed", "0"])

    assert code == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert len(lines) == 5
    assert set(lines) <= {"cat", "dog", "lizard"}


def test_cli_is_reproducible_with_seed(capsys) -> None:
    """The same seed should print the same predictions."""

    run_predict_cli(["--example", "--key", "alphabet", "--count", "20", "--seed", "4"])
    first = capsys.readouterr().out
    run_predict_cli(["--example", "--key", "alphabet", "--count", "20", "--seed", "4"])
    second = capsys.readouterr().out

    assert first == second


def test_cli_table_file_writes_summary(tmp_path, capsys) -> None:
    """Table files and JSON summaries should work together."""

    table_path = tmp_path / "table.json"
    table_path.write_text(json.dumps(table_to_mapping(example_table())), encoding="utf-8")
    summary_path = tmp_path / "out" / "summary.json"

    code = run_predict_cli(
        [
            "--table",
            str(table_path),
            "--key",
            "cat",
            "--count",
            "2000",
            "--seed",
            "11",
            "--summary-json",
            str(summary_path),
        ]
    )

    assert code == 0
    summary = json.loads(summary_path.read_text(encoding="utf-8"))
    assert summary["mode"] == "predict"
    assert summary["n_draws"] == 2000
    assert summary["seed"] == 11
    assert sum(summary["counts"].values()) == 2000
    assert summary["expected"]["sat"] == pytest.approx(0.6)
    assert summary["frequencies"]["sat"] == pytest.approx(0.6, abs=0.05)
    assert "Summary JSON" in capsys.readouterr().err


def test_cli_generate_prints_sequence(capsys) -> None:
    """Generate mode should print the start key and chained labels."""

    code = run_predict_cli(["--example", "--key", "the", "--generate", "3", "--seed", "0"])

    assert code == 0
    words = capsys.readouterr().out.split()
    assert words[0] == "the"
    assert 2 <= len(words) <= 4


def test_cli_config_source(tmp_path, capsys) -> None:
    """Config files should drive the CLI, with the configured seed."""

    config_path = tmp_path / "predictor.yaml"
    config_path.write_text("table:\n  a: [[b, 1.0]]\nseed: 2\n", encoding="utf-8")

    code = run_predict_cli(["--config", str(config_path), "--key", "a", "--count", "3"])

    assert code == 0
    assert capsys.readouterr().out.split() == ["b", "b", "b"]


def test_cli_unknown_key_exits_with_error(capsys) -> None:
    """Unknown keys should be reported on stderr with exit code 2."""

    code = run_predict_cli(["--example", "--key", "missing"])

    assert code == 2
    assert "no distribution for key 'missing'" in capsys.readouterr().err


def test_cli_malformed_table_exits_with_error(tmp_path, capsys) -> None:
    """Validation errors should be reported on stderr with exit code 2."""

    table_path = tmp_path / "table.json"
    table_path.write_text(json.dumps({"foo": [["a", 0.3], ["b", 0.7]]}), encoding="utf-8")

    code = run_predict_cli(["--table", str(table_path), "--key", "foo"])

    assert code == 2
    assert "must be exactly 1.0" in capsys.readouterr().err


def test_cli_requires_one_table_source() -> None:
    """Exactly one table source must be selected."""

    with pytest.raises(SystemExit):
        run_predict_cli(["--key", "the"])
    with pytest.raises(SystemExit):
        run_predict_cli(["--example", "--table", "x.json", "--key", "the"])


def test_cli_matches_non_string_table_keys_by_text(tmp_path, capsys) -> None:
    """A YAML key that loads as an integer should be reachable as ``--key 1``."""

    table_path = tmp_path / "table.yaml"
    table_path.write_text("1: [[a, 1.0]]\n", encoding="utf-8")

    code = run_predict_cli(["--table", str(table_path), "--key", "1", "--count", "2", "--seed", "0"])

    assert code == 0
    assert capsys.readouterr().out.split() == ["a", "a"]


def test_cli_missing_table_file_exits_with_error(tmp_path, capsys) -> None:
    """Unreadable table files should be reported on stderr with exit code 2."""

    code = run_predict_cli(["--table", str(tmp_path / "absent.json"), "--key", "the"])

    assert code == 2
    assert capsys.readouterr().err.startswith("error:")


def test_cli_malformed_yaml_exits_with_error(tmp_path, capsys) -> None:
    """YAML syntax errors should be reported on stderr with exit code 2."""

    table_path = tmp_path / "table.yaml"
    table_path.write_text("a: [b\n", encoding="utf-8")

    code = run_predict_cli(["--table", str(table_path), "--key", "a"])

    assert code == 2
    assert capsys.readouterr().err.startswith("error:")


def test_cli_summary_records_config_seed(tmp_path) -> None:
    """Without ``--seed`` the summary should record the seed from the config."""

    config_path = tmp_path / "predictor.yaml"
    config_path.write_text("table:\n  a: [[b, 0.5], [c, 1.0]]\nseed: 2\n", encoding="utf-8")
    summary_path = tmp_path / "summary.json"

    code = run_predict_cli(
        ["--config", str(config_path), "--key", "a", "--count", "4", "--summary-json", str(summary_path)]
    )

    assert code == 0
    assert json.loads(summary_path.read_text(encoding="utf-8"))["seed"] == 2


def test_cli_seed_flag_overrides_config_seed(tmp_path, capsys) -> None:
    """An explicit ``--seed`` should win over the config seed and be recorded."""

    config_path = tmp_path / "predictor.yaml"
    config_path.write_text("table:\n  a: [[b, 0.5], [c, 1.0]]\nseed: 2\n", encoding="utf-8")
    summary_path = tmp_path / "summary.json"

    code = run_predict_cli(
        [
            "--config",
            str(config_path),
            "--key",
            "a",
            "--count",
            "4",
            "--seed",
            "9",
            "--summary-json",
            str(summary_path),
        ]
    )

    assert code == 0
    assert json.loads(summary_path.read_text(encoding="utf-8"))["seed"] == 9
    assert "Summary JSON" in capsys.readouterr().err
