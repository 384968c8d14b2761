"""Command-line entry point for drawing successor labels."""

from __future__ import annotations

import argparse
from collections import Counter
import json
import logging
from pathlib import Path
import sys
from typing import Any, Sequence

import numpy as np
import yaml

from successor_model.config import parse_predictor_config
from successor_model.core.config_loading import load_config_mapping
from successor_model.core.errors import UnknownKeyError
from successor_model.examples import example_table
from successor_model.io.tables import TABLE_FORMATS, load_table
from successor_model.predictor import SuccessorPredictor

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def run_predict_cli(argv: Sequence[str] | None = None) -> int:
    """Draw successor labels from a table file, config or the built-in example.

    Parameters
    ----------
    argv : Sequence[str] | None, optional
        CLI argument list. When ``None``, process arguments are used.

    Returns
    -------
    int
        Exit code (`0` on success, `2` on unreadable or malformed tables and
        unknown keys).
    """

    parser = argparse.ArgumentParser(description="Draw successor labels from a cumulative successor table.")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--table", default=None, help="Path to JSON, YAML or CSV table file.")
    source.add_argument("--config", default=None, help="Path to predictor JSON or YAML config.")
    source.add_argument("--example", action="store_true", help="Use the built-in example table.")
    parser.add_argument(
        "--format",
        choices=TABLE_FORMATS,
        default="cumulative",
        help="Entry value format for --table.",
    )
    parser.add_argument(
        "--key",
        required=True,
        help="Context key to predict from; non-string table keys match by their string form.",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--count", type=int, default=1, help="Number of independent predictions.")
    mode.add_argument(
        "--generate",
        type=int,
        default=None,
        metavar="LENGTH",
        help="Generate a chained sequence of up to LENGTH labels instead.",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed (overrides config seed).")
    parser.add_argument("--summary-json", default=None, help="Optional path for a JSON run summary.")
    parser.add_argument("--log-level", choices=_LOG_LEVELS, default="WARNING", help="Logging level.")
    args = parser.parse_args(list(argv) if argv is not None else None)

    logging.basicConfig(
        level=getattr(logging, str(args.log_level)),
        format="%(asctime)s  %(levelname)s  %(name)s  %(message)s",
    )

    try:
        predictor, seed = _build_predictor(args)
        key = _resolve_key(predictor, args.key)
        if args.generate is not None:
            labels = predictor.generate(key, int(args.generate))
            print(" ".join(str(label) for label in (key, *labels)))
            summary = {"mode": "generate", "key": str(key), "sequence": [str(label) for label in labels]}
        else:
            labels = predictor.predict_many(key, int(args.count))
            for label in labels:
                print(label)
            summary = _frequency_summary(predictor, key=key, labels=labels)
    except (OSError, ValueError, yaml.YAMLError, UnknownKeyError) as exc:
        logger.debug("prediction failed", exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if args.summary_json is not None:
        summary_path = Path(args.summary_json)
        summary_path.parent.mkdir(parents=True, exist_ok=True)
        summary["seed"] = seed
        summary_path.write_text(json.dumps(summary, indent=2, sort_keys=True), encoding="utf-8")
        print(f"Summary JSON: {summary_path}", file=sys.stderr)
    return 0


def _build_predictor(args: argparse.Namespace) -> tuple[SuccessorPredictor[Any, Any], int | None]:
    """Build the selected predictor and return it with its effective seed."""

    seed = args.seed
    if args.config is not None:
        config_path = Path(args.config)
        parsed = parse_predictor_config(load_config_mapping(config_path), base_dir=config_path.parent)
        table = parsed.table
        if seed is None:
            seed = parsed.seed
    elif args.example:
        table = example_table()
    else:
        table = load_table(args.table, format=str(args.format))
    return SuccessorPredictor(table, np.random.default_rng(seed)), seed


def _resolve_key(predictor: SuccessorPredictor[Any, Any], key: str) -> Any:
    """Map a command-line key onto a table key.

    YAML tables may use non-string keys (``1:`` loads as an integer), so a
    key absent verbatim is matched against the string form of each table key.
    """

    if key in predictor:
        return key
    for candidate in predictor:
        if str(candidate) == key:
            return candidate
    raise UnknownKeyError(key)


def _frequency_summary(
    predictor: SuccessorPredictor[Any, Any],
    *,
    key: Any,
    labels: Sequence[Any],
) -> dict[str, Any]:
    """Summarize observed label frequencies against expected probabilities."""

    counts = Counter(str(label) for label in labels)
    n_draws = len(labels)
    expected = {str(label): mass for label, mass in predictor.distribution(key).probabilities().items()}
    return {
        "mode": "predict",
        "key": str(key),
        "n_draws": n_draws,
        "counts": dict(counts),
        "frequencies": {label: count / n_draws for label, count in counts.items()} if n_draws else {},
        "expected": expected,
    }


def main() -> None:
    """Execute the predict CLI and exit with its return code."""

    raise SystemExit(run_predict_cli())


if __name__ == "__main__":
    main()


__all__ = ["main", "run_predict_cli"]
