"""Config-driven predictor construction.

A predictor config is a JSON/YAML mapping::

    table:
      the: [[cat, 0.1], [dog, 0.5], [lizard, 1.0]]
      cat: [[sat, 0.6], [ate, 1.0]]
    format: cumulative
    seed: 12345

``table_path`` may replace ``table`` to point at a separate JSON, YAML or CSV
table file; relative paths resolve against the config file's directory.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import numpy as np

from successor_model.core.config_loading import load_config_mapping, validate_allowed_keys
from successor_model.core.contracts import RandomSource
from successor_model.core.distribution import Distribution
from successor_model.io.tables import TABLE_FORMATS, load_table, table_from_mapping
from successor_model.predictor import SuccessorPredictor

_CONFIG_KEYS = ("table", "table_path", "format", "seed")


@dataclass(frozen=True, slots=True)
class PredictorConfig:
    """Parsed predictor configuration.

    Parameters
    ----------
    table : dict[Any, Distribution[Any]]
        Unvalidated successor table.
    seed : int | None, optional
        Seed for :func:`numpy.random.default_rng`. ``None`` draws fresh OS
        entropy.
    """

    table: dict[Any, Distribution[Any]]
    seed: int | None = None

    def make_rng(self) -> np.random.Generator:
        """Return a new generator seeded from :attr:`seed`."""

        return np.random.default_rng(self.seed)


def parse_predictor_config(
    config: Mapping[str, Any],
    *,
    base_dir: str | Path | None = None,
) -> PredictorConfig:
    """Parse a predictor config mapping.

    Parameters
    ----------
    config : Mapping[str, Any]
        Config mapping with ``table`` or ``table_path`` and optional
        ``format`` and ``seed`` keys.
    base_dir : str | pathlib.Path | None, optional
        Directory used to resolve a relative ``table_path``.

    Returns
    -------
    PredictorConfig
        Parsed config.

    Raises
    ------
    ValueError
        If keys are unknown, both or neither table sources are given, or a
        value has the wrong type.
    """

    validate_allowed_keys(config, field_name="config", allowed_keys=_CONFIG_KEYS)

    table_format = str(config.get("format", "cumulative"))
    if table_format not in TABLE_FORMATS:
        raise ValueError(f"config.format must be one of {TABLE_FORMATS}; got {table_format!r}")

    has_table = "table" in config
    has_path = "table_path" in config
    if has_table == has_path:
        raise ValueError("config must define exactly one of 'table' or 'table_path'")

    if has_table:
        table = table_from_mapping(config["table"], format=table_format)
    else:
        table_path = Path(str(config["table_path"]))
        if not table_path.is_absolute() and base_dir is not None:
            table_path = Path(base_dir) / table_path
        table = load_table(table_path, format=table_format)

    return PredictorConfig(table=table, seed=_coerce_seed(config.get("seed")))


def predictor_from_config(
    config: Mapping[str, Any],
    *,
    rng: RandomSource | None = None,
    base_dir: str | Path | None = None,
) -> SuccessorPredictor[Any, Any]:
    """Build a validated predictor from a config mapping.

    Parameters
    ----------
    config : Mapping[str, Any]
        Predictor config mapping.
    rng : RandomSource | None, optional
        Random source override. When omitted, a numpy generator is seeded from
        the config's ``seed``.
    base_dir : str | pathlib.Path | None, optional
        Directory used to resolve a relative ``table_path``.

    Returns
    -------
    SuccessorPredictor[Any, Any]
        Predictor over the validated table.
    """

    parsed = parse_predictor_config(config, base_dir=base_dir)
    return SuccessorPredictor(parsed.table, rng if rng is not None else parsed.make_rng())


def load_predictor(path: str | Path, *, rng: RandomSource | None = None) -> SuccessorPredictor[Any, Any]:
    """Load a config file and build its predictor.

    Parameters
    ----------
    path : str | pathlib.Path
        JSON/YAML predictor config path.
    rng : RandomSource | None, optional
        Random source override.

    Returns
    -------
    SuccessorPredictor[Any, Any]
        Predictor over the validated table.
    """

    config_path = Path(path)
    return predictor_from_config(
        load_config_mapping(config_path),
        rng=rng,
        base_dir=config_path.parent,
    )


def _coerce_seed(value: Any) -> int | None:
    """Coerce an optional non-negative integer seed."""

    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise ValueError(f"config.seed must be an integer; got {value!r}")
    if value < 0:
        raise ValueError("config.seed must be >= 0")
    return int(value)


__all__ = ["PredictorConfig", "load_predictor", "parse_predictor_config", "predictor_from_config"]
