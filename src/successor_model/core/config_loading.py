"""Read declarative JSON/YAML mappings for tables and predictor configs.

Both configuration files and table files share one reader so that suffix
handling and root-type checks stay identical across entry points.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

SUPPORTED_CONFIG_SUFFIXES: tuple[str, ...] = (".json", ".yaml", ".yml")


def load_config_mapping(path: str | Path) -> dict[str, Any]:
    """Load one JSON/YAML file whose root is an object mapping.

    Parameters
    ----------
    path : str | pathlib.Path
        File path with a `.json`, `.yaml` or `.yml` suffix.

    Returns
    -------
    dict[str, Any]
        Parsed mapping.

    Raises
    ------
    ValueError
        If the suffix is unsupported or the root is not a mapping.
    """

    config_path = Path(path)
    suffix = config_path.suffix.lower()
    if suffix not in SUPPORTED_CONFIG_SUFFIXES:
        supported = ", ".join(SUPPORTED_CONFIG_SUFFIXES)
        raise ValueError(
            f"unsupported config file extension {suffix!r}; expected one of {supported}"
        )

    with config_path.open("r", encoding="utf-8") as handle:
        if suffix == ".json":
            raw = json.load(handle)
        else:
            import yaml

            raw = yaml.safe_load(handle)

    if not isinstance(raw, dict):
        raise ValueError(f"{config_path.name}: root must be a JSON/YAML object")
    logger.debug("loaded %s mapping with %d top-level keys from %s", suffix, len(raw), config_path)
    return raw


def validate_allowed_keys(
    mapping: Mapping[str, Any],
    *,
    field_name: str,
    allowed_keys: Iterable[str],
) -> None:
    """Reject keys of ``mapping`` that are not in ``allowed_keys``.

    Raises
    ------
    ValueError
        If unknown keys are present; the message names ``field_name``.
    """

    allowed = {str(key) for key in allowed_keys}
    unknown = sorted(str(key) for key in mapping if str(key) not in allowed)
    if unknown:
        raise ValueError(f"{field_name} has unknown keys: {unknown}")


def validate_required_keys(
    mapping: Mapping[str, Any],
    *,
    field_name: str,
    required_keys: Iterable[str],
) -> None:
    """Reject ``mapping`` when any of ``required_keys`` is missing."""

    missing = sorted(str(key) for key in required_keys if key not in mapping)
    if missing:
        raise ValueError(f"{field_name} is missing required keys: {missing}")


__all__ = [
    "SUPPORTED_CONFIG_SUFFIXES",
    "load_config_mapping",
    "validate_allowed_keys",
    "validate_required_keys",
]
