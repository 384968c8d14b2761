"""Core data model, contracts and validation for successor tables."""

from .config_loading import (
    SUPPORTED_CONFIG_SUFFIXES,
    load_config_mapping,
    validate_allowed_keys,
    validate_required_keys,
)
from .contracts import KeyT, LabelT, RandomSource
from .distribution import CumulativeEntry, Distribution, as_distribution, table_from_pairs
from .errors import (
    CorruptDistributionError,
    EmptyDistributionError,
    EmptyTableError,
    FinalNotOneError,
    NonAscendingError,
    OutOfRangeError,
    TableValidationError,
    UnknownKeyError,
)
from .validation import is_valid_table, validate_distribution, validate_table

__all__ = [
    "CorruptDistributionError",
    "CumulativeEntry",
    "Distribution",
    "EmptyDistributionError",
    "EmptyTableError",
    "FinalNotOneError",
    "KeyT",
    "LabelT",
    "NonAscendingError",
    "OutOfRangeError",
    "RandomSource",
    "SUPPORTED_CONFIG_SUFFIXES",
    "TableValidationError",
    "UnknownKeyError",
    "as_distribution",
    "is_valid_table",
    "load_config_mapping",
    "table_from_pairs",
    "validate_allowed_keys",
    "validate_distribution",
    "validate_required_keys",
    "validate_table",
]
