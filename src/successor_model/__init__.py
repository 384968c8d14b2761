"""Top-level package for ``successor_model``.

The package draws a weighted-random successor label for a context key:

1. a table maps each key to a :class:`~successor_model.core.distribution.Distribution`
   of strictly ascending cumulative probabilities ending at ``1.0``,
2. :func:`~successor_model.core.validation.validate_table` checks the whole
   table once,
3. :class:`~successor_model.predictor.SuccessorPredictor` draws a uniform value
   from an injected random source and selects a label by binary search.

Notes
-----
Randomness is never defaulted internally; callers pass a random source such as
``numpy.random.default_rng(seed)``.
"""

import logging

from .config import PredictorConfig, load_predictor, parse_predictor_config, predictor_from_config
from .core.distribution import CumulativeEntry, Distribution, table_from_pairs
from .core.errors import (
    CorruptDistributionError,
    EmptyDistributionError,
    EmptyTableError,
    FinalNotOneError,
    NonAscendingError,
    OutOfRangeError,
    TableValidationError,
    UnknownKeyError,
)
from .core.validation import is_valid_table, validate_table
from .predictor import SuccessorPredictor
from .runtime.sampling import select_label

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "CorruptDistributionError",
    "CumulativeEntry",
    "Distribution",
    "EmptyDistributionError",
    "EmptyTableError",
    "FinalNotOneError",
    "NonAscendingError",
    "OutOfRangeError",
    "PredictorConfig",
    "SuccessorPredictor",
    "TableValidationError",
    "UnknownKeyError",
    "is_valid_table",
    "load_predictor",
    "parse_predictor_config",
    "predictor_from_config",
    "select_label",
    "table_from_pairs",
    "validate_table",
]

__version__ = "0.1.0"
