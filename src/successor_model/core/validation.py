"""Well-formedness checks for successor tables.

Every distribution in a table must be a non-empty sequence of strictly
ascending cumulative probabilities in ``(0, 1]`` that ends at exactly ``1.0``.
Validation is a pure function of its input and fails on the first violation,
so a table is either accepted whole or rejected whole.
"""

from __future__ import annotations

from collections.abc import Mapping
import logging
import math
from typing import Any

from .distribution import Distribution, as_distribution
from .errors import (
    EmptyDistributionError,
    EmptyTableError,
    FinalNotOneError,
    NonAscendingError,
    OutOfRangeError,
)

logger = logging.getLogger(__name__)


def validate_distribution(distribution: Distribution[Any], *, key: Any = None) -> None:
    """Validate one cumulative distribution.

    Parameters
    ----------
    distribution : Distribution[Any]
        Distribution to check.
    key : Any, optional
        Context key used in error messages and attached to raised errors.

    Raises
    ------
    EmptyDistributionError
        If the distribution has no entries.
    NonAscendingError
        If a threshold is not strictly greater than its predecessor (the first
        entry is compared against ``0.0``).
    OutOfRangeError
        If a threshold is not a finite value in ``(0, 1]``.
    FinalNotOneError
        If the last threshold is not exactly ``1.0``.
    """

    if len(distribution) == 0:
        raise EmptyDistributionError(
            f"distribution for key {key!r} must not be empty",
            key=key,
        )

    previous = 0.0
    for index, threshold in enumerate(distribution.thresholds):
        if math.isnan(threshold):
            raise OutOfRangeError(
                f"cumulative probability at index {index} for key {key!r} must be a number; got nan",
                key=key,
                index=index,
                value=threshold,
            )
        if threshold <= previous:
            raise NonAscendingError(
                f"cumulative probabilities for key {key!r} must be strictly ascending; "
                f"index {index} has {threshold!r} after {previous!r}",
                key=key,
                index=index,
                value=threshold,
            )
        if threshold <= 0.0 or threshold > 1.0:
            raise OutOfRangeError(
                f"cumulative probability at index {index} for key {key!r} must be in (0, 1]; "
                f"got {threshold!r}",
                key=key,
                index=index,
                value=threshold,
            )
        previous = threshold

    # exact comparison: the final threshold is authored input, not a sampled value
    if previous != 1.0:
        raise FinalNotOneError(
            f"final cumulative probability for key {key!r} must be exactly 1.0; got {previous!r}",
            key=key,
            index=len(distribution) - 1,
            value=previous,
        )


def validate_table(table: Mapping[Any, Distribution[Any]]) -> None:
    """Validate a whole successor table.

    Parameters
    ----------
    table : Mapping[Any, Distribution[Any]]
        Mapping from context key to distribution.

    Raises
    ------
    EmptyTableError
        If the table has no keys.
    TableValidationError
        The first per-distribution violation, see
        :func:`validate_distribution`.
    """

    if len(table) == 0:
        raise EmptyTableError("successor table must not be empty")

    for key, distribution in table.items():
        validate_distribution(as_distribution(distribution), key=key)

    logger.debug("accepted successor table with %d keys", len(table))


def is_valid_table(table: Mapping[Any, Distribution[Any]]) -> bool:
    """Return whether :func:`validate_table` would accept ``table``.

    Raw pair sequences that cannot even be built into distributions, such as
    malformed pairs or non-numeric thresholds, count as invalid.
    """

    try:
        validate_table(table)
    except (TypeError, ValueError):
        return False
    return True


__all__ = ["is_valid_table", "validate_distribution", "validate_table"]
