"""Weighted successor selection by binary search over a cumulative distribution.

The caller supplies the uniform draw, which keeps selection independent of any
random source and testable with literal values. A draw selects the leftmost
entry whose threshold is greater than or equal to it, so a draw that equals a
threshold exactly selects that threshold's label.
"""

from __future__ import annotations

from bisect import bisect_left
from collections.abc import Iterable
from typing import Any

import numpy as np

from successor_model.core.distribution import Distribution
from successor_model.core.errors import CorruptDistributionError


def select_index(distribution: Distribution[Any], draw: float) -> int:
    """Return the position selected by ``draw``.

    Parameters
    ----------
    distribution : Distribution[Any]
        Validated cumulative distribution.
    draw : float
        Uniform draw, normally in ``[0, 1)``.

    Returns
    -------
    int
        Index of the leftmost entry with ``threshold >= draw``.

    Raises
    ------
    CorruptDistributionError
        If no entry covers ``draw``. A validated distribution ends at ``1.0``,
        so this only happens for unvalidated input or draws above ``1.0``.
    """

    thresholds = distribution.thresholds
    index = bisect_left(thresholds, draw)
    if index == len(thresholds):
        raise CorruptDistributionError(
            f"no entry covers draw {draw!r}; distribution ends at "
            f"{thresholds[-1] if thresholds else None!r}"
        )
    return index


def select_label(distribution: Distribution[Any], draw: float) -> Any:
    """Return the label selected by ``draw`` in ``O(log n)`` comparisons.

    Parameters
    ----------
    distribution : Distribution[Any]
        Validated cumulative distribution.
    draw : float
        Uniform draw, normally in ``[0, 1)``.

    Returns
    -------
    Any
        Selected label.
    """

    return distribution.labels[select_index(distribution, draw)]


def select_label_linear(distribution: Distribution[Any], draw: float) -> Any:
    """Reference ``O(n)`` scan with the same tie-break as :func:`select_label`."""

    for entry in distribution:
        if draw <= entry.cumulative_probability:
            return entry.label
    raise CorruptDistributionError(f"no entry covers draw {draw!r}")


def select_labels(distribution: Distribution[Any], draws: Iterable[float] | np.ndarray) -> tuple[Any, ...]:
    """Select one label per draw with a single vectorized search.

    Parameters
    ----------
    distribution : Distribution[Any]
        Validated cumulative distribution.
    draws : Iterable[float] | numpy.ndarray
        Uniform draws.

    Returns
    -------
    tuple[Any, ...]
        Selected labels in draw order.

    Raises
    ------
    CorruptDistributionError
        If any draw is not covered by the distribution.
    """

    values = np.asarray(list(draws) if not isinstance(draws, np.ndarray) else draws, dtype=float)
    indices = np.searchsorted(distribution.threshold_array, values, side="left")
    uncovered = indices >= len(distribution)
    if np.any(uncovered):
        first = float(values[np.flatnonzero(uncovered)[0]])
        raise CorruptDistributionError(f"no entry covers draw {first!r}")
    labels = distribution.labels
    return tuple(labels[int(index)] for index in indices)


__all__ = ["select_index", "select_label", "select_label_linear", "select_labels"]
