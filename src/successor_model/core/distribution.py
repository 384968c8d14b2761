"""Cumulative successor distributions.

A :class:`Distribution` is the ordered list of successor labels for one context
key, each paired with the cumulative probability that it *or any earlier label*
is chosen. For example::

    the -> [(cat, 0.1), (dog, 0.5), (lizard, 1.0)]

gives ``cat`` a 10% chance, ``dog`` 40% and ``lizard`` 50%.

Construction does not enforce the CDF invariants; that is the job of
:mod:`successor_model.core.validation`, which runs once before a table is
accepted by a predictor.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field
import numbers
from typing import Any, Generic

import numpy as np

from .contracts import LabelT


@dataclass(frozen=True, slots=True)
class CumulativeEntry(Generic[LabelT]):
    """One successor label with its cumulative probability threshold.

    Parameters
    ----------
    label : LabelT
        Successor label.
    cumulative_probability : float
        Probability in ``(0, 1]`` that this label or any preceding label in
        the distribution is chosen.

    Raises
    ------
    TypeError
        If ``cumulative_probability`` is not a real number.
    """

    label: LabelT
    cumulative_probability: float

    def __post_init__(self) -> None:
        value = self.cumulative_probability
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            raise TypeError(
                f"cumulative_probability for label {self.label!r} must be a real number; "
                f"got {type(value).__name__}"
            )
        object.__setattr__(self, "cumulative_probability", float(value))


@dataclass(frozen=True, slots=True)
class Distribution(Generic[LabelT]):
    """Ordered cumulative distribution over successor labels.

    Parameters
    ----------
    entries : tuple[CumulativeEntry[LabelT], ...]
        Entries in ascending threshold order.

    Notes
    -----
    Labels and thresholds are cached as tuples (and a read-only float array)
    when the distribution is built, so sampling does no per-draw conversion.
    """

    entries: tuple[CumulativeEntry[LabelT], ...]
    _labels: tuple[LabelT, ...] = field(init=False, repr=False, compare=False)
    _thresholds: tuple[float, ...] = field(init=False, repr=False, compare=False)
    _threshold_array: np.ndarray = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        entries = tuple(self.entries)
        for entry in entries:
            if not isinstance(entry, CumulativeEntry):
                raise TypeError(
                    f"distribution entries must be CumulativeEntry instances; got {type(entry).__name__}"
                )
        thresholds = tuple(entry.cumulative_probability for entry in entries)
        array = np.asarray(thresholds, dtype=float)
        array.flags.writeable = False

        object.__setattr__(self, "entries", entries)
        object.__setattr__(self, "_labels", tuple(entry.label for entry in entries))
        object.__setattr__(self, "_thresholds", thresholds)
        object.__setattr__(self, "_threshold_array", array)

    @classmethod
    def from_pairs(
        cls,
        pairs: Iterable[CumulativeEntry[LabelT] | tuple[LabelT, float]],
    ) -> Distribution[LabelT]:
        """Build a distribution from ``(label, cumulative_probability)`` pairs.

        Parameters
        ----------
        pairs : Iterable[CumulativeEntry | tuple[LabelT, float]]
            Entries or two-item pairs in threshold order.

        Returns
        -------
        Distribution[LabelT]
            Unvalidated distribution.

        Raises
        ------
        ValueError
            If a pair does not have exactly two items.
        """

        entries: list[CumulativeEntry[LabelT]] = []
        for index, item in enumerate(pairs):
            if isinstance(item, CumulativeEntry):
                entries.append(item)
                continue
            if isinstance(item, (str, bytes)) or not isinstance(item, Sequence) or len(item) != 2:
                raise ValueError(
                    f"entry {index} must be a (label, cumulative_probability) pair; got {item!r}"
                )
            label, threshold = item
            entries.append(CumulativeEntry(label=label, cumulative_probability=threshold))
        return cls(entries=tuple(entries))

    @classmethod
    def from_weights(
        cls,
        weights: Mapping[LabelT, float] | Iterable[tuple[LabelT, float]],
    ) -> Distribution[LabelT]:
        """Build a distribution from non-negative raw weights.

        Weights are normalized and accumulated in input order. Labels with zero
        weight, or with weight too small to move the accumulated threshold in
        floating point, are dropped, and the final threshold is pinned to exactly
        ``1.0`` so floating-point rounding never leaves a coverage gap.

        Parameters
        ----------
        weights : Mapping[LabelT, float] | Iterable[tuple[LabelT, float]]
            Label weights. Only relative magnitudes matter.

        Returns
        -------
        Distribution[LabelT]
            Cumulative distribution over labels with positive weight.

        Raises
        ------
        ValueError
            If no weights are given, any weight is negative or non-finite, or
            the total weight is zero.
        """

        items = list(weights.items()) if isinstance(weights, Mapping) else [tuple(item) for item in weights]
        if not items:
            raise ValueError("weights must include at least one label")

        labels = [label for label, _ in items]
        values = np.asarray([float(value) for _, value in items], dtype=float)
        if not np.all(np.isfinite(values)):
            raise ValueError("weights must be finite")
        if np.any(values < 0):
            negative = [labels[index] for index in np.flatnonzero(values < 0)]
            raise ValueError(f"weights must be non-negative; negative labels: {negative!r}")
        total = float(values.sum())
        if total <= 0:
            raise ValueError("weights must sum to a positive total")

        keep = np.flatnonzero(values > 0)
        cumulative = np.minimum(np.cumsum(values[keep]) / total, 1.0)
        cumulative[-1] = 1.0
        # masses that vanish under rounding would repeat the previous threshold
        rises = np.diff(cumulative, prepend=0.0) > 0
        keep, cumulative = keep[rises], cumulative[rises]
        return cls(
            entries=tuple(
                CumulativeEntry(label=labels[int(position)], cumulative_probability=float(threshold))
                for position, threshold in zip(keep, cumulative)
            )
        )

    @property
    def labels(self) -> tuple[LabelT, ...]:
        """Successor labels in distribution order."""

        return self._labels

    @property
    def thresholds(self) -> tuple[float, ...]:
        """Cumulative probability thresholds in distribution order."""

        return self._thresholds

    @property
    def threshold_array(self) -> np.ndarray:
        """Read-only float array view of :attr:`thresholds`."""

        return self._threshold_array

    def probabilities(self) -> dict[LabelT, float]:
        """Return per-label probability mass.

        Returns
        -------
        dict[LabelT, float]
            ``threshold[i] - threshold[i - 1]`` for each label, with an implicit
            leading threshold of ``0``.
        """

        masses: dict[LabelT, float] = {}
        previous = 0.0
        for label, threshold in zip(self._labels, self._thresholds):
            masses[label] = masses.get(label, 0.0) + (threshold - previous)
            previous = threshold
        return masses

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[CumulativeEntry[LabelT]]:
        return iter(self.entries)


def as_distribution(value: Any) -> Distribution[Any]:
    """Return ``value`` as a :class:`Distribution`.

    Existing distributions are returned unchanged; any other iterable is
    treated as a sequence of ``(label, cumulative_probability)`` pairs.
    """

    if isinstance(value, Distribution):
        return value
    if isinstance(value, (str, bytes, Mapping)) or not isinstance(value, Iterable):
        raise TypeError(
            f"distribution must be a Distribution or a sequence of pairs; got {type(value).__name__}"
        )
    return Distribution.from_pairs(value)


def table_from_pairs(
    mapping: Mapping[Any, Iterable[CumulativeEntry[Any] | tuple[Any, float]]],
) -> dict[Any, Distribution[Any]]:
    """Build a table from ``{key: [(label, cumulative_probability), ...]}``.

    Parameters
    ----------
    mapping : Mapping[Any, Iterable[CumulativeEntry | tuple[Any, float]]]
        Pair sequences keyed by context key.

    Returns
    -------
    dict[Any, Distribution[Any]]
        Unvalidated table in ``mapping`` order.
    """

    return {key: as_distribution(pairs) for key, pairs in mapping.items()}


__all__ = ["CumulativeEntry", "Distribution", "as_distribution", "table_from_pairs"]
