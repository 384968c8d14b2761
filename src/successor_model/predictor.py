"""Successor predictor façade.

:class:`SuccessorPredictor` owns a validated table and an injected random
source. The table is validated exactly once, at construction; prediction only
looks up the key, takes one draw and runs the binary-search sampler.

Concurrency
-----------
A predictor is not synchronized. The table is immutable and safe to share,
but the random source is stateful, so each thread of execution should use its
own predictor obtained from :meth:`SuccessorPredictor.with_rng` or
:meth:`SuccessorPredictor.spawn`. Seeded reproducibility is defined for one
sequential caller per predictor.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
import logging
from types import MappingProxyType
from typing import Generic

import numpy as np

from successor_model.core.contracts import KeyT, LabelT, RandomSource
from successor_model.core.distribution import Distribution, as_distribution
from successor_model.core.errors import UnknownKeyError
from successor_model.core.validation import validate_table
from successor_model.runtime.sampling import select_label

logger = logging.getLogger(__name__)


class SuccessorPredictor(Generic[KeyT, LabelT]):
    """Predict successor labels from per-key cumulative distributions.

    Parameters
    ----------
    table : Mapping[KeyT, Distribution[LabelT]]
        Context key to distribution. Values may also be sequences of
        ``(label, cumulative_probability)`` pairs.
    rng : RandomSource
        Source of uniform draws in ``[0, 1)``, e.g. a
        :class:`numpy.random.Generator`.

    Raises
    ------
    TypeError
        If ``table`` is not a mapping or ``rng`` is missing.
    TableValidationError
        If any distribution in ``table`` is malformed. No predictor is created.

    Examples
    --------
    >>> import numpy as np
    >>> predictor = SuccessorPredictor(
    ...     {"the": [("cat", 0.1), ("dog", 0.5), ("lizard", 1.0)]},
    ...     np.random.default_rng(0),
    ... )
    >>> predictor.predict("the") in {"cat", "dog", "lizard"}
    True
    """

    def __init__(self, table: Mapping[KeyT, Distribution[LabelT]], rng: RandomSource) -> None:
        if not isinstance(table, Mapping):
            raise TypeError(f"table must be a mapping; got {type(table).__name__}")
        if rng is None:
            raise TypeError("rng must not be None")
        if not callable(getattr(rng, "random", None)):
            raise TypeError(f"rng must provide a random() method; got {type(rng).__name__}")

        snapshot = {key: as_distribution(value) for key, value in table.items()}
        validate_table(snapshot)

        self._table: Mapping[KeyT, Distribution[LabelT]] = MappingProxyType(snapshot)
        self._rng = rng
        logger.debug("constructed predictor over %d keys", len(snapshot))

    @classmethod
    def _from_validated(
        cls,
        table: Mapping[KeyT, Distribution[LabelT]],
        rng: RandomSource,
    ) -> SuccessorPredictor[KeyT, LabelT]:
        """Build a predictor around an already validated read-only table."""

        predictor = cls.__new__(cls)
        predictor._table = table
        predictor._rng = rng
        return predictor

    @property
    def table(self) -> Mapping[KeyT, Distribution[LabelT]]:
        """Read-only view of the validated table."""

        return self._table

    @property
    def rng(self) -> RandomSource:
        """Injected random source."""

        return self._rng

    def keys(self) -> tuple[KeyT, ...]:
        """Return context keys in table order."""

        return tuple(self._table)

    def distribution(self, key: KeyT) -> Distribution[LabelT]:
        """Return the distribution for ``key``.

        Raises
        ------
        UnknownKeyError
            If ``key`` has no distribution, including unhashable keys that
            could never be in the table.
        """

        try:
            return self._table[key]
        except (KeyError, TypeError):
            raise UnknownKeyError(key) from None

    def predict(self, key: KeyT) -> LabelT:
        """Draw one successor label for ``key``.

        Parameters
        ----------
        key : KeyT
            Context key.

        Returns
        -------
        LabelT
            Label chosen with the probability encoded in the key's
            distribution.

        Raises
        ------
        UnknownKeyError
            If ``key`` has no distribution. The random source is not advanced.
        """

        return select_label(self.distribution(key), self._rng.random())

    def predict_many(self, key: KeyT, n: int) -> tuple[LabelT, ...]:
        """Draw ``n`` successor labels for ``key`` sequentially.

        The result equals ``n`` consecutive :meth:`predict` calls on the same
        random source.
        """

        if n < 0:
            raise ValueError("n must be >= 0")
        distribution = self.distribution(key)
        rng = self._rng
        return tuple(select_label(distribution, rng.random()) for _ in range(n))

    def generate(self, start: KeyT, max_length: int) -> tuple[LabelT, ...]:
        """Walk the table as a Markov chain starting from ``start``.

        Each predicted label is used as the next context key. The walk stops
        after ``max_length`` labels, or earlier when a label has no
        distribution of its own.

        Parameters
        ----------
        start : KeyT
            Initial context key. Must exist in the table.
        max_length : int
            Maximum number of generated labels.

        Returns
        -------
        tuple[LabelT, ...]
            Generated labels, excluding ``start``.

        Raises
        ------
        UnknownKeyError
            If ``start`` has no distribution.
        ValueError
            If ``max_length`` is negative.
        """

        if max_length < 0:
            raise ValueError("max_length must be >= 0")
        distribution = self.distribution(start)
        generated: list[LabelT] = []
        while len(generated) < max_length:
            label = select_label(distribution, self._rng.random())
            generated.append(label)
            if label not in self:
                break
            distribution = self._table[label]  # type: ignore[index]
        return tuple(generated)

    def with_rng(self, rng: RandomSource) -> SuccessorPredictor[KeyT, LabelT]:
        """Return a predictor sharing this table but drawing from ``rng``.

        The table is not validated again.
        """

        if rng is None or not callable(getattr(rng, "random", None)):
            raise TypeError("rng must provide a random() method")
        return self._from_validated(self._table, rng)

    def spawn(
        self,
        n: int,
        *,
        seed: int | np.random.SeedSequence | None = None,
    ) -> tuple[SuccessorPredictor[KeyT, LabelT], ...]:
        """Create ``n`` predictors with independent numpy generators.

        Child generators come from :meth:`numpy.random.SeedSequence.spawn`, so
        the streams are statistically independent and reproducible for a
        fixed ``seed``. Intended for one-predictor-per-thread use.
        """

        if n < 0:
            raise ValueError("n must be >= 0")
        root = seed if isinstance(seed, np.random.SeedSequence) else np.random.SeedSequence(seed)
        return tuple(self.with_rng(np.random.default_rng(child)) for child in root.spawn(n))

    def __contains__(self, key: object) -> bool:
        try:
            return key in self._table
        except TypeError:
            return False

    def __len__(self) -> int:
        return len(self._table)

    def __iter__(self) -> Iterator[KeyT]:
        return iter(self._table)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(n_keys={len(self._table)}, rng={type(self._rng).__name__})"


__all__ = ["SuccessorPredictor"]
