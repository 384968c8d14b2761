"""Protocol contracts shared by the predictor and its collaborators.

Labels and context keys are opaque values: the package never inspects them
beyond hashing and equality, so the same machinery works for words, token IDs
or any other hashable successor symbol.
"""

from __future__ import annotations

from typing import Hashable, Protocol, TypeVar, runtime_checkable

LabelT = TypeVar("LabelT")
KeyT = TypeVar("KeyT", bound=Hashable)


@runtime_checkable
class RandomSource(Protocol):
    """Source of uniform draws on the half-open interval ``[0, 1)``.

    Notes
    -----
    Both :class:`numpy.random.Generator` and :class:`random.Random` satisfy
    this protocol. Seeded sources carry internal state, so one source must not
    be shared between concurrent callers.
    """

    def random(self) -> float:
        """Return one uniform draw in ``[0, 1)``."""


__all__ = ["KeyT", "LabelT", "RandomSource"]
