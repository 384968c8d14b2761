"""Exception taxonomy for table validation and prediction.

Construction-time problems derive from :class:`TableValidationError` (itself a
``ValueError``) so callers can catch every malformed-table condition at once.
Prediction on an absent key raises :class:`UnknownKeyError`, a ``KeyError``.
:class:`CorruptDistributionError` signals that a distribution which never
passed validation (or was altered afterwards) reached the sampler.
"""

from __future__ import annotations

from typing import Any


class TableValidationError(ValueError):
    """Base class for malformed successor tables.

    Parameters
    ----------
    message : str
        Human-readable description.
    key : Any, optional
        Context key whose distribution is malformed.
    index : int | None, optional
        Entry position inside the distribution, when applicable.
    value : float | None, optional
        Offending cumulative probability, when applicable.
    """

    def __init__(
        self,
        message: str,
        *,
        key: Any = None,
        index: int | None = None,
        value: float | None = None,
    ) -> None:
        super().__init__(message)
        self.key = key
        self.index = index
        self.value = value


class EmptyTableError(TableValidationError):
    """Raised when a table contains no context keys."""


class EmptyDistributionError(TableValidationError):
    """Raised when a context key maps to zero entries."""


class NonAscendingError(TableValidationError):
    """Raised when cumulative probabilities are not strictly ascending."""


class OutOfRangeError(TableValidationError):
    """Raised when a cumulative probability falls outside ``(0, 1]``."""


class FinalNotOneError(TableValidationError):
    """Raised when the last cumulative probability is not exactly ``1.0``."""


class UnknownKeyError(KeyError):
    """Raised when a prediction is requested for a key with no distribution."""

    def __init__(self, key: Any) -> None:
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"no distribution for key {self.key!r}"


class CorruptDistributionError(RuntimeError):
    """Raised when the sampler finds no entry covering a draw."""


__all__ = [
    "CorruptDistributionError",
    "EmptyDistributionError",
    "EmptyTableError",
    "FinalNotOneError",
    "NonAscendingError",
    "OutOfRangeError",
    "TableValidationError",
    "UnknownKeyError",
]
