"""Built-in example tables.

``the`` and ``cat`` form a tiny word-successor table; ``alphabet`` is a
26-entry distribution with uneven letter masses, handy for exercising the
binary search on a longer sequence.
"""

from __future__ import annotations

from typing import Any

from successor_model.core.distribution import Distribution, table_from_pairs

EXAMPLE_PAIRS: dict[str, tuple[tuple[str, float], ...]] = {
    "the": (("cat", 0.1), ("dog", 0.5), ("lizard", 1.0)),
    "cat": (("sat", 0.6), ("ate", 1.0)),
    "alphabet": (
        ("a", 0.034859),
        ("b", 0.098120),
        ("c", 0.153596),
        ("d", 0.213720),
        ("e", 0.225172),
        ("f", 0.293764),
        ("g", 0.354170),
        ("h", 0.392903),
        ("i", 0.423932),
        ("j", 0.474427),
        ("k", 0.512483),
        ("l", 0.580126),
        ("m", 0.586292),
        ("n", 0.603294),
        ("o", 0.613061),
        ("p", 0.613443),
        ("q", 0.647686),
        ("r", 0.680489),
        ("s", 0.740058),
        ("t", 0.770907),
        ("u", 0.826005),
        ("v", 0.879152),
        ("w", 0.917383),
        ("x", 0.943437),
        ("y", 0.971542),
        ("z", 1.000000),
    ),
}


def example_table() -> dict[str, Distribution[Any]]:
    """Return a fresh copy of the built-in example table."""

    return table_from_pairs(EXAMPLE_PAIRS)


__all__ = ["EXAMPLE_PAIRS", "example_table"]
