"""Sampling runtime for validated successor distributions."""

from .sampling import select_index, select_label, select_label_linear, select_labels

__all__ = ["select_index", "select_label", "select_label_linear", "select_labels"]
