"""I/O helpers for successor table files."""

from .tables import (
    TABLE_FORMATS,
    load_table,
    read_table_csv,
    table_from_mapping,
    table_to_mapping,
    write_table_csv,
)

__all__ = [
    "TABLE_FORMATS",
    "load_table",
    "read_table_csv",
    "table_from_mapping",
    "table_to_mapping",
    "write_table_csv",
]
