"""
Water Quality Data Visualizer.

This package contains:
- a small CSV parser that produces an immutable `Table`,
- per-column statistics and range filtering,
- matplotlib chart helpers, a PDF summary and the PyQt5 desktop window.
"""
from .csv_parser import (
    CSVParseError,
    CSVReadError,
    EmptyInputError,
    NoDataError,
    NoHeadersError,
    Table,
    load_file,
    parse,
)
from .statistics import ColumnStats, column_stats, filter_by_range

__all__ = [
    "CSVParseError",
    "CSVReadError",
    "ColumnStats",
    "EmptyInputError",
    "NoDataError",
    "NoHeadersError",
    "Table",
    "column_stats",
    "filter_by_range",
    "load_file",
    "parse",
]
