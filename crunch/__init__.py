"""
A small embeddable analytics core for CSV text.

Parses CSV text, extracts numeric columns, computes descriptive statistics and
fits a straight line between two columns. Every operation is a pure function
of its arguments; there is no I/O and no state retained between calls.

Modules:
    - parsing: Tokenizes CSV text into a rectangular Table.
    - extraction: Coerces columns into row-tagged numeric series.
    - stats: Descriptive statistics and least-squares regression.
    - analysis: Parses once and analyses a pair of columns.
    - api: The same operations returning plain dicts and lists.
"""

import logging

__version__ = "1.0.0"

from .analysis import analyze, analyze_table
from .api import (
    analyze_data,
    calculate_stats,
    get_column_values,
    linear_regression,
    parse_csv,
    parse_records,
)
from .errors import (
    ColumnNotFound,
    CrunchError,
    DegenerateInputError,
    EmptyInputError,
    LengthMismatchError,
    ParseError,
    RaggedRowWarning,
    RowError,
)
from .extraction import align, describe_columns, extract, infer_column_kinds
from .parsing import parse
from .schema import (
    AnalysisReport,
    Column,
    NumericSeries,
    RegressionReport,
    StatsReport,
    Table,
)
from .stats import compute_stats, fit_linear

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Plain-data operations
    "parse_csv",
    "parse_records",
    "get_column_values",
    "calculate_stats",
    "linear_regression",
    "analyze_data",
    # Pipeline stages
    "parse",
    "extract",
    "align",
    "infer_column_kinds",
    "describe_columns",
    "compute_stats",
    "fit_linear",
    "analyze",
    "analyze_table",
    # Containers
    "Table",
    "Column",
    "NumericSeries",
    "StatsReport",
    "RegressionReport",
    "AnalysisReport",
    # Errors
    "CrunchError",
    "ParseError",
    "ColumnNotFound",
    "EmptyInputError",
    "LengthMismatchError",
    "DegenerateInputError",
    "RaggedRowWarning",
    "RowError",
]
