"""Plain-data entry points for host environments.

Each function takes strings and sequences of numbers and returns only builtin
containers (``dict``, ``list``, ``float``, ``int``, ``str``), freshly built per
call. Nothing returned shares memory with the pipeline internals, so a host
binding can hand the results across its boundary as-is.
"""

from __future__ import annotations

from typing import Dict, Iterable, List

from .analysis import analyze
from .extraction import extract
from .parsing import parse
from .stats import DEFAULT_DDOF, compute_stats, fit_linear


def parse_csv(csv_text: str, **options) -> Dict[str, object]:
    """Parse CSV text into ``{"headers", "rows", "skipped_rows"}``."""
    return parse(csv_text, warn_stacklevel=3, **options).to_dict()


def parse_records(csv_text: str, **options) -> List[Dict[str, str]]:
    """Parse CSV text into one ``{header: cell}`` mapping per data row."""
    return parse(csv_text, warn_stacklevel=3, **options).to_records()


def get_column_values(csv_text: str, column_name: str, **options) -> List[float]:
    """Return the numeric values of one column, skipping non-numeric cells."""
    table = parse(csv_text, warn_stacklevel=3, **options)
    return extract(table, column_name).to_list()


def calculate_stats(values: Iterable[float], ddof: int = DEFAULT_DDOF) -> Dict[str, object]:
    return compute_stats(values, ddof=ddof).to_dict()


def linear_regression(
    x_values: Iterable[float], y_values: Iterable[float]
) -> Dict[str, object]:
    return fit_linear(x_values, y_values).to_dict()


def analyze_data(
    x_column_name: str, y_column_name: str, csv_text: str, **options
) -> Dict[str, object]:
    """Run :func:`crunch.analysis.analyze` and return the report as a dict."""
    report = analyze(
        x_column_name, y_column_name, csv_text, warn_stacklevel=4, **options
    )
    return report.to_dict()
