"""
Two-column CSV analysis.

This module answers one question per call: how does column ``y`` depend on
column ``x``? The text is parsed once, both columns are coerced to numeric
series, and the series are paired by original row index before fitting:

    y = slope * x + intercept   (ordinary least squares)

A row contributes a pair only when BOTH of its cells parsed as finite numbers.
A gap in either column therefore removes that row from the fit instead of
shifting later values onto earlier rows.

Per-column statistics are computed over each column's own numeric series, so
``x_stats.count`` and ``y_stats.count`` can exceed ``regression.n``.
"""

from __future__ import annotations

import logging

from .extraction import align, extract
from .parsing import (
    DEFAULT_DELIMITER,
    DEFAULT_MISMATCH_POLICY,
    DEFAULT_QUOTECHAR,
    parse,
)
from .schema import AnalysisReport, Table
from .stats import DEFAULT_DDOF, compute_stats, fit_linear

logger = logging.getLogger(__name__)


def analyze_table(
    table: Table,
    x_column_name: str,
    y_column_name: str,
    *,
    include_stats: bool = True,
    ddof: int = DEFAULT_DDOF,
) -> AnalysisReport:
    """Regress ``y_column_name`` on ``x_column_name`` over an already-parsed table.

    Args:
        table (Table): Parsed CSV contents.
        x_column_name (str): Independent-variable header (exact match).
        y_column_name (str): Dependent-variable header (exact match).
        include_stats (bool, optional): Also summarise each column.
            Defaults to ``True``.
        ddof (int, optional): Variance divisor offset for the column
            statistics. Defaults to ``0`` (population).

    Returns:
        AnalysisReport: Regression over row-aligned pairs, optional per-column
        statistics, and counts of rows used and dropped.

    Raises:
        ColumnNotFound: If either column is absent.
        EmptyInputError: If no row has numeric values in both columns.
        DegenerateInputError: If the aligned x (or y) values have zero
            variance in a way that leaves the fit undefined.
    """
    x_series = extract(table, x_column_name)
    y_series = extract(table, y_column_name)

    x_stats = compute_stats(x_series, ddof=ddof) if include_stats else None
    y_stats = compute_stats(y_series, ddof=ddof) if include_stats else None

    x_aligned, y_aligned = align(x_series, y_series)
    regression = fit_linear(x_aligned, y_aligned)

    rows_used = len(x_aligned)
    rows_dropped = len(table.rows) - rows_used
    if rows_dropped:
        logger.debug(
            "Analysis %r vs %r: %d of %d rows lacked a numeric value in one column",
            x_column_name,
            y_column_name,
            rows_dropped,
            len(table.rows),
        )

    return AnalysisReport(
        x_column=x_column_name,
        y_column=y_column_name,
        regression=regression,
        x_stats=x_stats,
        y_stats=y_stats,
        rows_used=rows_used,
        rows_dropped=rows_dropped,
        skipped_rows=table.skipped_rows,
    )


def analyze(
    x_column_name: str,
    y_column_name: str,
    csv_text: str,
    *,
    include_stats: bool = True,
    ddof: int = DEFAULT_DDOF,
    delimiter: str = DEFAULT_DELIMITER,
    quotechar: str = DEFAULT_QUOTECHAR,
    on_mismatch: str = DEFAULT_MISMATCH_POLICY,
    warn_stacklevel: int = 3,
) -> AnalysisReport:
    """Parse ``csv_text`` once and analyse one pair of columns.

    Parser options are forwarded to :func:`crunch.parsing.parse`; see
    :func:`analyze_table` for the analysis itself.

    Raises:
        ParseError: If the CSV text is empty or malformed.
        ColumnNotFound: If either column is absent.
        EmptyInputError: If no row has numeric values in both columns.
        DegenerateInputError: If the fit is undefined.
    """
    table = parse(
        csv_text,
        delimiter=delimiter,
        quotechar=quotechar,
        on_mismatch=on_mismatch,
        warn_stacklevel=warn_stacklevel,
    )
    return analyze_table(
        table,
        x_column_name,
        y_column_name,
        include_stats=include_stats,
        ddof=ddof,
    )
