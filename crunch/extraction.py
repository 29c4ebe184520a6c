"""Coerce table columns into index-tagged numeric series.

Coercion is deliberately tolerant: a cell that is empty, not a number, or not
finite (``nan``, ``inf``) is left out of the series instead of raising or
being zero-filled. Each kept value remains tagged with the data row it came
from, so two columns coerced independently can still be paired row by row
with :func:`align`.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Sequence, Tuple

import numpy as np
import pandas as pd

from .schema import NumericSeries, Table

logger = logging.getLogger(__name__)

NUMERIC = "numeric"
TEXT = "text"


def coerce_numeric(cells: Sequence[str]) -> np.ndarray:
    """Parse cells as floats, mapping anything unparseable to NaN.

    Accepts integer and floating-point literals with an optional sign and
    exponent. Non-finite results are returned as NaN as well, so callers only
    need a single ``np.isfinite`` mask.
    """
    if len(cells) == 0:
        return np.empty(0, dtype=float)
    parsed = pd.to_numeric(pd.Series(list(cells), dtype=object), errors="coerce")
    values = parsed.to_numpy(dtype=float, na_value=np.nan)
    return np.where(np.isfinite(values), values, np.nan)


def extract(table: Table, column_name: str) -> NumericSeries:
    """Return the finite numeric values of one column, tagged by row.

    Args:
        table (Table): Parsed table.
        column_name (str): Header name, matched exactly and case-sensitively.
            With duplicate headers the first column of that name is used.

    Returns:
        NumericSeries: Values in row order with their zero-based row indices.
        It is shorter than the table whenever cells failed to parse.

    Raises:
        ColumnNotFound: If no header equals ``column_name``.
    """
    column = table.column(column_name)
    values = coerce_numeric(column.cells)
    mask = np.isfinite(values)
    row_index = np.flatnonzero(mask)

    dropped = len(column) - int(mask.sum())
    if dropped:
        logger.debug(
            "Column %r: dropped %d of %d cells that were empty or non-numeric",
            column_name,
            dropped,
            len(column),
        )
    return NumericSeries(name=column_name, values=values[mask], row_index=row_index)


def align(x: NumericSeries, y: NumericSeries) -> Tuple[NumericSeries, NumericSeries]:
    """Restrict two series to the rows where both have a value.

    Pairing is by original row index, never by position, so a gap in one
    column cannot shift the other column's values onto the wrong rows.
    Row order is preserved.
    """
    common, x_pos, y_pos = np.intersect1d(
        x.row_index, y.row_index, assume_unique=True, return_indices=True
    )
    logger.debug(
        "Aligned %r (%d values) with %r (%d values): %d shared rows",
        x.name,
        len(x),
        y.name,
        len(y),
        len(common),
    )
    return (
        NumericSeries(name=x.name, values=x.values[x_pos], row_index=common),
        NumericSeries(name=y.name, values=y.values[y_pos], row_index=common),
    )


def infer_column_kinds(table: Table) -> Dict[str, str]:
    """Classify every column as ``"numeric"`` or ``"text"``.

    A column is numeric when it has at least one non-empty cell and every
    non-empty cell coerces to a finite number.
    """
    return {entry["name"]: entry["kind"] for entry in describe_columns(table)}


def describe_columns(table: Table) -> List[Dict[str, object]]:
    """Summarise each column: inferred kind plus non-empty and numeric counts."""
    summary = []
    for idx, name in enumerate(table.headers):
        cells = [row[idx] for row in table.rows]
        non_empty = sum(1 for cell in cells if cell != "")
        numeric = int(np.isfinite(coerce_numeric(cells)).sum())
        kind = NUMERIC if non_empty and numeric == non_empty else TEXT
        summary.append(
            {
                "name": name,
                "kind": kind,
                "non_empty": non_empty,
                "numeric": numeric,
            }
        )
    return summary
