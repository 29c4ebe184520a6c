"""Define the immutable containers passed between pipeline stages.

Every container is constructed fresh per call and exposes ``to_dict()``, which
copies its contents out into plain Python lists, floats and strings. Hosts
that marshal results across a language boundary should only ever see the
output of ``to_dict()``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import numpy as np
import pandas as pd

from .errors import ColumnNotFound, RowError


@dataclass(frozen=True)
class Column:
    """A named run of raw cell strings taken from one table column."""

    name: str
    cells: Tuple[str, ...]

    def __len__(self) -> int:
        return len(self.cells)


@dataclass(frozen=True)
class Table:
    """Parsed CSV contents: header names plus rectangular rows of raw cells.

    Attributes:
        headers: Header names in source order.
        rows: Data rows in source order. Every row holds exactly
            ``len(headers)`` cells.
        row_errors: Rows whose cell count differed from the header and were
            padded, truncated or skipped while parsing.
    """

    headers: Tuple[str, ...]
    rows: Tuple[Tuple[str, ...], ...]
    row_errors: Tuple[RowError, ...] = ()

    @property
    def skipped_rows(self) -> int:
        """Number of source rows dropped by the ``"skip"`` mismatch policy."""
        return sum(1 for err in self.row_errors if err.action == "skipped")

    @property
    def shape(self) -> Tuple[int, int]:
        return len(self.rows), len(self.headers)

    def index_of(self, name: str) -> int:
        """Return the position of ``name`` (exact, case-sensitive, first match)."""
        try:
            return self.headers.index(name)
        except ValueError:
            raise ColumnNotFound(name, self.headers) from None

    def column(self, name: str) -> Column:
        idx = self.index_of(name)
        return Column(name=name, cells=tuple(row[idx] for row in self.rows))

    def to_dict(self) -> Dict[str, object]:
        return {
            "headers": list(self.headers),
            "rows": [list(row) for row in self.rows],
            "skipped_rows": self.skipped_rows,
        }

    def to_records(self) -> List[Dict[str, str]]:
        """Return one ``{header: cell}`` mapping per data row.

        With duplicate header names the last cell wins, as with any mapping.
        """
        return [dict(zip(self.headers, row)) for row in self.rows]

    def to_frame(self) -> pd.DataFrame:
        """Return the raw cells as a string-typed :class:`pandas.DataFrame`."""
        return pd.DataFrame(
            [list(row) for row in self.rows], columns=list(self.headers), dtype=object
        )


def _frozen_array(values, dtype) -> np.ndarray:
    arr = np.array(values, dtype=dtype, copy=True).reshape(-1)
    arr.flags.writeable = False
    return arr


@dataclass(frozen=True, eq=False)
class NumericSeries:
    """Finite numeric values coerced from a column, tagged with their row.

    ``row_index[i]`` is the zero-based data-row position that ``values[i]``
    came from. Cells that failed numeric coercion have no entry, so the series
    can be shorter than its source column. Both arrays are private read-only
    copies.
    """

    name: str
    values: np.ndarray
    row_index: np.ndarray = field(default=None)

    def __post_init__(self):
        values = _frozen_array(self.values, float)
        if self.row_index is None:
            row_index = _frozen_array(np.arange(len(values)), np.int64)
        else:
            row_index = _frozen_array(self.row_index, np.int64)
        if len(row_index) != len(values):
            raise ValueError("row_index must have one entry per value.")
        object.__setattr__(self, "values", values)
        object.__setattr__(self, "row_index", row_index)

    def __len__(self) -> int:
        return int(len(self.values))

    def to_list(self) -> List[float]:
        return [float(v) for v in self.values]

    def to_dict(self) -> Dict[str, object]:
        return {
            "name": self.name,
            "values": self.to_list(),
            "row_index": [int(i) for i in self.row_index],
        }


@dataclass(frozen=True)
class StatsReport:
    """Descriptive statistics over one numeric series.

    ``std_dev`` and ``variance`` use the divisor ``count - ddof``; the default
    ``ddof=0`` gives the population figures, so a single value has a standard
    deviation of ``0.0``.
    """

    count: int
    mean: float
    min: float
    max: float
    std_dev: float
    median: float
    variance: float
    ddof: int = 0

    def to_dict(self) -> Dict[str, object]:
        return {
            "count": int(self.count),
            "mean": float(self.mean),
            "min": float(self.min),
            "max": float(self.max),
            "std_dev": float(self.std_dev),
            "median": float(self.median),
            "variance": float(self.variance),
            "ddof": int(self.ddof),
        }


def _finite_or_none(value: float) -> Optional[float]:
    value = float(value)
    return value if math.isfinite(value) else None


@dataclass(frozen=True)
class RegressionReport:
    """Ordinary least-squares fit ``y = slope * x + intercept``.

    ``se_slope``, ``se_intercept`` and ``p_value`` are NaN when there are too
    few pairs (``n <= 2``); ``p_value`` is also NaN for an exact horizontal
    fit. In ``to_dict()`` such values become ``None`` so the result stays
    valid strict JSON.
    """

    slope: float
    intercept: float
    r_squared: float
    n: int
    se_slope: float = math.nan
    se_intercept: float = math.nan
    p_value: float = math.nan
    points: Tuple[Tuple[float, float], ...] = ()

    def predict(self, x: float) -> float:
        return self.slope * float(x) + self.intercept

    def to_dict(self) -> Dict[str, object]:
        return {
            "slope": float(self.slope),
            "intercept": float(self.intercept),
            "r_squared": float(self.r_squared),
            "n": int(self.n),
            "se_slope": _finite_or_none(self.se_slope),
            "se_intercept": _finite_or_none(self.se_intercept),
            "p_value": _finite_or_none(self.p_value),
            "points": [[float(x), float(y)] for x, y in self.points],
        }


@dataclass(frozen=True)
class AnalysisReport:
    """Combined result of analysing one pair of columns."""

    x_column: str
    y_column: str
    regression: RegressionReport
    x_stats: Optional[StatsReport] = None
    y_stats: Optional[StatsReport] = None
    rows_used: int = 0
    rows_dropped: int = 0
    skipped_rows: int = 0

    def to_dict(self) -> Dict[str, object]:
        return {
            "x_column": self.x_column,
            "y_column": self.y_column,
            "x_stats": self.x_stats.to_dict() if self.x_stats else None,
            "y_stats": self.y_stats.to_dict() if self.y_stats else None,
            "regression": self.regression.to_dict(),
            "rows_used": int(self.rows_used),
            "rows_dropped": int(self.rows_dropped),
            "skipped_rows": int(self.skipped_rows),
        }

    def to_frame(self) -> pd.DataFrame:
        """Return the per-column statistics as a two-row DataFrame.

        The frame is indexed by column name; it is empty when statistics were
        not requested.
        """
        rows = []
        for name, stats in ((self.x_column, self.x_stats), (self.y_column, self.y_stats)):
            if stats is None:
                continue
            record = {"Column": name}
            record.update(stats.to_dict())
            rows.append(record)
        if not rows:
            return pd.DataFrame(columns=["Column"]).set_index("Column")
        return pd.DataFrame.from_records(rows).set_index("Column")
