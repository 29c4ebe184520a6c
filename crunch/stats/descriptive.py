"""Descriptive statistics over a single numeric series."""

from __future__ import annotations

from typing import Iterable, Union

import numpy as np

from ..errors import EmptyInputError
from ..schema import NumericSeries, StatsReport

DEFAULT_DDOF = 0


def as_finite_array(values: Union[NumericSeries, Iterable[float]]) -> np.ndarray:
    """Copy ``values`` into a float array, dropping NaN and infinities."""
    if isinstance(values, NumericSeries):
        values = values.values
    elif not isinstance(values, np.ndarray):
        values = list(values)
    arr = np.array(values, dtype=float).reshape(-1)
    return arr[np.isfinite(arr)]


def compute_stats(
    values: Union[NumericSeries, Iterable[float]], ddof: int = DEFAULT_DDOF
) -> StatsReport:
    """Summarise a numeric series.

    Args:
        values: A :class:`NumericSeries` or any iterable of numbers. Non-finite
            entries are ignored.
        ddof (int, optional): Delta degrees of freedom for the variance
            divisor ``count - ddof``. Defaults to ``0`` (population).

    Returns:
        StatsReport: count, mean, min, max, std_dev, median and variance.

    Raises:
        EmptyInputError: If no finite values remain.
        ValueError: If ``ddof`` is negative.

    Note:
        With the default population divisor a single value has
        ``std_dev == 0.0``. When ``count <= ddof`` the spread is undefined and
        is likewise reported as ``0.0`` rather than NaN. The median is taken
        from a sorted copy; the caller's sequence is never reordered.
    """
    if ddof < 0:
        raise ValueError("ddof must be >= 0")
    arr = as_finite_array(values)
    n = int(len(arr))
    if n == 0:
        raise EmptyInputError("Cannot compute statistics of an empty series.")

    mean = float(np.mean(arr))
    if n > ddof:
        variance = float(np.sum((arr - mean) ** 2) / (n - ddof))
    else:
        variance = 0.0

    return StatsReport(
        count=n,
        mean=mean,
        min=float(np.min(arr)),
        max=float(np.max(arr)),
        std_dev=float(np.sqrt(variance)),
        median=float(np.median(arr)),
        variance=variance,
        ddof=int(ddof),
    )
