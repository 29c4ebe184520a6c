"""Provide the ordinary least-squares fit between two numeric series.

The closed-form estimate is computed from sums centred on the means:

    slope     = sum((x - xbar) * (y - ybar)) / sum((x - xbar)**2)
    intercept = ybar - slope * xbar

This is algebraically equal to ``(n*Sxy - Sx*Sy) / (n*Sxx - Sx**2)`` but does
not cancel away the significant digits of large, closely spaced x values such
as epoch timestamps.

Zero-variance input is rejected with :class:`DegenerateInputError` so a report
never carries an infinite or NaN slope, intercept or r-squared.
"""

from __future__ import annotations

import math
from typing import Iterable, Union

import numpy as np
from scipy.stats import t as student_t

from ..errors import DegenerateInputError, EmptyInputError, LengthMismatchError
from ..schema import NumericSeries, RegressionReport

EPSILON = 1e-12


def _as_array(values: Union[NumericSeries, Iterable[float]]) -> np.ndarray:
    if isinstance(values, NumericSeries):
        values = values.values
    elif not isinstance(values, np.ndarray):
        values = list(values)
    return np.array(values, dtype=float).reshape(-1)


def fit_linear(
    x: Union[NumericSeries, Iterable[float]], y: Union[NumericSeries, Iterable[float]]
) -> RegressionReport:
    """Fit ``y = slope * x + intercept`` by ordinary least squares.

    Args:
        x: Independent values.
        y: Dependent values, paired with ``x`` by position. Pairs where
            either member is NaN or infinite are left out of the fit.

    Returns:
        RegressionReport: slope, intercept, r_squared and pair count ``n``,
        plus standard errors, the two-sided slope p-value, and the fitted
        ``(x, y)`` points.

    Raises:
        LengthMismatchError: If ``x`` and ``y`` differ in length.
        EmptyInputError: If there is no finite pair to fit.
        DegenerateInputError: If every ``x`` is identical, or every ``y`` is
            identical while the fitted line still leaves residuals.

    Note:
        When all ``y`` are identical the total variance is zero and
        ``r_squared`` is defined as ``1.0`` provided the residuals vanish
        (within a relative tolerance of ``EPSILON``).
        Standard errors need ``n > 2`` and are NaN otherwise.
    """
    x_arr = _as_array(x)
    y_arr = _as_array(y)
    if len(x_arr) != len(y_arr):
        raise LengthMismatchError(len(x_arr), len(y_arr))
    if len(x_arr) == 0:
        raise EmptyInputError("Cannot fit a regression to empty series.")

    mask = np.isfinite(x_arr) & np.isfinite(y_arr)
    x_arr = x_arr[mask]
    y_arr = y_arr[mask]
    n = int(len(x_arr))
    if n == 0:
        raise EmptyInputError("No finite (x, y) pairs to fit.")
    if np.all(x_arr == x_arr[0]):
        raise DegenerateInputError(
            "All x values are identical; the slope is undefined."
        )

    sum_x = float(np.sum(x_arr))
    sum_y = float(np.sum(y_arr))
    xbar = sum_x / n
    y_constant = bool(np.all(y_arr == y_arr[0]))
    ybar = float(y_arr[0]) if y_constant else sum_y / n

    # Centred sums keep their precision when x is large relative to its spread.
    dx = x_arr - xbar
    dy = y_arr - ybar
    ssxx = float(np.sum(dx * dx))
    ssxy = float(np.sum(dx * dy))
    if not (ssxx > 0 and math.isfinite(ssxx)):
        raise DegenerateInputError("Insufficient x variance for regression.")

    slope = ssxy / ssxx
    intercept = ybar - slope * xbar

    resid = dy - slope * dx
    ss_res = float(np.sum(resid**2))

    if y_constant:
        if ss_res > EPSILON * max(1.0, n * ybar * ybar):
            raise DegenerateInputError(
                "All y values are identical but the fit leaves residuals; "
                "r_squared is undefined."
            )
        r_squared = 1.0
    else:
        ss_tot = float(np.sum(dy * dy))
        r_squared = 1.0 - ss_res / ss_tot

    if not (math.isfinite(slope) and math.isfinite(intercept) and math.isfinite(r_squared)):
        raise DegenerateInputError("Regression produced non-finite parameters.")

    se_slope = math.nan
    se_intercept = math.nan
    p_value = math.nan
    dof = n - 2
    if dof > 0:
        mse = ss_res / dof
        se_slope = math.sqrt(mse / ssxx)
        se_intercept = math.sqrt(mse * (1.0 / n + xbar * xbar / ssxx))
        if se_slope > 0:
            p_value = float(2.0 * student_t.sf(abs(slope / se_slope), dof))
        elif slope != 0:
            p_value = 0.0

    return RegressionReport(
        slope=float(slope),
        intercept=float(intercept),
        r_squared=float(r_squared),
        n=n,
        se_slope=se_slope,
        se_intercept=se_intercept,
        p_value=p_value,
        points=tuple((float(a), float(b)) for a, b in zip(x_arr, y_arr)),
    )
