import math

import numpy as np
import pytest

from crunch.errors import DegenerateInputError, EmptyInputError, LengthMismatchError
from crunch.stats import fit_linear


def test_perfect_line_is_exact():
    fit = fit_linear([1, 2, 3], [2, 4, 6])
    assert fit.slope == 2.0
    assert fit.intercept == 0.0
    assert fit.r_squared == 1.0
    assert fit.n == 3
    assert fit.points == ((1.0, 2.0), (2.0, 4.0), (3.0, 6.0))


def test_noisy_line_matches_numpy_polyfit():
    x = np.array([0.0, 1.0, 2.0, 3.0, 4.0, 5.0])
    y = np.array([1.1, 2.9, 5.2, 7.1, 8.8, 11.2])
    fit = fit_linear(x, y)

    m, b = np.polyfit(x, y, 1)
    assert np.isclose(fit.slope, m)
    assert np.isclose(fit.intercept, b)
    assert 0.99 < fit.r_squared < 1.0
    assert fit.se_slope > 0
    assert 0.0 <= fit.p_value < 0.001
    assert np.isclose(fit.predict(2.0), 2.0 * m + b)


def test_two_points_have_no_standard_errors():
    fit = fit_linear([0.0, 1.0], [1.0, 3.0])
    assert fit.slope == 2.0
    assert math.isnan(fit.se_slope)
    assert math.isnan(fit.p_value)


def test_constant_x_is_degenerate():
    with pytest.raises(DegenerateInputError):
        fit_linear([5, 5, 5], [1, 2, 3])


def test_single_pair_is_degenerate():
    with pytest.raises(DegenerateInputError):
        fit_linear([1.0], [2.0])


def test_constant_y_on_a_flat_line_has_unit_r_squared():
    fit = fit_linear([1.0, 2.0, 3.0, 4.0], [3.0, 3.0, 3.0, 3.0])
    assert math.isclose(fit.slope, 0.0, abs_tol=1e-12)
    assert math.isclose(fit.intercept, 3.0)
    assert fit.r_squared == 1.0


def test_length_mismatch():
    with pytest.raises(LengthMismatchError, match="same length") as excinfo:
        fit_linear([1, 2, 3], [1, 2])
    assert (excinfo.value.x_len, excinfo.value.y_len) == (3, 2)


def test_empty_input():
    with pytest.raises(EmptyInputError):
        fit_linear([], [])


def test_pairs_with_non_finite_members_are_dropped():
    fit = fit_linear([1.0, math.nan, 2.0, 3.0], [2.0, 5.0, math.inf, 6.0])
    assert fit.n == 2
    assert math.isclose(fit.slope, 2.0)


def test_overflowing_sums_are_degenerate_not_infinite():
    with pytest.raises(DegenerateInputError):
        fit_linear([1e200, 2e200, 3e200], [1.0, 2.0, 3.0])


def test_repeat_calls_are_identical():
    x = [0.3, 1.7, 2.2, 5.9]
    y = [1.0, 0.4, 2.8, 3.3]
    assert fit_linear(x, y).to_dict() == fit_linear(x, y).to_dict()


def test_epoch_timestamps_keep_their_precision():
    x = [1.7e9 + i for i in range(10)]
    y = [2.0 * xi + 1.0 for xi in x]
    fit = fit_linear(x, y)

    m, _ = np.polyfit(np.array(x) - 1.7e9, y, 1)
    assert math.isclose(fit.slope, 2.0)
    assert math.isclose(fit.slope, m)
    assert math.isclose(fit.intercept, 1.0, abs_tol=1e-6)
    assert fit.r_squared == 1.0


def test_large_evenly_spaced_x_is_not_degenerate():
    fit = fit_linear([1e9, 1e9 + 1, 1e9 + 2], [0.0, 1.0, 2.0])
    assert fit.slope == 1.0
    assert fit.intercept == -1e9
    assert fit.r_squared == 1.0


def test_constant_y_with_large_x_is_a_flat_exact_fit():
    fit = fit_linear([1e9, 1e9 + 1, 1e9 + 2], [5.0, 5.0, 5.0])
    assert fit.slope == 0.0
    assert fit.intercept == 5.0
    assert fit.r_squared == 1.0
