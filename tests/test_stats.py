import math

import numpy as np
import pytest

from crunch.errors import EmptyInputError
from crunch.schema import NumericSeries
from crunch.stats import compute_stats


def test_textbook_population_standard_deviation():
    stats = compute_stats([2, 4, 4, 4, 5, 5, 7, 9])
    assert stats.count == 8
    assert stats.mean == 5.0
    assert stats.std_dev == 2.0
    assert stats.variance == 4.0
    assert stats.min == 2.0
    assert stats.max == 9.0
    assert stats.median == 4.5


def test_odd_count_median():
    assert compute_stats([3.0, 1.0, 2.0]).median == 2.0


def test_single_value_has_zero_spread():
    stats = compute_stats([7.5])
    assert stats.count == 1
    assert stats.std_dev == 0.0
    assert stats.median == 7.5


def test_sample_divisor():
    stats = compute_stats([2, 4, 4, 4, 5, 5, 7, 9], ddof=1)
    assert math.isclose(stats.variance, 32.0 / 7.0)
    assert stats.ddof == 1


def test_sample_divisor_with_single_value_is_zero_not_nan():
    assert compute_stats([1.0], ddof=1).std_dev == 0.0


def test_negative_ddof_rejected():
    with pytest.raises(ValueError, match="ddof"):
        compute_stats([1.0], ddof=-1)


def test_empty_input_raises():
    with pytest.raises(EmptyInputError):
        compute_stats([])


def test_only_non_finite_values_count_as_empty():
    with pytest.raises(EmptyInputError):
        compute_stats([math.nan, math.inf])


def test_non_finite_values_are_ignored():
    stats = compute_stats([1.0, math.nan, 3.0])
    assert stats.count == 2
    assert stats.mean == 2.0


def test_input_order_is_not_mutated():
    values = np.array([9.0, 1.0, 5.0])
    compute_stats(values)
    assert values.tolist() == [9.0, 1.0, 5.0]


def test_accepts_numeric_series():
    series = NumericSeries(name="s", values=[1.0, 2.0, 3.0, 4.0], row_index=[0, 2, 5, 6])
    stats = compute_stats(series)
    assert stats.count == 4
    assert stats.median == 2.5


def test_repeat_calls_are_identical():
    values = [0.1, 0.2, 0.3, 10.0 / 3.0]
    assert compute_stats(values).to_dict() == compute_stats(values).to_dict()
