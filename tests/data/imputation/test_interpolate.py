"""Tests for linear interpolation imputation."""

from fractions import Fraction

import numpy as np
import pandas as pd
import pytest

from imputekit.core.exceptions.data.imputation import (
    AllMissingError,
    ImputationError,
    RoundingError,
)
from imputekit.data.imputation import Context, InterpolateConfig, InterpolateImputer
from imputekit.data.imputation.base_imputer import round_value
from imputekit.utils.constants import RoundingMode

SENTINEL = Context(is_missing=lambda v: v == -999)


def test_fills_gap_evenly(gap_sequence):
    result = InterpolateImputer().impute(gap_sequence)
    np.testing.assert_array_equal(result, [1.0, 2.0, 3.0, 4.0, 5.0, 6.0])


def test_gap_longer_than_limit_stays_missing(gap_sequence):
    imputer = InterpolateImputer(InterpolateConfig(limit=2))
    result = imputer.impute(gap_sequence)
    np.testing.assert_array_equal(result, [1.0, 2.0, np.nan, np.nan, np.nan, 6.0])


def test_gap_equal_to_limit_is_filled(gap_sequence):
    result = InterpolateImputer(InterpolateConfig(limit=3)).impute(gap_sequence)
    np.testing.assert_array_equal(result, [1.0, 2.0, 3.0, 4.0, 5.0, 6.0])


def test_limit_only_skips_long_runs():
    data = np.array([1.0, np.nan, 3.0, np.nan, np.nan, np.nan, 7.0, np.nan, 9.0])
    result = InterpolateImputer(InterpolateConfig(limit=1)).impute(data)
    np.testing.assert_array_equal(
        result, [1.0, 2.0, 3.0, np.nan, np.nan, np.nan, 7.0, 8.0, 9.0]
    )


def test_leading_run_is_not_filled():
    result = InterpolateImputer().impute(np.array([np.nan, np.nan, 3.0, 4.0]))
    np.testing.assert_array_equal(result, [np.nan, np.nan, 3.0, 4.0])


def test_trailing_run_is_not_filled():
    result = InterpolateImputer().impute(np.array([1.0, 2.0, np.nan, np.nan]))
    np.testing.assert_array_equal(result, [1.0, 2.0, np.nan, np.nan])


def test_multiple_gaps():
    data = np.array([1.0, np.nan, 3.0, np.nan, np.nan, 6.0])
    result = InterpolateImputer().impute(data)
    np.testing.assert_array_equal(result, [1.0, 2.0, 3.0, 4.0, 5.0, 6.0])


def test_decreasing_values():
    result = InterpolateImputer().impute(np.array([4.0, np.nan, np.nan, 1.0]))
    np.testing.assert_allclose(result, [4.0, 3.0, 2.0, 1.0])


def test_all_missing_raises():
    with pytest.raises(AllMissingError):
        InterpolateImputer().impute(np.array([np.nan, np.nan, np.nan]))


def test_non_numeric_raises():
    with pytest.raises(ImputationError):
        InterpolateImputer().impute(np.array(["a", None, "c"], dtype=object))


def test_float32_dtype_is_preserved():
    data = np.array([1.0, np.nan, 3.0], dtype=np.float32)
    result = InterpolateImputer().impute(data)
    assert result.dtype == np.float32
    np.testing.assert_array_equal(result, np.array([1.0, 2.0, 3.0], dtype=np.float32))


def test_integral_values_need_no_rounding():
    data = pd.Series([1, None, None, 4], dtype="Int64")
    result = InterpolateImputer().impute(data)
    assert str(result.dtype) == "Int64"
    assert result.tolist() == [1, 2, 3, 4]


def test_fractional_value_without_rounding_mode_raises():
    data = np.array([1, -999, 4], dtype=np.int64)
    with pytest.raises(RoundingError):
        InterpolateImputer().impute(data, context=SENTINEL)


def test_rounding_error_leaves_data_unchanged():
    data = np.array([1, -999, 4], dtype=np.int64)
    with pytest.raises(RoundingError):
        InterpolateImputer().impute(data, context=SENTINEL, inplace=True)
    assert data.tolist() == [1, -999, 4]


@pytest.mark.parametrize(
    "mode, expected",
    [
        (RoundingMode.NEAREST, 2),
        (RoundingMode.NEAREST_TIES_AWAY, 3),
        (RoundingMode.UP, 3),
        (RoundingMode.DOWN, 2),
        (RoundingMode.TO_ZERO, 2),
    ],
)
def test_rounding_modes(mode, expected):
    data = np.array([1, -999, 4], dtype=np.int64)
    imputer = InterpolateImputer(InterpolateConfig(rounding=mode))
    result = imputer.impute(data, context=SENTINEL)
    assert result.tolist() == [1, expected, 4]
    assert result.dtype == np.int64


def test_rounding_mode_accepts_strings():
    assert InterpolateConfig(rounding="up").rounding is RoundingMode.UP


def test_unsigned_values_do_not_wrap_around():
    data = np.array([200, 255, 255, 50], dtype=np.uint8)
    context = Context(is_missing=lambda v: v == 255)
    result = InterpolateImputer().impute(data, context=context)
    assert result.dtype == np.uint8
    assert result.tolist() == [200, 150, 100, 50]


def test_object_integers_stay_integers():
    result = InterpolateImputer().impute([1, None, 3])
    assert result == [1, 2, 3]
    assert all(isinstance(v, int) for v in result)


def test_no_missing_is_a_no_op():
    data = np.array([1.0, 5.0, 2.0])
    result = InterpolateImputer().impute(data)
    np.testing.assert_array_equal(result, data)


def test_negative_limit_rejected():
    with pytest.raises(ValueError):
        InterpolateConfig(limit=-1)


@pytest.mark.parametrize(
    "value, mode, expected",
    [
        (Fraction(-5, 2), RoundingMode.NEAREST, -2),
        (Fraction(-5, 2), RoundingMode.NEAREST_TIES_AWAY, -3),
        (Fraction(-5, 2), RoundingMode.UP, -2),
        (Fraction(-5, 2), RoundingMode.DOWN, -3),
        (Fraction(-5, 2), RoundingMode.TO_ZERO, -2),
        (3.5, RoundingMode.NEAREST, 4),
    ],
)
def test_round_value(value, mode, expected):
    assert round_value(value, mode) == expected
