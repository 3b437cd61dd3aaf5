"""Tests for the per-sequence carry, fill and sampling strategies."""

import numpy as np
import pandas as pd
import pytest

from imputekit.core.exceptions.data.imputation import (
    AllMissingError,
    ImputationError,
    RoundingError,
)
from imputekit.data.imputation import (
    FillConfig,
    FillImputer,
    LOCFImputer,
    NOCBImputer,
    SRSConfig,
    SRSImputer,
)
from imputekit.utils.constants import RoundingMode


class TestCarry:
    def test_locf(self):
        result = LOCFImputer().impute(np.array([1.0, np.nan, np.nan, 4.0]))
        np.testing.assert_array_equal(result, [1.0, 1.0, 1.0, 4.0])

    def test_nocb(self):
        result = NOCBImputer().impute(np.array([1.0, np.nan, np.nan, 4.0]))
        np.testing.assert_array_equal(result, [1.0, 4.0, 4.0, 4.0])

    def test_boundary_runs_stay_missing(self):
        data = np.array([np.nan, 2.0, np.nan, 4.0, np.nan])
        np.testing.assert_array_equal(
            LOCFImputer().impute(data), [np.nan, 2.0, 2.0, 4.0, 4.0]
        )
        np.testing.assert_array_equal(
            NOCBImputer().impute(data), [2.0, 2.0, 4.0, 4.0, np.nan]
        )

    def test_locf_is_idempotent(self):
        data = np.array([np.nan, 1.0, np.nan, 3.0, np.nan, np.nan])
        once = LOCFImputer().impute(data)
        twice = LOCFImputer().impute(once)
        np.testing.assert_array_equal(once, twice)

    def test_strings(self):
        data = pd.Series(["a", None, "b", None])
        assert LOCFImputer().impute(data).tolist() == ["a", "a", "b", "b"]

    def test_all_missing_raises(self):
        with pytest.raises(AllMissingError):
            NOCBImputer().impute(np.array([np.nan, np.nan]))


class TestFill:
    def test_default_is_mean(self):
        result = FillImputer().impute(np.array([1.0, np.nan, 3.0, np.nan]))
        np.testing.assert_array_equal(result, [1.0, 2.0, 3.0, 2.0])

    def test_literal_value(self):
        imputer = FillImputer(FillConfig(value=-1.0))
        result = imputer.impute(np.array([1.0, np.nan, np.nan]))
        np.testing.assert_array_equal(result, [1.0, -1.0, -1.0])

    def test_reducer(self):
        imputer = FillImputer(FillConfig(fn=np.median))
        result = imputer.impute(np.array([1.0, np.nan, 2.0, 10.0]))
        np.testing.assert_array_equal(result, [1.0, 2.0, 2.0, 10.0])

    def test_callable_value_is_reducer(self):
        config = FillConfig(value=np.max)
        assert config.fn is np.max
        assert config.value is None

    def test_value_and_fn_are_exclusive(self):
        with pytest.raises(ValueError):
            FillConfig(value=0.0, fn=np.mean)

    def test_mode_for_strings(self):
        data = np.array(["a", "b", None, "b"], dtype=object)
        assert FillImputer().impute(data).tolist() == ["a", "b", "b", "b"]

    def test_mode_ties_go_to_first_seen(self):
        data = np.array(["x", "y", None], dtype=object)
        assert FillImputer().impute(data).tolist() == ["x", "y", "x"]

    def test_fractional_mean_in_integer_sequence(self):
        data = pd.Series([1, None, 2], dtype="Int64")
        with pytest.raises(RoundingError):
            FillImputer().impute(data)

        imputer = FillImputer(FillConfig(rounding=RoundingMode.UP))
        result = imputer.impute(data)
        assert str(result.dtype) == "Int64"
        assert result.tolist() == [1, 2, 2]

    def test_literal_value_fills_all_missing(self):
        imputer = FillImputer(FillConfig(value=0.0))
        result = imputer.impute(np.array([np.nan, np.nan]))
        np.testing.assert_array_equal(result, [0.0, 0.0])

    def test_statistic_of_all_missing_raises(self):
        with pytest.raises(AllMissingError):
            FillImputer().impute(np.array([np.nan, np.nan]))

    def test_failing_reducer_is_wrapped(self):
        def broken(values):
            raise ZeroDivisionError("boom")

        with pytest.raises(ImputationError) as excinfo:
            FillImputer(FillConfig(fn=broken)).impute(np.array([1.0, np.nan]))
        assert isinstance(excinfo.value.__cause__, ZeroDivisionError)
        assert "Imputation failed" in str(excinfo.value)


class TestSRS:
    def test_samples_present_values(self):
        data = np.array([1.0, np.nan, 3.0, np.nan, 5.0, np.nan])
        result = SRSImputer().impute(data)
        assert not np.isnan(result).any()
        assert set(result[[1, 3, 5]]).issubset({1.0, 3.0, 5.0})

    def test_same_seed_same_draws(self):
        data = np.array([1.0, 2.0, np.nan, 4.0, np.nan, np.nan, 7.0])
        first = SRSImputer(SRSConfig(random_state=7)).impute(data)
        second = SRSImputer(SRSConfig(random_state=7)).impute(data)
        np.testing.assert_array_equal(first, second)

    def test_generator_source(self):
        data = np.array(["a", None, "b", None], dtype=object)
        imputer = SRSImputer(SRSConfig(random_state=np.random.default_rng(0)))
        result = imputer.impute(data)
        assert set(result.tolist()) <= {"a", "b"}

    def test_integer_sequence_stays_integer(self):
        data = pd.Series([3, None, 5], dtype="Int64")
        result = SRSImputer().impute(data)
        assert str(result.dtype) == "Int64"
        assert result[1] in (3, 5)

    def test_all_missing_raises(self):
        with pytest.raises(AllMissingError):
            SRSImputer().impute(np.array([np.nan]))
