"""
Shared fixtures for the imputation tests.
"""

import numpy as np
import pandas as pd
import pytest


@pytest.fixture
def gap_sequence():
    """Float sequence with a three slot interior gap."""
    return np.array([1.0, 2.0, np.nan, np.nan, np.nan, 6.0])


@pytest.fixture
def incomplete_frame():
    """Table with float, nullable integer and string columns."""
    return pd.DataFrame(
        {
            "a": [1.0, 2.0, np.nan, np.nan, 5.0],
            "b": [1.1, 2.2, 3.3, np.nan, 5.5],
            "count": pd.array([1, None, 3, None, 5], dtype="Int64"),
            "label": ["x", None, "y", "y", None],
        }
    )


@pytest.fixture
def incomplete_matrix():
    """Matrix whose columns each have one missing entry."""
    return np.array(
        [
            [1.0, 10.0, np.nan],
            [2.0, np.nan, 300.0],
            [np.nan, 30.0, 400.0],
            [4.0, 40.0, 500.0],
        ]
    )


def _add_missings(data: np.ndarray, fraction: float, rng: np.random.Generator) -> np.ndarray:
    """Copy of ``data`` with a random fraction of entries set to NaN.

    Every row keeps at least one present entry.
    """
    result = data.astype(np.float64).copy()
    mask = rng.random(result.shape) < fraction
    for i in np.flatnonzero(mask.all(axis=1)):
        mask[i, rng.integers(result.shape[1])] = False
    result[mask] = np.nan
    return result


@pytest.fixture
def add_missings():
    """Factory that knocks random holes into a complete matrix."""
    return _add_missings
