# src/imputekit/utils/constants.py
"""
Constants for the imputation package.

This module contains constants and enumerations shared by the context,
the dispatcher and the imputation strategies.
"""

# Standard Library Imports
from enum import Enum
from typing import Final


# Validation defaults
DEFAULT_MISSING_LIMIT: Final[float] = 1.0

# Strategy defaults
DEFAULT_RANDOM_STATE: Final[int] = 137
DEFAULT_N_NEIGHBORS: Final[int] = 5
DEFAULT_SVD_TOLERANCE: Final[float] = 1e-10
DEFAULT_SVD_MAX_ITERATIONS: Final[int] = 100


class Dims(str, Enum):
    """Which axis of a matrix forms the sequences passed to a strategy."""

    ROWS = "rows"
    COLS = "cols"

    @classmethod
    def parse(cls, value: "str | Dims") -> "Dims":
        """Resolve a dimension selector, accepting ``"columns"`` as an alias."""
        if isinstance(value, Dims):
            return value
        key = str(value).lower()
        if key == "columns":
            key = cls.COLS.value
        try:
            return cls(key)
        except ValueError:
            raise ValueError(
                f"Invalid dims {value!r}, expected one of: "
                f"{[d.value for d in cls]}"
            ) from None


class RoundingMode(str, Enum):
    """How fractional fill values are written into integer sequences."""

    NEAREST = "nearest"  # ties to even
    NEAREST_TIES_AWAY = "nearest_ties_away"
    UP = "up"
    DOWN = "down"
    TO_ZERO = "to_zero"


class ElementKind(str, Enum):
    """Element type of a sequence, preserved when fill values are written."""

    INTEGER = "integer"
    FLOATING = "floating"
    OTHER = "other"


class KNNWeights(str, Enum):
    """Weight functions for combining neighbor values."""

    UNIFORM = "uniform"
    DISTANCE = "distance"


class StatisticKeys(str, Enum):
    """Keys used in imputation statistics dictionaries."""

    TOTAL_MISSING = "total_missing_values"
    MISSING_BY_SEQUENCE = "missing_by_sequence"
    MISSING_PERCENTAGE = "missing_percentage"
    IMPUTED = "imputed_values"
    REMAINING = "remaining_missing_values"
    DROPPED = "dropped"
