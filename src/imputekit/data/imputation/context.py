"""
Validation context for imputation.

A context decides what counts as a missing value and how much missingness a
sequence may have before imputation is refused. A fresh context is used for
every top-level imputation call; it holds no state between calls.
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional

import numpy as np
import pandas as pd

from imputekit.core.exceptions.data.imputation import LimitExceededError
from imputekit.utils.constants import DEFAULT_MISSING_LIMIT


@dataclass(frozen=True)
class Context:
    """Missingness predicate plus the limit enforced before imputing.

    Attributes:
        limit: Largest allowed fraction of missing values in a sequence (0 to 1)
        max_missing: Largest allowed count of missing values (optional)
        is_missing: Scalar predicate deciding whether a slot is missing. When
            ``None`` the container's own marker (NaN, None, pd.NA) is used.
    """

    limit: float = DEFAULT_MISSING_LIMIT
    max_missing: Optional[int] = None
    is_missing: Optional[Callable[[Any], bool]] = None

    def __post_init__(self) -> None:
        if not 0.0 <= self.limit <= 1.0:
            raise ValueError(f"limit must be between 0 and 1, got {self.limit}")
        if self.max_missing is not None and self.max_missing < 0:
            raise ValueError(
                f"max_missing must be non-negative, got {self.max_missing}"
            )

    def ismissing(self, value: Any) -> bool:
        """Whether a single value is missing under this context."""
        if self.is_missing is None:
            return bool(pd.isna(value))
        return bool(self.is_missing(value))

    def missing_mask(self, data: Any) -> np.ndarray:
        """Boolean mask of missing slots with the same shape as ``data``."""
        if isinstance(data, (pd.Series, pd.DataFrame)):
            if self.is_missing is None:
                return data.isna().to_numpy(dtype=bool)
            values = data.to_numpy(dtype=object)
        else:
            values = np.asarray(data)
            if self.is_missing is None:
                return np.asarray(pd.isna(values), dtype=bool)

        if values.size == 0:
            return np.zeros(values.shape, dtype=bool)
        mask = np.fromiter(
            (self.ismissing(v) for v in values.ravel()),
            dtype=bool,
            count=values.size,
        )
        return mask.reshape(values.shape)

    def count_missing(self, data: Any) -> int:
        """Number of missing slots in ``data``."""
        return int(self.missing_mask(data).sum())

    def exceeds(self, count: int, total: int) -> bool:
        """Whether ``count`` missing values out of ``total`` breaks the limit."""
        if self.max_missing is not None and count > self.max_missing:
            return True
        if total == 0:
            return False
        return count / total > self.limit

    def check(self, mask: np.ndarray) -> int:
        """Validate a precomputed missing mask, returning the missing count.

        Raises:
            LimitExceededError: If the mask has too many missing slots
        """
        count = int(mask.sum())
        total = int(mask.size)
        if self.exceeds(count, total):
            raise LimitExceededError(count, total, self.limit, self.max_missing)
        return count

    def validate(self, data: Any) -> int:
        """Count the missing slots of ``data`` and enforce the limit.

        Args:
            data: A sequence or container

        Returns:
            Number of missing slots

        Raises:
            LimitExceededError: If the configured limit is exceeded
        """
        return self.check(self.missing_mask(data))

    def run(self, data: Any, operation: Callable[[Any, np.ndarray], Any]) -> Any:
        """Validate ``data`` and, if it passes, call ``operation(data, mask)``."""
        mask = self.missing_mask(data)
        self.check(mask)
        return operation(data, mask)


def find_first(mask: np.ndarray) -> Optional[int]:
    """Index of the first present slot, or None if every slot is missing."""
    return find_next(mask, 0)


def find_next(mask: np.ndarray, start: int) -> Optional[int]:
    """Index of the first present slot at or after ``start``."""
    present = np.flatnonzero(~mask[start:])
    if present.size == 0:
        return None
    return start + int(present[0])
