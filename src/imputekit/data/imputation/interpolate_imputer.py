"""
Linear interpolation imputation.

This module fills runs of missing values that are bounded by present values
on both sides with evenly spaced values between the two bounds.
"""

from dataclasses import dataclass
from fractions import Fraction
from typing import Any, List, Optional, Union

import numpy as np

from imputekit.core.exceptions.data.imputation import AllMissingError, ImputationError
from imputekit.data.imputation.base_imputer import BaseImputer, BaseImputerConfig, Fills
from imputekit.data.imputation.context import find_first, find_next
from imputekit.utils.constants import ElementKind


@dataclass(frozen=True)
class InterpolateConfig(BaseImputerConfig):
    """Configuration for linear interpolation.

    Attributes:
        limit: Longest run of missing values that will be filled. Longer runs
            are left missing. None fills runs of any length.
        rounding: Rounding mode used when an interpolated value must be stored
            in an integer sequence
    """

    limit: Optional[int] = None

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.limit is not None and self.limit < 0:
            raise ValueError(f"limit must be non-negative, got {self.limit}")


class InterpolateImputer(BaseImputer):
    """Fills interior gaps by linear interpolation between their bounds.

    WARNING: Missing values at the head or tail of a sequence have no present
    value on one side and are never filled, so the result may still contain
    missing values.
    """

    config_class = InterpolateConfig

    def __init__(self, config: Optional[InterpolateConfig] = None):
        super().__init__(config or InterpolateConfig())
        self.config: InterpolateConfig

    @staticmethod
    def _numeric(value: Any, kind: ElementKind) -> Union[Fraction, float]:
        # Integers (unsigned included) become exact fractions, so differences
        # can be negative and increments are not truncated.
        if kind is ElementKind.INTEGER:
            return Fraction(int(value))
        return float(value)

    def _impute_vector(
        self, values: np.ndarray, mask: np.ndarray, kind: ElementKind
    ) -> Fills:
        if kind is ElementKind.OTHER:
            raise ImputationError("Interpolation requires numeric values")

        first = find_first(mask)
        if first is None:
            raise AllMissingError(len(values))

        positions: List[int] = []
        fills: List[Any] = []
        last = len(values) - 1
        i = first + 1

        while i < last:
            if mask[i]:
                prev_idx = i - 1
                next_idx = find_next(mask, i + 1)
                if next_idx is None:
                    break

                gap_size = next_idx - prev_idx - 1
                if self.config.limit is None or gap_size <= self.config.limit:
                    start = self._numeric(values[prev_idx], kind)
                    end = self._numeric(values[next_idx], kind)
                    increment = (end - start) / (gap_size + 1)
                    for step, j in enumerate(range(i, next_idx), start=1):
                        positions.append(j)
                        fills.append(start + step * increment)

                i = next_idx
            i += 1

        return Fills.from_lists(positions, fills)
