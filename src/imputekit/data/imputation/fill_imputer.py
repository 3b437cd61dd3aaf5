"""
Fill-value imputation.

Replaces every missing value of a sequence with a single value: either a
literal, or a statistic computed from the sequence's present values.
"""

from collections import Counter
from dataclasses import dataclass
from typing import Any, Callable, Optional

import numpy as np

from imputekit.core.exceptions.data.imputation import AllMissingError
from imputekit.data.imputation.base_imputer import BaseImputer, BaseImputerConfig, Fills
from imputekit.utils.constants import ElementKind


@dataclass(frozen=True)
class FillConfig(BaseImputerConfig):
    """Configuration for fill-value imputation.

    Attributes:
        value: Literal fill value. A callable is treated as ``fn``.
        fn: Reducer called with the present values of a sequence (as floats
            for numeric sequences) returning the fill value
        rounding: Rounding mode used when the fill value must be stored in an
            integer sequence

    With neither ``value`` nor ``fn`` the mean is used for numeric sequences
    and the most frequent value (first seen on ties) for other sequences.
    """

    value: Any = None
    fn: Optional[Callable[[np.ndarray], Any]] = None

    def __post_init__(self) -> None:
        super().__post_init__()
        if callable(self.value):
            if self.fn is not None:
                raise ValueError("Specify either a callable value or fn, not both")
            object.__setattr__(self, "fn", self.value)
            object.__setattr__(self, "value", None)
        elif self.value is not None and self.fn is not None:
            raise ValueError("Specify either value or fn, not both")


def most_frequent(values: np.ndarray) -> Any:
    """Most frequent value, ties going to the value seen first."""
    return Counter(values.tolist()).most_common(1)[0][0]


class FillImputer(BaseImputer):
    """Service class for filling missing values with a single value."""

    config_class = FillConfig

    def __init__(self, config: Optional[FillConfig] = None):
        super().__init__(config or FillConfig())
        self.config: FillConfig

    def _fill_value(
        self, values: np.ndarray, mask: np.ndarray, kind: ElementKind
    ) -> Any:
        if self.config.value is not None:
            return self.config.value

        present = values[~mask]
        if present.size == 0:
            raise AllMissingError(len(values))

        numeric = kind is not ElementKind.OTHER
        if numeric:
            present = present.astype(np.float64)
        if self.config.fn is not None:
            return self.config.fn(present)
        if numeric:
            return float(np.mean(present))
        return most_frequent(present)

    def _impute_vector(
        self, values: np.ndarray, mask: np.ndarray, kind: ElementKind
    ) -> Fills:
        fill_value = self._fill_value(values, mask, kind)
        positions = np.flatnonzero(mask)
        return Fills(positions, [fill_value] * len(positions))
