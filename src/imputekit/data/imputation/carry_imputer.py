"""
Observation carrying imputation.

Last observation carried forward (LOCF) and next observation carried backward
(NOCB) for sequences of any element type.
"""

from typing import Any, Iterable, List

import numpy as np

from imputekit.core.exceptions.data.imputation import AllMissingError
from imputekit.data.imputation.base_imputer import BaseImputer, Fills
from imputekit.utils.constants import ElementKind


def _carry(values: np.ndarray, mask: np.ndarray, order: Iterable[int]) -> Fills:
    if mask.all():
        raise AllMissingError(len(values))

    positions: List[int] = []
    fills: List[Any] = []
    seen = False
    carried: Any = None
    for i in order:
        if not mask[i]:
            carried = values[i]
            seen = True
        elif seen:
            positions.append(i)
            fills.append(carried)
    return Fills.from_lists(positions, fills)


class LOCFImputer(BaseImputer):
    """Fills each missing value with the last present value before it.

    A leading run of missing values has nothing to carry and stays missing.
    """

    def _impute_vector(
        self, values: np.ndarray, mask: np.ndarray, kind: ElementKind
    ) -> Fills:
        return _carry(values, mask, range(len(values)))


class NOCBImputer(BaseImputer):
    """Fills each missing value with the next present value after it.

    A trailing run of missing values has nothing to carry and stays missing.
    """

    def _impute_vector(
        self, values: np.ndarray, mask: np.ndarray, kind: ElementKind
    ) -> Fills:
        return _carry(values, mask, range(len(values) - 1, -1, -1))
