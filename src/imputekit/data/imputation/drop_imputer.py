"""
Filtering strategies for missing data.

Instead of filling missing values these strategies remove incomplete
observations or variables with too much missing data. They change the shape
of the data and therefore always return a new container.
"""

from abc import abstractmethod
from collections.abc import Mapping
from typing import Any, List

import numpy as np
import pandas as pd

from imputekit.core.exceptions.data.imputation import ImputationError
from imputekit.data.imputation.base_imputer import BaseImputer, Fills
from imputekit.data.imputation.context import Context
from imputekit.utils.constants import Dims, ElementKind, StatisticKeys


def _take(values: Any, keep: np.ndarray) -> Any:
    """Positional selection that works for lists, arrays and Series."""
    if isinstance(values, pd.Series):
        return values.iloc[keep].copy()
    if isinstance(values, np.ndarray):
        return values[keep].copy()
    if isinstance(values, list):
        return [values[i] for i in keep]
    raise ImputationError(f"Unsupported column type: {type(values).__name__}")


def _column_masks(table: Mapping, columns: List[Any], context: Context) -> np.ndarray:
    lengths = {len(table[c]) for c in table}
    if len(lengths) > 1:
        raise ImputationError(
            f"All columns must have the same length, got lengths {sorted(lengths)}"
        )
    n_rows = lengths.pop() if lengths else 0
    if not columns:
        return np.zeros((n_rows, 0), dtype=bool)
    return np.column_stack([context.missing_mask(table[c]) for c in columns])


class FilterImputer(BaseImputer):
    """Base class for strategies that remove data instead of filling it."""

    is_filter = True

    def _impute_vector(
        self, values: np.ndarray, mask: np.ndarray, kind: ElementKind
    ) -> Fills:
        raise ImputationError(
            f"{type(self).__name__} removes data and does not compute fill values"
        )

    @abstractmethod
    def filter(self, data: Any, dims: Dims, context: Context) -> Any:
        """Return a copy of ``data`` with observations or variables removed."""


class DropObsImputer(FilterImputer):
    """Removes every observation that has a missing value.

    Observations are the rows of a table. For a matrix they run along the axis
    orthogonal to ``dims``: with ``dims="cols"`` each row is an observation.
    For a single sequence the missing slots themselves are removed.
    """

    def filter(self, data: Any, dims: Dims, context: Context) -> Any:
        if isinstance(data, pd.DataFrame):
            selected = set(self._get_columns_for_imputation(list(data.columns)))
            positions = [j for j, name in enumerate(data.columns) if name in selected]
            mask = context.missing_mask(data.iloc[:, positions])
            keep = np.flatnonzero(~mask.any(axis=1))
            result = data.iloc[keep].copy()
            n_observations = data.shape[0]
        elif isinstance(data, (pd.Series, list)) or (
            isinstance(data, np.ndarray) and data.ndim == 1
        ):
            mask = context.missing_mask(data)
            keep = np.flatnonzero(~mask)
            result = _take(data, keep)
            n_observations = len(mask)
        elif isinstance(data, np.ndarray) and data.ndim == 2:
            mask = context.missing_mask(data)
            if dims is Dims.COLS:
                keep = np.flatnonzero(~mask.any(axis=1))
                result = data[keep, :].copy()
                n_observations = data.shape[0]
            else:
                keep = np.flatnonzero(~mask.any(axis=0))
                result = data[:, keep].copy()
                n_observations = data.shape[1]
        elif isinstance(data, Mapping):
            columns = self._get_columns_for_imputation(list(data.keys()))
            mask = _column_masks(data, columns, context)
            keep = np.flatnonzero(~mask.any(axis=1))
            result = {key: _take(value, keep) for key, value in data.items()}
            n_observations = mask.shape[0]
        else:
            raise ImputationError(f"Unsupported data type: {type(data).__name__}")

        dropped = n_observations - len(keep)
        self._imputation_stats = {StatisticKeys.DROPPED.value: dropped}
        self._log(f"Dropped {dropped} of {n_observations} observations")
        return result


class DropVarsImputer(FilterImputer):
    """Removes variables whose missing data exceeds the context's limit.

    Variables are the columns of a table, and the sequences selected by
    ``dims`` for a matrix. Variables within the limit are kept unchanged.
    """

    def filter(self, data: Any, dims: Dims, context: Context) -> Any:
        if isinstance(data, pd.DataFrame):
            columns = self._get_columns_for_imputation(list(data.columns))
            selected = set(columns)
            keep = []
            for j, name in enumerate(data.columns):
                if name in selected:
                    mask = context.missing_mask(data.iloc[:, j])
                    if context.exceeds(int(mask.sum()), mask.size):
                        continue
                keep.append(j)
            result = data.iloc[:, keep].copy()
            n_variables = data.shape[1]
        elif isinstance(data, np.ndarray) and data.ndim == 2:
            mask = context.missing_mask(data)
            axis = 0 if dims is Dims.COLS else 1
            counts = mask.sum(axis=axis)
            total = mask.shape[axis]
            keep = [
                i
                for i, count in enumerate(counts)
                if not context.exceeds(int(count), total)
            ]
            if dims is Dims.COLS:
                result = data[:, keep].copy()
            else:
                result = data[keep, :].copy()
            n_variables = len(counts)
        elif isinstance(data, Mapping):
            selected = set(self._get_columns_for_imputation(list(data.keys())))
            result = {}
            for key, value in data.items():
                if key in selected:
                    mask = context.missing_mask(value)
                    if context.exceeds(int(mask.sum()), mask.size):
                        continue
                result[key] = _take(value, np.arange(len(value)))
            keep = list(result)
            n_variables = len(data)
        else:
            raise ImputationError(
                "DropVarsImputer requires a matrix or a table, "
                f"got {type(data).__name__}"
            )

        dropped = n_variables - len(keep)
        self._imputation_stats = {StatisticKeys.DROPPED.value: dropped}
        self._log(f"Dropped {dropped} of {n_variables} variables")
        return result
