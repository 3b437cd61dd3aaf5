"""
Dispatching of imputation strategies over containers.

The dispatcher slices a container into one-dimensional sequences, validates
every sequence against the context, asks the strategy for fill values and
finally writes all of them back in a single pass. Supported containers are
1-D numpy arrays, lists, pandas Series, 2-D numpy arrays (matrices), pandas
DataFrames and mappings of names to sequences (tables).
"""

import copy
from collections.abc import Mapping, MutableMapping
from logging import Logger
from typing import Any, Callable, List, Optional

import numpy as np
import pandas as pd

from imputekit.core.exceptions.data.imputation import ImputationError
from imputekit.data.imputation.base_imputer import BaseImputer, write_fills
from imputekit.data.imputation.context import Context
from imputekit.utils.constants import Dims
from imputekit.utils.logging import get_logger
from imputekit.utils.performance import timed_execution


logger: Logger = get_logger(__name__)


class SequenceSlot:
    """One imputable sequence of a container.

    Attributes:
        label: Column name or row/column index of the sequence
        data: Mutable 1-D array or Series the fills are written into
        commit: Callback propagating ``data`` back into the container, for
            containers that cannot be mutated through a view
    """

    def __init__(
        self,
        label: Any,
        data: Any,
        commit: Optional[Callable[[Any], None]] = None,
    ) -> None:
        self.label = label
        self.data = data
        self._commit = commit

    def commit(self) -> None:
        if self._commit is not None:
            self._commit(self.data)


def _list_slot(label: Any, values: list) -> SequenceSlot:
    """Slot for a Python list, imputed through an object array copy."""
    array = np.empty(len(values), dtype=object)
    for i, value in enumerate(values):
        array[i] = value

    def commit(data: np.ndarray) -> None:
        values[:] = data.tolist()

    return SequenceSlot(label, array, commit)


def _table_slot(table: MutableMapping, key: Any) -> SequenceSlot:
    value = table[key]
    if isinstance(value, list):
        return _list_slot(key, value)
    if isinstance(value, pd.Series):
        return SequenceSlot(key, value)
    if isinstance(value, np.ndarray) and value.ndim == 1:
        return SequenceSlot(key, value)
    raise ImputationError(
        f"Column {key!r} must be a list, 1-D array or Series, "
        f"got {type(value).__name__}"
    )


def _frame_slot(frame: pd.DataFrame, position: int) -> SequenceSlot:
    # Column views are not writable under copy-on-write
    column = frame.iloc[:, position].copy()

    def commit(data: pd.Series) -> None:
        frame.isetitem(position, data)

    return SequenceSlot(frame.columns[position], column, commit)


def sequence_slots(data: Any, dims: Dims, imputer: BaseImputer) -> List[SequenceSlot]:
    """Slice a container into the sequences a strategy is applied to.

    Args:
        data: Container to slice
        dims: Which matrix axis forms the sequences
        imputer: Imputer whose configuration selects table columns

    Returns:
        Slots in container order

    Raises:
        ImputationError: If the container type is not supported
    """
    if isinstance(data, pd.DataFrame):
        selected = set(imputer._get_columns_for_imputation(list(data.columns)))
        return [
            _frame_slot(data, j)
            for j, name in enumerate(data.columns)
            if name in selected
        ]
    if isinstance(data, pd.Series):
        return [SequenceSlot(data.name, data)]
    if isinstance(data, np.ndarray):
        if data.ndim == 1:
            return [SequenceSlot(0, data)]
        if data.ndim == 2:
            if dims is Dims.COLS:
                return [SequenceSlot(j, data[:, j]) for j in range(data.shape[1])]
            return [SequenceSlot(i, data[i, :]) for i in range(data.shape[0])]
        raise ImputationError(
            f"Only 1-D and 2-D arrays can be imputed, got {data.ndim}-D"
        )
    if isinstance(data, list):
        return [_list_slot(0, data)]
    if isinstance(data, MutableMapping):
        columns = imputer._get_columns_for_imputation(list(data.keys()))
        return [_table_slot(data, key) for key in columns]
    raise ImputationError(f"Unsupported data type: {type(data).__name__}")


def copy_container(data: Any) -> Any:
    """Copy a container so that imputing the copy leaves ``data`` untouched."""
    if isinstance(data, (pd.DataFrame, pd.Series, np.ndarray)):
        return data.copy()
    if isinstance(data, list):
        return list(data)
    if isinstance(data, Mapping):
        return {key: copy_container(value) for key, value in data.items()}
    return copy.deepcopy(data)


def _validate_sequences(
    slots: List[SequenceSlot], context: Context
) -> List[np.ndarray]:
    masks = []
    for slot in slots:
        mask = context.missing_mask(slot.data)
        context.check(mask)
        masks.append(mask)
    return masks


@timed_execution
def apply(
    imputer: BaseImputer,
    data: Any,
    dims: Any = Dims.COLS,
    context: Optional[Context] = None,
) -> Any:
    """Impute ``data`` in place.

    Args:
        imputer: Strategy to apply
        data: Container to impute; it is modified
        dims: Whether rows or columns of a matrix are the imputed sequences
        context: Validation context (a default one when None)

    Returns:
        ``data`` itself

    Raises:
        LimitExceededError: If a sequence has too many missing values; the
            container is left unchanged
        ImputationError: If imputation fails
    """
    if imputer.is_filter:
        raise ImputationError(
            f"{type(imputer).__name__} changes the shape of the data and "
            "cannot be applied in place"
        )
    context = context or Context()
    dims = Dims.parse(dims)

    try:
        slots = sequence_slots(data, dims, imputer)
        masks = _validate_sequences(slots, context)
        sequences = [slot.data for slot in slots]

        fills = imputer.compute_fills(sequences, masks)
        prepared = imputer.prepare_fills(sequences, masks, fills)

        imputed = 0
        for slot, (positions, values) in zip(slots, prepared):
            if len(positions):
                write_fills(slot.data, positions, values)
                slot.commit()
                imputed += len(positions)

        imputer._collect_statistics([slot.label for slot in slots], masks, imputed)
    except ImputationError:
        raise
    except Exception as e:
        raise ImputationError(f"Imputation failed: {str(e)}") from e

    stats = imputer.get_imputation_statistics()
    imputer._log(
        f"{type(imputer).__name__} imputed {imputed} of "
        f"{stats['total_missing_values']} missing values across "
        f"{len(slots)} sequences"
    )
    if stats["remaining_missing_values"]:
        logger.warning(
            f"{stats['remaining_missing_values']} missing values remain after "
            f"{type(imputer).__name__} imputation"
        )
    return data


def impute(
    imputer: BaseImputer,
    data: Any,
    dims: Any = Dims.COLS,
    context: Optional[Context] = None,
) -> Any:
    """Impute a copy of ``data``, leaving the caller's container untouched.

    Filter strategies, which remove observations or variables, are only
    available through this entry point.

    Returns:
        The imputed copy
    """
    if imputer.is_filter:
        context = context or Context()
        dims = Dims.parse(dims)
        try:
            return imputer.filter(data, dims, context)
        except ImputationError:
            raise
        except Exception as e:
            raise ImputationError(f"Imputation failed: {str(e)}") from e
    return apply(imputer, copy_container(data), dims=dims, context=context)


