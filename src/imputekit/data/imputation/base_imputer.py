"""
Base imputation module for handling missing data.

This module provides the base configuration and abstract base class shared by
every imputation strategy. A strategy only computes fill values for the
missing slots of one-dimensional sequences; slicing containers into sequences
and writing the results back is left to the dispatcher.
"""

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from fractions import Fraction
from logging import Logger
from typing import Any, Dict, List, NamedTuple, Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd
from pandas.api import types as ptypes

from imputekit.core.exceptions.data.imputation import ImputationError, RoundingError
from imputekit.utils.constants import ElementKind, RoundingMode, StatisticKeys
from imputekit.utils.logging import get_logger

logger: Logger = get_logger(__name__)


@dataclass(frozen=True)
class BaseImputerConfig:
    """Base configuration for imputation strategies.

    Attributes:
        exclude_columns: Table columns to leave untouched
        include_columns: Table columns to impute (if None, all non-excluded columns)
        rounding: Rounding mode for fractional values written to integer sequences.
            When None, such a write raises RoundingError.
        verbose: Whether to log progress messages at INFO level
    """

    exclude_columns: Tuple[str, ...] = ()
    include_columns: Optional[Tuple[str, ...]] = None
    rounding: Optional[RoundingMode] = None
    verbose: bool = False

    def __post_init__(self) -> None:
        # Frozen dataclasses must stay hashable, so normalise lists to tuples
        object.__setattr__(self, "exclude_columns", tuple(self.exclude_columns))
        if self.include_columns is not None:
            object.__setattr__(self, "include_columns", tuple(self.include_columns))
        if self.rounding is not None:
            object.__setattr__(self, "rounding", RoundingMode(self.rounding))


class Fills(NamedTuple):
    """Fill values computed for one sequence.

    Attributes:
        positions: Indices of the slots being filled
        values: Value for each position, in the same order
    """

    positions: np.ndarray
    values: List[Any]

    @classmethod
    def empty(cls) -> "Fills":
        return cls(np.empty(0, dtype=np.intp), [])

    @classmethod
    def from_lists(cls, positions: Sequence[int], values: Sequence[Any]) -> "Fills":
        return cls(np.asarray(positions, dtype=np.intp), list(values))


Vector = Union[np.ndarray, pd.Series]


def as_values(data: Vector) -> np.ndarray:
    """Positional numpy view of a sequence without changing its values."""
    if isinstance(data, pd.Series):
        if isinstance(data.dtype, np.dtype):
            return data.to_numpy()
        return data.to_numpy(dtype=object)
    return np.asarray(data)


def element_kind(data: Vector, values: np.ndarray, mask: np.ndarray) -> ElementKind:
    """Classify the element type of a sequence.

    Object sequences are classified by the types of their present values.
    """
    dtype = data.dtype
    if ptypes.is_bool_dtype(dtype):
        return ElementKind.OTHER
    if ptypes.is_integer_dtype(dtype):
        return ElementKind.INTEGER
    if ptypes.is_float_dtype(dtype):
        return ElementKind.FLOATING
    if ptypes.is_object_dtype(dtype):
        inferred = ptypes.infer_dtype(values[~mask], skipna=True)
        if inferred == "integer":
            return ElementKind.INTEGER
        if inferred in ("floating", "mixed-integer-float", "decimal"):
            return ElementKind.FLOATING
    return ElementKind.OTHER


def as_float_array(values: np.ndarray, mask: np.ndarray) -> np.ndarray:
    """Float copy of a numeric sequence with NaN at the missing slots."""
    result = np.full(len(values), np.nan, dtype=np.float64)
    result[~mask] = np.asarray(values[~mask], dtype=np.float64)
    return result


def round_value(value: Union[Fraction, float], mode: RoundingMode) -> int:
    """Round a value to an integer with the given rounding mode."""
    frac = value if isinstance(value, Fraction) else Fraction(float(value))
    if mode is RoundingMode.NEAREST:
        return round(frac)
    if mode is RoundingMode.NEAREST_TIES_AWAY:
        magnitude = math.floor(abs(frac) + Fraction(1, 2))
        return magnitude if frac >= 0 else -magnitude
    if mode is RoundingMode.UP:
        return math.ceil(frac)
    if mode is RoundingMode.DOWN:
        return math.floor(frac)
    if mode is RoundingMode.TO_ZERO:
        return math.trunc(frac)
    raise ValueError(f"Unknown rounding mode: {mode}")


def to_integer(value: Any, rounding: Optional[RoundingMode], dtype: Any) -> int:
    """Convert a computed fill value for storage in an integer sequence.

    Raises:
        RoundingError: If the value is fractional and no rounding mode is set
    """
    if isinstance(value, (int, np.integer)) and not isinstance(value, bool):
        return int(value)
    if isinstance(value, Fraction):
        frac = value
    else:
        as_float = float(value)
        if not math.isfinite(as_float):
            raise ImputationError(
                f"Cannot store non-finite value {value} in {dtype} sequence"
            )
        frac = Fraction(as_float)
    if frac.denominator == 1:
        return int(frac)
    if rounding is None:
        raise RoundingError(float(frac), dtype)
    return round_value(frac, rounding)


def convert_fills(
    values: List[Any],
    kind: ElementKind,
    rounding: Optional[RoundingMode],
    dtype: Any,
) -> List[Any]:
    """Convert computed fill values so they keep the sequence's element type."""
    if kind is ElementKind.INTEGER:
        return [to_integer(v, rounding, dtype) for v in values]
    if kind is ElementKind.FLOATING:
        return [float(v) for v in values]
    return list(values)


def typed_array(values: List[Any], dtype: Any) -> Any:
    """Build an array of ``dtype`` suitable for assignment into a sequence."""
    if isinstance(dtype, np.dtype):
        if dtype == object:
            result = np.empty(len(values), dtype=object)
            for i, value in enumerate(values):
                result[i] = value
            return result
        return np.asarray(values, dtype=dtype)
    return pd.array(values, dtype=dtype)


def write_fills(data: Vector, positions: np.ndarray, values: Any) -> None:
    """Write typed fill values into a sequence in place."""
    if len(positions) == 0:
        return
    if isinstance(data, pd.Series):
        data.iloc[positions] = values
    else:
        data[positions] = values


class BaseImputer(ABC):
    """Abstract base class for imputation strategies.

    Subclasses implement :meth:`_impute_vector`, returning the fill values for
    the missing slots of one sequence. Strategies that need the whole matrix
    at once (nearest-neighbor, factorization) override :meth:`compute_fills`.
    Imputers compare equal when they share a class and an equal configuration.
    """

    config_class = BaseImputerConfig
    is_filter = False

    def __init__(self, config: Optional[BaseImputerConfig] = None):
        """Initialize the base imputer.

        Args:
            config: Configuration for imputation
        """
        self.config = config or self.config_class()
        if not isinstance(self.config, self.config_class):
            raise ImputationError(
                f"{type(self).__name__} expects a {self.config_class.__name__}, "
                f"got {type(self.config).__name__}"
            )
        self._imputation_stats: Dict[str, Any] = {}

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return self.config == other.config

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.config))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.config!r})"

    @abstractmethod
    def _impute_vector(
        self, values: np.ndarray, mask: np.ndarray, kind: ElementKind
    ) -> Fills:
        """Compute fill values for one sequence.

        Implementations must not modify ``values``. Slots that cannot be
        resolved are simply left out of the returned fills.

        Args:
            values: Positional values of the sequence
            mask: Boolean mask of missing slots
            kind: Element type of the sequence

        Returns:
            Positions and values to write
        """

    def compute_fills(
        self, sequences: List[Vector], masks: List[np.ndarray]
    ) -> List[Fills]:
        """Compute fill values for each sequence independently.

        Args:
            sequences: One-dimensional sequences (never modified here)
            masks: Missing mask of each sequence

        Returns:
            Fills for each sequence, in order
        """
        results: List[Fills] = []
        for data, mask in zip(sequences, masks):
            if not mask.any():
                results.append(Fills.empty())
                continue
            values = as_values(data)
            kind = element_kind(data, values, mask)
            results.append(self._impute_vector(values, mask, kind))
        return results

    def prepare_fills(
        self, sequences: List[Vector], masks: List[np.ndarray], fills: List[Fills]
    ) -> List[Tuple[np.ndarray, Any]]:
        """Convert computed fills to each sequence's element type.

        Every conversion happens before anything is written, so a rounding
        failure leaves the container untouched.
        """
        prepared = []
        for data, mask, fill in zip(sequences, masks, fills):
            if len(fill.positions) == 0:
                prepared.append((fill.positions, None))
                continue
            kind = element_kind(data, as_values(data), mask)
            converted = convert_fills(
                fill.values, kind, self.config.rounding, data.dtype
            )
            prepared.append((fill.positions, typed_array(converted, data.dtype)))
        return prepared

    def _log(self, message: str) -> None:
        if self.config.verbose:
            logger.info(message)
        else:
            logger.debug(message)

    def _get_columns_for_imputation(self, columns: List[Any]) -> List[Any]:
        """Get the table columns to be imputed.

        Args:
            columns: All column names of the table

        Returns:
            Column names to impute, in table order

        Raises:
            ImputationError: If a configured column does not exist
        """
        invalid_excluded = [c for c in self.config.exclude_columns if c not in columns]
        if invalid_excluded:
            raise ImputationError(
                f"Excluded columns not found in data: {invalid_excluded}"
            )
        if self.config.include_columns is not None:
            invalid_included = [
                c for c in self.config.include_columns if c not in columns
            ]
            if invalid_included:
                raise ImputationError(
                    f"Included columns not found in data: {invalid_included}"
                )
            return [
                c
                for c in columns
                if c in self.config.include_columns
                and c not in self.config.exclude_columns
            ]
        return [c for c in columns if c not in self.config.exclude_columns]

    def _collect_statistics(
        self,
        labels: List[Any],
        masks: List[np.ndarray],
        imputed: int,
    ) -> None:
        """Collect statistics about the imputation process.

        Args:
            labels: Name or index of each sequence
            masks: Missing mask of each sequence before imputation
            imputed: Number of slots that were filled
        """
        missing_by_sequence = {
            label: int(mask.sum()) for label, mask in zip(labels, masks)
        }
        missing_pct = {
            label: (float(mask.sum()) / mask.size * 100 if mask.size else 0.0)
            for label, mask in zip(labels, masks)
        }
        total_missing = sum(missing_by_sequence.values())

        self._imputation_stats = {
            StatisticKeys.TOTAL_MISSING.value: total_missing,
            StatisticKeys.MISSING_BY_SEQUENCE.value: missing_by_sequence,
            StatisticKeys.MISSING_PERCENTAGE.value: missing_pct,
            StatisticKeys.IMPUTED.value: imputed,
            StatisticKeys.REMAINING.value: total_missing - imputed,
        }

    def get_imputation_statistics(self) -> Dict[str, Any]:
        """Get statistics about the last imputation call.

        Returns:
            Dictionary containing imputation statistics
        """
        return self._imputation_stats

    def impute(
        self,
        data: Any,
        dims: Any = "cols",
        context: Any = None,
        inplace: bool = False,
    ) -> Any:
        """Impute missing values in a sequence, matrix or table.

        Args:
            data: Container with missing values
            dims: Whether rows or columns of a matrix are the imputed sequences
            context: Validation context (a default one when None)
            inplace: Write into ``data`` instead of a copy

        Returns:
            The imputed container (``data`` itself when ``inplace``)

        Raises:
            ImputationError: If validation or imputation fails
        """
        from imputekit.data.imputation import dispatcher

        if inplace:
            return dispatcher.apply(self, data, dims=dims, context=context)
        return dispatcher.impute(self, data, dims=dims, context=context)


def as_float_matrix(sequences: List[Vector], masks: List[np.ndarray]) -> np.ndarray:
    """Stack numeric sequences as the columns of a float matrix.

    Missing slots become NaN. Rows of the result are observations.

    Raises:
        ImputationError: If the sequences differ in length or are not numeric
    """
    lengths = {len(data) for data in sequences}
    if len(lengths) > 1:
        raise ImputationError(
            f"All sequences must have the same length, got lengths {sorted(lengths)}"
        )
    columns = []
    for data, mask in zip(sequences, masks):
        values = as_values(data)
        if element_kind(data, values, mask) is ElementKind.OTHER:
            raise ImputationError(
                f"Matrix imputation requires numeric values, got {data.dtype}"
            )
        columns.append(as_float_array(values, mask))
    return np.column_stack(columns)


class MatrixImputer(BaseImputer):
    """Base class for strategies that read the whole matrix at once.

    The sequences are stacked as the columns (variables) of one float matrix,
    whose rows are the observations. Fill values are computed from this
    snapshot only, never from values imputed during the same call.
    """

    @abstractmethod
    def _impute_matrix(self, matrix: np.ndarray, mask: np.ndarray) -> np.ndarray:
        """Estimate the missing entries of a matrix.

        Args:
            matrix: Observations x variables, NaN at missing entries
            mask: Boolean mask of missing entries

        Returns:
            Matrix of the same shape whose entries at ``mask`` hold the
            estimates. NaN marks an entry that could not be resolved.
        """

    def compute_fills(
        self, sequences: List[Vector], masks: List[np.ndarray]
    ) -> List[Fills]:
        if not sequences or not any(mask.any() for mask in masks):
            return [Fills.empty() for _ in sequences]

        matrix = as_float_matrix(sequences, masks)
        mask = np.column_stack(masks)
        estimates = self._impute_matrix(matrix, mask)

        results = []
        for j in range(matrix.shape[1]):
            column = estimates[:, j]
            positions = np.flatnonzero(mask[:, j] & ~np.isnan(column))
            results.append(Fills(positions, column[positions].tolist()))
        return results

    def _impute_vector(
        self, values: np.ndarray, mask: np.ndarray, kind: ElementKind
    ) -> Fills:
        if kind is ElementKind.OTHER:
            raise ImputationError("Matrix imputation requires numeric values")
        estimates = self._impute_matrix(
            as_float_array(values, mask)[:, np.newaxis], mask[:, np.newaxis]
        )[:, 0]
        positions = np.flatnonzero(mask & ~np.isnan(estimates))
        return Fills(positions, estimates[positions].tolist())
