"""Exceptions for the imputation module."""

from typing import Optional


class ImputationError(Exception):
    """Base class for imputation-related exceptions."""

    pass


class LimitExceededError(ImputationError):
    """Raised when a sequence has more missing values than the context allows."""

    def __init__(
        self,
        count: int,
        total: int,
        limit: Optional[float] = None,
        max_missing: Optional[int] = None,
    ) -> None:
        self.count = count
        self.total = total
        self.limit = limit
        self.max_missing = max_missing
        ratio = count / total if total else 0.0
        if max_missing is not None and count > max_missing:
            message = (
                f"Missing data limit exceeded: {count} missing values "
                f"exceeds the maximum of {max_missing}"
            )
        else:
            message = (
                f"Missing data limit exceeded: {count} of {total} values "
                f"missing ({ratio:.2%}) exceeds limit {limit}"
            )
        super().__init__(message)


class AllMissingError(ImputationError):
    """Raised when a sequence has no present values to impute from."""

    def __init__(self, length: int) -> None:
        self.length = length
        super().__init__(f"All {length} values are missing, nothing to impute from")


class RoundingError(ImputationError):
    """Raised when a fractional value must be stored in an integer sequence."""

    def __init__(self, value: object, dtype: object) -> None:
        self.value = value
        self.dtype = dtype
        super().__init__(
            f"Cannot store non-integer value {value} in {dtype} sequence "
            "without a rounding mode"
        )


class StrategyNotFoundError(ImputationError):
    """Raised when an imputation strategy name is not recognised."""

    pass
