"""
imputekit: missing value imputation for sequences, matrices and tables.
"""

from imputekit.core.exceptions.data.imputation import (
    AllMissingError,
    ImputationError,
    LimitExceededError,
    RoundingError,
    StrategyNotFoundError,
)
from imputekit.data.imputation import (
    IMPUTATION_METHODS,
    Context,
    create_imputer,
    impute,
)
from imputekit.utils.constants import Dims, RoundingMode

__version__ = "0.1.0"

__all__ = [
    "AllMissingError",
    "ImputationError",
    "LimitExceededError",
    "RoundingError",
    "StrategyNotFoundError",
    "IMPUTATION_METHODS",
    "Context",
    "Dims",
    "RoundingMode",
    "create_imputer",
    "impute",
]
