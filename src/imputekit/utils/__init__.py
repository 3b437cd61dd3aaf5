# src/imputekit/utils/__init__.py
"""
Utility functions and classes for the package.
"""

from imputekit.utils.constants import Dims, KNNWeights, RoundingMode
from imputekit.utils.logging import get_logger, setup_logging
from imputekit.utils.performance import timed_execution

__all__ = [
    # Constants
    "Dims",
    "KNNWeights",
    "RoundingMode",
    # Logging
    "get_logger",
    "setup_logging",
    # Performance
    "timed_execution",
]
