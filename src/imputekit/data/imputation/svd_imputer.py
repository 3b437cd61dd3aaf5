"""
Low-rank (SVD) imputation.

Missing entries are first set to their variable's mean. The matrix is then
repeatedly replaced by its truncated SVD reconstruction at the missing
entries only, until the imputed entries stop changing or the iteration budget
runs out.
"""

from dataclasses import dataclass
from logging import Logger
from typing import Optional, Tuple

import numpy as np

from imputekit.core.exceptions.data.imputation import AllMissingError
from imputekit.data.imputation.base_imputer import BaseImputerConfig, MatrixImputer
from imputekit.utils.constants import DEFAULT_SVD_MAX_ITERATIONS, DEFAULT_SVD_TOLERANCE
from imputekit.utils.logging import get_logger

logger: Logger = get_logger(__name__)


@dataclass(frozen=True)
class SVDConfig(BaseImputerConfig):
    """Configuration for SVD imputation.

    Attributes:
        rank: Number of singular values kept. None uses half of the smaller
            matrix dimension (at least 1).
        tol: Relative change of the imputed entries below which iteration stops
        max_iterations: Maximum number of reconstruction rounds
        limits: Optional (low, high) bounds the estimates are clipped to
    """

    rank: Optional[int] = None
    tol: float = DEFAULT_SVD_TOLERANCE
    max_iterations: int = DEFAULT_SVD_MAX_ITERATIONS
    limits: Optional[Tuple[float, float]] = None

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.rank is not None and self.rank < 1:
            raise ValueError(f"rank must be at least 1, got {self.rank}")
        if self.max_iterations < 1:
            raise ValueError(
                f"max_iterations must be at least 1, got {self.max_iterations}"
            )
        if self.limits is not None:
            object.__setattr__(self, "limits", tuple(self.limits))


class SVDImputer(MatrixImputer):
    """Service class for iterative low-rank SVD imputation."""

    config_class = SVDConfig

    def __init__(self, config: Optional[SVDConfig] = None):
        super().__init__(config or SVDConfig())
        self.config: SVDConfig

    def _rank(self, shape: Tuple[int, int]) -> int:
        smallest = min(shape)
        if self.config.rank is None:
            return max(1, smallest // 2)
        return min(self.config.rank, smallest)

    def _impute_matrix(self, matrix: np.ndarray, mask: np.ndarray) -> np.ndarray:
        empty = np.flatnonzero(mask.all(axis=0))
        if empty.size:
            raise AllMissingError(matrix.shape[0])

        means = np.nanmean(matrix, axis=0)
        filled = np.where(mask, means[np.newaxis, :], matrix)
        rank = self._rank(filled.shape)
        previous = filled[mask]

        converged = False
        for iteration in range(1, self.config.max_iterations + 1):
            u, s, vt = np.linalg.svd(filled, full_matrices=False)
            approximation = (u[:, :rank] * s[:rank]) @ vt[:rank]
            if self.config.limits is not None:
                np.clip(approximation, *self.config.limits, out=approximation)

            current = approximation[mask]
            filled[mask] = current

            scale = np.linalg.norm(previous)
            change = np.linalg.norm(current - previous)
            if scale > 0:
                change /= scale
            previous = current
            if change < self.config.tol:
                converged = True
                break

        if converged:
            self._log(f"SVD converged after {iteration} iterations (rank {rank})")
        else:
            logger.warning(
                f"SVD did not converge within {self.config.max_iterations} "
                f"iterations (last relative change {change:.3g})"
            )

        estimates = np.full(matrix.shape, np.nan)
        estimates[mask] = filled[mask]
        return estimates
