"""
K-Nearest Neighbors imputation.

This module fills each missing entry of a matrix with a weighted combination
of the same variable in the k nearest observations. Distances are computed
with sklearn's ``nan_euclidean_distances``, which only uses the dimensions
present in both observations.
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np
from sklearn.metrics.pairwise import nan_euclidean_distances

from imputekit.data.imputation.base_imputer import BaseImputerConfig, MatrixImputer
from imputekit.utils.constants import DEFAULT_N_NEIGHBORS, KNNWeights


@dataclass(frozen=True)
class KNNImputerConfig(BaseImputerConfig):
    """Configuration for KNN imputation.

    Attributes:
        k: Number of neighbors contributing to each fill
        weights: Weight function used in prediction ('uniform', 'distance')
        rounding: Rounding mode used when a fill must be stored in an integer
            sequence
        exclude_columns: List of columns to exclude from imputation
        include_columns: List of columns to include in imputation
        verbose: Whether to log progress messages
    """

    k: int = DEFAULT_N_NEIGHBORS
    weights: KNNWeights = KNNWeights.DISTANCE

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.k < 1:
            raise ValueError(f"k must be at least 1, got {self.k}")
        object.__setattr__(self, "weights", KNNWeights(self.weights))


class KNNImputer(MatrixImputer):
    """Nearest-neighbor imputation over the observations of a matrix.

    Sequences are the variables; the other axis holds the observations. An
    entry is only filled from donors that have the variable present and share
    at least one present dimension with the observation being imputed.
    Donors at equal distance are taken in input order. An entry with no
    donor stays missing.
    """

    config_class = KNNImputerConfig

    def __init__(self, config: Optional[KNNImputerConfig] = None):
        """Initialize the KNN imputer.

        Args:
            config: Configuration for KNN imputation
        """
        super().__init__(config or KNNImputerConfig())
        self.config: KNNImputerConfig

    def _neighbor_weights(self, distances: np.ndarray) -> np.ndarray:
        if self.config.weights is KNNWeights.UNIFORM:
            return np.ones_like(distances)
        exact = distances == 0
        if exact.any():
            # Exact matches take all the weight
            return exact.astype(np.float64)
        return 1.0 / distances

    def _impute_matrix(self, matrix: np.ndarray, mask: np.ndarray) -> np.ndarray:
        distances = nan_euclidean_distances(matrix, matrix)
        estimates = np.full(matrix.shape, np.nan)

        for i in np.flatnonzero(mask.any(axis=1)):
            row_distances = distances[i]
            for j in np.flatnonzero(mask[i]):
                donors = np.flatnonzero(~mask[:, j] & ~np.isnan(row_distances))
                donors = donors[donors != i]
                if donors.size == 0:
                    continue

                order = np.argsort(row_distances[donors], kind="stable")
                nearest = donors[order[: self.config.k]]
                weights = self._neighbor_weights(row_distances[nearest])
                estimates[i, j] = np.average(matrix[nearest, j], weights=weights)

        self._log(
            f"KNN estimated {int((~np.isnan(estimates[mask])).sum())} of "
            f"{int(mask.sum())} missing entries"
        )
        return estimates
