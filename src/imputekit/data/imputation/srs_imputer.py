"""
Simple random sampling (SRS) imputation.

Each missing value is replaced by a value drawn uniformly, with replacement,
from the present values of the same sequence. This keeps the distribution of
the sequence (mean, spread, category frequencies) roughly intact and works
for numeric and categorical data alike.
"""

from dataclasses import dataclass
from typing import Optional, Union

import numpy as np

from imputekit.core.exceptions.data.imputation import AllMissingError
from imputekit.data.imputation.base_imputer import BaseImputer, BaseImputerConfig, Fills
from imputekit.utils.constants import DEFAULT_RANDOM_STATE, ElementKind


@dataclass(frozen=True)
class SRSConfig(BaseImputerConfig):
    """Configuration for simple random sampling.

    Attributes:
        random_state: Seed or numpy Generator used for sampling
    """

    random_state: Optional[Union[int, np.random.Generator]] = DEFAULT_RANDOM_STATE


class SRSImputer(BaseImputer):
    """Service class for simple random sampling imputation.

    The random generator is created once per imputer, so two imputers built
    from the same seed produce the same draws.
    """

    config_class = SRSConfig

    def __init__(self, config: Optional[SRSConfig] = None):
        super().__init__(config or SRSConfig())
        self.config: SRSConfig
        self._rng = np.random.default_rng(self.config.random_state)

    def _impute_vector(
        self, values: np.ndarray, mask: np.ndarray, kind: ElementKind
    ) -> Fills:
        present = values[~mask]
        if present.size == 0:
            raise AllMissingError(len(values))

        positions = np.flatnonzero(mask)
        picks = self._rng.integers(0, present.size, size=positions.size)
        return Fills(positions, [present[p] for p in picks])
