"""
Imputation module for handling missing data.

This module provides the validation context, the dispatcher and the
imputation strategies for sequences, matrices and tables.
"""

from imputekit.data.imputation.base_imputer import (
    BaseImputer,
    BaseImputerConfig,
    MatrixImputer,
)
from imputekit.data.imputation.carry_imputer import LOCFImputer, NOCBImputer
from imputekit.data.imputation.context import Context
from imputekit.data.imputation.drop_imputer import DropObsImputer, DropVarsImputer
from imputekit.data.imputation.fill_imputer import FillConfig, FillImputer
from imputekit.data.imputation.interpolate_imputer import (
    InterpolateConfig,
    InterpolateImputer,
)
from imputekit.data.imputation.knn_imputer import KNNImputer, KNNImputerConfig
from imputekit.data.imputation.methods import (
    IMPUTATION_METHODS,
    create_imputer,
    impute,
)
from imputekit.data.imputation.srs_imputer import SRSConfig, SRSImputer
from imputekit.data.imputation.svd_imputer import SVDConfig, SVDImputer

__all__ = [
    "BaseImputer",
    "BaseImputerConfig",
    "MatrixImputer",
    "Context",
    "InterpolateImputer",
    "InterpolateConfig",
    "LOCFImputer",
    "NOCBImputer",
    "FillImputer",
    "FillConfig",
    "SRSImputer",
    "SRSConfig",
    "KNNImputer",
    "KNNImputerConfig",
    "SVDImputer",
    "SVDConfig",
    "DropObsImputer",
    "DropVarsImputer",
    "IMPUTATION_METHODS",
    "create_imputer",
    "impute",
]
