"""
Friendly names for imputation strategies.

The mapping below is read-only: strategies are chosen by name through
:func:`create_imputer`, never registered at runtime.
"""

from dataclasses import fields
from types import MappingProxyType
from typing import Any, Mapping, Optional, Type, Union

from imputekit.core.exceptions.data.imputation import (
    ImputationError,
    StrategyNotFoundError,
)
from imputekit.data.imputation.base_imputer import BaseImputer
from imputekit.data.imputation.carry_imputer import LOCFImputer, NOCBImputer
from imputekit.data.imputation.context import Context
from imputekit.data.imputation.drop_imputer import DropObsImputer, DropVarsImputer
from imputekit.data.imputation.fill_imputer import FillImputer
from imputekit.data.imputation.interpolate_imputer import InterpolateImputer
from imputekit.data.imputation.knn_imputer import KNNImputer
from imputekit.data.imputation.srs_imputer import SRSImputer
from imputekit.data.imputation.svd_imputer import SVDImputer

IMPUTATION_METHODS: Mapping[str, Type[BaseImputer]] = MappingProxyType(
    {
        "drop": DropObsImputer,
        "dropobs": DropObsImputer,
        "dropvars": DropVarsImputer,
        "interp": InterpolateImputer,
        "interpolate": InterpolateImputer,
        "fill": FillImputer,
        "locf": LOCFImputer,
        "nocb": NOCBImputer,
        "srs": SRSImputer,
        "svd": SVDImputer,
        "knn": KNNImputer,
    }
)


def create_imputer(name: str, **options: Any) -> BaseImputer:
    """Build an imputer from its friendly name and configuration options.

    Args:
        name: One of the keys of ``IMPUTATION_METHODS`` (case-insensitive)
        **options: Fields of the strategy's configuration class

    Returns:
        Configured imputer

    Raises:
        StrategyNotFoundError: If the name is unknown
        ImputationError: If an option is not accepted by the strategy
    """
    try:
        imputer_class = IMPUTATION_METHODS[name.lower()]
    except KeyError:
        raise StrategyNotFoundError(
            f"Unknown imputation method {name!r}, expected one of: "
            f"{sorted(IMPUTATION_METHODS)}"
        ) from None

    config_class = imputer_class.config_class
    accepted = {f.name for f in fields(config_class)}
    unknown = sorted(set(options) - accepted)
    if unknown:
        raise ImputationError(
            f"Invalid options for {name!r}: {unknown}, "
            f"expected any of: {sorted(accepted)}"
        )
    return imputer_class(config_class(**options))


def impute(
    data: Any,
    method: Union[str, BaseImputer],
    dims: Any = "cols",
    context: Optional[Context] = None,
    inplace: bool = False,
    **options: Any,
) -> Any:
    """Impute ``data`` with a strategy given by name or instance.

    Example:
        >>> impute(np.array([1.0, np.nan, 3.0]), "interp")
        array([1., 2., 3.])

    Args:
        data: Sequence, matrix or table with missing values
        method: Strategy name or a configured imputer
        dims: Whether rows or columns of a matrix are the imputed sequences
        context: Validation context (a default one when None)
        inplace: Write into ``data`` instead of a copy
        **options: Configuration options when ``method`` is a name

    Returns:
        The imputed container
    """
    if isinstance(method, BaseImputer):
        if options:
            raise ImputationError(
                "Options can only be given together with a method name"
            )
        imputer = method
    else:
        imputer = create_imputer(method, **options)
    return imputer.impute(data, dims=dims, context=context, inplace=inplace)
