# scripts/impute_table.py
"""
Imputation script for tabular data.

Reads a CSV file, imputes its missing values with one of the named
strategies and writes the result next to the input (or to --output).

Example:
    python scripts/impute_table.py -i scores.csv -m knn -k 3 --limit 0.4
"""

import argparse
import sys
from pathlib import Path
from typing import Any, Dict

import pandas as pd

from imputekit import Context, ImputationError, create_imputer
from imputekit.data.imputation import IMPUTATION_METHODS
from imputekit.utils.constants import (
    DEFAULT_MISSING_LIMIT,
    DEFAULT_N_NEIGHBORS,
    DEFAULT_RANDOM_STATE,
    RoundingMode,
)
from imputekit.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)

FILTER_METHODS = ("drop", "dropobs", "dropvars")


def parse_args(argv=None):
    """Parse command line arguments.

    Args:
        argv: Argument list (defaults to ``sys.argv[1:]``)

    Returns:
        Parsed command line arguments
    """
    parser = argparse.ArgumentParser(
        description="Fill or drop missing values in a CSV table"
    )
    parser.add_argument("--input", "-i", required=True, help="CSV file to read")
    parser.add_argument(
        "--output", "-o", help="CSV file to write (default: <input>_imputed.csv)"
    )
    parser.add_argument(
        "--method",
        "-m",
        choices=sorted(IMPUTATION_METHODS),
        default="interp",
        help="Imputation strategy (default: interp)",
    )
    parser.add_argument(
        "--limit",
        type=float,
        default=DEFAULT_MISSING_LIMIT,
        help="Largest allowed fraction of missing values per column",
    )
    parser.add_argument(
        "--gap-limit", type=int, help="Longest run filled by interpolation"
    )
    parser.add_argument(
        "--rounding",
        choices=[mode.value for mode in RoundingMode],
        help="How fractional fills are stored in integer columns",
    )
    parser.add_argument(
        "--neighbors",
        "-k",
        type=int,
        default=DEFAULT_N_NEIGHBORS,
        help="Neighbors used by knn",
    )
    parser.add_argument(
        "--exclude", "-e", nargs="+", default=[], help="Columns left untouched"
    )
    parser.add_argument("--include", nargs="+", help="Only impute these columns")
    parser.add_argument(
        "--random-state",
        type=int,
        default=DEFAULT_RANDOM_STATE,
        help="Seed used by srs",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Log progress")
    return parser.parse_args(argv)


def build_options(args) -> Dict[str, Any]:
    """Collect the configuration options accepted by the chosen method."""
    options: Dict[str, Any] = {
        "exclude_columns": args.exclude,
        "include_columns": args.include,
        "verbose": args.verbose,
    }
    if args.rounding and args.method not in FILTER_METHODS:
        options["rounding"] = args.rounding
    if args.method in ("interp", "interpolate") and args.gap_limit is not None:
        options["limit"] = args.gap_limit
    if args.method == "knn":
        options["k"] = args.neighbors
    if args.method == "srs":
        options["random_state"] = args.random_state
    return options


def default_output(input_path: str) -> str:
    path = Path(input_path)
    return str(path.with_name(f"{path.stem}_imputed{path.suffix}"))


def report(imputer, before: pd.DataFrame, after: pd.DataFrame) -> None:
    """Log what the imputation changed."""
    remaining = int(after.isna().sum().sum())
    if remaining:
        logger.warning(f"{remaining} cells are still missing")
    for key, value in imputer.get_imputation_statistics().items():
        if not isinstance(value, dict):
            logger.info(f"{key}: {value}")
    if after.shape != before.shape:
        logger.info(f"Shape changed from {before.shape} to {after.shape}")


def main(argv=None) -> int:
    """Run the imputation script and return its exit code."""
    args = parse_args(argv)
    setup_logging("DEBUG" if args.verbose else "INFO")
    output = args.output or default_output(args.input)

    try:
        table = pd.read_csv(args.input)
    except (OSError, pd.errors.ParserError) as e:
        logger.error(f"Could not read {args.input}: {e}")
        return 1
    logger.info(f"Read {args.input} with {table.shape[0]} rows, {table.shape[1]} columns")

    try:
        imputer = create_imputer(args.method, **build_options(args))
        result = imputer.impute(table, context=Context(limit=args.limit))
    except (ImputationError, ValueError) as e:
        logger.error(f"{args.method} imputation failed: {e}")
        return 1

    report(imputer, table, result)
    result.to_csv(output, index=False)
    logger.info(f"Wrote {output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
