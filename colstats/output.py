"""Collect interval and test results into tables and CSV files.

This module is the output boundary between in-memory results and exported
tabular artifacts.
"""

from __future__ import annotations

import logging
import math
import os
from typing import Mapping, Union

import pandas as pd

from .schema import IntervalResult, ResultColumns, TestResult

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_DIR = "output"
DEFAULT_RESULTS_FILENAME = "statistical_results.csv"

Result = Union[IntervalResult, TestResult]


def _format_df(df: tuple) -> str:
    return ", ".join(f"{value:g}" for value in df)


def results_to_frame(results: Mapping[str, Result]) -> pd.DataFrame:
    """Build one table row per named result.

    Args:
        results (Mapping[str, IntervalResult | TestResult]): Results keyed by
            the label to show in the ``Test`` column.

    Returns:
        pandas.DataFrame: Columns from :class:`ResultColumns`. Interval rows
        leave the statistic, p-value and df cells empty; test rows leave the
        bounds empty.

    Raises:
        TypeError: If a value is neither an interval nor a test result.
    """
    cols = ResultColumns()
    rows = []
    for label, result in results.items():
        row = {
            cols.test: label,
            cols.statistic: math.nan,
            cols.p_value: math.nan,
            cols.lower: math.nan,
            cols.upper: math.nan,
            cols.df: "",
        }
        if isinstance(result, IntervalResult):
            row[cols.lower] = result.lower
            row[cols.upper] = result.upper
        elif isinstance(result, TestResult):
            row[cols.statistic] = result.statistic
            row[cols.p_value] = result.p_value
            row[cols.df] = _format_df(result.df)
        else:
            raise TypeError(
                f"Unsupported result type for {label!r}: {type(result).__name__}"
            )
        rows.append(row)

    return pd.DataFrame(
        rows,
        columns=[cols.test, cols.statistic, cols.p_value, cols.lower, cols.upper, cols.df],
    )


def save_results_to_csv(
    results: Mapping[str, Result],
    output_dir: str = DEFAULT_OUTPUT_DIR,
    filename: str = DEFAULT_RESULTS_FILENAME,
) -> str:
    """Write :func:`results_to_frame` output to ``output_dir/filename``.

    Returns:
        str: Path of the written CSV file.
    """
    os.makedirs(output_dir, exist_ok=True)
    path = os.path.join(output_dir, filename)
    results_to_frame(results).to_csv(path, index=False)
    logger.info("Saved %d result(s) to %s", len(results), path)
    return path
