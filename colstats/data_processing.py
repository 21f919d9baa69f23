"""
Converts raw columns (lists, arrays, Series, CSV tables) into numeric samples.
"""

# Coercion summary: every cell goes through ``pandas.to_numeric`` with
# ``errors="coerce"``; cells that end up missing are dropped with a warning,
# infinite values are kept so the statistical routines can reject them.

import logging
from typing import Iterable, List, Mapping

import numpy as np
import pandas as pd

from .errors import InvalidParameterError

logger = logging.getLogger(__name__)


def column_to_sample(values, name=None):
    """Convert a raw column into a 1-D float array of its numeric cells.

    Strings that parse as numbers are kept; ``None``, empty cells, NaN and
    non-numeric entries are dropped. The original order of the remaining
    values is preserved.

    Args:
        values: List, tuple, :class:`numpy.ndarray` or :class:`pandas.Series`.
        name: Column label used in log messages. Defaults to the Series name.

    Returns:
        numpy.ndarray: Numeric values as ``float64``.
    """

    if isinstance(values, pd.Series):
        series = values
        label = name if name is not None else values.name
    else:
        arr = np.asarray(values, dtype=object)
        if arr.ndim != 1:
            raise InvalidParameterError(
                f"Column {name!r} must be one-dimensional, got shape {arr.shape}."
            )
        series = pd.Series(arr)
        label = name

    numeric = pd.to_numeric(series, errors="coerce").astype(float)
    missing = numeric.isna()
    n_dropped = int(missing.sum())
    if n_dropped:
        logger.warning(
            "Column %r: dropped %d missing or non-numeric value(s) of %d",
            label if label is not None else "<unnamed>",
            n_dropped,
            len(numeric),
        )
    return numeric[~missing].to_numpy(dtype=float)


def columns_to_groups(columns):
    """Convert nested columns into a list of samples for ANOVA.

    Args:
        columns: Iterable of columns, or a mapping of group label to column.
            Mappings keep their insertion order.

    Returns:
        list[numpy.ndarray]: One numeric sample per group.
    """

    if isinstance(columns, pd.DataFrame):
        return [column_to_sample(columns[col], name=str(col)) for col in columns.columns]
    if isinstance(columns, Mapping):
        return [column_to_sample(col, name=str(key)) for key, col in columns.items()]
    return [
        column_to_sample(col, name=f"group {idx}") for idx, col in enumerate(columns)
    ]


def subtract_columns(column1, column2):
    """Element-wise ``column1 - column2`` for paired numeric columns.

    Pairs with a missing value on either side are dropped together so the
    remaining differences stay aligned.
    """

    a = pd.to_numeric(pd.Series(np.asarray(column1, dtype=object)), errors="coerce")
    b = pd.to_numeric(pd.Series(np.asarray(column2, dtype=object)), errors="coerce")
    if len(a) != len(b):
        raise InvalidParameterError(
            f"Paired columns must have equal length, got {len(a)} and {len(b)}."
        )
    diff = (a.astype(float) - b.astype(float)).reset_index(drop=True)
    return column_to_sample(diff, name="difference")


def load_columns(filepath):
    """
    Load a table of numeric columns from a CSV file.

    Args:
        filepath (str): Path to the CSV file.

    Returns:
        pd.DataFrame: Loaded DataFrame.
    """
    return pd.read_csv(filepath)


def select_columns(df: pd.DataFrame, names: Iterable[str]) -> List[np.ndarray]:
    """Return numeric samples for the named DataFrame columns, in order."""
    names = list(names)
    missing = [name for name in names if name not in df.columns]
    if missing:
        raise KeyError(f"Columns not found in table: {missing}")
    return [column_to_sample(df[name], name=name) for name in names]


def groups_from_long_form(
    df: pd.DataFrame, group_col: str, value_col: str
) -> List[np.ndarray]:
    """Split a long-form table into per-group samples.

    Args:
        df: Table with one row per observation.
        group_col: Column holding the group label.
        value_col: Column holding the numeric response.

    Returns:
        list[numpy.ndarray]: Samples ordered by sorted group label. Rows with
        a missing group label are ignored.
    """
    for col in (group_col, value_col):
        if col not in df.columns:
            raise KeyError(f"Column '{col}' not found in table.")

    groups = []
    for label, grp in df.dropna(subset=[group_col]).groupby(group_col, sort=True):
        groups.append(column_to_sample(grp[value_col], name=f"{value_col}[{label}]"))
    return groups
