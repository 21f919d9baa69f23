"""
A Python package of confidence intervals and hypothesis tests for numeric columns.

Computes Z/T intervals, variance-ratio intervals, mean and variance tests,
one-way ANOVA and the simple linear-regression F-test.

Modules:
    - stats: Statistical routines and reference distributions.
    - data_processing: Coerces raw columns and CSV tables into numeric samples.
    - output: Collects results into tables and CSV files.
    - schema: Result containers, tail selectors and column labels.
    - errors: Exception hierarchy for invalid input.
"""

__version__ = "1.0.0"

from .data_processing import (
    column_to_sample,
    columns_to_groups,
    groups_from_long_form,
    load_columns,
    select_columns,
    subtract_columns,
)
from .errors import (
    DegenerateInputError,
    InsufficientDataError,
    InvalidParameterError,
    NonFiniteInputError,
    StatisticsError,
)
from .output import results_to_frame, save_results_to_csv
from .schema import IntervalResult, RegressionResult, Tail, TestResult
from .stats import (
    anova_1way_test,
    matched_pairs_t_test,
    one_samp_t_interval,
    one_samp_t_test,
    one_samp_var_interval,
    one_samp_z_interval,
    one_samp_z_test,
    regression_test,
    two_samp_t_interval,
    two_samp_t_test,
    two_samp_var_interval,
    two_samp_z_interval,
    variance_test,
)

__all__ = [
    # Confidence intervals
    "one_samp_z_interval",
    "two_samp_z_interval",
    "one_samp_t_interval",
    "two_samp_t_interval",
    "two_samp_var_interval",
    "one_samp_var_interval",
    # Hypothesis tests
    "one_samp_z_test",
    "one_samp_t_test",
    "two_samp_t_test",
    "matched_pairs_t_test",
    "variance_test",
    "anova_1way_test",
    "regression_test",
    # Results
    "IntervalResult",
    "TestResult",
    "RegressionResult",
    "Tail",
    # Errors
    "StatisticsError",
    "InsufficientDataError",
    "DegenerateInputError",
    "InvalidParameterError",
    "NonFiniteInputError",
    # Data processing
    "column_to_sample",
    "columns_to_groups",
    "subtract_columns",
    "load_columns",
    "select_columns",
    "groups_from_long_form",
    # Output
    "results_to_frame",
    "save_results_to_csv",
]
