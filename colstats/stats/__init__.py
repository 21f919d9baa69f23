"""
Statistical routines over numeric columns.

This subpackage holds the computational core: confidence intervals and
hypothesis tests built on SciPy distribution lookups. All functions operate
on arrays and primitive types and return frozen result objects.

Modules:
    distributions:
        Standard normal, Student's t, F and chi-square capability objects
        exposing ``cdf``, ``sf`` and ``quantile``, plus tail-aware p-values.

    descriptive:
        Sample validation, Bessel-corrected moments and the Welch-Satterthwaite
        degrees of freedom.

    intervals:
        One- and two-sample Z and T intervals, variance-ratio and
        single-variance intervals.

    hypothesis:
        One-sample z/t tests, Welch and matched-pairs t-tests, variance
        F-test, one-way ANOVA and the simple regression F-test.

Design Principle:
    Nothing here performs I/O or holds state between calls; every routine
    validates its inputs before computing.
"""

from .distributions import (
    Distribution,
    chi_square,
    fisher_f,
    p_value,
    standard_normal,
    student_t,
)
from .hypothesis import (
    anova_1way_test,
    matched_pairs_t_test,
    one_samp_t_test,
    one_samp_z_test,
    regression_test,
    two_samp_t_test,
    variance_test,
)
from .intervals import (
    one_samp_t_interval,
    one_samp_var_interval,
    one_samp_z_interval,
    two_samp_t_interval,
    two_samp_var_interval,
    two_samp_z_interval,
)

__all__ = [
    "Distribution",
    "chi_square",
    "fisher_f",
    "p_value",
    "standard_normal",
    "student_t",
    "one_samp_z_interval",
    "two_samp_z_interval",
    "one_samp_t_interval",
    "two_samp_t_interval",
    "two_samp_var_interval",
    "one_samp_var_interval",
    "one_samp_z_test",
    "one_samp_t_test",
    "two_samp_t_test",
    "matched_pairs_t_test",
    "variance_test",
    "anova_1way_test",
    "regression_test",
]
