"""Hypothesis tests returning a statistic with its p-value.

Mean tests (z, t, Welch, matched pairs) and the variance F-test accept a tail
selector; one-way ANOVA and the regression F-test are upper-tailed by
construction.
"""

from __future__ import annotations

import logging
import math
from typing import Iterable, Union

import numpy as np

from colstats.errors import (
    DegenerateInputError,
    InsufficientDataError,
    InvalidParameterError,
)
from colstats.schema import RegressionResult, Tail, TestResult
from colstats.stats.descriptive import (
    DEFAULT_TAIL,
    MIN_REGRESSION_SIZE,
    ArrayLike,
    as_groups,
    as_sample,
    check_finite,
    is_constant,
    require_finite_result,
    require_spread,
    resolve_tail,
    sample_mean,
    sample_variance,
    standard_error,
    welch_df,
)
from colstats.stats.distributions import (
    Distribution,
    fisher_f,
    p_value,
    standard_normal,
    student_t,
)

logger = logging.getLogger(__name__)

TailLike = Union[str, Tail]


def _one_sample_statistic(sample: ArrayLike, mu0: float) -> tuple[float, int]:
    x = as_sample(sample)
    require_spread(x)
    statistic = (sample_mean(x) - mu0) / standard_error(x)
    return require_finite_result(statistic, "Test statistic"), x.size


def _result(dist: Distribution, statistic: float, tail: Tail) -> TestResult:
    return TestResult(
        statistic=float(statistic),
        p_value=p_value(dist, statistic, tail),
        df=dist.params,
    )


def one_samp_z_test(
    sample: ArrayLike, tails: TailLike = DEFAULT_TAIL, mu0: float = 0.0
) -> TestResult:
    """One-sample z-test of ``H0: mu = mu0`` using the sample standard deviation.

    Args:
        sample: Observations, at least two.
        tails: ``"two-sided"``, ``"less"`` or ``"greater"``.
        mu0: Hypothesized population mean.

    Returns:
        TestResult: ``z = (mean - mu0) / (s / sqrt(n))`` and its standard
        normal p-value.
    """
    tail = resolve_tail(tails)
    mu0 = check_finite(mu0, "mu0")
    z, n = _one_sample_statistic(sample, mu0)
    logger.debug("one_samp_z_test: n=%d z=%g tail=%s", n, z, tail.value)
    return _result(standard_normal(), z, tail)


def one_samp_t_test(
    sample: ArrayLike, tails: TailLike = DEFAULT_TAIL, mu0: float = 0.0
) -> TestResult:
    """One-sample t-test of ``H0: mu = mu0`` with ``n - 1`` degrees of freedom."""
    tail = resolve_tail(tails)
    mu0 = check_finite(mu0, "mu0")
    t_stat, n = _one_sample_statistic(sample, mu0)
    logger.debug("one_samp_t_test: n=%d t=%g tail=%s", n, t_stat, tail.value)
    return _result(student_t(n - 1), t_stat, tail)


def two_samp_t_test(
    sample1: ArrayLike,
    sample2: ArrayLike,
    delta0: float = 0.0,
    tails: TailLike = DEFAULT_TAIL,
) -> TestResult:
    """Welch two-sample t-test of ``H0: mu1 - mu2 = delta0``.

    Variances are not pooled; degrees of freedom use the Welch-Satterthwaite
    approximation.
    """
    tail = resolve_tail(tails)
    delta0 = check_finite(delta0, "delta0")
    x1 = as_sample(sample1, name="sample1")
    x2 = as_sample(sample2, name="sample2")
    var1 = sample_variance(x1)
    var2 = sample_variance(x2)
    se = math.sqrt(var1 / x1.size + var2 / x2.size)
    if se == 0:
        raise DegenerateInputError(
            "Both samples have zero variance; the test statistic is undefined."
        )

    t_stat = require_finite_result(
        (sample_mean(x1) - sample_mean(x2) - delta0) / se, "Test statistic"
    )
    df = welch_df(var1, x1.size, var2, x2.size)
    logger.debug("two_samp_t_test: t=%g df=%g tail=%s", t_stat, df, tail.value)
    return _result(student_t(df), t_stat, tail)


def matched_pairs_t_test(
    sample1: ArrayLike,
    sample2: ArrayLike,
    delta0: float = 0.0,
    tails: TailLike = DEFAULT_TAIL,
) -> TestResult:
    """Paired t-test on the differences ``sample1 - sample2``.

    Raises:
        InvalidParameterError: If the samples differ in length.
    """
    x1 = as_sample(sample1, name="sample1")
    x2 = as_sample(sample2, name="sample2")
    if x1.size != x2.size:
        raise InvalidParameterError(
            f"Paired samples must have equal length, got {x1.size} and {x2.size}."
        )
    return one_samp_t_test(x1 - x2, tails=tails, mu0=delta0)


def variance_test(
    sample1: ArrayLike, sample2: ArrayLike, tails: TailLike = DEFAULT_TAIL
) -> TestResult:
    """F-test for equality of two variances.

    Args:
        sample1: First sample, at least two observations.
        sample2: Second sample, at least two observations.
        tails: Alternative hypothesis for ``sigma1^2 / sigma2^2`` versus 1.

    Returns:
        TestResult: ``F = var1 / var2`` with ``F(n1 - 1, n2 - 1)`` p-value.
        The two-sided p-value is twice the smaller tail, capped at 1.

    Raises:
        DegenerateInputError: If either sample is constant.
    """
    tail = resolve_tail(tails)
    x1 = as_sample(sample1, name="sample1")
    x2 = as_sample(sample2, name="sample2")
    require_spread(x1, name="sample1")
    require_spread(x2, name="sample2")

    f_stat = require_finite_result(
        sample_variance(x1) / sample_variance(x2), "Variance ratio"
    )
    logger.debug("variance_test: F=%g tail=%s", f_stat, tail.value)
    return _result(fisher_f(x1.size - 1, x2.size - 1), f_stat, tail)


def anova_1way_test(groups: Iterable[ArrayLike]) -> TestResult:
    """One-way analysis of variance across ``k`` groups.

    Groups may differ in size. The between-group sum of squares weights each
    group mean's squared deviation from the grand mean by the group size.

    Args:
        groups: Collection of at least two non-empty samples.

    Returns:
        TestResult: ``F = (SSB / (k - 1)) / (SSW / (N - k))`` and its
        upper-tail p-value.

    Raises:
        InsufficientDataError: If fewer than two groups or ``N <= k``.
        DegenerateInputError: If every group is constant (``SSW == 0``).
    """
    samples = as_groups(groups)
    k = len(samples)
    n_total = int(sum(g.size for g in samples))
    df_between = k - 1
    df_within = n_total - k
    if df_within <= 0:
        raise InsufficientDataError(
            f"ANOVA needs more observations than groups, got N={n_total} for k={k}."
        )

    grand_mean = sample_mean(np.concatenate(samples))
    means = np.array([sample_mean(g) for g in samples])
    sizes = np.array([g.size for g in samples], dtype=float)
    ss_between = require_finite_result(
        float(np.sum(sizes * np.square(means - grand_mean))), "Between-group SS"
    )
    # constant groups contribute exactly zero
    ss_within = require_finite_result(
        float(sum((g.size - 1) * sample_variance(g) for g in samples)),
        "Within-group SS",
    )
    if ss_within == 0:
        raise DegenerateInputError(
            "Within-group sum of squares is zero; the F statistic is undefined."
        )

    f_stat = require_finite_result(
        (ss_between / df_between) / (ss_within / df_within), "F statistic"
    )
    logger.debug(
        "anova_1way_test: k=%d N=%d SSB=%g SSW=%g F=%g",
        k,
        n_total,
        ss_between,
        ss_within,
        f_stat,
    )
    return _result(fisher_f(df_between, df_within), f_stat, Tail.GREATER)


def regression_test(x: ArrayLike, y: ArrayLike) -> RegressionResult:
    """F-test for the slope of a simple least-squares regression of ``y`` on ``x``.

    A perfect fit (zero residual sum of squares) yields ``F = inf`` and
    ``p = 0``.

    Raises:
        InsufficientDataError: If fewer than three pairs.
        InvalidParameterError: If ``x`` and ``y`` differ in length.
        DegenerateInputError: If ``x`` or ``y`` is constant.
    """
    x_arr = as_sample(x, name="x", min_size=MIN_REGRESSION_SIZE)
    y_arr = as_sample(y, name="y", min_size=MIN_REGRESSION_SIZE)
    if x_arr.size != y_arr.size:
        raise InvalidParameterError(
            f"x and y must have equal length, got {x_arr.size} and {y_arr.size}."
        )
    n = x_arr.size

    x_bar = sample_mean(x_arr)
    y_bar = sample_mean(y_arr)
    x_dev = x_arr - x_bar
    y_dev = y_arr - y_bar
    sxx = require_finite_result(float(np.sum(np.square(x_dev))), "Sxx")
    sxy = require_finite_result(float(np.sum(x_dev * y_dev)), "Sxy")
    sst = require_finite_result(float(np.sum(np.square(y_dev))), "Total SS")
    if is_constant(x_arr) or sxx == 0:
        raise DegenerateInputError("x has zero variance; the slope is undefined.")
    if is_constant(y_arr) or sst == 0:
        raise DegenerateInputError("y has zero variance; the F statistic is undefined.")

    slope = require_finite_result(sxy / sxx, "Slope")
    intercept = require_finite_result(y_bar - slope * x_bar, "Intercept")
    resid = y_arr - (intercept + slope * x_arr)
    ssr = require_finite_result(slope * sxy, "Regression SS")
    sse = require_finite_result(
        max(0.0, float(np.sum(np.square(resid)))), "Residual SS"
    )

    df_error = n - 2
    ms_error = sse / df_error
    f_stat = math.inf if ms_error == 0 else ssr / ms_error
    logger.debug(
        "regression_test: n=%d slope=%g intercept=%g F=%g", n, slope, intercept, f_stat
    )

    dist = fisher_f(1, df_error)
    return RegressionResult(
        statistic=float(f_stat),
        p_value=p_value(dist, f_stat, Tail.GREATER),
        df=dist.params,
        slope=float(slope),
        intercept=float(intercept),
        r_squared=float(min(1.0, ssr / sst)),
    )
