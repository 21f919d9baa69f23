"""Two-sided confidence intervals for means, mean differences and variances.

Every routine computes a point estimate and a critical value from the
reference distribution at ``1 - alpha/2``:

- Z and T intervals return ``estimate -/+ critical * standard_error``.
- Variance intervals divide a scaled estimate by the upper and lower
  quantiles, so the smaller quantile yields the larger bound.
"""

from __future__ import annotations

import logging
import math

from colstats.errors import DegenerateInputError
from colstats.schema import IntervalResult
from colstats.stats.descriptive import (
    DEFAULT_ALPHA,
    ArrayLike,
    as_sample,
    check_alpha,
    require_finite_result,
    require_spread,
    sample_mean,
    sample_variance,
    standard_error,
    welch_df,
)
from colstats.stats.distributions import (
    chi_square,
    fisher_f,
    standard_normal,
    student_t,
)

logger = logging.getLogger(__name__)


def _finite_interval(lower: float, upper: float) -> IntervalResult:
    require_finite_result(lower, "Lower bound")
    require_finite_result(upper, "Upper bound")
    return IntervalResult(lower=lower, upper=upper)


def _symmetric_interval(estimate: float, margin: float) -> IntervalResult:
    return _finite_interval(estimate - margin, estimate + margin)


def _one_sample_moments(sample: ArrayLike) -> tuple[int, float, float]:
    x = as_sample(sample)
    require_spread(x)
    se = standard_error(x)
    return x.size, sample_mean(x), se


def _two_sample_moments(
    sample1: ArrayLike, sample2: ArrayLike
) -> tuple[float, float, float]:
    """Return the mean difference, its standard error and the Welch df."""
    x1 = as_sample(sample1, name="sample1")
    x2 = as_sample(sample2, name="sample2")
    var1 = sample_variance(x1)
    var2 = sample_variance(x2)
    se = math.sqrt(var1 / x1.size + var2 / x2.size)
    if se == 0:
        raise DegenerateInputError(
            "Both samples have zero variance; the interval is undefined."
        )
    diff = require_finite_result(sample_mean(x1) - sample_mean(x2), "Mean difference")
    return diff, se, welch_df(var1, x1.size, var2, x2.size)


def one_samp_z_interval(sample: ArrayLike, alpha: float = DEFAULT_ALPHA) -> IntervalResult:
    """Normal-approximation confidence interval for a population mean.

    The sample standard deviation stands in for the population sigma.

    Args:
        sample: Observations, at least two.
        alpha: Significance level; ``0.05`` gives a 95% interval.

    Returns:
        IntervalResult: ``mean -/+ z_(1-alpha/2) * s / sqrt(n)``.

    Raises:
        InsufficientDataError: If fewer than two observations.
        DegenerateInputError: If all observations are identical.
        InvalidParameterError: If ``alpha`` is outside ``(0, 1)``.
        NonFiniteInputError: If the sample contains NaN or infinity, or its
            moments overflow.
    """
    alpha = check_alpha(alpha)
    n, mean, se = _one_sample_moments(sample)
    z_crit = standard_normal().quantile(1.0 - alpha / 2.0)
    logger.debug("one_samp_z_interval: n=%d mean=%g se=%g z=%g", n, mean, se, z_crit)
    return _symmetric_interval(mean, z_crit * se)


def two_samp_z_interval(
    sample1: ArrayLike, sample2: ArrayLike, alpha: float = DEFAULT_ALPHA
) -> IntervalResult:
    """Normal-approximation interval for ``mean1 - mean2``.

    Swapping the samples negates and swaps the bounds.
    """
    alpha = check_alpha(alpha)
    diff, se, _ = _two_sample_moments(sample1, sample2)
    z_crit = standard_normal().quantile(1.0 - alpha / 2.0)
    logger.debug("two_samp_z_interval: diff=%g se=%g z=%g", diff, se, z_crit)
    return _symmetric_interval(diff, z_crit * se)


def one_samp_t_interval(sample: ArrayLike, alpha: float = DEFAULT_ALPHA) -> IntervalResult:
    """Student's t confidence interval for a mean with ``n - 1`` df."""
    alpha = check_alpha(alpha)
    n, mean, se = _one_sample_moments(sample)
    t_crit = student_t(n - 1).quantile(1.0 - alpha / 2.0)
    logger.debug("one_samp_t_interval: n=%d mean=%g se=%g t=%g", n, mean, se, t_crit)
    return _symmetric_interval(mean, t_crit * se)


def two_samp_t_interval(
    sample1: ArrayLike, sample2: ArrayLike, alpha: float = DEFAULT_ALPHA
) -> IntervalResult:
    """Welch interval for ``mean1 - mean2`` (unequal variances).

    Degrees of freedom follow the Welch-Satterthwaite approximation, so they
    are generally non-integer.
    """
    alpha = check_alpha(alpha)
    diff, se, df = _two_sample_moments(sample1, sample2)
    t_crit = student_t(df).quantile(1.0 - alpha / 2.0)
    logger.debug(
        "two_samp_t_interval: diff=%g se=%g df=%g t=%g", diff, se, df, t_crit
    )
    return _symmetric_interval(diff, t_crit * se)


def two_samp_var_interval(
    sample1: ArrayLike, sample2: ArrayLike, alpha: float = DEFAULT_ALPHA
) -> IntervalResult:
    """Confidence interval for the variance ratio ``sigma1^2 / sigma2^2``.

    Args:
        sample1: First sample, at least two observations.
        sample2: Second sample, at least two observations.
        alpha: Significance level.

    Returns:
        IntervalResult: ``(ratio / F_(1-alpha/2), ratio / F_(alpha/2))`` with
        ``F ~ F(n1 - 1, n2 - 1)`` and ``ratio = var1 / var2``. Both bounds are
        strictly positive and bracket the observed ratio.

    Raises:
        DegenerateInputError: If either sample is constant.
    """
    alpha = check_alpha(alpha)
    x1 = as_sample(sample1, name="sample1")
    x2 = as_sample(sample2, name="sample2")
    require_spread(x1, name="sample1")
    require_spread(x2, name="sample2")
    ratio = require_finite_result(
        sample_variance(x1) / sample_variance(x2), "Variance ratio"
    )
    dist = fisher_f(x1.size - 1, x2.size - 1)
    f_lower = dist.quantile(alpha / 2.0)
    f_upper = dist.quantile(1.0 - alpha / 2.0)
    logger.debug(
        "two_samp_var_interval: ratio=%g F_lo=%g F_hi=%g", ratio, f_lower, f_upper
    )
    return _finite_interval(ratio / f_upper, ratio / f_lower)


def one_samp_var_interval(sample: ArrayLike, alpha: float = DEFAULT_ALPHA) -> IntervalResult:
    """Chi-square confidence interval for a population variance.

    Bounds are ``(n - 1) s^2 / chi2_(1-alpha/2)`` and
    ``(n - 1) s^2 / chi2_(alpha/2)`` with ``n - 1`` degrees of freedom.
    """
    alpha = check_alpha(alpha)
    x = as_sample(sample)
    require_spread(x)

    df = x.size - 1
    dist = chi_square(df)
    scaled = require_finite_result(df * sample_variance(x), "Scaled variance")
    chi_lower = dist.quantile(alpha / 2.0)
    chi_upper = dist.quantile(1.0 - alpha / 2.0)
    logger.debug(
        "one_samp_var_interval: n=%d scaled=%g chi2_lo=%g chi2_hi=%g",
        x.size,
        scaled,
        chi_lower,
        chi_upper,
    )
    return _finite_interval(scaled / chi_upper, scaled / chi_lower)
