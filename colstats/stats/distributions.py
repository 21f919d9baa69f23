"""Reference distributions used for critical values and p-values.

Each :class:`Distribution` is an immutable capability object exposing
``cdf``, ``sf`` and ``quantile`` for one parameterization of a SciPy
continuous distribution. The routines in :mod:`colstats.stats` build the
distribution they need per call, so no distribution state is shared.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Tuple

from scipy import stats as scipy_stats

from colstats.errors import InvalidParameterError, NonFiniteInputError
from colstats.schema import Tail


@dataclass(frozen=True)
class Distribution:
    """Frozen continuous distribution with CDF and quantile lookups."""

    name: str
    params: Tuple[float, ...]
    frozen: Any

    def cdf(self, x: float) -> float:
        return float(self.frozen.cdf(x))

    def sf(self, x: float) -> float:
        """Upper-tail probability ``1 - cdf(x)`` without cancellation."""
        return float(self.frozen.sf(x))

    def quantile(self, p: float) -> float:
        """Return the inverse CDF at probability ``p``.

        Raises:
            InvalidParameterError: If ``p`` is not a finite value in ``[0, 1]``.
        """
        p = float(p)
        if not math.isfinite(p) or not 0.0 <= p <= 1.0:
            raise InvalidParameterError(
                f"Quantile probability must lie in [0, 1], got {p!r}"
            )
        return float(self.frozen.ppf(p))


def _check_df(value: float, label: str) -> float:
    df = float(value)
    if not math.isfinite(df) or df <= 0:
        raise InvalidParameterError(
            f"{label} must be finite and > 0, got {value!r}"
        )
    return df


def standard_normal() -> Distribution:
    return Distribution("normal", (), scipy_stats.norm(loc=0.0, scale=1.0))


def student_t(df: float) -> Distribution:
    df = _check_df(df, "Degrees of freedom")
    return Distribution("t", (df,), scipy_stats.t(df))


def fisher_f(dfn: float, dfd: float) -> Distribution:
    dfn = _check_df(dfn, "Numerator degrees of freedom")
    dfd = _check_df(dfd, "Denominator degrees of freedom")
    return Distribution("f", (dfn, dfd), scipy_stats.f(dfn, dfd))


def chi_square(df: float) -> Distribution:
    df = _check_df(df, "Degrees of freedom")
    return Distribution("chi2", (df,), scipy_stats.chi2(df))


def p_value(dist: Distribution, statistic: float, tail: Tail) -> float:
    """Convert a test statistic into a p-value for the requested tail.

    Args:
        dist: Reference distribution of the statistic under the null.
        statistic: Observed statistic.
        tail: Alternative hypothesis.

    Returns:
        float: p-value clamped to ``[0, 1]``. The two-sided value doubles the
        smaller tail, which for the symmetric normal and t distributions
        equals ``2 * sf(|statistic|)``.

    Raises:
        NonFiniteInputError: If the statistic or the tail probability is NaN.
    """
    if math.isnan(statistic):
        raise NonFiniteInputError("Test statistic is NaN; no p-value exists.")
    if tail is Tail.LESS:
        p = dist.cdf(statistic)
    elif tail is Tail.GREATER:
        p = dist.sf(statistic)
    else:
        p = 2.0 * min(dist.cdf(statistic), dist.sf(statistic))
    if math.isnan(p):
        raise NonFiniteInputError(
            f"p-value of {statistic!r} is NaN under {dist.name}{dist.params}."
        )
    return min(1.0, max(0.0, p))
