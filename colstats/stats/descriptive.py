"""Sample validation and summary moments shared by every routine.

All checks run before any computation so a routine either returns a complete
result or raises one of the :mod:`colstats.errors` exceptions.
"""

from __future__ import annotations

import math
import numbers
from typing import Iterable, Sequence, Union

import numpy as np

from colstats.errors import (
    DegenerateInputError,
    InsufficientDataError,
    InvalidParameterError,
    NonFiniteInputError,
)
from colstats.schema import Tail

DEFAULT_ALPHA = 0.05
DEFAULT_TAIL = Tail.TWO_SIDED
MIN_SAMPLE_SIZE = 2
MIN_REGRESSION_SIZE = 3

ArrayLike = Union[Sequence[float], np.ndarray]


def as_sample(
    values: ArrayLike, name: str = "sample", min_size: int = MIN_SAMPLE_SIZE
) -> np.ndarray:
    """Validate ``values`` and return them as a 1-D float array.

    Args:
        values: Numeric sequence. Non-numeric input is rejected rather than
            coerced; use :func:`colstats.data_processing.column_to_sample`
            for lenient conversion of raw columns.
        name: Argument name used in error messages.
        min_size: Minimum number of observations.

    Returns:
        numpy.ndarray: A fresh ``float64`` copy of the data.

    Raises:
        InvalidParameterError: If the data is not one-dimensional numeric.
        InsufficientDataError: If fewer than ``min_size`` observations.
        NonFiniteInputError: If any value is NaN or infinite.
    """
    try:
        arr = np.array(values, dtype=float)
    except (TypeError, ValueError) as exc:
        raise InvalidParameterError(f"{name} must contain only numbers.") from exc
    if arr.ndim != 1:
        raise InvalidParameterError(
            f"{name} must be one-dimensional, got shape {arr.shape}."
        )
    if arr.size < min_size:
        raise InsufficientDataError(
            f"{name} needs at least {min_size} observations, got {arr.size}."
        )
    n_bad = int(np.count_nonzero(~np.isfinite(arr)))
    if n_bad:
        raise NonFiniteInputError(f"{name} contains {n_bad} non-finite value(s).")
    return arr


def as_groups(groups: Iterable[ArrayLike], min_size: int = 1) -> list[np.ndarray]:
    """Validate an ANOVA group collection (k >= 2 non-empty samples)."""
    if isinstance(groups, np.ndarray) and groups.ndim == 1:
        raise InvalidParameterError("groups must be a collection of samples.")
    samples = [
        as_sample(g, name=f"group {idx}", min_size=min_size)
        for idx, g in enumerate(groups)
    ]
    if len(samples) < 2:
        raise InsufficientDataError(
            f"At least 2 groups are required, got {len(samples)}."
        )
    return samples


def check_alpha(alpha: float) -> float:
    """Return ``alpha`` as a float after checking ``0 < alpha < 1``."""
    if isinstance(alpha, bool) or not isinstance(alpha, numbers.Real):
        raise InvalidParameterError(f"alpha must be a real number, got {alpha!r}")
    alpha = float(alpha)
    if not math.isfinite(alpha) or not 0.0 < alpha < 1.0:
        raise InvalidParameterError(
            f"alpha must lie strictly between 0 and 1, got {alpha!r}"
        )
    return alpha


def check_finite(value: float, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidParameterError(f"{name} must be a real number, got {value!r}")
    value = float(value)
    if not math.isfinite(value):
        raise InvalidParameterError(f"{name} must be finite, got {value!r}")
    return value


def resolve_tail(tails: Union[str, Tail]) -> Tail:
    """Map ``"two-sided"``/``"less"``/``"greater"`` (or a :class:`Tail`)."""
    try:
        return Tail(tails)
    except ValueError:
        valid = ", ".join(repr(t.value) for t in Tail)
        raise InvalidParameterError(
            f"Invalid test type {tails!r}; expected one of {valid}."
        ) from None


def is_constant(x: np.ndarray) -> bool:
    """True when every observation equals the first one."""
    return bool(np.all(x == x[0]))


def require_spread(x: np.ndarray, name: str = "sample") -> None:
    """Raise :class:`DegenerateInputError` for a sample of identical values.

    Comparing the values themselves avoids trusting a computed variance,
    which for constants such as ``0.1`` is a rounding residue, not zero.
    """
    if is_constant(x) or standard_error(x) == 0:
        raise DegenerateInputError(
            f"{name} has zero variance (all values are identical)."
        )


def require_finite_result(value: float, label: str) -> float:
    """Raise :class:`NonFiniteInputError` when an intermediate overflowed."""
    if not math.isfinite(value):
        raise NonFiniteInputError(
            f"{label} is not finite ({value!r}); the input magnitudes overflow."
        )
    return value


def sample_mean(x: np.ndarray) -> float:
    return require_finite_result(float(np.mean(x)), "sample mean")


def sample_variance(x: np.ndarray) -> float:
    """Bessel-corrected sample variance (``ddof=1``).

    Exactly ``0.0`` for a constant sample.
    """
    if is_constant(x):
        return 0.0
    return require_finite_result(float(np.var(x, ddof=1)), "sample variance")


def standard_error(x: np.ndarray) -> float:
    return math.sqrt(sample_variance(x) / x.size)


def welch_df(var1: float, n1: int, var2: float, n2: int) -> float:
    """Welch-Satterthwaite approximation to the two-sample degrees of freedom."""
    se1 = var1 / n1
    se2 = var2 / n2
    total = se1 + se2
    df = total * total / (se1 * se1 / (n1 - 1) + se2 * se2 / (n2 - 1))
    return require_finite_result(df, "Welch degrees of freedom")
