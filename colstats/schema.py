"""Define result containers, tail selectors and standardized column names."""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Dict, Tuple


class Tail(str, Enum):
    """Alternative hypothesis used to turn a statistic into a p-value."""

    TWO_SIDED = "two-sided"
    LESS = "less"
    GREATER = "greater"


@dataclass(frozen=True)
class IntervalResult:
    """Two-sided confidence interval ``(lower, upper)``.

    Attributes:
        lower: Lower confidence bound.
        upper: Upper confidence bound. Always ``>= lower``.
    """

    lower: float
    upper: float

    def __post_init__(self) -> None:
        if self.lower > self.upper:
            raise ValueError(
                f"Interval bounds are out of order: {self.lower!r} > {self.upper!r}"
            )

    @property
    def midpoint(self) -> float:
        return 0.5 * (self.lower + self.upper)

    @property
    def width(self) -> float:
        return self.upper - self.lower

    def contains(self, value: float) -> bool:
        return self.lower <= value <= self.upper

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class TestResult:
    """Test statistic with its p-value.

    Attributes:
        statistic: Value of the test statistic (z, t or F).
        p_value: Probability in ``[0, 1]`` under the null hypothesis.
        df: Degrees of freedom of the reference distribution; empty for the
            standard normal.
    """

    __test__ = False

    statistic: float
    p_value: float
    df: Tuple[float, ...] = ()

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)


@dataclass(frozen=True)
class RegressionResult(TestResult):
    """Regression F-test result carrying the fitted least-squares line."""

    slope: float = math.nan
    intercept: float = math.nan
    r_squared: float = math.nan


@dataclass(frozen=True)
class ResultColumns:
    """Container for the column labels used in exported result tables.

    Attributes:
        test: Label of the routine or user-supplied result name.
        statistic: Test statistic; empty for intervals.
        p_value: p-value; empty for intervals.
        lower: Lower confidence bound; empty for tests.
        upper: Upper confidence bound; empty for tests.
        df: Degrees of freedom rendered as a comma-separated string.
    """

    test: str = "Test"
    statistic: str = "Statistic"
    p_value: str = "p-value"
    lower: str = "Lower"
    upper: str = "Upper"
    df: str = "df"
