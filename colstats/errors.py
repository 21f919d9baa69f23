"""Error taxonomy for the statistical routines.

Every error derives from :class:`StatisticsError`, itself a ``ValueError``,
so callers that already guard numerical code with ``except ValueError`` keep
working unchanged.
"""

from __future__ import annotations


class StatisticsError(ValueError):
    """Base class for invalid-input failures raised by ``colstats``."""


class InsufficientDataError(StatisticsError):
    """A sample (or group collection) is smaller than the routine requires."""


class DegenerateInputError(StatisticsError):
    """Input makes a ratio undefined (zero variance, zero Sxx, ...)."""


class InvalidParameterError(StatisticsError):
    """A scalar parameter (alpha, tails, degrees of freedom, ...) is invalid."""


class NonFiniteInputError(StatisticsError):
    """A sample contains NaN or infinite values."""


__all__ = [
    "StatisticsError",
    "InsufficientDataError",
    "DegenerateInputError",
    "InvalidParameterError",
    "NonFiniteInputError",
]
