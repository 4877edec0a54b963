"""Exceptions raised by the series loading, transform and statistics code.

Each error subclasses ActivityChartError and the closest builtin, so callers
may catch either ``ActivityChartError`` or e.g. ``ValueError``.
"""

from __future__ import annotations


class ActivityChartError(Exception):
    """Base class for all activitychart errors."""


class ParseError(ActivityChartError, ValueError):
    """A CSV field or column could not be turned into a valid sample."""


class InvalidArgumentError(ActivityChartError, ValueError):
    """Bad window size or mismatched series passed to a transform."""


class SampleNotFoundError(ActivityChartError, LookupError):
    """No sample exists at exactly the requested minute."""

    def __init__(self, minute: int, series_name: str = "") -> None:
        self.minute = minute
        self.series_name = series_name
        where = f" in series {series_name!r}" if series_name else ""
        super().__init__(f"No sample at minute {minute}{where}")


class ZeroBaselineError(ActivityChartError, ArithmeticError):
    """Percent change requested from a start value of zero."""

    def __init__(self, minute: int, series_name: str = "") -> None:
        self.minute = minute
        self.series_name = series_name
        where = f" in series {series_name!r}" if series_name else ""
        super().__init__(f"Start value at minute {minute}{where} is 0; percent change is undefined")
