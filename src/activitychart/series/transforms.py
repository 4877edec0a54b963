"""Series transforms: trailing rolling average and absolute difference.

Both transforms are pure: they return a new TimeSeries and never touch the
input.

Rolling average
  Output i is the mean of input values [max(0, i - window_size + 1), i]. The
  window is trailing (no look-ahead) and grows from 1 sample at the start to
  window_size once i >= window_size - 1. Computed with
  pandas.Series.rolling(min_periods=1), which matches a naive per-window mean
  up to floating point reassociation.

Absolute difference
  AlignmentMode.POSITION pairs samples by index (lengths must match) and takes
  minutes from the first series. AlignmentMode.MINUTE joins on minute and
  skips minutes present in only one series.
"""

from __future__ import annotations

from enum import Enum

import numpy as np
import pandas as pd

from activitychart.series.errors import InvalidArgumentError
from activitychart.series.time_series import MINUTE_COL, VALUE_COL, TimeSeries
from activitychart.utils.logging import get_logger

logger = get_logger(__name__)


class AlignmentMode(str, Enum):
    """How two series are paired for the difference transform."""

    POSITION = "position"
    MINUTE = "minute"


def rolling_average(series: TimeSeries, window_size: int) -> TimeSeries:
    """Smooth a series with a trailing simple moving average.

    Args:
        series: Input series.
        window_size: Window width in samples (> 0).

    Returns:
        New series with the same minutes and name.

    Raises:
        InvalidArgumentError: If window_size is not a positive integer.
    """
    if isinstance(window_size, bool) or not isinstance(window_size, (int, np.integer)):
        raise InvalidArgumentError(f"window_size must be an integer, got {window_size!r}")
    if window_size <= 0:
        raise InvalidArgumentError(f"window_size must be > 0, got {window_size}")
    if not len(series):
        return TimeSeries((), name=series.name)

    values = pd.Series(series.values, dtype=float)
    smoothed = values.rolling(window=int(window_size), min_periods=1).mean()
    logger.debug("rolling_average: name=%r n=%s window_size=%s", series.name, len(series), window_size)
    return TimeSeries.from_arrays(series.minutes, smoothed.tolist(), name=series.name)


def absolute_difference(
    a: TimeSeries,
    b: TimeSeries,
    *,
    alignment: AlignmentMode = AlignmentMode.POSITION,
    name: str = "",
) -> TimeSeries:
    """Per-sample ``abs(a - b)``.

    Args:
        a: First series; its minutes label the output in POSITION mode.
        b: Second series.
        alignment: POSITION (index pairing, equal lengths required) or
            MINUTE (inner join on minute).
        name: Display name of the result.

    Returns:
        New series of absolute differences.

    Raises:
        InvalidArgumentError: POSITION mode with series of different length,
            or an unknown alignment.
    """
    try:
        alignment = AlignmentMode(alignment)
    except ValueError:
        raise InvalidArgumentError(f"unknown alignment {alignment!r}") from None
    if alignment is AlignmentMode.POSITION:
        return _difference_by_position(a, b, name)
    return _difference_by_minute(a, b, name)


def _difference_by_position(a: TimeSeries, b: TimeSeries, name: str) -> TimeSeries:
    if len(a) != len(b):
        raise InvalidArgumentError(
            f"series lengths differ: {a.name or 'a'}={len(a)}, {b.name or 'b'}={len(b)}"
        )
    if a.minutes != b.minutes:
        logger.warning(
            "absolute_difference: %r and %r do not share the same minutes; pairing by position",
            a.name,
            b.name,
        )
    diff = np.abs(np.asarray(a.values, dtype=float) - np.asarray(b.values, dtype=float))
    return TimeSeries.from_arrays(a.minutes, diff.tolist(), name=name)


def _difference_by_minute(a: TimeSeries, b: TimeSeries, name: str) -> TimeSeries:
    joined = pd.merge(
        a.to_frame(),
        b.to_frame(),
        on=MINUTE_COL,
        how="inner",
        suffixes=("_a", "_b"),
        sort=False,
    )
    skipped = len(a) + len(b) - 2 * len(joined)
    if skipped:
        logger.warning(
            "absolute_difference: skipped %s sample(s) with no matching minute between %r and %r",
            skipped,
            a.name,
            b.name,
        )
    diff = (joined[f"{VALUE_COL}_a"] - joined[f"{VALUE_COL}_b"]).abs()
    return TimeSeries.from_arrays(joined[MINUTE_COL].tolist(), diff.tolist(), name=name)
