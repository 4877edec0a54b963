"""Range statistic: percent change of a series between two minutes.

Endpoints are floored to whole minutes and looked up by exact match (no
nearest-sample search, no interpolation).
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable, Mapping, Optional

from activitychart.series.errors import SampleNotFoundError, ZeroBaselineError
from activitychart.series.time_series import TimeSeries
from activitychart.utils.logging import get_logger

logger = get_logger(__name__)


def percent_change(series: TimeSeries, start_minute: float, end_minute: float) -> float:
    """Percent change from the sample at floor(start) to the sample at floor(end).

    Returns:
        ``(end_value - start_value) / start_value * 100``.

    Raises:
        SampleNotFoundError: No sample at one of the floored minutes.
        ZeroBaselineError: The start value is 0.
    """
    start = math.floor(start_minute)
    end = math.floor(end_minute)
    start_value = series.value_at(start)
    end_value = series.value_at(end)
    if start_value == 0:
        raise ZeroBaselineError(start, series.name)
    return (end_value - start_value) / start_value * 100


@dataclass(frozen=True)
class RangeStats:
    """Percent change of each series over one brushed interval.

    ``changes`` maps series name -> percent change, or None when it has never
    been computable for this selection history.
    """

    start_minute: float
    end_minute: float
    changes: dict[str, Optional[float]] = field(default_factory=dict)

    def get(self, name: str) -> Optional[float]:
        return self.changes.get(name)


def compute_range_stats(
    series_list: Iterable[TimeSeries],
    start_minute: float,
    end_minute: float,
    *,
    previous: Optional[RangeStats] = None,
) -> RangeStats:
    """Percent change for every series over [start_minute, end_minute].

    A lookup or zero-baseline failure for one series keeps that series'
    value from ``previous`` (None if there is none); other series still
    update.
    """
    prev: Mapping[str, Optional[float]] = previous.changes if previous is not None else {}
    changes: dict[str, Optional[float]] = {}
    for series in series_list:
        try:
            changes[series.name] = percent_change(series, start_minute, end_minute)
        except (SampleNotFoundError, ZeroBaselineError) as e:
            logger.debug("range stats for %r not updated: %s", series.name, e)
            changes[series.name] = prev.get(series.name)
    return RangeStats(start_minute=start_minute, end_minute=end_minute, changes=changes)


def format_percent(value: Optional[float]) -> str:
    """'12.34%' with two decimals, or 'n/a' for None."""
    if value is None:
        return "n/a"
    return f"{value:.2f}%"
