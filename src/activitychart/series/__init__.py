"""Cohort time series: data model, CSV loading, transforms and range statistics."""

from activitychart.series.errors import (
    ActivityChartError,
    InvalidArgumentError,
    ParseError,
    SampleNotFoundError,
    ZeroBaselineError,
)
from activitychart.series.loader import load_cohorts, load_cohorts_async, load_series_csv
from activitychart.series.range_stats import RangeStats, compute_range_stats, format_percent, percent_change
from activitychart.series.time_series import TimeSample, TimeSeries
from activitychart.series.transforms import AlignmentMode, absolute_difference, rolling_average

__all__ = [
    "ActivityChartError",
    "AlignmentMode",
    "InvalidArgumentError",
    "ParseError",
    "RangeStats",
    "SampleNotFoundError",
    "TimeSample",
    "TimeSeries",
    "ZeroBaselineError",
    "absolute_difference",
    "compute_range_stats",
    "format_percent",
    "load_cohorts",
    "load_cohorts_async",
    "load_series_csv",
    "percent_change",
    "rolling_average",
]
