"""
activitychart: interactive two-cohort activity comparison chart with NiceGUI.

This package provides:
- TimeSeries loading from CSV, trailing rolling-average smoothing and
  absolute difference of two cohorts
- Percent change over a brushed time range
- ActivityChartWidget: Plotly chart with a series-visibility dropdown and
  range statistics
- Logging utilities for library and application use

For logging configuration in standalone scripts:
    ```python
    from activitychart.utils.logging import configure_logging
    configure_logging(level="DEBUG")
    ```
"""

import logging

from activitychart.utils.logging import configure_logging, get_logger

from activitychart.chart import ActivityChartWidget, ChartConfig, ChartData, SeriesVisibility, run_pipeline
from activitychart.series import (
    TimeSample,
    TimeSeries,
    absolute_difference,
    load_series_csv,
    percent_change,
    rolling_average,
)

# NullHandler so logs don't reach root until configure_logging() is called.
_logger = logging.getLogger("activitychart")
if not _logger.handlers:
    _logger.addHandler(logging.NullHandler())

__all__ = [
    "ActivityChartWidget",
    "ChartConfig",
    "ChartData",
    "SeriesVisibility",
    "TimeSample",
    "TimeSeries",
    "absolute_difference",
    "configure_logging",
    "get_logger",
    "load_series_csv",
    "percent_change",
    "rolling_average",
    "run_pipeline",
]

__version__ = "0.1.0"
