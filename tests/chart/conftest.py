"""Fixtures for chart tests."""

from __future__ import annotations

import pytest

from activitychart.chart.chart_config import ChartConfig
from activitychart.chart.pipeline import ChartData, run_pipeline
from activitychart.series.time_series import TimeSeries


@pytest.fixture
def raw_cohorts() -> tuple[TimeSeries, TimeSeries]:
    """Two short cohorts sampled every 60 minutes across the day."""
    minutes = list(range(0, 1440, 60))
    a = TimeSeries.from_arrays(minutes, [10.0 + i for i in range(len(minutes))], name="raw_a")
    b = TimeSeries.from_arrays(minutes, [20.0 + 2 * i for i in range(len(minutes))], name="raw_b")
    return a, b


@pytest.fixture
def chart_data(raw_cohorts) -> ChartData:
    """ChartData for raw_cohorts with window_size=1 (no smoothing)."""
    return run_pipeline(*raw_cohorts, ChartConfig(window_size=1))
