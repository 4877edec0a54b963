"""Activity chart: configuration, pipeline, figure generation and NiceGUI widget."""

from activitychart.chart.activity_chart_widget import ActivityChartWidget
from activitychart.chart.chart_config import ChartConfig, SeriesVisibility
from activitychart.chart.pipeline import ChartData, load_and_run, load_and_run_async, run_pipeline

__all__ = [
    "ActivityChartWidget",
    "ChartConfig",
    "ChartData",
    "SeriesVisibility",
    "load_and_run",
    "load_and_run_async",
    "run_pipeline",
]
