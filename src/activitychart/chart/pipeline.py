"""
Chart pipeline: cohorts -> smoothed cohorts -> difference -> render.

The pipeline holds no global state. Callers pass the loaded series, a
ChartConfig, and optionally a render callback that receives the finished
ChartData. Any error raised by a stage aborts the run before render is
called, so a partially computed chart is never shown.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from activitychart.chart.chart_config import ChartConfig
from activitychart.series.loader import PathOrUrl, load_cohorts, load_cohorts_async
from activitychart.series.time_series import TimeSeries
from activitychart.series.transforms import absolute_difference, rolling_average
from activitychart.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ChartData:
    """Finished series handed to the presentation layer."""

    cohort_a: TimeSeries
    cohort_b: TimeSeries
    difference: Optional[TimeSeries] = None

    def cohorts(self) -> tuple[TimeSeries, TimeSeries]:
        return self.cohort_a, self.cohort_b


RenderFn = Callable[[ChartData], None]


def run_pipeline(
    cohort_a: TimeSeries,
    cohort_b: TimeSeries,
    config: ChartConfig,
    render: Optional[RenderFn] = None,
) -> ChartData:
    """Smooth both cohorts, derive the difference series, and render.

    Series are renamed to the labels in ``config`` so downstream statistics
    and traces are keyed by display name.

    Args:
        cohort_a: Raw series of the first cohort.
        cohort_b: Raw series of the second cohort.
        config: Window size, difference/alignment options and labels.
        render: Optional callback invoked once with the result.

    Returns:
        The ChartData passed to ``render``.

    Raises:
        InvalidArgumentError: Bad window size or mismatched series.
    """
    smoothed_a = rolling_average(cohort_a, config.window_size).renamed(config.cohort_a_label)
    smoothed_b = rolling_average(cohort_b, config.window_size).renamed(config.cohort_b_label)

    difference = None
    if config.include_difference:
        difference = absolute_difference(
            smoothed_a,
            smoothed_b,
            alignment=config.alignment,
            name=config.difference_label,
        )

    data = ChartData(cohort_a=smoothed_a, cohort_b=smoothed_b, difference=difference)
    logger.info(
        "pipeline: window_size=%s n_a=%s n_b=%s difference=%s",
        config.window_size,
        len(smoothed_a),
        len(smoothed_b),
        len(difference) if difference is not None else None,
    )
    if render is not None:
        render(data)
    return data


def load_and_run(
    path_a: PathOrUrl,
    path_b: PathOrUrl,
    config: ChartConfig,
    render: Optional[RenderFn] = None,
    *,
    strict: bool = True,
) -> ChartData:
    """Load both cohort CSVs, then run_pipeline()."""
    a, b = load_cohorts(path_a, path_b, strict=strict)
    return run_pipeline(a, b, config, render)


async def load_and_run_async(
    path_a: PathOrUrl,
    path_b: PathOrUrl,
    config: ChartConfig,
    render: Optional[RenderFn] = None,
    *,
    strict: bool = True,
) -> ChartData:
    """Same as load_and_run() but awaits the file load (the only suspension point)."""
    a, b = await load_cohorts_async(path_a, path_b, strict=strict)
    return run_pipeline(a, b, config, render)
