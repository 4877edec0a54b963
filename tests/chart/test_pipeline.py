"""Unit tests for run_pipeline / load_and_run."""

from __future__ import annotations

import asyncio
from types import SimpleNamespace

import pytest

import activitychart.series.loader as loader_mod
from activitychart.chart.chart_config import ChartConfig
from activitychart.chart.pipeline import ChartData, load_and_run, load_and_run_async, run_pipeline
from activitychart.series.errors import InvalidArgumentError, ParseError
from activitychart.series.time_series import TimeSeries


def test_run_pipeline_smooths_renames_and_diffs(raw_cohorts):
    a, b = raw_cohorts
    data = run_pipeline(a, b, ChartConfig(window_size=2))
    assert data.cohort_a.name == "Male Activity"
    assert data.cohort_b.name == "Female Activity"
    assert data.difference.name == "Activity Difference"
    assert data.cohort_a.minutes == a.minutes
    assert data.cohort_a.values[:3] == pytest.approx([10.0, 10.5, 11.5])
    assert data.cohort_b.values[:3] == pytest.approx([20.0, 21.0, 23.0])
    assert data.difference.values[:3] == pytest.approx([10.0, 10.5, 11.5])


def test_run_pipeline_calls_render_once(raw_cohorts):
    rendered: list[ChartData] = []
    data = run_pipeline(*raw_cohorts, ChartConfig(), render=rendered.append)
    assert rendered == [data]


def test_run_pipeline_without_difference(raw_cohorts):
    data = run_pipeline(*raw_cohorts, ChartConfig(include_difference=False))
    assert data.difference is None
    assert len(data.cohorts()) == 2


def test_run_pipeline_error_aborts_before_render(raw_cohorts):
    a, _ = raw_cohorts
    short = TimeSeries.from_pairs([(0, 1.0)])
    rendered = []
    with pytest.raises(InvalidArgumentError):
        run_pipeline(a, short, ChartConfig(), render=rendered.append)
    assert rendered == []


def test_run_pipeline_minute_alignment_accepts_different_lengths(raw_cohorts):
    a, _ = raw_cohorts
    b = TimeSeries.from_pairs([(0, 4.0), (60, 4.0)])
    data = run_pipeline(a, b, ChartConfig(window_size=1, alignment="minute"))
    assert data.difference.minutes == [0, 60]
    assert data.difference.values == pytest.approx([6.0, 7.0])


def test_run_pipeline_rejects_invalid_window_at_runtime(raw_cohorts):
    cfg = ChartConfig()
    cfg.window_size = 0
    with pytest.raises(InvalidArgumentError):
        run_pipeline(*raw_cohorts, cfg)


def test_load_and_run_reads_csvs(tmp_path):
    a = tmp_path / "a.csv"
    b = tmp_path / "b.csv"
    a.write_text("time,median_activity\n0,10\n1,20\n", encoding="utf-8")
    b.write_text("time,median_activity\n0,4\n1,16\n", encoding="utf-8")
    data = load_and_run(a, b, ChartConfig(window_size=1))
    assert data.difference.values == pytest.approx([6.0, 4.0])


def test_load_and_run_propagates_parse_error(tmp_path):
    a = tmp_path / "a.csv"
    a.write_text("time,median_activity\n0,oops\n", encoding="utf-8")
    rendered = []
    with pytest.raises(ParseError):
        load_and_run(a, a, ChartConfig(), render=rendered.append)
    assert rendered == []


def test_load_and_run_async(tmp_path, monkeypatch):
    a = tmp_path / "a.csv"
    a.write_text("time,median_activity\n0,10\n1,20\n", encoding="utf-8")

    async def fake_io_bound(func, *args, **kwargs):
        return func(*args, **kwargs)

    monkeypatch.setattr(loader_mod, "run", SimpleNamespace(io_bound=fake_io_bound))
    rendered = []
    data = asyncio.run(load_and_run_async(a, a, ChartConfig(window_size=2), render=rendered.append))
    assert rendered == [data]
    assert data.difference.values == [0.0, 0.0]
