"""Unit tests for activity_chart_app module (env helpers, config overrides, chart build)."""

from __future__ import annotations

import asyncio
import logging
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

import activitychart.series.loader as loader_mod
from activitychart.app import activity_chart_app
from activitychart.app.schema import resolve_cohort_paths
from activitychart.chart.app_config import AppConfig
from activitychart.chart.chart_config import ChartConfig
from activitychart.chart.pipeline import load_and_run
from activitychart.chart.theme import ThemeMode
from activitychart.series.errors import ParseError


def test_env_bool_unset_returns_default(monkeypatch):
    monkeypatch.delenv("_TEST_ACTIVITY_CHART_BOOL", raising=False)
    assert activity_chart_app._env_bool("_TEST_ACTIVITY_CHART_BOOL", True) is True
    assert activity_chart_app._env_bool("_TEST_ACTIVITY_CHART_BOOL", False) is False


@pytest.mark.parametrize("raw", ["1", "true", "True", "yes", " on "])
def test_env_bool_truthy_values(monkeypatch, raw):
    monkeypatch.setenv("_TEST_ACTIVITY_CHART_BOOL", raw)
    assert activity_chart_app._env_bool("_TEST_ACTIVITY_CHART_BOOL", False) is True


@pytest.mark.parametrize("raw", ["0", "false", "no", "OFF"])
def test_env_bool_falsy_values(monkeypatch, raw):
    monkeypatch.setenv("_TEST_ACTIVITY_CHART_BOOL", raw)
    assert activity_chart_app._env_bool("_TEST_ACTIVITY_CHART_BOOL", True) is False


def test_env_bool_invalid_returns_default(monkeypatch):
    monkeypatch.setenv("_TEST_ACTIVITY_CHART_BOOL", "maybe")
    assert activity_chart_app._env_bool("_TEST_ACTIVITY_CHART_BOOL", True) is True


def test_env_int(monkeypatch):
    monkeypatch.delenv("_TEST_ACTIVITY_CHART_INT", raising=False)
    assert activity_chart_app._env_int("_TEST_ACTIVITY_CHART_INT", 8080) == 8080
    monkeypatch.setenv("_TEST_ACTIVITY_CHART_INT", "9000")
    assert activity_chart_app._env_int("_TEST_ACTIVITY_CHART_INT", 8080) == 9000
    monkeypatch.setenv("_TEST_ACTIVITY_CHART_INT", "abc")
    assert activity_chart_app._env_int("_TEST_ACTIVITY_CHART_INT", None) is None


def test_chart_config_with_env_unset(monkeypatch):
    monkeypatch.delenv("ACTIVITY_CHART_WINDOW_SIZE", raising=False)
    cfg = ChartConfig(window_size=7)
    assert activity_chart_app.chart_config_with_env(cfg) is cfg


def test_chart_config_with_env_overrides_window(monkeypatch):
    monkeypatch.setenv("ACTIVITY_CHART_WINDOW_SIZE", "30")
    cfg = ChartConfig(window_size=7, cohort_a_label="Control")
    out = activity_chart_app.chart_config_with_env(cfg)
    assert out.window_size == 30
    assert out.cohort_a_label == "Control"
    assert cfg.window_size == 7


def test_chart_config_with_env_invalid_window_is_ignored(monkeypatch, caplog):
    monkeypatch.setenv("ACTIVITY_CHART_WINDOW_SIZE", "0")
    cfg = ChartConfig()
    with caplog.at_level(logging.WARNING, logger="activitychart"):
        assert activity_chart_app.chart_config_with_env(cfg) is cfg
    assert "ACTIVITY_CHART_WINDOW_SIZE" in caplog.text


def test_bundled_samples_run_through_pipeline():
    data = load_and_run(*resolve_cohort_paths(), ChartConfig())
    assert len(data.cohort_a) == 1440
    assert len(data.cohort_b) == 1440
    assert len(data.difference) == 1440
    assert min(data.difference.values) >= 0.0


# --- build_chart (mocked ui) ---


@pytest.fixture
def page_ui(monkeypatch: pytest.MonkeyPatch):
    """Mock ui and ActivityChartWidget in the app module; returns (labels, widget_cls)."""
    labels: list[MagicMock] = []

    def label(text=""):
        el = MagicMock()
        el.text = text
        el.classes = MagicMock(return_value=el)
        labels.append(el)
        return el

    fake_ui = MagicMock()
    fake_ui.label = label
    widget_cls = MagicMock()
    monkeypatch.setattr(activity_chart_app, "ui", fake_ui)
    monkeypatch.setattr(activity_chart_app, "ActivityChartWidget", widget_cls)
    monkeypatch.delenv("ACTIVITY_CHART_WINDOW_SIZE", raising=False)
    return labels, widget_cls


def _raise(exc: Exception):
    async def fake_load_and_run_async(*args, **kwargs):
        raise exc

    return fake_load_and_run_async


@pytest.mark.requires_nicegui
@pytest.mark.parametrize(
    "exc, message",
    [
        (ParseError("a.csv: non-numeric or non-finite field on line(s) 3"), "Failed to build chart"),
        (FileNotFoundError(2, "No such file", "missing.csv"), "Data file not found: missing.csv"),
        (PermissionError("denied"), "Could not read data"),
    ],
)
def test_build_chart_failure_shows_error_and_no_widget(page_ui, monkeypatch, tmp_path, exc, message) -> None:
    labels, widget_cls = page_ui
    monkeypatch.setattr(activity_chart_app, "load_and_run_async", _raise(exc))
    container = MagicMock()

    widget = asyncio.run(activity_chart_app.build_chart(container, AppConfig(path=tmp_path / "cfg.json")))

    assert widget is None
    widget_cls.assert_not_called()
    container.clear.assert_called_once()
    (error_label,) = labels
    assert message in error_label.text
    error_label.classes.assert_called_once_with("text-negative")


@pytest.mark.requires_nicegui
def test_build_chart_renders_widget(page_ui, monkeypatch, tmp_path) -> None:
    labels, widget_cls = page_ui

    async def fake_io_bound(func, *args, **kwargs):
        return func(*args, **kwargs)

    monkeypatch.setattr(loader_mod, "run", SimpleNamespace(io_bound=fake_io_bound))
    container = MagicMock()

    widget = asyncio.run(
        activity_chart_app.build_chart(container, AppConfig(path=tmp_path / "cfg.json"), theme=ThemeMode.DARK)
    )

    assert widget is widget_cls.return_value
    chart_data, chart_config = widget_cls.call_args.args
    assert len(chart_data.cohort_a) == 1440
    assert chart_config == ChartConfig()
    assert widget_cls.call_args.kwargs == {"theme": ThemeMode.DARK}
    widget.render.assert_called_once()
    assert labels == []
