"""Activity chart app: standalone NiceGUI application for ActivityChartWidget.

Runs in native or web mode via env vars. Uses the @ui.page("/") pattern.

Run:
    python -m activitychart.app.activity_chart_app

Env vars:
    ACTIVITY_CHART_GUI_NATIVE: 1/0 (default 0)
    ACTIVITY_CHART_GUI_RELOAD: 1/0 (default 0)
    ACTIVITY_CHART_WINDOW_SIZE: smoothing window override (positive int)
    HOST: bind host (default 127.0.0.1 native, 0.0.0.0 web)
    PORT: bind port (default find_open_port native, 8080 web)
"""

from __future__ import annotations

import dataclasses
import os
from multiprocessing import freeze_support
from typing import Optional

from nicegui import ui

from activitychart.app import header, schema
from activitychart.chart.activity_chart_widget import ActivityChartWidget
from activitychart.chart.app_config import AppConfig
from activitychart.chart.chart_config import ChartConfig
from activitychart.chart.pipeline import ChartData, load_and_run_async
from activitychart.chart.theme import ThemeMode
from activitychart.series.errors import ActivityChartError
from activitychart.utils.gui_defaults import setUpGuiDefaults
from activitychart.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)

STORAGE_SECRET = "activitychart-session-secret"


def _env_bool(name: str, default: bool) -> bool:
    """Parse env var as bool; if unset/invalid returns default."""
    raw = os.getenv(name)
    if raw is None:
        return default
    v = raw.strip().lower()
    if v in {"1", "true", "yes", "on"}:
        return True
    if v in {"0", "false", "no", "off"}:
        return False
    return default


def _env_int(name: str, default: Optional[int]) -> Optional[int]:
    """Parse env var as int; if unset/invalid returns default."""
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def chart_config_with_env(config: ChartConfig) -> ChartConfig:
    """Apply ACTIVITY_CHART_WINDOW_SIZE to config; an invalid value is logged and ignored."""
    window_size = _env_int("ACTIVITY_CHART_WINDOW_SIZE", None)
    if window_size is None:
        return config
    try:
        return dataclasses.replace(config, window_size=window_size)
    except ActivityChartError as e:
        logger.warning("Ignoring ACTIVITY_CHART_WINDOW_SIZE=%s: %s", window_size, e)
        return config


def _show_error(container: ui.element, message: str) -> None:
    container.clear()
    with container:
        ui.label(message).classes("text-negative")


async def build_chart(
    container: ui.element,
    app_config: AppConfig,
    *,
    theme: ThemeMode = ThemeMode.LIGHT,
) -> Optional[ActivityChartWidget]:
    """Load the configured cohorts and render the chart into container.

    On failure the container shows an error label instead and None is
    returned; no widget is built from a partially computed chart.
    """
    chart_config = chart_config_with_env(app_config.get_chart_config())
    path_a, path_b = schema.resolve_cohort_paths(app_config)
    widget: Optional[ActivityChartWidget] = None

    def _render(chart_data: ChartData) -> None:
        nonlocal widget
        widget = ActivityChartWidget(chart_data, chart_config, theme=theme)
        container.clear()
        with container:
            widget.render()

    try:
        await load_and_run_async(
            path_a,
            path_b,
            chart_config,
            render=_render,
            strict=app_config.data.strict_load,
        )
    except FileNotFoundError as e:
        logger.error("Cohort file not found: %s", e)
        _show_error(container, f"Data file not found: {e.filename or e}")
    except OSError as e:
        logger.exception("Could not read cohort data: %s", e)
        _show_error(container, f"Could not read data: {e}")
    except ActivityChartError as e:
        logger.exception("Failed to build chart from %s, %s: %s", path_a, path_b, e)
        _show_error(container, f"Failed to build chart: {e}")
    return widget


# ---------------------------------------------------------------------------
# Page
# ---------------------------------------------------------------------------

@ui.page("/")
async def home() -> None:
    """Home page: header + chart of the two configured cohort files."""

    setUpGuiDefaults("text-sm")
    ui.page_title("Activity Chart")

    widget: Optional[ActivityChartWidget] = None

    def _on_theme_change(theme: ThemeMode) -> None:
        if widget is not None:
            widget.set_theme(theme)

    dark_mode = header.build_activity_chart_header(on_theme_change=_on_theme_change)

    with ui.column().classes("w-full flex flex-col gap-4 p-4"):
        main_container = ui.column().classes("w-full")
        with main_container:
            ui.spinner(size="lg")

    widget = await build_chart(main_container, AppConfig.load(), theme=header.current_theme(dark_mode))


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main(*, reload: bool | None = None, native_bool: bool | None = None) -> None:
    """Start the activity chart application.

    Defaults (no env vars, no args):
      - native=False (browser)
      - reload=False
    """
    configure_logging()

    native_bool = _env_bool("ACTIVITY_CHART_GUI_NATIVE", False) if native_bool is None else native_bool
    reload = _env_bool("ACTIVITY_CHART_GUI_RELOAD", False) if reload is None else reload

    from nicegui import native as native_module
    if native_bool:
        port = _env_int("PORT", native_module.find_open_port())
    else:
        port = _env_int("PORT", 8080)

    default_host = "127.0.0.1" if native_bool else "0.0.0.0"
    host = os.getenv("HOST", default_host)

    logger.info(
        "Starting Activity Chart app: host=%s port=%s reload=%s native=%s",
        host,
        port,
        reload,
        native_bool,
    )

    run_kwargs: dict = {
        "host": host,
        "port": port,
        "reload": reload,
        "native": native_bool,
        "storage_secret": STORAGE_SECRET,
        "title": "Activity Chart",
    }
    if native_bool:
        run_kwargs["window_size"] = (1300, 800)
    ui.run(**run_kwargs)


if __name__ in {"__main__", "__mp_main__"}:
    freeze_support()
    main()
