"""Activity comparison chart widget.

Self-contained NiceGUI widget: a series-visibility dropdown, the Plotly
chart, and a "Percent Change" panel driven by horizontal brush selection.
Uses Plotly dicts only for ui.plotly (never go.Figure).
"""

from __future__ import annotations

from typing import Callable, Optional, Union

from nicegui import ui
from nicegui.events import GenericEventArguments

from activitychart.chart.chart_config import ChartConfig, SeriesVisibility
from activitychart.chart.figure_generator import FigureGenerator, apply_visibility, format_clock
from activitychart.chart.pipeline import ChartData
from activitychart.chart.selection_handler import BrushSelectionHandler
from activitychart.chart.theme import ThemeMode, resolve_theme
from activitychart.series.errors import InvalidArgumentError
from activitychart.series.range_stats import RangeStats, format_percent
from activitychart.utils.logging import get_logger

logger = get_logger(__name__)

OnVisibilityChange = Callable[[SeriesVisibility], None]

NO_SELECTION_TEXT = "Drag across the chart to compare a time range"


def _safe_call(func: Callable, *args, **kwargs) -> None:
    """Call func, ignoring only 'client deleted' RuntimeErrors."""
    try:
        func(*args, **kwargs)
    except RuntimeError as e:
        if "deleted" not in str(e).lower():
            raise


class ActivityChartWidget:
    """Chart of two smoothed cohorts plus their absolute difference.

    Optional parts follow ChartConfig: include_toggle (dropdown),
    include_brush_stats (percent change panel), include_difference (trace
    and dropdown option, when the ChartData has a difference series).
    """

    def __init__(
        self,
        chart_data: ChartData,
        config: ChartConfig,
        *,
        theme: Union[str, ThemeMode] = "light",
        on_visibility_change: Optional[OnVisibilityChange] = None,
    ) -> None:
        self._chart_data = chart_data
        self._config = config
        self._theme = resolve_theme(theme)
        self._visibility = config.visibility
        self._on_visibility_change = on_visibility_change
        self._figure_generator = FigureGenerator(config)
        self._fig_dict: dict = {}

        self._selection_handler = BrushSelectionHandler(
            get_chart_data=lambda: self._chart_data,
            on_update=self._set_stats,
        )

        self._visibility_select: Optional[ui.select] = None
        self._plot: Optional[ui.plotly] = None
        self._stats_labels: dict[str, ui.label] = {}
        self._stats_hint: Optional[ui.label] = None

    @property
    def visibility(self) -> SeriesVisibility:
        return self._visibility

    @property
    def selection_handler(self) -> BrushSelectionHandler:
        return self._selection_handler

    def render(self) -> None:
        """Create the widget inside the current container."""
        self._stats_labels = {}
        self._fig_dict = self._figure_generator.make_figure(
            self._chart_data, visibility=self._visibility, theme=self._theme
        )

        with ui.row().classes("w-full items-start no-wrap gap-4"):
            with ui.column().classes("flex-1 min-w-0"):
                self._plot = ui.plotly(self._fig_dict).classes("w-full h-[600px]")
                if self._config.include_brush_stats:
                    # live updates while dragging; relayout covers moving or resizing the box
                    self._plot.on("plotly_selecting", self._on_plotly_selected)
                    self._plot.on("plotly_selected", self._on_plotly_selected)
                    self._plot.on("plotly_deselect", self._on_plotly_deselect)
                    self._plot.on("plotly_relayout", self._on_plotly_relayout)

            with ui.column().classes("w-64 gap-2"):
                if self._config.include_toggle:
                    self._visibility_select = ui.select(
                        self._config.visibility_options(),
                        value=self._visibility.value,
                        label="Show",
                        on_change=lambda e: self.set_visibility(e.value),
                    ).classes("w-full")

                if self._config.include_brush_stats:
                    ui.label("Percent Change").classes("font-bold")
                    for series in self._chart_data.cohorts():
                        self._stats_labels[series.name] = ui.label(f"{series.name}: n/a")
                    self._stats_hint = ui.label(NO_SELECTION_TEXT).classes("text-xs text-gray-500")

    def set_chart_data(self, chart_data: ChartData) -> None:
        """Replace the series (e.g. after a re-run) and redraw. Clears the brush stats."""
        _safe_call(self._set_chart_data_impl, chart_data)

    def _set_chart_data_impl(self, chart_data: ChartData) -> None:
        self._chart_data = chart_data
        self._selection_handler.handle_clear()
        self._redraw()

    def set_visibility(self, visibility: Union[str, SeriesVisibility]) -> None:
        """Show all / one cohort / difference only, without regenerating the figure."""
        _safe_call(self._set_visibility_impl, visibility)

    def _set_visibility_impl(self, visibility: Union[str, SeriesVisibility]) -> None:
        new = SeriesVisibility(visibility)
        if new.value not in self._config.visibility_options():
            raise InvalidArgumentError(f"visibility {new.value!r} is not available for this chart")
        if new == self._visibility and self._fig_dict:
            return
        self._visibility = new
        logger.info(f"visibility -> {new.value}")
        if self._visibility_select is not None and self._visibility_select.value != new.value:
            self._visibility_select.value = new.value
        if self._fig_dict:
            self._fig_dict = apply_visibility(self._fig_dict, new)
            if self._plot is not None:
                self._plot.update_figure(self._fig_dict)
        if self._on_visibility_change is not None:
            self._on_visibility_change(new)

    def set_theme(self, theme: Union[str, ThemeMode]) -> None:
        _safe_call(self._set_theme_impl, theme)

    def _set_theme_impl(self, theme: Union[str, ThemeMode]) -> None:
        self._theme = resolve_theme(theme)
        self._redraw()

    def _redraw(self) -> None:
        self._fig_dict = self._figure_generator.make_figure(
            self._chart_data, visibility=self._visibility, theme=self._theme
        )
        if self._plot is not None:
            self._plot.update_figure(self._fig_dict)

    def _on_plotly_relayout(self, e: GenericEventArguments) -> None:
        payload = e.args if isinstance(e.args, dict) else {}
        self._selection_handler.handle_relayout(payload)

    def _on_plotly_selected(self, e: GenericEventArguments) -> None:
        self._selection_handler.handle_selected(e.args)

    def _on_plotly_deselect(self, e: GenericEventArguments) -> None:
        self._selection_handler.handle_clear()

    def _set_stats(self, stats: Optional[RangeStats]) -> None:
        """Update the percent change labels (callback from selection handler)."""
        for name, label in self._stats_labels.items():
            value = stats.get(name) if stats is not None else None
            label.text = f"{name}: {format_percent(value)}"
        if self._stats_hint is not None:
            if stats is None:
                self._stats_hint.text = NO_SELECTION_TEXT
            else:
                self._stats_hint.text = f"{format_clock(stats.start_minute)} - {format_clock(stats.end_minute)}"
