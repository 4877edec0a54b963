"""Plotly figure generation for the activity comparison chart.

FigureGenerator turns ChartData plus a ChartConfig into a Plotly figure dict
(never go.Figure) ready for ui.plotly / update_figure. Every data trace
carries its role in ``meta`` so visibility can be changed on the dict without
regenerating it (apply_visibility).
"""

from __future__ import annotations

from typing import Any, Optional, Union

import plotly.graph_objects as go
from plotly.colors import hex_to_rgb

from activitychart.chart.chart_config import (
    ROLE_COHORT_A,
    ROLE_COHORT_B,
    ROLE_DIFFERENCE,
    ROLE_DIFFERENCE_AREA,
    ChartConfig,
    SeriesVisibility,
    visible_roles,
)
from activitychart.chart.pipeline import ChartData
from activitychart.chart.theme import (
    ThemeMode,
    get_grid_color,
    get_lights_off_fill,
    get_theme_colors,
    get_theme_template,
    resolve_theme,
)
from activitychart.series.time_series import TimeSeries
from activitychart.utils.logging import get_logger

logger = get_logger(__name__)

DATA_ROLES = (ROLE_COHORT_A, ROLE_COHORT_B, ROLE_DIFFERENCE, ROLE_DIFFERENCE_AREA)


def format_hour_tick(minute: int) -> str:
    """Axis tick label for a whole-hour minute, e.g. 120 -> '2:00'."""
    return f"{minute // 60}:00"


def format_clock(minute: float) -> str:
    """Hover label 'H:MM' for a minute of the day."""
    m = int(minute)
    return f"{m // 60}:{m % 60:02d}"


def hex_to_rgba(color: str, alpha: float) -> str:
    """'#2ca02c', 0.3 -> 'rgba(44,160,44,0.3)'. Non-hex colors are returned unchanged."""
    if not color.startswith("#") or len(color) != 7:
        return color
    r, g, b = hex_to_rgb(color)
    return f"rgba({r},{g},{b},{alpha})"


def apply_visibility(fig_dict: dict, visibility: Union[str, SeriesVisibility]) -> dict:
    """Return a copy of fig_dict with trace ``visible`` flags set for visibility.

    Traces without a data role in ``meta`` are left alone.
    """
    roles = visible_roles(SeriesVisibility(visibility))
    data = []
    for trace in fig_dict.get("data", []):
        role = trace.get("meta")
        if role in DATA_ROLES:
            trace = {**trace, "visible": role in roles}
        data.append(trace)
    return {**fig_dict, "data": data}


class FigureGenerator:
    """Generates the comparison chart figure dict.

    Attributes:
        config: ChartConfig with labels, colors, axis bounds and feature flags.
    """

    def __init__(self, config: ChartConfig) -> None:
        self.config = config

    def make_figure(
        self,
        chart_data: ChartData,
        *,
        visibility: Optional[Union[str, SeriesVisibility]] = None,
        theme: Optional[Union[str, ThemeMode]] = None,
    ) -> dict:
        """Build the Plotly figure dict.

        Args:
            chart_data: Smoothed cohorts and optional difference series.
            visibility: Which series to show. Defaults to config.visibility.
            theme: Light or dark. Defaults to light.

        Returns:
            Plotly figure dictionary.
        """
        cfg = self.config
        visibility = SeriesVisibility(visibility if visibility is not None else cfg.visibility)
        theme_mode = resolve_theme(theme)
        roles = visible_roles(visibility)
        logger.info(
            f"FigureGenerator.make_figure: n_a={len(chart_data.cohort_a)}, n_b={len(chart_data.cohort_b)}, "
            f"difference={chart_data.difference is not None}, visibility={visibility.value}, theme={theme_mode.value}"
        )

        fig = go.Figure()

        if chart_data.difference is not None:
            # area first so the lines draw on top of it
            fig.add_trace(self._difference_area_trace(chart_data.difference, ROLE_DIFFERENCE_AREA in roles))

        fig.add_trace(self._line_trace(
            chart_data.cohort_a, ROLE_COHORT_A, cfg.cohort_a_label, cfg.cohort_a_color, ROLE_COHORT_A in roles,
        ))
        fig.add_trace(self._line_trace(
            chart_data.cohort_b, ROLE_COHORT_B, cfg.cohort_b_label, cfg.cohort_b_color, ROLE_COHORT_B in roles,
        ))
        if chart_data.difference is not None:
            fig.add_trace(self._line_trace(
                chart_data.difference, ROLE_DIFFERENCE, cfg.difference_label, cfg.difference_color,
                ROLE_DIFFERENCE in roles,
            ))

        self._add_lights_annotations(fig, theme_mode)
        self._update_layout(fig, chart_data, theme_mode)

        result = fig.to_dict()
        logger.debug(f"Figure generated: {len(result.get('data', []))} traces")
        return result

    def y_range(self, chart_data: ChartData) -> Optional[list[float]]:
        """[min of both cohorts, y_max], or None (autorange) if that is empty or inverted."""
        values = chart_data.cohort_a.values + chart_data.cohort_b.values
        if not values:
            return None
        y_min = min(values)
        if y_min >= self.config.y_max:
            return None
        return [y_min, self.config.y_max]

    def _line_trace(self, series: TimeSeries, role: str, label: str, color: str, visible: bool) -> go.Scatter:
        return go.Scatter(
            x=series.minutes,
            y=series.values,
            mode="lines",
            name=label,
            meta=role,
            visible=visible,
            line=dict(color=color, width=self.config.line_width),
            customdata=[format_clock(m) for m in series.minutes],
            hovertemplate=f"{label}<br>%{{customdata}}: %{{y:.2f}}<extra></extra>",
        )

    def _difference_area_trace(self, series: TimeSeries, visible: bool) -> go.Scatter:
        cfg = self.config
        return go.Scatter(
            x=series.minutes,
            y=series.values,
            mode="lines",
            name=f"{cfg.difference_label} (area)",
            meta=ROLE_DIFFERENCE_AREA,
            visible=visible,
            fill="tozeroy",
            fillcolor=hex_to_rgba(cfg.difference_color, cfg.difference_fill_opacity),
            line=dict(width=0),
            showlegend=False,
            hoverinfo="skip",
        )

    def _add_lights_annotations(self, fig: go.Figure, theme_mode: ThemeMode) -> None:
        """Shaded lights-off band, dashed divider and the two labels above the plot."""
        cfg = self.config
        _, fg_color = get_theme_colors(theme_mode)
        switch = cfg.lights_switch_minute
        if not cfg.x_min < switch < cfg.x_max:
            return
        fig.add_shape(
            type="rect",
            xref="x", yref="paper",
            x0=cfg.x_min, x1=switch, y0=0, y1=1,
            fillcolor=get_lights_off_fill(theme_mode),
            line=dict(width=0),
            layer="below",
        )
        fig.add_shape(
            type="line",
            xref="x", yref="paper",
            x0=switch, x1=switch, y0=0, y1=1,
            line=dict(color=fg_color, width=2, dash="dash"),
        )
        for text, x in (
            (cfg.lights_off_label, (cfg.x_min + switch) / 2),
            (cfg.lights_on_label, (switch + cfg.x_max) / 2),
        ):
            fig.add_annotation(
                x=x, y=1, xref="x", yref="paper",
                yanchor="bottom", showarrow=False,
                text=text, font=dict(size=16, color=fg_color),
            )

    def _update_layout(self, fig: go.Figure, chart_data: ChartData, theme_mode: ThemeMode) -> None:
        cfg = self.config
        bg_color, fg_color = get_theme_colors(theme_mode)
        tickvals = list(range(cfg.x_min, cfg.x_max + 1, cfg.tick_step_minutes))
        yaxis: dict[str, Any] = dict(
            title=cfg.y_title,
            showgrid=True,
            gridcolor=get_grid_color(theme_mode),
            zeroline=False,
        )
        y_range = self.y_range(chart_data)
        if y_range is not None:
            yaxis["range"] = y_range
        fig.update_layout(
            template=get_theme_template(theme_mode),
            paper_bgcolor=bg_color,
            plot_bgcolor=bg_color,
            font=dict(color=fg_color),
            margin=dict(l=80, r=40, t=50, b=70),
            xaxis=dict(
                title=cfg.x_title,
                range=[cfg.x_min, cfg.x_max],
                tickvals=tickvals,
                ticktext=[format_hour_tick(v) for v in tickvals],
                showgrid=False,
                zeroline=False,
            ),
            yaxis=yaxis,
            showlegend=True,
            legend=dict(x=1.02, y=0.5, xanchor="left"),
            dragmode="select" if cfg.include_brush_stats else "zoom",
            selectdirection="h",
            hovermode="x unified",
            uirevision="keep",
        )
