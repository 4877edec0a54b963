"""Brush (interval) selection handling: Plotly selection payload -> RangeStats."""

from __future__ import annotations

from typing import Any, Callable, Optional

from activitychart.chart.pipeline import ChartData
from activitychart.series.range_stats import RangeStats, compute_range_stats
from activitychart.utils.logging import get_logger

logger = get_logger(__name__)


def parse_selection_x_range(payload: dict) -> Optional[tuple[float, float]]:
    """Extract the selected (start, end) x interval from a plotly_relayout payload.

    Handles the flat keys Plotly sends when a selection box is moved or
    resized ("selections[0].x0" ...) and the "selections" list sent when one
    is drawn. Returns None if the payload has no usable rect selection.
    """
    x0 = payload.get("selections[0].x0")
    x1 = payload.get("selections[0].x1")
    if x0 is None or x1 is None:
        selections = payload.get("selections") or []
        sel = selections[0] if selections and isinstance(selections[0], dict) else None
        if sel is None or sel.get("type", "rect") != "rect":
            return None
        x0, x1 = sel.get("x0"), sel.get("x1")
    if x0 is None or x1 is None:
        return None
    try:
        a, b = float(x0), float(x1)
    except (TypeError, ValueError):
        return None
    return (min(a, b), max(a, b))


def parse_selected_event_x_range(args: Any) -> Optional[tuple[float, float]]:
    """Extract (start, end) from plotly_selected event args ({"range": {"x": [x0, x1]}})."""
    if not isinstance(args, dict):
        return None
    x_range = (args.get("range") or {}).get("x")
    if not x_range or len(x_range) != 2:
        return None
    try:
        a, b = float(x_range[0]), float(x_range[1])
    except (TypeError, ValueError):
        return None
    return (min(a, b), max(a, b))


class BrushSelectionHandler:
    """Recomputes percent change for both cohorts whenever the brush changes.

    A cohort whose endpoint has no exact-minute sample (or a zero start value)
    keeps its previous value; the other cohort still updates.
    """

    def __init__(
        self,
        get_chart_data: Callable[[], Optional[ChartData]],
        on_update: Callable[[Optional[RangeStats]], None],
    ) -> None:
        self._get_chart_data = get_chart_data
        self._on_update = on_update
        self._stats: Optional[RangeStats] = None

    def get_stats(self) -> Optional[RangeStats]:
        return self._stats

    def handle_relayout(self, payload: dict) -> None:
        """Handle a plotly_relayout payload; ignores relayouts unrelated to selection."""
        if "selections" not in payload and "selections[0].x0" not in payload:
            return
        if "selections" in payload and not payload.get("selections"):
            self.handle_clear()
            return
        x_range = parse_selection_x_range(payload)
        if x_range is None:
            return
        self.select_range(*x_range)

    def handle_selected(self, args: Any) -> None:
        """Handle plotly_selected event args."""
        x_range = parse_selected_event_x_range(args)
        if x_range is not None:
            self.select_range(*x_range)

    def select_range(self, start_minute: float, end_minute: float) -> Optional[RangeStats]:
        """Compute stats for [start_minute, end_minute] and notify on_update."""
        chart_data = self._get_chart_data()
        if chart_data is None:
            return None
        self._stats = compute_range_stats(
            chart_data.cohorts(),
            start_minute,
            end_minute,
            previous=self._stats,
        )
        logger.info(
            "Brush selection %.1f..%.1f: %s",
            start_minute,
            end_minute,
            self._stats.changes,
        )
        self._on_update(self._stats)
        return self._stats

    def handle_clear(self) -> None:
        if self._stats is None:
            return
        self._stats = None
        self._on_update(None)
        logger.info("Brush selection cleared")
