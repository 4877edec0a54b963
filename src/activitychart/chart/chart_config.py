"""Chart configuration for the activity comparison chart.

This module defines the SeriesVisibility enum and the ChartConfig dataclass
that parameterizes the pipeline (smoothing window, optional difference series,
optional brush statistics, visibility toggle) and the figure styling.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any

from activitychart.series.errors import InvalidArgumentError
from activitychart.series.transforms import AlignmentMode
from activitychart.utils.logging import get_logger

logger = get_logger(__name__)


class SeriesVisibility(str, Enum):
    """Which series the chart shows (values match the dropdown option keys)."""
    ALL = "all"
    COHORT_A = "male"
    COHORT_B = "female"
    DIFFERENCE = "difference"


# trace roles used as Plotly trace `meta`
ROLE_COHORT_A = "cohort_a"
ROLE_COHORT_B = "cohort_b"
ROLE_DIFFERENCE = "difference"
ROLE_DIFFERENCE_AREA = "difference_area"

_VISIBLE_ROLES: dict[SeriesVisibility, frozenset[str]] = {
    SeriesVisibility.ALL: frozenset({ROLE_COHORT_A, ROLE_COHORT_B, ROLE_DIFFERENCE, ROLE_DIFFERENCE_AREA}),
    SeriesVisibility.COHORT_A: frozenset({ROLE_COHORT_A}),
    SeriesVisibility.COHORT_B: frozenset({ROLE_COHORT_B}),
    SeriesVisibility.DIFFERENCE: frozenset({ROLE_DIFFERENCE, ROLE_DIFFERENCE_AREA}),
}


def visible_roles(visibility: SeriesVisibility) -> frozenset[str]:
    """Trace roles shown for a visibility choice. The difference area follows the difference line."""
    return _VISIBLE_ROLES[SeriesVisibility(visibility)]


@dataclass
class ChartConfig:
    """Configuration for one chart.

    Pipeline fields (window_size, include_difference, alignment) decide what
    is computed; the rest only affect presentation.
    """
    window_size: int = 10
    include_difference: bool = True
    include_brush_stats: bool = True
    include_toggle: bool = True
    visibility: SeriesVisibility = SeriesVisibility.ALL
    alignment: AlignmentMode = AlignmentMode.POSITION

    cohort_a_label: str = "Male Activity"
    cohort_b_label: str = "Female Activity"
    difference_label: str = "Activity Difference"
    cohort_a_color: str = "#1f77b4"
    cohort_b_color: str = "#ff7f0e"
    difference_color: str = "#2ca02c"
    line_width: float = 2.5
    difference_fill_opacity: float = 0.3

    x_min: int = 0
    x_max: int = 1440
    y_max: float = 60.0               # upper bound of the value axis; lower bound is the data minimum
    tick_step_minutes: int = 120
    lights_switch_minute: int = 720   # lights off before, lights on after
    lights_off_label: str = "Lights Off"
    lights_on_label: str = "Lights On"
    x_title: str = "Time (Hours)"
    y_title: str = "Median Activity"

    def __post_init__(self) -> None:
        self.visibility = SeriesVisibility(self.visibility)
        self.alignment = AlignmentMode(self.alignment)
        if self.visibility is SeriesVisibility.DIFFERENCE and not self.include_difference:
            logger.warning("visibility 'difference' needs include_difference, showing all series")
            self.visibility = SeriesVisibility.ALL
        self.validate()

    def validate(self) -> None:
        """Raise InvalidArgumentError for settings the pipeline cannot run with."""
        if isinstance(self.window_size, bool) or not isinstance(self.window_size, int) or self.window_size <= 0:
            raise InvalidArgumentError(f"window_size must be a positive integer, got {self.window_size!r}")
        if self.x_max <= self.x_min:
            raise InvalidArgumentError(f"x_max ({self.x_max}) must be greater than x_min ({self.x_min})")
        if self.tick_step_minutes <= 0:
            raise InvalidArgumentError(f"tick_step_minutes must be > 0, got {self.tick_step_minutes}")
        # labels key the range statistics and the per-cohort stat rows
        if self.cohort_a_label == self.cohort_b_label:
            raise InvalidArgumentError(f"cohort labels must differ, both are {self.cohort_a_label!r}")

    def labels(self) -> dict[str, str]:
        """Trace role -> display label."""
        return {
            ROLE_COHORT_A: self.cohort_a_label,
            ROLE_COHORT_B: self.cohort_b_label,
            ROLE_DIFFERENCE: self.difference_label,
        }

    def visibility_options(self) -> dict[str, str]:
        """Dropdown options: SeriesVisibility value -> text."""
        options = {
            SeriesVisibility.ALL.value: "All",
            SeriesVisibility.COHORT_A.value: f"{self.cohort_a_label} Only",
            SeriesVisibility.COHORT_B.value: f"{self.cohort_b_label} Only",
        }
        if self.include_difference:
            options[SeriesVisibility.DIFFERENCE.value] = f"{self.difference_label} Only"
        return options

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-friendly dict (enums as their values)."""
        d: dict[str, Any] = {}
        for f in fields(self):
            v = getattr(self, f.name)
            d[f.name] = v.value if isinstance(v, Enum) else v
        return d

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ChartConfig":
        """Deserialize from dict. Unknown keys are ignored with a warning, missing keys use defaults.

        Raises:
            InvalidArgumentError: If the resulting config does not validate.
        """
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in data.items():
            if key not in known:
                logger.warning(f"Unknown key '{key}' in chart config, ignoring")
                continue
            kwargs[key] = value
        try:
            return cls(**kwargs)
        except ValueError as e:
            if isinstance(e, InvalidArgumentError):
                raise
            raise InvalidArgumentError(str(e)) from e
