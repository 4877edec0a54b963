"""Light/dark theme values for the activity chart figure."""

from __future__ import annotations

from enum import Enum
from typing import Union


class ThemeMode(str, Enum):
    """UI theme mode shared by the header toggle and the figure."""

    DARK = "dark"
    LIGHT = "light"


def resolve_theme(theme: Union[str, ThemeMode, None]) -> ThemeMode:
    """Convert str/None to ThemeMode. Anything not dark is LIGHT."""
    if isinstance(theme, ThemeMode):
        return theme
    if theme is not None and str(theme).lower() in ("dark", "plotly_dark"):
        return ThemeMode.DARK
    return ThemeMode.LIGHT


def get_theme_colors(theme: ThemeMode) -> tuple[str, str]:
    """(background, foreground) colors."""
    if theme is ThemeMode.DARK:
        return "#121212", "#eeeeee"
    return "#ffffff", "#000000"


def get_theme_template(theme: ThemeMode) -> str:
    if theme is ThemeMode.DARK:
        return "plotly_dark"
    return "plotly_white"


def get_grid_color(theme: ThemeMode) -> str:
    return "rgba(255,255,255,0.2)" if theme is ThemeMode.DARK else "#cccccc"


def get_lights_off_fill(theme: ThemeMode) -> str:
    """Fill of the shaded lights-off band (lightgrey at 0.6 in light mode)."""
    return "rgba(120,120,120,0.35)" if theme is ThemeMode.DARK else "rgba(211,211,211,0.6)"
