"""Header component for the activity chart app: title and theme toggle."""

from __future__ import annotations

from typing import Callable, Optional

from nicegui import app, ui

from activitychart.chart.theme import ThemeMode

THEME_STORAGE_KEY = "activity_chart_dark_mode"


def build_activity_chart_header(
    *,
    title: str = "Activity Chart",
    on_theme_change: Optional[Callable[[ThemeMode], None]] = None,
) -> ui.dark_mode:
    """Build the page header.

    Left: title label. Right: dark/light toggle; the choice is stored in
    app.storage.user and reported through on_theme_change.

    Returns:
        Dark mode controller for the page.
    """
    dark_mode = ui.dark_mode()
    dark_mode.value = bool(app.storage.user.get(THEME_STORAGE_KEY, False))

    def _toggle_theme() -> None:
        dark_mode.value = not dark_mode.value
        app.storage.user[THEME_STORAGE_KEY] = dark_mode.value
        theme_btn.props(f"icon={'light_mode' if dark_mode.value else 'dark_mode'}")
        if on_theme_change is not None:
            on_theme_change(current_theme(dark_mode))

    with ui.header().classes("items-center justify-between").props("dense").style(
        "min-height: 36px; height: 36px; padding: 0 8px;"
    ):
        ui.label(title).classes("!text-lg font-bold text-white")
        theme_btn = ui.button(
            icon="light_mode" if dark_mode.value else "dark_mode",
            on_click=_toggle_theme,
        ).props("flat round dense text-color=white").tooltip("Toggle dark / light mode")

    return dark_mode


def current_theme(dark_mode: ui.dark_mode) -> ThemeMode:
    return ThemeMode.DARK if dark_mode.value else ThemeMode.LIGHT
