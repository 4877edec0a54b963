"""Tests for setUpGuiDefaults with a mocked ui module."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

import activitychart.utils.gui_defaults as gd_mod
from activitychart.utils.gui_defaults import setUpGuiDefaults


@pytest.mark.requires_nicegui
def test_gui_defaults_applied(monkeypatch: pytest.MonkeyPatch) -> None:
    fake_ui = MagicMock()
    monkeypatch.setattr(gd_mod, "ui", fake_ui)
    setUpGuiDefaults("text-xs")
    fake_ui.label.default_classes.assert_called_once_with("text-xs select-text")
    fake_ui.checkbox.default_props.assert_called_once_with("dense size=xs")
    fake_ui.select.default_props.assert_called_once_with("dense outlined")


def test_gui_defaults_rejects_unknown_size() -> None:
    with pytest.raises(ValueError):
        setUpGuiDefaults("text-7xl")
