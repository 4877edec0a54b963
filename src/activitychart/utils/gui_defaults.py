"""Default classes and props for the NiceGUI elements used by the activity chart."""

from __future__ import annotations

from nicegui import ui

from activitychart.utils.logging import get_logger

logger = get_logger(__name__)

# tailwind text size -> quasar size prop
_QUASAR_SIZES = {
    "text-xs": "xs",
    "text-sm": "sm",
    "text-base": "md",
    "text-lg": "lg",
}


def setUpGuiDefaults(text_size: str = "text-sm") -> None:
    """Set default classes/props for labels, buttons, selects and checkboxes.

    Args:
        text_size: Tailwind CSS text size class ('text-xs', 'text-sm',
            'text-base' or 'text-lg').

    Raises:
        ValueError: If text_size is not one of the supported classes.
    """
    if text_size not in _QUASAR_SIZES:
        raise ValueError(f"Unsupported text_size {text_size!r}; expected one of {sorted(_QUASAR_SIZES)}")
    quasar_size = _QUASAR_SIZES[text_size]
    logger.debug('gui defaults text_size:"%s" quasar:%s', text_size, quasar_size)

    ui.label.default_classes(f"{text_size} select-text")
    ui.button.default_classes(text_size)
    ui.button.default_props("dense")
    ui.select.default_classes(text_size)
    ui.select.default_props("dense outlined")
    ui.checkbox.default_classes(text_size)
    ui.checkbox.default_props(f"dense size={quasar_size}")
