"""
Logging utilities for the activitychart package.

Library modules only ever call ``get_logger(__name__)``. The standalone app
(``activitychart.app.activity_chart_app``) is the one place that calls
``configure_logging()`` to attach a console handler.

activitychart does NOT write any log files.

Example Usage
-------------
In library code (transforms.py, figure_generator.py, etc.):
    ```python
    from activitychart.utils.logging import get_logger
    logger = get_logger(__name__)
    logger.info("smoothed %s samples", n)
    ```

In the app or a script:
    ```python
    from activitychart.utils.logging import configure_logging
    configure_logging(level="DEBUG")
    ```
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional, Union

PACKAGE_LOGGER_NAME = "activitychart"
LOG_LEVEL_ENV_VAR = "ACTIVITYCHART_LOG_LEVEL"

DEFAULT_FMT = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d:%(funcName)s: %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _resolve_level(level: Optional[Union[str, int]]) -> int:
    """Map None / level name / int to a logging level int (unknown names -> INFO)."""
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV_VAR, "INFO")
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.INFO)
    return int(level)


def configure_logging(
    level: Optional[Union[str, int]] = None,
    *,
    fmt: Optional[str] = None,
    datefmt: Optional[str] = None,
    force: bool = False,
) -> logging.Logger:
    """
    Attach a stderr handler to the ``activitychart`` logger (never root).

    Parameters
    ----------
    level:
        Logging level (e.g. "DEBUG", "INFO"). Defaults to the
        ACTIVITYCHART_LOG_LEVEL env var, or "INFO" if unset.
    fmt:
        Log message format. Defaults to DEFAULT_FMT.
    datefmt:
        Date format. Defaults to DEFAULT_DATEFMT.
    force:
        If True, drop existing handlers first. If False and a stderr handler
        is already attached, only the level is updated.

    Returns
    -------
    The configured package logger.
    """
    resolved = _resolve_level(level)
    logger = logging.getLogger(PACKAGE_LOGGER_NAME)
    logger.setLevel(resolved)

    if force:
        for h in logger.handlers[:]:
            h.close()
            logger.removeHandler(h)
    else:
        for h in logger.handlers:
            if isinstance(h, logging.StreamHandler) and h.stream is sys.stderr:
                h.setLevel(resolved)
                return logger

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(resolved)
    console.setFormatter(logging.Formatter(fmt=fmt or DEFAULT_FMT, datefmt=datefmt or DEFAULT_DATEFMT))
    logger.addHandler(console)
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return ``logging.getLogger(name)``, or the package logger when name is None."""
    return logging.getLogger(name or PACKAGE_LOGGER_NAME)
