"""Fixtures for series tests."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from activitychart.series.time_series import TimeSeries


@pytest.fixture
def write_csv(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write CSV text to tmp_path/<name> and return the path."""

    def _write(name: str, text: str) -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def three_point_series() -> TimeSeries:
    return TimeSeries.from_pairs([(0, 10.0), (1, 20.0), (2, 30.0)], name="cohort")
