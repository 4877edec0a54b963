"""Unit tests for rolling_average and absolute_difference."""

from __future__ import annotations

import logging

import numpy as np
import pytest

from activitychart.series.errors import InvalidArgumentError
from activitychart.series.time_series import TimeSeries
from activitychart.series.transforms import AlignmentMode, absolute_difference, rolling_average


def _naive_trailing_mean(values: list[float], window_size: int) -> list[float]:
    out = []
    for i in range(len(values)):
        window = values[max(0, i - window_size + 1): i + 1]
        out.append(sum(window) / len(window))
    return out


@pytest.fixture
def uneven_series() -> TimeSeries:
    rng = np.random.default_rng(3)
    minutes = sorted(rng.choice(np.arange(1440), size=60, replace=False).tolist())
    values = (rng.random(60) * 50).tolist()
    return TimeSeries.from_arrays(minutes, values, name="uneven")


# --- rolling_average ---


def test_rolling_average_window_two(three_point_series):
    out = rolling_average(three_point_series, 2)
    assert out.minutes == [0, 1, 2]
    assert out.values == pytest.approx([10.0, 15.0, 25.0])
    assert out.name == "cohort"


def test_rolling_average_window_one_is_identity(uneven_series):
    out = rolling_average(uneven_series, 1)
    assert out.minutes == uneven_series.minutes
    assert out.values == pytest.approx(uneven_series.values)


def test_rolling_average_window_at_least_length_is_cumulative_mean(uneven_series):
    n = len(uneven_series)
    values = uneven_series.values
    expected = [sum(values[: i + 1]) / (i + 1) for i in range(n)]
    for window_size in (n, n + 25):
        assert rolling_average(uneven_series, window_size).values == pytest.approx(expected)


@pytest.mark.parametrize("window_size", [2, 5, 10, 59])
def test_rolling_average_matches_naive_trailing_window(uneven_series, window_size):
    out = rolling_average(uneven_series, window_size)
    assert out.minutes == uneven_series.minutes
    assert out.values == pytest.approx(_naive_trailing_mean(uneven_series.values, window_size))


def test_rolling_average_first_value_is_first_sample(uneven_series):
    out = rolling_average(uneven_series, 10)
    assert out.values[0] == uneven_series.values[0]


def test_rolling_average_empty():
    out = rolling_average(TimeSeries(name="empty"), 10)
    assert len(out) == 0
    assert out.name == "empty"


def test_rolling_average_does_not_mutate_input(three_point_series):
    before = three_point_series.values
    rolling_average(three_point_series, 3)
    assert three_point_series.values == before


@pytest.mark.parametrize("window_size", [0, -1, 2.5, True, "10"])
def test_rolling_average_invalid_window_raises(three_point_series, window_size):
    with pytest.raises(InvalidArgumentError):
        rolling_average(three_point_series, window_size)


def test_rolling_average_accepts_numpy_int(three_point_series):
    out = rolling_average(three_point_series, np.int64(2))
    assert out.values == pytest.approx([10.0, 15.0, 25.0])


# --- absolute_difference ---


def test_absolute_difference_example():
    a = TimeSeries.from_pairs([(0, 10.0), (1, 10.0)])
    b = TimeSeries.from_pairs([(0, 4.0), (1, 16.0)])
    out = absolute_difference(a, b, name="diff")
    assert out.minutes == [0, 1]
    assert out.values == pytest.approx([6.0, 6.0])
    assert out.name == "diff"


def test_absolute_difference_symmetric(uneven_series):
    other = TimeSeries.from_arrays(uneven_series.minutes, [v * 0.5 + 3 for v in uneven_series.values])
    assert absolute_difference(uneven_series, other).values == absolute_difference(other, uneven_series).values


def test_absolute_difference_with_itself_is_zero(uneven_series):
    assert absolute_difference(uneven_series, uneven_series).values == [0.0] * len(uneven_series)


def test_absolute_difference_length_mismatch_raises():
    a = TimeSeries.from_pairs([(0, 1.0), (1, 2.0)])
    b = TimeSeries.from_pairs([(0, 1.0)])
    with pytest.raises(InvalidArgumentError) as exc_info:
        absolute_difference(a, b)
    assert "lengths differ" in str(exc_info.value)


def test_absolute_difference_position_mode_takes_minutes_from_first(caplog):
    a = TimeSeries.from_pairs([(0, 5.0), (1, 5.0)], name="a")
    b = TimeSeries.from_pairs([(0, 1.0), (2, 8.0)], name="b")
    with caplog.at_level(logging.WARNING, logger="activitychart"):
        out = absolute_difference(a, b)
    assert out.minutes == [0, 1]
    assert out.values == pytest.approx([4.0, 3.0])
    assert "pairing by position" in caplog.text


def test_absolute_difference_minute_mode_joins_and_skips(caplog):
    a = TimeSeries.from_pairs([(0, 5.0), (1, 5.0), (2, 5.0)], name="a")
    b = TimeSeries.from_pairs([(0, 1.0), (2, 8.0)], name="b")
    with caplog.at_level(logging.WARNING, logger="activitychart"):
        out = absolute_difference(a, b, alignment=AlignmentMode.MINUTE)
    assert out.minutes == [0, 2]
    assert out.values == pytest.approx([4.0, 3.0])
    assert "skipped 1 sample(s)" in caplog.text


def test_absolute_difference_minute_mode_accepts_string():
    a = TimeSeries.from_pairs([(0, 5.0)])
    out = absolute_difference(a, a, alignment="minute")
    assert out.values == [0.0]


def test_absolute_difference_unknown_alignment_raises():
    a = TimeSeries.from_pairs([(0, 5.0)])
    with pytest.raises(InvalidArgumentError):
        absolute_difference(a, a, alignment="nearest")


def test_absolute_difference_empty():
    assert len(absolute_difference(TimeSeries(), TimeSeries())) == 0
