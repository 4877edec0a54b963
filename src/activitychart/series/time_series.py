"""Time series data model.

A TimeSeries is an immutable, ordered sequence of (minute, value) samples for
one cohort over a single day (minute 0 .. 1439). Transforms never mutate a
TimeSeries; they build a new one.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator

import numpy as np
import pandas as pd

from activitychart.series.errors import SampleNotFoundError

MINUTES_PER_DAY = 1440
MINUTE_COL = "minute"
VALUE_COL = "value"


@dataclass(frozen=True)
class TimeSample:
    """One sample: clock minute of the day and the measured value."""

    minute: int
    value: float


@dataclass(frozen=True)
class TimeSeries:
    """Ordered samples for one cohort.

    Attributes:
        samples: Samples in load order. Minutes are expected to be unique and
            strictly increasing (see validate_minutes()).
        name: Display name of the cohort (e.g. "Male Activity").
    """

    samples: tuple[TimeSample, ...] = ()
    name: str = ""
    _by_minute: dict[int, float] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        # accept any iterable of samples, store as tuple
        if not isinstance(self.samples, tuple):
            object.__setattr__(self, "samples", tuple(self.samples))
        object.__setattr__(self, "_by_minute", {s.minute: s.value for s in self.samples})

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[int, float]], name: str = "") -> "TimeSeries":
        """Build from (minute, value) pairs."""
        return cls(tuple(TimeSample(int(m), float(v)) for m, v in pairs), name=name)

    @classmethod
    def from_arrays(
        cls,
        minutes: Iterable[int],
        values: Iterable[float],
        name: str = "",
    ) -> "TimeSeries":
        """Build from parallel minute and value sequences of equal length."""
        minutes = list(minutes)
        values = list(values)
        if len(minutes) != len(values):
            raise ValueError(f"minutes ({len(minutes)}) and values ({len(values)}) differ in length")
        return cls.from_pairs(zip(minutes, values), name=name)

    @classmethod
    def from_frame(cls, df: pd.DataFrame, name: str = "") -> "TimeSeries":
        """Build from a DataFrame with 'minute' and 'value' columns (row order kept)."""
        for col in (MINUTE_COL, VALUE_COL):
            if col not in df.columns:
                raise ValueError(f"df must contain required column {col!r}")
        return cls.from_arrays(
            df[MINUTE_COL].astype(int).tolist(),
            df[VALUE_COL].astype(float).tolist(),
            name=name,
        )

    def to_frame(self) -> pd.DataFrame:
        """Return a DataFrame with columns 'minute' (int) and 'value' (float)."""
        return pd.DataFrame(
            {
                MINUTE_COL: np.asarray(self.minutes, dtype=int),
                VALUE_COL: np.asarray(self.values, dtype=float),
            }
        )

    def renamed(self, name: str) -> "TimeSeries":
        """Same samples, different display name."""
        return TimeSeries(self.samples, name=name)

    @property
    def minutes(self) -> list[int]:
        return [s.minute for s in self.samples]

    @property
    def values(self) -> list[float]:
        return [s.value for s in self.samples]

    def value_at(self, minute: int) -> float:
        """Value of the sample at exactly ``minute``.

        Raises:
            SampleNotFoundError: If no sample has that minute.
        """
        try:
            return self._by_minute[minute]
        except KeyError:
            raise SampleNotFoundError(minute, self.name) from None

    def validate_minutes(self) -> None:
        """Check minutes are within the day and strictly increasing.

        Raises:
            ValueError: On the first offending sample.
        """
        prev = None
        for i, s in enumerate(self.samples):
            if not 0 <= s.minute < MINUTES_PER_DAY:
                raise ValueError(f"sample {i}: minute {s.minute} outside [0, {MINUTES_PER_DAY - 1}]")
            if prev is not None and s.minute <= prev:
                raise ValueError(f"sample {i}: minute {s.minute} does not increase (previous {prev})")
            prev = s.minute

    def __len__(self) -> int:
        return len(self.samples)

    def __iter__(self) -> Iterator[TimeSample]:
        return iter(self.samples)

    def __getitem__(self, index: int) -> TimeSample:
        return self.samples[index]
