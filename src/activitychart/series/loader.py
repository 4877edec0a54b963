"""CSV loading for cohort time series.

Each cohort file has a header row with at least a time column (integer minute
of the day, 0-1439) and a value column (median activity). Rows are kept in
file order.

Coercion policy:
  - strict=True (default): any non-numeric or missing field, non-integral or
    out-of-range minute aborts the load with ParseError.
  - strict=False: such rows are skipped and counted in a warning.
  In both modes minutes must be strictly increasing; a violation raises.
"""

from __future__ import annotations

from os import PathLike
from typing import Union

import numpy as np
import pandas as pd
from nicegui import run

from activitychart.series.errors import ParseError
from activitychart.series.time_series import MINUTES_PER_DAY, TimeSeries
from activitychart.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_TIME_COL = "time"
DEFAULT_VALUE_COL = "median_activity"

# number of offending rows listed in a ParseError message
_MAX_REPORTED_ROWS = 5

PathOrUrl = Union[str, "PathLike[str]"]


def _bad_rows_message(what: str, rows: pd.Index) -> str:
    # +2: 1-based line numbers plus the header line
    lines = [str(int(r) + 2) for r in rows[:_MAX_REPORTED_ROWS]]
    more = f" (+{len(rows) - _MAX_REPORTED_ROWS} more)" if len(rows) > _MAX_REPORTED_ROWS else ""
    return f"{what} on line(s) {', '.join(lines)}{more}"


def frame_to_series(
    df: pd.DataFrame,
    *,
    name: str = "",
    time_col: str = DEFAULT_TIME_COL,
    value_col: str = DEFAULT_VALUE_COL,
    strict: bool = True,
    source: str = "<frame>",
) -> TimeSeries:
    """Coerce a raw (string or numeric) DataFrame into a TimeSeries.

    Args:
        df: Raw rows, one per sample, in file order.
        name: Display name for the resulting series.
        time_col: Column holding the minute of day.
        value_col: Column holding the measured value.
        strict: Abort on malformed rows (True) or skip them (False).
        source: Path/URL used in error and log messages.

    Returns:
        TimeSeries with one sample per accepted row.

    Raises:
        ParseError: Missing columns, malformed rows (strict), or minutes that
            are not strictly increasing.
    """
    missing = [c for c in (time_col, value_col) if c not in df.columns]
    if missing:
        raise ParseError(f"{source}: missing required column(s) {missing}; found {list(df.columns)}")

    minutes = pd.to_numeric(df[time_col], errors="coerce")
    values = pd.to_numeric(df[value_col], errors="coerce")

    # NaN from coercion or missing fields, and "inf"/"-inf" which to_numeric accepts
    bad_numeric = minutes.isna() | ~np.isfinite(values.astype(float))
    bad_minute = ~bad_numeric & (
        (minutes != np.floor(minutes)) | (minutes < 0) | (minutes >= MINUTES_PER_DAY)
    )
    bad = bad_numeric | bad_minute

    if bad.any():
        if strict:
            if bad_numeric.any():
                raise ParseError(f"{source}: " + _bad_rows_message("non-numeric or non-finite field", df.index[bad_numeric]))
            raise ParseError(
                f"{source}: "
                + _bad_rows_message(f"minute not an integer in [0, {MINUTES_PER_DAY - 1}]", df.index[bad_minute])
            )
        logger.warning("%s: skipping %s malformed row(s) of %s", source, int(bad.sum()), len(df))
        minutes = minutes[~bad]
        values = values[~bad]

    series = TimeSeries.from_arrays(minutes.astype(int).tolist(), values.astype(float).tolist(), name=name)
    try:
        series.validate_minutes()
    except ValueError as e:
        raise ParseError(f"{source}: {e}") from e
    return series


def load_series_csv(
    path: PathOrUrl,
    *,
    name: str = "",
    time_col: str = DEFAULT_TIME_COL,
    value_col: str = DEFAULT_VALUE_COL,
    strict: bool = True,
) -> TimeSeries:
    """Load one cohort CSV (local path or URL) into a TimeSeries.

    Fields are read as strings so that numeric coercion, and therefore the
    strict/lenient policy, is applied in one place (frame_to_series).

    Raises:
        FileNotFoundError: Local path does not exist.
        ParseError: See frame_to_series(); also an empty or unparsable file.
    """
    source = str(path)
    try:
        df = pd.read_csv(path, dtype=str, skipinitialspace=True)
    except pd.errors.EmptyDataError as e:
        raise ParseError(f"{source}: file is empty") from e
    except pd.errors.ParserError as e:
        raise ParseError(f"{source}: {e}") from e
    series = frame_to_series(
        df,
        name=name,
        time_col=time_col,
        value_col=value_col,
        strict=strict,
        source=source,
    )
    logger.info("loaded %s samples from %s", len(series), source)
    return series


def load_cohorts(
    path_a: PathOrUrl,
    path_b: PathOrUrl,
    *,
    name_a: str = "",
    name_b: str = "",
    time_col: str = DEFAULT_TIME_COL,
    value_col: str = DEFAULT_VALUE_COL,
    strict: bool = True,
) -> tuple[TimeSeries, TimeSeries]:
    """Load both cohort files. Errors from either file propagate."""
    a = load_series_csv(path_a, name=name_a, time_col=time_col, value_col=value_col, strict=strict)
    b = load_series_csv(path_b, name=name_b, time_col=time_col, value_col=value_col, strict=strict)
    return a, b


async def load_cohorts_async(
    path_a: PathOrUrl,
    path_b: PathOrUrl,
    *,
    name_a: str = "",
    name_b: str = "",
    time_col: str = DEFAULT_TIME_COL,
    value_col: str = DEFAULT_VALUE_COL,
    strict: bool = True,
) -> tuple[TimeSeries, TimeSeries]:
    """Load both cohort files off the event loop (run.io_bound)."""
    return await run.io_bound(
        load_cohorts,
        path_a,
        path_b,
        name_a=name_a,
        name_b=name_b,
        time_col=time_col,
        value_col=value_col,
        strict=strict,
    )
