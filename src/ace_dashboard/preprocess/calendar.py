"""Month keys and the institutional academic calendar.

Every time bucket in the engine is a ``YYYY-MM`` month key. Academic periods
are numbered in era years (Gregorian year minus 1911): the fall semester runs
August through January, the spring semester February through July, and an
academic year spans August through the following July.
"""

from __future__ import annotations

import math
import re
from datetime import date, datetime

import numpy as np
import pandas as pd

ERA_OFFSET = 1911
SPREADSHEET_EPOCH = pd.Timestamp(1899, 12, 30)
DEFAULT_RETENTION_YEARS = 7

DATE_LITERAL_RE = re.compile(r"Date\((\d+),\s*(\d+),\s*(\d+)(?:,\s*\d+)*\)")
# A free-form string must carry a calendar date; pandas fills missing parts from today.
DATE_SHAPE_RE = re.compile(r"\d{4}|\d{1,2}\s*[-/.]\s*\d{1,2}\s*[-/.]\s*\d{2,4}")
MONTH_KEY_RE = re.compile(r"^(\d{4})-(\d{2})$")
SEMESTER_KEY_RE = re.compile(r"^\s*(-?\d+)-([12])\s*$")
YEAR_KEY_RE = re.compile(r"^\s*(-?\d+)\s*$")


def month_key(year: int, month: int) -> str:
    return f"{year:04d}-{month:02d}"


def split_month_key(key: str) -> tuple[int, int]:
    match = MONTH_KEY_RE.match(key)
    if not match:
        raise ValueError(f"not a month key: {key!r}")
    return int(match.group(1)), int(match.group(2))


def _is_absent(value: object) -> bool:
    if value is None or isinstance(value, bool):
        return True
    if isinstance(value, str):
        return value == ""
    try:
        missing = pd.isna(value)
    except (TypeError, ValueError):
        return False
    return bool(missing) if isinstance(missing, (bool, np.bool_)) else False


def _from_date_literal(year: int, month_index: int, day: int) -> pd.Timestamp:
    # Out-of-range months and days roll into neighbouring months.
    year += month_index // 12
    first_of_month = pd.Timestamp(year, month_index % 12 + 1, 1)
    return first_of_month + pd.Timedelta(days=day - 1)


def _to_timestamp(value: object) -> pd.Timestamp | None:
    if isinstance(value, (datetime, date, np.datetime64)):
        return pd.Timestamp(value)
    if isinstance(value, (int, float, np.integer, np.floating)):
        days = float(value)
        if not math.isfinite(days) or days == 0:
            return None
        return SPREADSHEET_EPOCH + pd.Timedelta(days=days)
    if isinstance(value, str):
        match = DATE_LITERAL_RE.search(value)
        if match:
            year, month_index, day = (int(part) for part in match.groups())
            return _from_date_literal(year, month_index, day)
        if not DATE_SHAPE_RE.search(value):
            return None
        parsed = pd.to_datetime(value.strip(), errors="coerce")
        if isinstance(parsed, pd.Timestamp):
            return parsed
    return None


def parse_month_key(value: object) -> str | None:
    """Normalize a raw cell into a month key, or ``None`` when it is not a date.

    Accepts datetimes, spreadsheet serial day counts, gviz ``Date(Y,M,D)``
    literals (zero-based month) and free-form date strings.
    """
    if _is_absent(value):
        return None
    try:
        stamp = _to_timestamp(value)
    except (ValueError, OverflowError, pd.errors.OutOfBoundsDatetime):
        return None
    if stamp is None or pd.isna(stamp):
        return None
    return month_key(stamp.year, stamp.month)


def first_month_key(values: object) -> str | None:
    """Return the month key of the first cell in ``values`` that parses as a date."""
    for value in values:
        key = parse_month_key(value)
        if key:
            return key
    return None


def min_available_month(
    now: datetime | None = None,
    retention_years: int = DEFAULT_RETENTION_YEARS,
) -> str:
    current = now or datetime.now()
    return month_key(current.year - retention_years, current.month)


def month_to_semester(key: str) -> str:
    year, month = split_month_key(key)
    if month >= 8:
        return f"{year - ERA_OFFSET}-1"
    if month == 1:
        return f"{year - ERA_OFFSET - 1}-1"
    return f"{year - ERA_OFFSET - 1}-2"


def semester_to_months(semester_key: str) -> list[str]:
    match = SEMESTER_KEY_RE.match(str(semester_key))
    if not match:
        return []
    year = int(match.group(1)) + ERA_OFFSET
    if match.group(2) == "1":
        return [month_key(year, month) for month in range(8, 13)] + [month_key(year + 1, 1)]
    return [month_key(year + 1, month) for month in range(2, 8)]


def month_to_year(key: str) -> str:
    year, month = split_month_key(key)
    return str(year - ERA_OFFSET if month >= 8 else year - ERA_OFFSET - 1)


def year_to_months(year_key: str | int) -> list[str]:
    match = YEAR_KEY_RE.match(str(year_key))
    if not match:
        return []
    year = int(match.group(1)) + ERA_OFFSET
    return [month_key(year, month) for month in range(8, 13)] + [
        month_key(year + 1, month) for month in range(1, 8)
    ]
