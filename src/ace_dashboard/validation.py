from __future__ import annotations

import re
from typing import TypeVar

MAX_TEXT_LENGTH = 1000
AGGREGATION_MODES = ("new", "cumulative")
TIME_MODES = ("month", "semester", "year")

CHART_ID_RE = re.compile(r"^chart(?:[0-9]|1[01])$")
ANGLE_BRACKETS_RE = re.compile(r"[<>]")
JAVASCRIPT_SCHEME_RE = re.compile(r"javascript:", re.IGNORECASE)

T = TypeVar("T")


def sanitize(value: T) -> T | str:
    """Strip markup-ish characters from free text; other types pass through."""
    if not isinstance(value, str):
        return value
    text = ANGLE_BRACKETS_RE.sub("", value)
    text = JAVASCRIPT_SCHEME_RE.sub("", text)
    return text.strip()[:MAX_TEXT_LENGTH]


def is_valid_chart_id(chart_id: object) -> bool:
    return isinstance(chart_id, str) and CHART_ID_RE.fullmatch(chart_id) is not None


def is_valid_aggregation_mode(mode: object) -> bool:
    return isinstance(mode, str) and mode in AGGREGATION_MODES


def is_valid_time_mode(mode: object) -> bool:
    return isinstance(mode, str) and mode in TIME_MODES
