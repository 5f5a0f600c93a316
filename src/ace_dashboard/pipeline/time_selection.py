from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from ace_dashboard.errors import EmptySelection, InvalidTimeMode
from ace_dashboard.preprocess.calendar import MONTH_KEY_RE, semester_to_months, year_to_months
from ace_dashboard.validation import is_valid_time_mode

LOGGER = logging.getLogger(__name__)


def _month_only(key: str) -> list[str]:
    return [key] if isinstance(key, str) and MONTH_KEY_RE.match(key) else []


EXPANDERS: dict[str, Callable[[str], list[str]]] = {
    "month": _month_only,
    "semester": semester_to_months,
    "year": year_to_months,
}


def resolve_time_window(
    mode: str,
    selections: Iterable[str],
    available: Iterable[str],
) -> list[str]:
    """Expand selected months, semesters or academic years into an available month window."""
    if not is_valid_time_mode(mode):
        raise InvalidTimeMode(mode)
    available_set = set(available)
    expand = EXPANDERS[mode]

    months: set[str] = set()
    for key in selections:
        expanded = expand(key)
        kept = [month for month in expanded if month in available_set]
        if len(kept) < len(expanded):
            LOGGER.debug("selection %s: dropped %d unavailable months", key, len(expanded) - len(kept))
        months.update(kept)

    if not months:
        raise EmptySelection()
    return sorted(months)
