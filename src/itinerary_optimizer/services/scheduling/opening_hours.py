"""Opening-hours hint parsing and time window normalisation."""

from __future__ import annotations

import re
from typing import Any, Optional

from ...models.domain import LAST_MINUTE_OF_DAY, MINUTES_PER_DAY, TimeWindow, finite_number, round_half_up

_ALWAYS_OPEN_PATTERNS = (
    re.compile(r"24\s*/\s*7", re.IGNORECASE),
    re.compile(r"open\s*24\s*hours", re.IGNORECASE),
)
_RANGE_PATTERN = re.compile(r"(\d{1,2}):(\d{2})\s*[-–]\s*(\d{1,2}):(\d{2})")


def _all_day() -> TimeWindow:
    return TimeWindow(open_minutes=0, close_minutes=LAST_MINUTE_OF_DAY)


def _clamp_minute_of_day(value: int) -> int:
    return max(0, min(LAST_MINUTE_OF_DAY, value))


def parse_opening_hours_window(opening_hours: Optional[str]) -> Optional[TimeWindow]:
    """Extract a single daily window from free-form text such as ``"Mo-Fr 09:00-17:30"``.

    Only the first ``H:MM-H:MM`` range is used. Windows that cross midnight are
    not modelled and are treated as open all day. Returns ``None`` when nothing
    usable is found.
    """
    if not opening_hours:
        return None
    text = opening_hours.strip()
    if not text:
        return None

    if any(pattern.search(text) for pattern in _ALWAYS_OPEN_PATTERNS):
        return _all_day()

    match = _RANGE_PATTERN.search(text)
    if not match:
        return None

    open_h, open_m, close_h, close_m = (int(group) for group in match.groups())
    open_minutes = _clamp_minute_of_day(open_h * 60 + open_m)
    close_minutes = _clamp_minute_of_day(close_h * 60 + close_m)

    if close_minutes < open_minutes:
        return _all_day()
    return TimeWindow(open_minutes=open_minutes, close_minutes=close_minutes)


def _clamp_window_bound(value: Optional[float], *, default: int) -> int:
    if value is None:
        return default
    return max(0, min(MINUTES_PER_DAY, round_half_up(value)))


def normalize_time_window(raw: Any) -> TimeWindow:
    """Turn a loosely typed ``{openMinutes, closeMinutes}`` mapping into a valid window.

    Missing or non-numeric bounds fall back to the full day; bounds are clamped
    into ``[0, 1440]`` and swapped into order when close precedes open.
    """
    if isinstance(raw, TimeWindow):
        raw = {"openMinutes": raw.open_minutes, "closeMinutes": raw.close_minutes}
    if not isinstance(raw, dict):
        raw = {}

    open_value = finite_number(raw.get("openMinutes", raw.get("open_minutes")))
    close_value = finite_number(raw.get("closeMinutes", raw.get("close_minutes")))

    open_minutes = _clamp_window_bound(open_value, default=0)
    close_minutes = _clamp_window_bound(close_value, default=MINUTES_PER_DAY)

    return TimeWindow(
        open_minutes=min(open_minutes, close_minutes),
        close_minutes=max(close_minutes, open_minutes),
    )
