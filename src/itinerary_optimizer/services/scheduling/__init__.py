"""Day scheduling helpers."""

from .day_planner import fit_visit, plan_days
from .opening_hours import normalize_time_window, parse_opening_hours_window

__all__ = [
    "plan_days",
    "fit_visit",
    "normalize_time_window",
    "parse_opening_hours_window",
]
