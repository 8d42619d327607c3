"""Domain models for waypoints, planner constraints and day plans."""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional

MINUTES_PER_DAY = 24 * 60
LAST_MINUTE_OF_DAY = MINUTES_PER_DAY - 1
MIN_VISIT_MINUTES = 5
MIN_DAY_LENGTH_MINUTES = 30


class TravelMode(str, Enum):
    DRIVING = "driving"
    WALKING = "walking"
    CYCLING = "cycling"


SPEED_KMH: dict[TravelMode, float] = {
    TravelMode.DRIVING: 60.0,
    TravelMode.CYCLING: 18.0,
    TravelMode.WALKING: 5.0,
}


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


@dataclass(slots=True)
class Waypoint:
    """A stop on the trip. Only waypoints with an ``id`` can be locked or configured."""

    name: str
    lat: float
    lng: float
    id: Optional[str] = None
    order: Optional[int] = None
    extra: dict = field(default_factory=dict)

    def with_order(self, order: int) -> "Waypoint":
        return replace(self, order=order)


@dataclass(slots=True)
class TimeWindow:
    open_minutes: int = 0
    close_minutes: int = MINUTES_PER_DAY


FULL_DAY_WINDOW = TimeWindow(open_minutes=0, close_minutes=MINUTES_PER_DAY)


@dataclass(slots=True)
class PlannerConstraints:
    """Normalised optimizer and scheduler settings for one request."""

    fixed_start: bool = True
    fixed_end: bool = True
    travel_mode: TravelMode = TravelMode.DRIVING
    locked_waypoint_ids: frozenset[str] = frozenset()
    visit_minutes_by_waypoint_id: dict[str, int] = field(default_factory=dict)
    default_visit_minutes: int = 60
    time_windows_by_waypoint_id: dict[str, TimeWindow] = field(default_factory=dict)
    day_start_minutes: int = 9 * 60
    day_end_minutes: int = 20 * 60

    @property
    def effective_day_end_minutes(self) -> int:
        return max(self.day_start_minutes + MIN_DAY_LENGTH_MINUTES, self.day_end_minutes)

    def visit_minutes_for(self, waypoint: Waypoint) -> int:
        if waypoint.id is not None and waypoint.id in self.visit_minutes_by_waypoint_id:
            return self.visit_minutes_by_waypoint_id[waypoint.id]
        return self.default_visit_minutes

    def window_for(self, waypoint: Waypoint) -> TimeWindow:
        if waypoint.id is not None and waypoint.id in self.time_windows_by_waypoint_id:
            return self.time_windows_by_waypoint_id[waypoint.id]
        return FULL_DAY_WINDOW


@dataclass(slots=True)
class ScheduledStop:
    index: int
    arrival_minutes: int
    visit_start_minutes: int
    visit_end_minutes: int
    leg_minutes: int
    conflict: bool = False


@dataclass(slots=True)
class DayPlan:
    day: int
    waypoint_indexes: list[int]
    estimated_travel_minutes: int
    stops: list[ScheduledStop] = field(default_factory=list)


@dataclass(slots=True)
class Conflict:
    message: str
    waypoint_id: Optional[str] = None


@dataclass(slots=True)
class DayPlanResult:
    days: list[DayPlan]
    conflicts: list[Conflict]


def finite_number(value: object) -> Optional[float]:
    """Return ``value`` as a float if it is a real, finite JSON number, else ``None``."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value):
        return None
    return float(value)
