"""Itinerary optimization request/response schemas."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, SerializerFunctionWrapHandler, field_validator, model_serializer
from pydantic.alias_generators import to_camel

from ..config import settings
from ..models.domain import (
    LAST_MINUTE_OF_DAY,
    MIN_VISIT_MINUTES,
    MINUTES_PER_DAY,
    TravelMode,
    finite_number,
    round_half_up,
)


def _minutes_in_range(value: Any, *, upper: int, default: int) -> int:
    number = finite_number(value)
    if number is None or number < 0 or number > upper:
        return default
    return round_half_up(number)


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class WaypointModel(CamelModel):
    """A waypoint as sent by the planner UI. Unknown fields are carried through."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    id: Optional[str] = Field(default=None, description="Stable caller-assigned id used for locks and lookups.")
    name: str = ""
    lat: float
    lng: float
    order: Optional[int] = None

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value: Any) -> Optional[str]:
        if value is None or isinstance(value, bool):
            return None
        if isinstance(value, int):
            return str(value)
        if isinstance(value, float):
            if finite_number(value) is None:
                return None
            # 7.0 and 7 name the same stop
            return str(int(value)) if value.is_integer() else str(value)
        if isinstance(value, str):
            return value or None
        return None

    @field_validator("order", mode="before")
    @classmethod
    def _whole_order_or_none(cls, value: Any) -> Optional[int]:
        number = finite_number(value)
        if number is None or not number.is_integer():
            return None
        return int(number)

    @field_validator("name", mode="before")
    @classmethod
    def _default_name(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @model_serializer(mode="wrap")
    def _omit_missing_id(self, handler: SerializerFunctionWrapHandler) -> dict:
        # Caller extras keep their None values; only an absent id is left out.
        data = handler(self)
        if self.id is None:
            data.pop("id", None)
        return data


class OptimizeRequest(CamelModel):
    """Optimizer input.

    Configuration values are never rejected: anything malformed or out of range
    is replaced by its default. Only the waypoint count is validated, by the
    service, so that callers get a 400 rather than a schema error.
    """

    waypoints: List[WaypointModel] = Field(default_factory=list)
    fixed_start: bool = True
    fixed_end: bool = True
    travel_mode: TravelMode = TravelMode.DRIVING
    day_start_minutes: int = Field(default_factory=lambda: settings.default_day_start_minutes)
    day_end_minutes: int = Field(default_factory=lambda: settings.default_day_end_minutes)
    visit_minutes_by_waypoint_id: Dict[str, Any] = Field(default_factory=dict)
    default_visit_minutes: int = Field(default_factory=lambda: settings.default_visit_minutes)
    time_windows_by_waypoint_id: Dict[str, Any] = Field(default_factory=dict)
    opening_hours_by_waypoint_id: Dict[str, Any] = Field(
        default_factory=dict,
        description="Free-form opening hours text per waypoint id, e.g. '09:00-17:00' or '24/7'.",
    )
    locked_waypoint_ids: List[str] = Field(default_factory=list)

    @field_validator("waypoints", mode="before")
    @classmethod
    def _waypoints_list(cls, value: Any) -> list:
        return value if isinstance(value, list) else []

    @field_validator("fixed_start", "fixed_end", mode="before")
    @classmethod
    def _anchor_flag(cls, value: Any) -> bool:
        # Only an explicit false releases an anchor.
        return value is not False

    @field_validator("travel_mode", mode="before")
    @classmethod
    def _known_travel_mode(cls, value: Any) -> TravelMode:
        try:
            return TravelMode(value)
        except (TypeError, ValueError):
            return TravelMode.DRIVING

    @field_validator("day_start_minutes", mode="before")
    @classmethod
    def _day_start(cls, value: Any) -> int:
        return _minutes_in_range(value, upper=LAST_MINUTE_OF_DAY, default=settings.default_day_start_minutes)

    @field_validator("day_end_minutes", mode="before")
    @classmethod
    def _day_end(cls, value: Any) -> int:
        return _minutes_in_range(value, upper=MINUTES_PER_DAY, default=settings.default_day_end_minutes)

    @field_validator("default_visit_minutes", mode="before")
    @classmethod
    def _default_visit(cls, value: Any) -> int:
        number = finite_number(value)
        if number is None or number <= 0:
            return settings.default_visit_minutes
        return max(MIN_VISIT_MINUTES, round_half_up(number))

    @field_validator(
        "visit_minutes_by_waypoint_id",
        "time_windows_by_waypoint_id",
        "opening_hours_by_waypoint_id",
        mode="before",
    )
    @classmethod
    def _mapping_or_empty(cls, value: Any) -> dict:
        return value if isinstance(value, dict) else {}

    @field_validator("locked_waypoint_ids", mode="before")
    @classmethod
    def _string_ids(cls, value: Any) -> list[str]:
        if not isinstance(value, list):
            return []
        return [item for item in value if isinstance(item, str) and item]


class OptimizedWaypointModel(WaypointModel):
    order: int


class ScheduledStopModel(CamelModel):
    index: int
    arrival_minutes: int
    visit_start_minutes: int
    visit_end_minutes: int
    leg_minutes: int
    conflict: bool = False


class DayPlanModel(CamelModel):
    day: int
    waypoint_indexes: List[int]
    estimated_travel_minutes: int
    stops: List[ScheduledStopModel] = Field(default_factory=list)


class ConflictModel(CamelModel):
    waypoint_id: Optional[str] = None
    message: str

    @model_serializer(mode="wrap")
    def _omit_missing_waypoint_id(self, handler: SerializerFunctionWrapHandler) -> dict:
        data = handler(self)
        if self.waypoint_id is None:
            data.pop("waypointId", None)
            data.pop("waypoint_id", None)
        return data


class OptimizeResponse(CamelModel):
    waypoints: List[OptimizedWaypointModel]
    days: List[DayPlanModel]
    conflicts: List[ConflictModel]
    metadata: dict = Field(default_factory=dict)
