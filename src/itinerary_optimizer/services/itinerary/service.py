"""Itinerary orchestration service."""

from __future__ import annotations

import logging
import time
from typing import Any, Mapping, Sequence

from ...config import settings
from ...models.domain import (
    MIN_VISIT_MINUTES,
    DayPlanResult,
    PlannerConstraints,
    TimeWindow,
    Waypoint,
    finite_number,
    round_half_up,
)
from ...schemas.itinerary import (
    ConflictModel,
    DayPlanModel,
    OptimizedWaypointModel,
    OptimizeRequest,
    OptimizeResponse,
    ScheduledStopModel,
    WaypointModel,
)
from ..geospatial import route_distance_km
from ..routing.locks import optimize_with_locks
from ..routing.refinement import RefinementBudget
from ..scheduling.day_planner import plan_days
from ..scheduling.opening_hours import normalize_time_window, parse_opening_hours_window

MIN_WAYPOINTS = 2


def _to_domain(model: WaypointModel) -> Waypoint:
    return Waypoint(
        id=model.id,
        name=model.name,
        lat=model.lat,
        lng=model.lng,
        order=model.order,
        extra=dict(model.model_extra or {}),
    )


def _to_model(waypoint: Waypoint) -> OptimizedWaypointModel:
    return OptimizedWaypointModel.model_validate(
        {
            **waypoint.extra,
            "id": waypoint.id,
            "name": waypoint.name,
            "lat": waypoint.lat,
            "lng": waypoint.lng,
            "order": waypoint.order,
        }
    )


def _visit_minutes(raw: Mapping[str, Any]) -> dict[str, int]:
    visits: dict[str, int] = {}
    for waypoint_id, value in raw.items():
        number = finite_number(value)
        if number is not None and number > 0:
            visits[waypoint_id] = max(MIN_VISIT_MINUTES, round_half_up(number))
    return visits


def _time_windows(
    explicit: Mapping[str, Any],
    opening_hours: Mapping[str, Any],
) -> dict[str, TimeWindow]:
    windows: dict[str, TimeWindow] = {}
    for waypoint_id, text in opening_hours.items():
        if not isinstance(text, str):
            continue
        parsed = parse_opening_hours_window(text)
        if parsed is not None:
            windows[waypoint_id] = parsed
    for waypoint_id, raw in explicit.items():
        windows[waypoint_id] = normalize_time_window(raw)
    return windows


def build_constraints(payload: OptimizeRequest) -> PlannerConstraints:
    return PlannerConstraints(
        fixed_start=payload.fixed_start,
        fixed_end=payload.fixed_end,
        travel_mode=payload.travel_mode,
        locked_waypoint_ids=frozenset(payload.locked_waypoint_ids),
        visit_minutes_by_waypoint_id=_visit_minutes(payload.visit_minutes_by_waypoint_id),
        default_visit_minutes=payload.default_visit_minutes,
        time_windows_by_waypoint_id=_time_windows(
            payload.time_windows_by_waypoint_id,
            payload.opening_hours_by_waypoint_id,
        ),
        day_start_minutes=payload.day_start_minutes,
        day_end_minutes=payload.day_end_minutes,
    )


def _validate_waypoints(waypoints: Sequence[WaypointModel]) -> None:
    if len(waypoints) < MIN_WAYPOINTS:
        raise ValueError("At least 2 waypoints are required")
    if len(waypoints) > settings.max_waypoints:
        raise ValueError(
            f"Too many waypoints: {len(waypoints)} (maximum is {settings.max_waypoints})"
        )


def optimize_waypoints(
    waypoints: Sequence[Waypoint],
    constraints: PlannerConstraints,
    budget: RefinementBudget | None = None,
) -> tuple[list[Waypoint], DayPlanResult]:
    """Order the waypoints and split the order into day plans."""
    refined = optimize_with_locks(
        waypoints,
        constraints.fixed_start,
        constraints.fixed_end,
        constraints.locked_waypoint_ids,
        budget,
    )
    optimized = [waypoint.with_order(index) for index, waypoint in enumerate(refined)]
    return optimized, plan_days(optimized, constraints)


def optimize_itinerary(payload: OptimizeRequest) -> OptimizeResponse:
    _validate_waypoints(payload.waypoints)

    constraints = build_constraints(payload)
    waypoints = [_to_domain(model) for model in payload.waypoints]

    started = time.perf_counter()
    optimized, schedule = optimize_waypoints(waypoints, constraints)
    elapsed_ms = (time.perf_counter() - started) * 1000
    total_distance_km = route_distance_km(optimized)

    logging.info(
        f"Optimized {len(optimized)} waypoints ({constraints.travel_mode.value}) into "
        f"{len(schedule.days)} day(s) with {len(schedule.conflicts)} conflict(s), "
        f"{total_distance_km:.2f} km in {elapsed_ms:.1f} ms"
    )

    return OptimizeResponse(
        waypoints=[_to_model(waypoint) for waypoint in optimized],
        days=[
            DayPlanModel(
                day=plan.day,
                waypoint_indexes=list(plan.waypoint_indexes),
                estimated_travel_minutes=plan.estimated_travel_minutes,
                stops=[
                    ScheduledStopModel(
                        index=stop.index,
                        arrival_minutes=stop.arrival_minutes,
                        visit_start_minutes=stop.visit_start_minutes,
                        visit_end_minutes=stop.visit_end_minutes,
                        leg_minutes=stop.leg_minutes,
                        conflict=stop.conflict,
                    )
                    for stop in plan.stops
                ],
            )
            for plan in schedule.days
        ],
        conflicts=[
            ConflictModel(waypoint_id=conflict.waypoint_id, message=conflict.message)
            for conflict in schedule.conflicts
        ],
        metadata={
            "travelMode": constraints.travel_mode.value,
            "totalDistanceKm": round(total_distance_km, 3),
            "dayCount": len(schedule.days),
            "conflictCount": len(schedule.conflicts),
        },
    )
