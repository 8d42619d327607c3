"""Split an ordered route into day plans against opening windows and day budgets."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from ...models.domain import (
    Conflict,
    DayPlan,
    DayPlanResult,
    PlannerConstraints,
    ScheduledStop,
    Waypoint,
)
from ..routing.travel import estimate_leg_minutes


@dataclass(slots=True)
class VisitFit:
    fits: bool
    visit_start: int
    visit_end: int
    window_start: int
    window_end: int
    visit_minutes: int


def fit_visit(
    waypoint: Waypoint,
    arrival_minutes: int,
    constraints: PlannerConstraints,
) -> VisitFit:
    """Check whether a visit starting no earlier than ``arrival_minutes`` ends inside its window.

    The waypoint's opening window is intersected with the configured day.
    """
    visit_minutes = constraints.visit_minutes_for(waypoint)
    window = constraints.window_for(waypoint)
    window_start = max(constraints.day_start_minutes, window.open_minutes)
    window_end = min(constraints.effective_day_end_minutes, window.close_minutes)
    visit_start = max(arrival_minutes, window_start)
    visit_end = visit_start + visit_minutes
    return VisitFit(
        fits=visit_end <= window_end,
        visit_start=visit_start,
        visit_end=visit_end,
        window_start=window_start,
        window_end=window_end,
        visit_minutes=visit_minutes,
    )


def _conflict_for(waypoint: Waypoint) -> Conflict:
    return Conflict(
        waypoint_id=waypoint.id,
        message=f"{waypoint.name} cannot fit within the configured day/opening window",
    )


def plan_days(waypoints: Sequence[Waypoint], constraints: PlannerConstraints) -> DayPlanResult:
    """Walk the route once, simulating a clock, and open a new day whenever a stop overflows.

    A stop that does not fit even as the first stop of a fresh day is still
    placed and reported as a conflict. When a day closes because of an
    overflow, the rejected leg is counted in that day's travel total and no
    travel is carried into the next day.
    """
    days: list[DayPlan] = []
    conflicts: list[Conflict] = []
    if not waypoints:
        return DayPlanResult(days=days, conflicts=conflicts)

    day_start = constraints.day_start_minutes
    current_day = 1
    current_indexes: list[int] = []
    current_stops: list[ScheduledStop] = []
    current_travel = 0
    clock = day_start

    for index, waypoint in enumerate(waypoints):
        if current_indexes:
            previous = waypoints[current_indexes[-1]]
            leg = estimate_leg_minutes(previous, waypoint, constraints.travel_mode)
        else:
            leg = 0
        projected_travel = current_travel + leg
        arrival = clock + leg
        fit = fit_visit(waypoint, arrival, constraints)

        if current_indexes and not fit.fits:
            days.append(
                DayPlan(
                    day=current_day,
                    waypoint_indexes=current_indexes,
                    estimated_travel_minutes=projected_travel,
                    stops=current_stops,
                )
            )
            current_day += 1
            current_indexes = []
            current_stops = []
            current_travel = 0
            clock = day_start
            leg = 0
            projected_travel = 0
            arrival = clock
            fit = fit_visit(waypoint, arrival, constraints)

        if not fit.fits:
            conflicts.append(_conflict_for(waypoint))

        visit_start = max(arrival, fit.window_start)
        current_indexes.append(index)
        current_stops.append(
            ScheduledStop(
                index=index,
                arrival_minutes=arrival,
                visit_start_minutes=visit_start,
                visit_end_minutes=visit_start + fit.visit_minutes,
                leg_minutes=leg,
                conflict=not fit.fits,
            )
        )
        current_travel = projected_travel
        clock = visit_start + fit.visit_minutes

    if current_indexes:
        days.append(
            DayPlan(
                day=current_day,
                waypoint_indexes=current_indexes,
                estimated_travel_minutes=current_travel,
                stops=current_stops,
            )
        )

    return DayPlanResult(days=days, conflicts=conflicts)
