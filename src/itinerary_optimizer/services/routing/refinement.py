"""2-opt local search over the movable interior of a route."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Sequence

from ...config import settings
from ...models.domain import Waypoint
from ..geospatial import route_distance_km

IMPROVEMENT_EPSILON_KM = 1e-9


@dataclass(slots=True)
class RefinementBudget:
    """Caps on 2-opt work for one segment. ``time_limit_seconds <= 0`` means no time cap."""

    max_sweeps: int = settings.two_opt_max_sweeps
    time_limit_seconds: float = settings.two_opt_time_limit_seconds

    @classmethod
    def from_settings(cls) -> "RefinementBudget":
        return cls(
            max_sweeps=settings.two_opt_max_sweeps,
            time_limit_seconds=settings.two_opt_time_limit_seconds,
        )


def _open_range(length: int, fixed_start: bool, fixed_end: bool) -> tuple[int, int]:
    start = 1 if fixed_start else 0
    end_exclusive = length - 1 if fixed_end else length
    return start, end_exclusive


def two_opt_refine(
    route: Sequence[Waypoint],
    fixed_start: bool,
    fixed_end: bool,
    budget: RefinementBudget | None = None,
) -> list[Waypoint]:
    """Improve ``route`` with 2-opt reversals until no move shortens it.

    Anchored ends take part in the distance sum but are never reversed.
    Moves are accepted only when they shorten the route by more than
    ``IMPROVEMENT_EPSILON_KM``, so the result is never longer than the input.
    When the budget runs out the best route found so far is returned.
    """
    if len(route) < 4:
        return list(route)
    start, end_exclusive = _open_range(len(route), fixed_start, fixed_end)
    if end_exclusive - start < 3:
        return list(route)

    budget = budget or RefinementBudget.from_settings()
    deadline = (
        time.monotonic() + budget.time_limit_seconds if budget.time_limit_seconds > 0 else None
    )

    best_route = list(route)
    best_distance = route_distance_km(best_route)
    sweeps = 0
    improved = True

    while improved:
        if sweeps >= budget.max_sweeps:
            logging.warning(
                f"2-opt stopped after {sweeps} sweeps (max_sweeps={budget.max_sweeps}); "
                f"returning best route found ({best_distance:.3f} km)"
            )
            break

        improved = False
        timed_out = False
        sweeps += 1
        for i in range(start, end_exclusive - 2):
            # deadline is checked per row, not only between sweeps
            if deadline is not None and time.monotonic() > deadline:
                timed_out = True
                break
            for k in range(i + 1, end_exclusive - 1):
                candidate = best_route[:i] + best_route[i : k + 1][::-1] + best_route[k + 1 :]
                candidate_distance = route_distance_km(candidate)
                if candidate_distance + IMPROVEMENT_EPSILON_KM < best_distance:
                    best_route = candidate
                    best_distance = candidate_distance
                    improved = True

        if timed_out:
            logging.warning(
                f"2-opt time limit of {budget.time_limit_seconds}s reached during sweep {sweeps}; "
                f"returning best route found ({best_distance:.3f} km)"
            )
            break

    return best_route
