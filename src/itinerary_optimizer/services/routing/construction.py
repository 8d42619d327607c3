"""Nearest-neighbour tour construction for a single route segment."""

from __future__ import annotations

import math
from typing import Sequence

from ...models.domain import Waypoint
from ..geospatial import waypoint_distance_km


def nearest_neighbor_order(
    waypoints: Sequence[Waypoint],
    fixed_start: bool,
    fixed_end: bool,
) -> list[Waypoint]:
    """Build a seed route by always moving to the closest unvisited waypoint.

    The first waypoint always seeds the route, so ``fixed_start`` does not
    change the result here; it only matters to the refiner. With ``fixed_end``
    the last waypoint is held back and appended after the greedy walk.
    Distance ties go to the waypoint that appears first in the pool.
    """
    if len(waypoints) <= 2:
        return list(waypoints)

    remaining = list(waypoints)
    end_waypoint = remaining.pop() if fixed_end else None
    route = [remaining.pop(0)]

    while remaining:
        current = route[-1]
        next_idx = 0
        best = math.inf
        for idx, candidate in enumerate(remaining):
            dist = waypoint_distance_km(current, candidate)
            if dist < best:
                best = dist
                next_idx = idx
        route.append(remaining.pop(next_idx))

    if end_waypoint is not None:
        route.append(end_waypoint)
    return route
