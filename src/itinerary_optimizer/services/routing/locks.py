"""Route optimization that keeps anchored and locked waypoints in place."""

from __future__ import annotations

from typing import Iterable, Sequence

from ...models.domain import Waypoint
from .construction import nearest_neighbor_order
from .refinement import RefinementBudget, two_opt_refine


def optimize_segment(
    waypoints: Sequence[Waypoint],
    fixed_start: bool,
    fixed_end: bool,
    budget: RefinementBudget | None = None,
) -> list[Waypoint]:
    seed = nearest_neighbor_order(waypoints, fixed_start, fixed_end)
    return two_opt_refine(seed, fixed_start, fixed_end, budget)


def _locked_indexes(
    waypoints: Sequence[Waypoint],
    fixed_start: bool,
    fixed_end: bool,
    locked_ids: Iterable[str],
) -> list[int]:
    effective_locked = set(locked_ids)
    if fixed_start and waypoints[0].id:
        effective_locked.add(waypoints[0].id)
    if fixed_end and waypoints[-1].id:
        effective_locked.add(waypoints[-1].id)
    return [idx for idx, waypoint in enumerate(waypoints) if waypoint.id and waypoint.id in effective_locked]


def optimize_with_locks(
    waypoints: Sequence[Waypoint],
    fixed_start: bool,
    fixed_end: bool,
    locked_ids: Iterable[str] = (),
    budget: RefinementBudget | None = None,
) -> list[Waypoint]:
    """Reorder the unlocked runs between locked waypoints.

    Each run is optimized on its own as a trip from the preceding lock to the
    following lock (or to a free end of the route). Locked waypoints, and the
    first/last waypoint when ``fixed_start``/``fixed_end`` is set and they carry
    an id, keep their original index.
    """
    if len(waypoints) < 3:
        return list(waypoints)

    locked_indexes = _locked_indexes(waypoints, fixed_start, fixed_end, locked_ids)
    if not locked_indexes:
        return optimize_segment(waypoints, fixed_start, fixed_end, budget)

    result = list(waypoints)
    count = len(result)
    bounds = [-1, *locked_indexes, count]

    for start_bound, end_bound in zip(bounds, bounds[1:]):
        unlocked_start = start_bound + 1
        unlocked_end = end_bound  # exclusive
        if unlocked_start >= unlocked_end:
            continue

        has_start_anchor = start_bound >= 0
        has_end_anchor = end_bound < count
        segment: list[Waypoint] = []
        if has_start_anchor:
            segment.append(result[start_bound])
        segment.extend(result[unlocked_start:unlocked_end])
        if has_end_anchor:
            segment.append(result[end_bound])

        optimized = optimize_segment(segment, has_start_anchor, has_end_anchor, budget)

        interior_start = 1 if has_start_anchor else 0
        interior_end = len(optimized) - 1 if has_end_anchor else len(optimized)
        result[unlocked_start:unlocked_end] = optimized[interior_start:interior_end]

    return result
