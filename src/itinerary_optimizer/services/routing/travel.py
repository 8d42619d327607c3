"""Closed-form leg time estimates per travel mode."""

from __future__ import annotations

from ...models.domain import SPEED_KMH, TravelMode, round_half_up
from ..geospatial import HasCoordinates, waypoint_distance_km


def estimate_leg_minutes(a: HasCoordinates, b: HasCoordinates, mode: TravelMode) -> int:
    """Straight-line travel time in whole minutes, never below one minute."""

    hours = waypoint_distance_km(a, b) / SPEED_KMH[mode]
    return max(1, round_half_up(hours * 60))
