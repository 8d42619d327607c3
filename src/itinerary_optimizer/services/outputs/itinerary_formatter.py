"""Serializers for itinerary outputs."""

from __future__ import annotations

import csv
import io

from ...schemas.itinerary import OptimizeResponse


def format_clock(minutes: int) -> str:
    """Render minutes-of-day as ``HH:MM``; values past midnight keep counting hours."""
    hours, mins = divmod(max(0, minutes), 60)
    return f"{hours:02d}:{mins:02d}"


def itinerary_to_json(response: OptimizeResponse) -> dict:
    return response.model_dump(by_alias=True)


def itinerary_to_csv(response: OptimizeResponse) -> str:
    buffer = io.StringIO()
    fieldnames = [
        "day",
        "sequence",
        "order",
        "waypoint_id",
        "name",
        "lat",
        "lng",
        "leg_minutes",
        "arrival",
        "visit_start",
        "visit_end",
        "day_travel_minutes",
        "conflict",
    ]
    writer = csv.DictWriter(buffer, fieldnames=fieldnames)
    writer.writeheader()
    for plan in response.days:
        for sequence, stop in enumerate(plan.stops, start=1):
            waypoint = response.waypoints[stop.index]
            writer.writerow(
                {
                    "day": plan.day,
                    "sequence": sequence,
                    "order": waypoint.order,
                    "waypoint_id": waypoint.id or "",
                    "name": waypoint.name,
                    "lat": waypoint.lat,
                    "lng": waypoint.lng,
                    "leg_minutes": stop.leg_minutes,
                    "arrival": format_clock(stop.arrival_minutes),
                    "visit_start": format_clock(stop.visit_start_minutes),
                    "visit_end": format_clock(stop.visit_end_minutes),
                    "day_travel_minutes": plan.estimated_travel_minutes,
                    "conflict": "yes" if stop.conflict else "",
                }
            )
    return buffer.getvalue()
