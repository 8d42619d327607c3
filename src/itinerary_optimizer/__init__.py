"""Waypoint ordering and day-by-day itinerary planning service."""
