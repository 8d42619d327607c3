"""Itinerary optimization service."""

from .service import build_constraints, optimize_itinerary, optimize_waypoints

__all__ = ["optimize_itinerary", "optimize_waypoints", "build_constraints"]
