"""Route group exports."""

from . import health, itinerary

__all__ = ["itinerary", "health"]
