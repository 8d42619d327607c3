"""Output serializers."""

from .itinerary_formatter import format_clock, itinerary_to_csv, itinerary_to_json

__all__ = ["itinerary_to_json", "itinerary_to_csv", "format_clock"]
