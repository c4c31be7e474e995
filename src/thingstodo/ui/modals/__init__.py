"""Modal dialogs for ThingsToDo."""

from .itinerary_modal import ItineraryModal

__all__ = ["ItineraryModal"]
