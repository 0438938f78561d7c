"""Models package - Import all models for SQLAlchemy registration."""
from tripmate.models.trip import Trip, TripTraveler
from tripmate.models.itinerary import ItineraryItem
from tripmate.models.settlement import CostSettlement

__all__ = [
    "Trip",
    "TripTraveler",
    "ItineraryItem",
    "CostSettlement",
]
