"""
Itinerary item model. Items with an estimated cost are the trip's expenses.
"""
from sqlalchemy import Column, String, Numeric, Boolean, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship
from tripmate.db.base import BaseModel


class ItineraryItem(BaseModel):
    """A single planned activity on a given day of a trip."""
    __tablename__ = "itinerary_items"
    
    trip_id = Column(Integer, ForeignKey("trips.id"), nullable=False, index=True)
    day_number = Column(Integer, nullable=False, default=1)
    order_index = Column(Integer, nullable=False, default=0)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    category = Column(String(50), nullable=True)
    estimated_cost = Column(Numeric(10, 2), nullable=True)
    payer_id = Column(String(64), nullable=True)  # Traveler id; null when split evenly
    is_split = Column(Boolean, default=False, nullable=False)
    
    # Relationships
    trip = relationship("Trip", back_populates="items")
