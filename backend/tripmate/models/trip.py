"""
Trip model for collaborative trip planning.
"""
from sqlalchemy import Column, String, Date, Boolean, ForeignKey, Integer, JSON
from sqlalchemy.orm import relationship
from tripmate.db.base import BaseModel


class Trip(BaseModel):
    """Trip model representing a planned journey."""
    __tablename__ = "trips"
    
    title = Column(String(200), nullable=False)
    city = Column(String(120), nullable=True)
    start_date = Column(Date, nullable=True, index=True)
    end_date = Column(Date, nullable=True)
    currency = Column(String(3), nullable=False, default="USD")
    generated_content = Column(JSON, nullable=True)  # AI-generated itinerary, may carry a travelers roster
    
    # Relationships
    travelers = relationship(
        "TripTraveler", back_populates="trip",
        cascade="all, delete-orphan", order_by="TripTraveler.id"
    )
    items = relationship("ItineraryItem", back_populates="trip", cascade="all, delete-orphan")
    cost_settlements = relationship("CostSettlement", back_populates="trip", cascade="all, delete-orphan")


class TripTraveler(BaseModel):
    """A person travelling on a trip, among whom shared costs are divided."""
    __tablename__ = "trip_travelers"
    
    trip_id = Column(Integer, ForeignKey("trips.id"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    age = Column(Integer, nullable=True)
    is_child = Column(Boolean, default=False, nullable=False)
    
    # Relationships
    trip = relationship("Trip", back_populates="travelers")
