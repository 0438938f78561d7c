"""
Settlement status records for trip cost splitting.
"""
from sqlalchemy import Column, String, Numeric, Boolean, DateTime, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import relationship
from tripmate.db.base import BaseModel


class CostSettlement(BaseModel):
    """
    Whether a directed transfer between two travelers has been paid.
    Amounts are always recomputed from itinerary costs; only the flag is authoritative.
    """
    __tablename__ = "cost_settlements"
    __table_args__ = (
        UniqueConstraint("trip_id", "from_traveler_id", "to_traveler_id", name="uq_cost_settlement_pair"),
    )
    
    trip_id = Column(Integer, ForeignKey("trips.id"), nullable=False, index=True)
    from_traveler_id = Column(String(64), nullable=False)
    to_traveler_id = Column(String(64), nullable=False)
    amount = Column(Numeric(10, 2), nullable=False, default=0)  # Amount at the time it was marked settled
    is_settled = Column(Boolean, default=False, nullable=False)
    settled_at = Column(DateTime, nullable=True)
    
    # Relationships
    trip = relationship("Trip", back_populates="cost_settlements")
