"""
Pydantic schemas for ItineraryItem entity.
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from decimal import Decimal


class ItineraryItemCreate(BaseModel):
    """Schema for itinerary item creation."""
    day_number: int = Field(1, ge=1)
    order_index: int = Field(0, ge=0)
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    category: Optional[str] = None
    estimated_cost: Optional[Decimal] = Field(None, ge=0)  # In the trip's currency
    payer_id: Optional[str] = None
    is_split: bool = False


class PayerUpdate(BaseModel):
    """Schema for assigning who paid for an item."""
    payer_id: Optional[str] = None
    is_split: bool = False


class ItineraryItemResponse(BaseModel):
    """Schema for itinerary item response."""
    id: int
    trip_id: int
    day_number: int
    order_index: int
    title: str
    description: Optional[str] = None
    category: Optional[str] = None
    estimated_cost: Optional[Decimal] = None
    payer_id: Optional[str] = None
    is_split: bool
    created_at: datetime
    updated_at: datetime
    
    class Config:
        from_attributes = True


class PriceUpdate(BaseModel):
    """Schema for setting an item's estimated cost. Null clears it."""
    price: Optional[Decimal] = Field(..., ge=0)
