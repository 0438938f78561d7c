"""
Pydantic schemas for Trip and TripTraveler entities.
"""
from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional
from datetime import date, datetime


class TripBase(BaseModel):
    """Base trip schema."""
    title: str = Field(..., min_length=1, max_length=200)
    city: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None


class TripCreate(TripBase):
    """Schema for trip creation."""
    currency: Optional[str] = Field(None, min_length=3, max_length=3)  # Defaults to settings.DEFAULT_CURRENCY
    generated_content: Optional[Dict[str, Any]] = None


class TripResponse(TripBase):
    """Schema for trip response."""
    id: int
    currency: str
    created_at: datetime
    updated_at: datetime
    
    class Config:
        from_attributes = True


class TravelerCreate(BaseModel):
    """Schema for adding a traveler to a trip."""
    name: str = Field(..., min_length=1, max_length=100)
    age: Optional[int] = Field(None, ge=0)
    is_child: bool = False


class TravelerResponse(BaseModel):
    """Schema for a traveler on the trip roster."""
    id: str  # Record id, or the generated-content id for fallback travelers
    name: str


class TripDetailResponse(TripResponse):
    """Schema for detailed trip response with resolved travelers."""
    travelers: List[TravelerResponse] = []
