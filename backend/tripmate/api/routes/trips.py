"""
Trip and traveler management routes.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
from tripmate.core.config import settings
from tripmate.db.session import get_db
from tripmate.models.trip import Trip, TripTraveler
from tripmate.schemas.trip import (
    TripCreate, TripResponse, TripDetailResponse,
    TravelerCreate, TravelerResponse
)
from tripmate.services.traveler_service import remove_traveler, resolve_travelers

router = APIRouter(prefix="/trips", tags=["trips"])


def get_trip_or_404(trip_id: int, db: Session) -> Trip:
    """Get a trip or raise 404."""
    trip = db.query(Trip).filter(Trip.id == trip_id).first()
    if not trip:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Trip not found"
        )
    return trip


@router.post("", response_model=TripResponse, status_code=status.HTTP_201_CREATED)
async def create_trip(
    trip_data: TripCreate,
    db: Session = Depends(get_db)
):
    """Create a new trip."""
    currency = trip_data.currency or settings.DEFAULT_CURRENCY
    
    new_trip = Trip(
        title=trip_data.title,
        city=trip_data.city,
        start_date=trip_data.start_date,
        end_date=trip_data.end_date,
        currency=currency.upper(),
        generated_content=trip_data.generated_content
    )
    db.add(new_trip)
    db.commit()
    db.refresh(new_trip)
    
    return new_trip


@router.get("/{trip_id}", response_model=TripDetailResponse)
async def get_trip(
    trip_id: int,
    db: Session = Depends(get_db)
):
    """Get trip details with its resolved traveler roster."""
    trip = get_trip_or_404(trip_id, db)
    travelers = [
        TravelerResponse(id=t.id, name=t.name)
        for t in resolve_travelers(trip, db)
    ]
    
    return TripDetailResponse(
        id=trip.id,
        title=trip.title,
        city=trip.city,
        start_date=trip.start_date,
        end_date=trip.end_date,
        currency=trip.currency,
        created_at=trip.created_at,
        updated_at=trip.updated_at,
        travelers=travelers
    )


@router.post("/{trip_id}/travelers", response_model=TravelerResponse, status_code=status.HTTP_201_CREATED)
async def add_traveler(
    trip_id: int,
    traveler_data: TravelerCreate,
    db: Session = Depends(get_db)
):
    """Add a traveler to the trip roster."""
    get_trip_or_404(trip_id, db)
    
    traveler = TripTraveler(
        trip_id=trip_id,
        name=traveler_data.name,
        age=traveler_data.age,
        is_child=traveler_data.is_child
    )
    db.add(traveler)
    db.commit()
    db.refresh(traveler)
    
    return TravelerResponse(id=str(traveler.id), name=traveler.name)


@router.get("/{trip_id}/travelers", response_model=List[TravelerResponse])
async def list_travelers(
    trip_id: int,
    db: Session = Depends(get_db)
):
    """List the travelers costs are divided among."""
    trip = get_trip_or_404(trip_id, db)
    return [TravelerResponse(id=t.id, name=t.name) for t in resolve_travelers(trip, db)]


@router.delete("/{trip_id}/travelers/{traveler_id}", response_model=List[TravelerResponse])
async def delete_traveler(
    trip_id: int,
    traveler_id: str,
    db: Session = Depends(get_db)
):
    """Remove a traveler. Items they paid for are split among the rest."""
    trip = get_trip_or_404(trip_id, db)
    
    if not remove_traveler(trip, traveler_id, db):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Traveler not found"
        )
    
    return [TravelerResponse(id=t.id, name=t.name) for t in resolve_travelers(trip, db)]
