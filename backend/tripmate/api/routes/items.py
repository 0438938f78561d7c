"""
Itinerary item routes.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List, Optional
from tripmate.db.session import get_db
from tripmate.models.itinerary import ItineraryItem
from tripmate.models.trip import Trip
from tripmate.schemas.itinerary import ItineraryItemCreate, ItineraryItemResponse, PayerUpdate, PriceUpdate
from tripmate.services.traveler_service import resolve_travelers
from tripmate.api.routes.trips import get_trip_or_404

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/trips", tags=["items"])


def check_payer(trip: Trip, payer_id: Optional[str], is_split: bool, db: Session) -> Optional[str]:
    """
    Validate the payer for an item and return the payer id to store.
    Split items never store a payer; a single payer must be on the trip roster.
    """
    if is_split or not payer_id:
        return None
    
    roster_ids = {t.id for t in resolve_travelers(trip, db)}
    if payer_id not in roster_ids:
        logger.warning(f"Rejected payer {payer_id!r} not on roster of trip {trip.id}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Payer is not a traveler on this trip"
        )
    return payer_id


def get_item_or_404(trip_id: int, item_id: int, db: Session) -> ItineraryItem:
    """Get an item belonging to the trip or raise 404."""
    item = db.query(ItineraryItem).filter(
        ItineraryItem.id == item_id,
        ItineraryItem.trip_id == trip_id
    ).first()
    if not item:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Item not found"
        )
    return item


@router.post("/{trip_id}/items", response_model=ItineraryItemResponse, status_code=status.HTTP_201_CREATED)
async def create_item(
    trip_id: int,
    item_data: ItineraryItemCreate,
    db: Session = Depends(get_db)
):
    """Add an item to the trip itinerary."""
    trip = get_trip_or_404(trip_id, db)
    payer_id = check_payer(trip, item_data.payer_id, item_data.is_split, db)
    
    item = ItineraryItem(
        trip_id=trip_id,
        day_number=item_data.day_number,
        order_index=item_data.order_index,
        title=item_data.title,
        description=item_data.description,
        category=item_data.category,
        estimated_cost=item_data.estimated_cost,
        payer_id=payer_id,
        is_split=item_data.is_split
    )
    db.add(item)
    db.commit()
    db.refresh(item)
    
    return item


@router.get("/{trip_id}/items", response_model=List[ItineraryItemResponse])
async def list_items(
    trip_id: int,
    db: Session = Depends(get_db)
):
    """List itinerary items in day order."""
    get_trip_or_404(trip_id, db)
    items = db.query(ItineraryItem).filter(
        ItineraryItem.trip_id == trip_id
    ).order_by(
        ItineraryItem.day_number,
        ItineraryItem.order_index,
        ItineraryItem.id
    ).all()
    return items


@router.patch("/{trip_id}/items/{item_id}/payer", response_model=ItineraryItemResponse)
async def assign_payer(
    trip_id: int,
    item_id: int,
    payer_data: PayerUpdate,
    db: Session = Depends(get_db)
):
    """Assign who paid for an item, or mark it as split evenly."""
    trip = get_trip_or_404(trip_id, db)
    item = get_item_or_404(trip_id, item_id, db)

    item.payer_id = check_payer(trip, payer_data.payer_id, payer_data.is_split, db)
    item.is_split = payer_data.is_split
    db.commit()
    db.refresh(item)
    
    return item


@router.patch("/{trip_id}/items/{item_id}/price", response_model=ItineraryItemResponse)
async def update_price(
    trip_id: int,
    item_id: int,
    price_data: PriceUpdate,
    db: Session = Depends(get_db)
):
    """Set or clear the estimated cost of an item."""
    get_trip_or_404(trip_id, db)
    item = get_item_or_404(trip_id, item_id, db)
    
    item.estimated_cost = price_data.price
    db.commit()
    db.refresh(item)
    
    return item
