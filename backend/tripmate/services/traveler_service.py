"""
Traveler roster resolution for trips.
"""
import logging
from typing import List, Tuple
from sqlalchemy.orm import Session
from tripmate.models.itinerary import ItineraryItem
from tripmate.models.trip import Trip, TripTraveler
from tripmate.services.settlement_service import Traveler

logger = logging.getLogger(__name__)


def resolve_travelers(trip: Trip, db: Session) -> List[Traveler]:
    """
    Get the roster costs are divided among.
    Explicit traveler records win; otherwise fall back to the travelers
    embedded in the trip's generated content.
    """
    rows = db.query(TripTraveler).filter(
        TripTraveler.trip_id == trip.id
    ).order_by(TripTraveler.id).all()
    
    if rows:
        return [Traveler(id=str(row.id), name=row.name) for row in rows]
    
    return travelers_from_generated_content(trip.id, trip.generated_content)


def travelers_from_generated_content(trip_id: int, generated_content) -> List[Traveler]:
    """Parse the travelers list stored in generated content, skipping malformed entries."""
    return [traveler for _, traveler in _parse_generated_travelers(trip_id, generated_content)]


def _parse_generated_travelers(trip_id: int, generated_content) -> List[Tuple[dict, Traveler]]:
    """Pair each usable raw traveler entry with the Traveler it resolves to."""
    if not generated_content:
        return []
    if not isinstance(generated_content, dict):
        logger.warning(f"Trip {trip_id} generated_content is not an object. Ignoring traveler fallback.")
        return []
    
    raw_travelers = generated_content.get("travelers")
    if not raw_travelers:
        return []
    if not isinstance(raw_travelers, list):
        logger.warning(f"Trip {trip_id} generated_content.travelers is not a list. Ignoring traveler fallback.")
        return []
    
    parsed = []
    seen = set()
    for i, raw in enumerate(raw_travelers):
        if not isinstance(raw, dict):
            logger.warning(f"Skipping malformed traveler #{i} in trip {trip_id} generated_content")
            continue
        # Index-based ids keep fallback travelers addressable as payers
        traveler_id = str(raw.get("id") or f"traveler-{i}")
        if traveler_id in seen:
            logger.warning(f"Duplicate traveler id {traveler_id!r} at #{i} in trip {trip_id} generated_content")
            while traveler_id in seen:
                traveler_id = f"{traveler_id}-{i}"
        seen.add(traveler_id)
        parsed.append((raw, Traveler(id=traveler_id, name=raw.get("name") or "")))
    return parsed


def remove_traveler(trip: Trip, traveler_id: str, db: Session) -> bool:
    """
    Remove a traveler from the trip roster.
    Items the traveler paid for become split evenly so every payer stays on
    the roster. Returns False when no such traveler exists.
    """
    rows = db.query(TripTraveler).filter(TripTraveler.trip_id == trip.id).all()
    
    if rows:
        row = next((r for r in rows if str(r.id) == traveler_id), None)
        if row is None:
            return False
        db.delete(row)
    else:
        parsed = _parse_generated_travelers(trip.id, trip.generated_content)
        if not any(t.id == traveler_id for _, t in parsed):
            return False
        # Pin the resolved ids so index-based ids do not shift after removal
        remaining = [
            {**raw, "id": traveler.id}
            for raw, traveler in parsed if traveler.id != traveler_id
        ]
        # Reassign a new dict so the JSON column change is detected
        trip.generated_content = {**trip.generated_content, "travelers": remaining}
    
    orphaned = db.query(ItineraryItem).filter(
        ItineraryItem.trip_id == trip.id,
        ItineraryItem.payer_id == traveler_id
    ).all()
    for item in orphaned:
        item.payer_id = None
        item.is_split = True
    
    db.commit()
    
    logger.info(
        f"Trip {trip.id}: removed traveler {traveler_id}, "
        f"{len(orphaned)} items they paid for are now split"
    )
    return True
