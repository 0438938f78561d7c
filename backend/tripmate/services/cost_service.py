"""
Cost service: loads trip expenses and settlement flags around the settlement engine.
"""
import logging
from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Tuple
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from tripmate.core.utils import round_currency
from tripmate.models.itinerary import ItineraryItem
from tripmate.models.settlement import CostSettlement
from tripmate.models.trip import Trip
from tripmate.services.settlement_service import (
    CostBreakdown, Expense, compute_breakdown, merge_settlement_status
)
from tripmate.services.traveler_service import resolve_travelers

logger = logging.getLogger(__name__)


def load_expenses(trip_id: int, db: Session) -> List[Expense]:
    """Get every itinerary item with a positive cost as an expense."""
    items = db.query(ItineraryItem).filter(
        ItineraryItem.trip_id == trip_id,
        ItineraryItem.estimated_cost.is_not(None),
        ItineraryItem.estimated_cost > 0
    ).order_by(
        ItineraryItem.day_number,
        ItineraryItem.order_index,
        ItineraryItem.id
    ).all()
    
    return [
        Expense(amount=item.estimated_cost, payer_id=item.payer_id, is_split=item.is_split)
        for item in items
    ]


def load_settlement_status(trip_id: int, db: Session) -> Dict[Tuple[str, str], bool]:
    """Get recorded settled flags keyed by (from traveler, to traveler)."""
    rows = db.query(CostSettlement).filter(CostSettlement.trip_id == trip_id).all()
    return {(row.from_traveler_id, row.to_traveler_id): row.is_settled for row in rows}


def get_cost_breakdown(trip: Trip, db: Session) -> CostBreakdown:
    """Compute the trip's cost breakdown with recorded settlements marked."""
    travelers = resolve_travelers(trip, db)
    expenses = load_expenses(trip.id, db)
    
    breakdown = compute_breakdown(expenses, travelers)
    breakdown.settlements = merge_settlement_status(
        breakdown.settlements, load_settlement_status(trip.id, db)
    )
    return breakdown


def find_settlement(trip_id: int, from_traveler_id: str, to_traveler_id: str, db: Session):
    """Get the recorded settlement for a directed pair, if any."""
    return db.query(CostSettlement).filter(
        CostSettlement.trip_id == trip_id,
        CostSettlement.from_traveler_id == from_traveler_id,
        CostSettlement.to_traveler_id == to_traveler_id
    ).first()


def mark_settled(trip: Trip, from_traveler_id: str, to_traveler_id: str, db: Session) -> CostSettlement:
    """
    Record that from_traveler has paid to_traveler.
    Updates the existing record for the pair or creates one holding the
    currently owed amount (0 if the pair owes nothing right now).
    """
    now = datetime.utcnow()
    record = find_settlement(trip.id, from_traveler_id, to_traveler_id, db)
    
    if record is None:
        amount = Decimal(0)
        breakdown = compute_breakdown(load_expenses(trip.id, db), resolve_travelers(trip, db))
        for settlement in breakdown.settlements:
            if (settlement.from_traveler_id == from_traveler_id
                    and settlement.to_traveler_id == to_traveler_id):
                amount = round_currency(settlement.amount)
                break
        record = CostSettlement(
            trip_id=trip.id,
            from_traveler_id=from_traveler_id,
            to_traveler_id=to_traveler_id,
            amount=amount,
            is_settled=True,
            settled_at=now
        )
        db.add(record)
        try:
            db.commit()
        except IntegrityError:
            # Another request recorded the pair first; update its row instead
            db.rollback()
            logger.info(f"Trip {trip.id}: settlement {from_traveler_id} -> {to_traveler_id} already recorded")
            record = find_settlement(trip.id, from_traveler_id, to_traveler_id, db)
            record.is_settled = True
            record.settled_at = now
            db.commit()
    else:
        record.is_settled = True
        record.settled_at = now
        db.commit()
    
    db.refresh(record)
    
    logger.info(f"Trip {trip.id}: marked {from_traveler_id} -> {to_traveler_id} as settled")
    return record
