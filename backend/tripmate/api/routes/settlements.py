"""
Trip cost breakdown and settlement routes.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from tripmate.db.session import get_db
from tripmate.schemas.settlement import CostBreakdownResponse, SettleRequest
from tripmate.services.cost_service import get_cost_breakdown, mark_settled
from tripmate.api.routes.trips import get_trip_or_404

router = APIRouter(prefix="/trips", tags=["settlement"])


@router.get("/{trip_id}/costs", response_model=CostBreakdownResponse)
async def get_costs(
    trip_id: int,
    db: Session = Depends(get_db)
):
    """Get what everyone paid and who owes whom."""
    trip = get_trip_or_404(trip_id, db)
    breakdown = get_cost_breakdown(trip, db)
    return CostBreakdownResponse.from_breakdown(breakdown)


@router.post("/{trip_id}/costs/settle")
async def settle(
    trip_id: int,
    settle_data: SettleRequest,
    db: Session = Depends(get_db)
):
    """Mark a transfer between two travelers as paid."""
    trip = get_trip_or_404(trip_id, db)
    
    if settle_data.from_traveler_id == settle_data.to_traveler_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="A traveler cannot settle with themselves"
        )
    
    mark_settled(trip, settle_data.from_traveler_id, settle_data.to_traveler_id, db)
    return {"success": True}
