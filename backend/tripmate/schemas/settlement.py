"""
Pydantic schemas for trip cost breakdowns and settlements.
"""
from pydantic import BaseModel, Field
from typing import List
from tripmate.core.utils import round_currency
from tripmate.services.settlement_service import CostBreakdown


class PaidByEntry(BaseModel):
    """Schema for how much one traveler is credited as having paid."""
    traveler_id: str
    traveler_name: str
    amount: float


class SettlementResponse(BaseModel):
    """Schema for a single transfer between travelers."""
    id: str  # "<from>-<to>"
    from_traveler_id: str
    from_traveler_name: str
    to_traveler_id: str
    to_traveler_name: str
    amount: float
    is_settled: bool


class CostBreakdownResponse(BaseModel):
    """Schema for a trip's cost breakdown. Currency fields are rounded to cents."""
    total: float
    per_person: float
    paid_by: List[PaidByEntry]
    settlements: List[SettlementResponse]
    
    @classmethod
    def from_breakdown(cls, breakdown: CostBreakdown) -> "CostBreakdownResponse":
        return cls(
            total=float(round_currency(breakdown.total)),
            per_person=float(round_currency(breakdown.per_person)),
            paid_by=[
                PaidByEntry(
                    traveler_id=b.traveler_id,
                    traveler_name=b.traveler_name,
                    amount=float(round_currency(b.paid))
                )
                for b in breakdown.paid_by
            ],
            settlements=[
                SettlementResponse(
                    id=s.id,
                    from_traveler_id=s.from_traveler_id,
                    from_traveler_name=s.from_traveler_name,
                    to_traveler_id=s.to_traveler_id,
                    to_traveler_name=s.to_traveler_name,
                    amount=float(round_currency(s.amount)),
                    is_settled=s.is_settled
                )
                for s in breakdown.settlements
            ]
        )


class SettleRequest(BaseModel):
    """Schema for marking a settlement as paid."""
    from_traveler_id: str = Field(..., min_length=1)
    to_traveler_id: str = Field(..., min_length=1)
