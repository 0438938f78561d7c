"""
Settlement engine for splitting shared trip costs.

Pure functions only: callers load expenses and travelers, and persist
"settled" flags themselves. Amounts are kept as unrounded Decimals here;
rounding to cents happens in the response schemas.
"""
import logging
from decimal import Decimal
from typing import Dict, List, Mapping, Optional, Sequence, Tuple
from tripmate.core.utils import to_decimal

logger = logging.getLogger(__name__)

# Balances within a cent of zero count as settled
SETTLEMENT_TOLERANCE = Decimal("0.01")


class Traveler:
    """A member of the trip roster."""
    def __init__(self, id: str, name: str):
        self.id = id
        self.name = name


class Expense:
    """A costed itinerary item, paid by one traveler or split evenly."""
    def __init__(self, amount, payer_id: Optional[str] = None, is_split: bool = False):
        self.amount = amount
        self.payer_id = payer_id
        self.is_split = is_split


class Balance:
    """What a traveler paid and where that leaves them against the fair share."""
    def __init__(self, traveler_id: str, traveler_name: str, paid: Decimal, net: Decimal):
        self.traveler_id = traveler_id
        self.traveler_name = traveler_name
        self.paid = paid
        self.net = net  # positive = owed money, negative = owes money


class Settlement:
    """A directed payment from a debtor to a creditor."""
    def __init__(
        self,
        from_traveler_id: str,
        from_traveler_name: str,
        to_traveler_id: str,
        to_traveler_name: str,
        amount: Decimal,
        is_settled: bool = False
    ):
        self.from_traveler_id = from_traveler_id
        self.from_traveler_name = from_traveler_name
        self.to_traveler_id = to_traveler_id
        self.to_traveler_name = to_traveler_name
        self.amount = amount
        self.is_settled = is_settled

    @property
    def id(self) -> str:
        return f"{self.from_traveler_id}-{self.to_traveler_id}"

    def __repr__(self):
        return (
            f"Settlement({self.from_traveler_id!r} -> {self.to_traveler_id!r}, "
            f"{self.amount}, settled={self.is_settled})"
        )


class CostBreakdown:
    """Totals, per-traveler paid amounts and the transfers that even them out."""
    def __init__(
        self,
        total: Decimal,
        per_person: Decimal,
        paid_by: List[Balance],
        settlements: List[Settlement]
    ):
        self.total = total
        self.per_person = per_person
        self.paid_by = paid_by
        self.settlements = settlements


def compute_breakdown(expenses: Sequence[Expense], travelers: Sequence[Traveler]) -> CostBreakdown:
    """
    Work out how much each traveler has paid and who owes whom.

    Split expenses, and expenses without a payer, are credited evenly to every
    traveler. Otherwise the whole amount is credited to the payer. A payer who
    is not on the roster is credited in a bucket that never reaches the output,
    so callers must keep payer ids consistent with the roster.
    """
    if not travelers:
        return CostBreakdown(Decimal(0), Decimal(0), [], [])

    count = len(travelers)
    # Insertion-ordered so balances come out in roster order
    paid: Dict[str, Decimal] = {traveler.id: Decimal(0) for traveler in travelers}
    total = Decimal(0)

    for expense in expenses:
        amount = to_decimal(expense.amount)
        total += amount

        if expense.is_split or not expense.payer_id:
            share = amount / count
            for traveler in travelers:
                paid[traveler.id] += share
        else:
            paid[expense.payer_id] = paid.get(expense.payer_id, Decimal(0)) + amount

    per_person = total / count

    balances = [
        Balance(
            traveler_id=traveler.id,
            traveler_name=traveler.name,
            paid=paid[traveler.id],
            net=paid[traveler.id] - per_person
        )
        for traveler in travelers
    ]
    settlements = compute_settlements(balances)

    logger.debug(
        f"Computed breakdown for {count} travelers and {len(expenses)} expenses: "
        f"total={total}, settlements={len(settlements)}"
    )
    return CostBreakdown(total, per_person, balances, settlements)


def compute_settlements(balances: Sequence[Balance]) -> List[Settlement]:
    """
    Pair debtors with creditors until every balance is within a cent of zero.

    Greedy: the first open debtor pays the first open creditor as much as the
    smaller of the two balances, in roster order. This always zeroes all
    balances and is deterministic, but it does not always find the fewest
    possible transfers once four or more travelers are out of balance.
    """
    # Working copies; the caller's balances stay untouched
    debtors = [
        {"id": b.traveler_id, "name": b.traveler_name, "balance": b.net}
        for b in balances if b.net < -SETTLEMENT_TOLERANCE
    ]
    creditors = [
        {"id": b.traveler_id, "name": b.traveler_name, "balance": b.net}
        for b in balances if b.net > SETTLEMENT_TOLERANCE
    ]

    settlements = []
    debtor_idx = 0
    creditor_idx = 0

    while debtor_idx < len(debtors) and creditor_idx < len(creditors):
        debtor = debtors[debtor_idx]
        creditor = creditors[creditor_idx]

        amount = min(abs(debtor["balance"]), creditor["balance"])
        if amount > SETTLEMENT_TOLERANCE:
            settlements.append(Settlement(
                from_traveler_id=debtor["id"],
                from_traveler_name=debtor["name"],
                to_traveler_id=creditor["id"],
                to_traveler_name=creditor["name"],
                amount=amount
            ))

        debtor["balance"] += amount
        creditor["balance"] -= amount

        if abs(debtor["balance"]) < SETTLEMENT_TOLERANCE:
            debtor_idx += 1
        if creditor["balance"] < SETTLEMENT_TOLERANCE:
            creditor_idx += 1

    return settlements


def merge_settlement_status(
    settlements: Sequence[Settlement],
    persisted_status: Mapping[Tuple[str, str], bool]
) -> List[Settlement]:
    """
    Overlay recorded "settled" flags onto freshly computed settlements.
    Matching is by exact (from, to) pair; a recorded A->B never marks B->A.
    """
    return [
        Settlement(
            from_traveler_id=s.from_traveler_id,
            from_traveler_name=s.from_traveler_name,
            to_traveler_id=s.to_traveler_id,
            to_traveler_name=s.to_traveler_name,
            amount=s.amount,
            is_settled=bool(persisted_status.get((s.from_traveler_id, s.to_traveler_id), False))
        )
        for s in settlements
    ]
