"""
Tests for the settlement engine.
"""
import random
from decimal import Decimal
import pytest
from tripmate.services.settlement_service import (
    Balance, Expense, Settlement, Traveler,
    compute_breakdown, compute_settlements, merge_settlement_status
)

A = Traveler("a", "Alice")
B = Traveler("b", "Bob")
C = Traveler("c", "Carol")


def pairs(settlements):
    """Reduce settlements to comparable (from, to, amount, settled) tuples."""
    return [(s.from_traveler_id, s.to_traveler_id, s.amount, s.is_settled) for s in settlements]


def paid(breakdown):
    return {b.traveler_id: b.paid for b in breakdown.paid_by}


def test_even_split_needs_no_settlement():
    """Split costs leave everyone at their fair share."""
    breakdown = compute_breakdown([Expense(100, is_split=True)], [A, B])
    
    assert breakdown.total == Decimal(100)
    assert breakdown.per_person == Decimal(50)
    assert paid(breakdown) == {"a": Decimal(50), "b": Decimal(50)}
    assert breakdown.settlements == []


def test_single_payer_is_owed_half():
    breakdown = compute_breakdown([Expense(100, payer_id="a")], [A, B])
    
    assert paid(breakdown) == {"a": Decimal(100), "b": Decimal(0)}
    assert breakdown.per_person == Decimal(50)
    assert [b.net for b in breakdown.paid_by] == [Decimal(50), Decimal(-50)]
    assert pairs(breakdown.settlements) == [("b", "a", Decimal(50), False)]
    
    settlement = breakdown.settlements[0]
    assert settlement.id == "b-a"
    assert settlement.from_traveler_name == "Bob"
    assert settlement.to_traveler_name == "Alice"


def test_mixed_payer_and_split_expenses():
    expenses = [Expense(90, payer_id="a"), Expense(30, is_split=True)]
    breakdown = compute_breakdown(expenses, [A, B, C])
    
    assert breakdown.total == Decimal(120)
    assert breakdown.per_person == Decimal(40)
    assert paid(breakdown) == {"a": Decimal(100), "b": Decimal(10), "c": Decimal(10)}
    assert [b.net for b in breakdown.paid_by] == [Decimal(60), Decimal(-30), Decimal(-30)]
    assert pairs(breakdown.settlements) == [
        ("b", "a", Decimal(30), False),
        ("c", "a", Decimal(30), False),
    ]


def test_no_travelers_gives_zero_breakdown():
    breakdown = compute_breakdown([Expense(100, payer_id="a")], [])
    
    assert breakdown.total == 0
    assert breakdown.per_person == 0
    assert breakdown.paid_by == []
    assert breakdown.settlements == []


def test_no_expenses_gives_zero_balances():
    breakdown = compute_breakdown([], [A, B])
    
    assert breakdown.total == 0
    assert breakdown.per_person == 0
    assert paid(breakdown) == {"a": 0, "b": 0}
    assert breakdown.settlements == []


def test_merge_marks_only_matching_direction():
    breakdown = compute_breakdown([Expense(90, payer_id="a"), Expense(30, is_split=True)], [A, B, C])
    merged = merge_settlement_status(breakdown.settlements, {("b", "a"): True})
    
    assert [(s.id, s.is_settled) for s in merged] == [("b-a", True), ("c-a", False)]
    # Amounts are carried over unchanged
    assert [s.amount for s in merged] == [Decimal(30), Decimal(30)]


def test_merge_ignores_reverse_direction():
    settlements = [Settlement("b", "Bob", "a", "Alice", Decimal(50))]
    merged = merge_settlement_status(settlements, {("a", "b"): True})
    assert merged[0].is_settled is False


def test_merge_respects_unsettled_flag():
    settlements = [Settlement("b", "Bob", "a", "Alice", Decimal(50))]
    merged = merge_settlement_status(settlements, {("b", "a"): False})
    assert merged[0].is_settled is False


def test_merge_does_not_mutate_input():
    settlements = [Settlement("b", "Bob", "a", "Alice", Decimal(50))]
    merge_settlement_status(settlements, {("b", "a"): True})
    assert settlements[0].is_settled is False


def test_single_traveler_never_owes_anyone():
    expenses = [Expense(70, payer_id="a"), Expense(30, is_split=True), Expense(5)]
    breakdown = compute_breakdown(expenses, [A])
    
    assert breakdown.total == Decimal(105)
    assert breakdown.per_person == Decimal(105)
    assert breakdown.settlements == []


def test_missing_payer_is_treated_as_split():
    breakdown = compute_breakdown([Expense(60, payer_id=None), Expense(30, payer_id="")], [A, B, C])
    assert paid(breakdown) == {"a": Decimal(30), "b": Decimal(30), "c": Decimal(30)}
    assert breakdown.settlements == []


def test_split_flag_overrides_payer():
    breakdown = compute_breakdown([Expense(40, payer_id="a", is_split=True)], [A, B])
    assert paid(breakdown) == {"a": Decimal(20), "b": Decimal(20)}


@pytest.mark.parametrize("amount", [None, "", "abc", float("nan"), Decimal("NaN"), float("inf")])
def test_unusable_amounts_count_as_zero(amount):
    breakdown = compute_breakdown([Expense(amount, payer_id="a"), Expense(10, payer_id="b")], [A, B])
    
    assert breakdown.total == Decimal(10)
    assert pairs(breakdown.settlements) == [("a", "b", Decimal(5), False)]


def test_numeric_strings_and_floats_are_accepted():
    breakdown = compute_breakdown([Expense("12.50", payer_id="a"), Expense(7.5, payer_id="a")], [A, B])
    assert breakdown.total == Decimal("20.0")
    assert pairs(breakdown.settlements) == [("b", "a", Decimal(10), False)]


def test_unknown_payer_is_left_out_of_roster():
    """An off-roster payer's credit never shows up in paid_by."""
    breakdown = compute_breakdown([Expense(100, payer_id="zed")], [A, B])
    
    assert breakdown.total == Decimal(100)
    assert [b.traveler_id for b in breakdown.paid_by] == ["a", "b"]
    assert paid(breakdown) == {"a": 0, "b": 0}
    # Everyone on the roster is short of the fair share, nobody is owed
    assert breakdown.settlements == []


def test_uneven_division_is_not_rounded_internally():
    breakdown = compute_breakdown([Expense(100, payer_id="a")], [A, B, C])
    
    assert breakdown.per_person == Decimal(100) / 3
    assert len(breakdown.settlements) == 2
    assert all(s.amount == Decimal(100) / 3 for s in breakdown.settlements)


def test_balances_within_a_cent_are_ignored():
    breakdown = compute_breakdown([Expense("0.01", payer_id="a")], [A, B])
    assert breakdown.settlements == []


def test_transfer_just_above_a_cent_is_emitted():
    breakdown = compute_breakdown([Expense("0.03", payer_id="a")], [A, B])
    assert pairs(breakdown.settlements) == [("b", "a", Decimal("0.015"), False)]


def test_greedy_order_follows_roster():
    """
    Four travelers out of balance: the greedy pass makes three transfers
    where two would do. This is the expected output.
    """
    p, q, r, s = (Traveler(x, x.upper()) for x in "pqrs")
    expenses = [Expense(2, payer_id="q"), Expense(10, payer_id="r"), Expense(12, payer_id="s")]
    breakdown = compute_breakdown(expenses, [p, q, r, s])
    
    assert [b.net for b in breakdown.paid_by] == [Decimal(-6), Decimal(-4), Decimal(4), Decimal(6)]
    assert pairs(breakdown.settlements) == [
        ("p", "r", Decimal(4), False),
        ("p", "s", Decimal(2), False),
        ("q", "s", Decimal(4), False),
    ]


def test_compute_settlements_does_not_mutate_balances():
    balances = [
        Balance("a", "Alice", Decimal(100), Decimal(50)),
        Balance("b", "Bob", Decimal(0), Decimal(-50)),
    ]
    settlements = compute_settlements(balances)
    
    assert pairs(settlements) == [("b", "a", Decimal(50), False)]
    assert [b.net for b in balances] == [Decimal(50), Decimal(-50)]


def random_trip(seed):
    rng = random.Random(seed)
    travelers = [Traveler(f"t{i}", f"Traveler {i}") for i in range(rng.randint(1, 6))]
    expenses = []
    for _ in range(rng.randint(0, 15)):
        amount = Decimal(rng.randint(0, 50000)) / 100
        if rng.random() < 0.4:
            expenses.append(Expense(amount, is_split=True))
        else:
            expenses.append(Expense(amount, payer_id=rng.choice(travelers).id))
    return expenses, travelers


@pytest.mark.parametrize("seed", range(25))
def test_breakdown_properties(seed):
    expenses, travelers = random_trip(seed)
    breakdown = compute_breakdown(expenses, travelers)
    
    # Every unit spent is credited to someone on the roster
    total_paid = sum((b.paid for b in breakdown.paid_by), Decimal(0))
    assert abs(total_paid - breakdown.total) < Decimal("1e-6")
    assert breakdown.total == sum((e.amount for e in expenses), Decimal(0))
    
    # Balances cancel out
    assert abs(sum((b.net for b in breakdown.paid_by), Decimal(0))) < Decimal("1e-6")
    
    # No empty transfers
    assert all(s.amount > 0 for s in breakdown.settlements)
    
    # Applying the transfers clears every balance
    remaining = {b.traveler_id: b.net for b in breakdown.paid_by}
    for s in breakdown.settlements:
        remaining[s.from_traveler_id] += s.amount
        remaining[s.to_traveler_id] -= s.amount
    # Each party skipped below the tolerance can leave up to a cent behind
    assert all(abs(net) < Decimal("0.01") * len(travelers) for net in remaining.values())
    
    if len(travelers) == 1:
        assert breakdown.settlements == []


@pytest.mark.parametrize("seed", range(5))
def test_breakdown_is_deterministic(seed):
    expenses, travelers = random_trip(seed)
    first = compute_breakdown(expenses, travelers)
    second = compute_breakdown(expenses, travelers)
    
    assert pairs(first.settlements) == pairs(second.settlements)
    assert [(b.traveler_id, b.paid, b.net) for b in first.paid_by] == \
        [(b.traveler_id, b.paid, b.net) for b in second.paid_by]
