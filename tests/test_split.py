from decimal import Decimal

import pytest
from hypothesis import given, strategies as st

from groupsplit.models import EvenSplit, ExactSplit, Expense, ShareCents, SharesSplit
from groupsplit.services.split import (
    SplitError,
    calculate_expense_shares,
    distribute_even,
    distribute_exact,
    distribute_shares,
    distribute_split,
    merge_shares,
)


def cents(shares):
    return [(share.participant_id, share.cents) for share in shares]


def amounts(shares):
    return {share.participant_id: share.amount for share in shares}


def test_distribute_even():
    shares = distribute_even(1000, ["a", "b", "c", "d"])
    assert cents(shares) == [("a", 250), ("b", 250), ("c", 250), ("d", 250)]


def test_distribute_even_remainder_goes_to_first_in_order():
    assert cents(distribute_even(1001, ["c", "a", "b"])) == [("c", 334), ("a", 334), ("b", 333)]


def test_distribute_even_negative_total():
    shares = distribute_even(-5, ["a", "b", "c"])
    assert cents(shares) == [("a", -1), ("b", -2), ("c", -2)]


def test_distribute_even_requires_participants():
    with pytest.raises(SplitError):
        distribute_even(100, [])


def test_shares_scenario():
    split = SharesSplit(
        shares=[
            {"participant_id": "a", "weight": 2},
            {"participant_id": "b", "weight": 1},
            {"participant_id": "c", "weight": 1},
        ]
    )
    shares = distribute_split(Decimal("75"), split)
    assert [(s.participant_id, s.amount) for s in shares] == [
        ("a", Decimal("37.50")),
        ("b", Decimal("18.75")),
        ("c", Decimal("18.75")),
    ]


def test_shares_leftover_goes_to_largest_fraction():
    split = SharesSplit(shares=[{"participant_id": "a", "weight": 1}, {"participant_id": "b", "weight": 2}])
    assert cents(distribute_shares(10, split)) == [("a", 3), ("b", 7)]


def test_shares_fraction_ties_keep_input_order():
    split = SharesSplit(
        shares=[
            {"participant_id": "b", "weight": 1},
            {"participant_id": "a", "weight": 1},
            {"participant_id": "c", "weight": 1},
        ]
    )
    assert cents(distribute_shares(100, split)) == [("b", 34), ("a", 33), ("c", 33)]


def test_shares_skip_non_positive_weights():
    split = SharesSplit(
        shares=[
            {"participant_id": "a", "weight": 0},
            {"participant_id": "b", "weight": 3},
            {"participant_id": "c", "weight": 1},
        ]
    )
    assert cents(distribute_shares(400, split)) == [("b", 300), ("c", 100)]


def test_shares_without_positive_weights_fall_back_to_even():
    split = SharesSplit(shares=[{"participant_id": "a", "weight": 0}, {"participant_id": "b", "weight": -1}])
    assert cents(distribute_shares(101, split)) == [("a", 51), ("b", 50)]


def test_shares_require_entries():
    with pytest.raises(SplitError):
        distribute_shares(100, SharesSplit(shares=[]))


def test_exact_first_allocation_absorbs_drift():
    split = ExactSplit(
        allocations=[
            {"participant_id": "a", "amount": "40"},
            {"participant_id": "b", "amount": "40"},
            {"participant_id": "c", "amount": "39.99"},
        ]
    )
    shares = distribute_split(120, split)
    assert amounts(shares) == {"a": Decimal("40.01"), "b": Decimal("40.00"), "c": Decimal("39.99")}
    assert sum(s.amount for s in shares) == Decimal("120.00")


def test_exact_overshoot_is_taken_from_first():
    split = ExactSplit(allocations=[{"participant_id": "a", "amount": 5}, {"participant_id": "b", "amount": 6}])
    assert cents(distribute_exact(1000, split)) == [("a", 400), ("b", 600)]


def test_exact_requires_allocations():
    with pytest.raises(SplitError):
        distribute_exact(100, ExactSplit(allocations=[]))


def test_calculate_expense_shares_even():
    expense = Expense(
        id="e1",
        amount=100,
        paid_by=[{"participant_id": "a", "amount": 100}],
        split=EvenSplit(participant_ids=["a", "b", "c", "d"]),
    )
    shares = calculate_expense_shares(expense)
    assert len(shares) == 4
    assert all(share.amount == Decimal("25.00") for share in shares)


def test_merge_shares():
    assert merge_shares([{"a": 100, "b": 50}, {"b": 25, "c": 10}]) == {"a": 100, "b": 75, "c": 10}


@given(st.integers(min_value=1, max_value=10_000_000), st.integers(min_value=1, max_value=50))
def test_even_split_sums_to_total(total_cents, n):
    shares = distribute_even(total_cents, [f"p{i}" for i in range(n)])
    base = total_cents // n
    assert sum(share.cents for share in shares) == total_cents
    assert all(share.cents in (base, base + 1) for share in shares)
    # extra cents land on a prefix of the list
    extras = [share.cents == base + 1 for share in shares]
    assert extras == sorted(extras, reverse=True)


@given(
    st.integers(min_value=0, max_value=10_000_000),
    st.lists(st.integers(min_value=-5, max_value=1000), min_size=1, max_size=12).filter(
        lambda weights: any(weight > 0 for weight in weights)
    ),
)
def test_shares_split_sums_to_total(total_cents, weights):
    split = SharesSplit(shares=[{"participant_id": f"p{i}", "weight": w} for i, w in enumerate(weights)])
    shares = distribute_shares(total_cents, split)
    assert sum(share.cents for share in shares) == total_cents
    assert all(isinstance(share, ShareCents) for share in shares)


@given(st.integers(min_value=2, max_value=1_000_000), st.integers(min_value=1, max_value=10))
def test_exact_split_off_by_one_cent(total_cents, n):
    base = [total_cents // n] * n
    base[-1] += total_cents - sum(base)
    base[-1] -= 1
    split = ExactSplit(
        allocations=[{"participant_id": f"p{i}", "amount": Decimal(c) / 100} for i, c in enumerate(base)]
    )
    shares = distribute_exact(total_cents, split)
    assert shares[0].cents == base[0] + 1
    assert sum(share.cents for share in shares) == total_cents
