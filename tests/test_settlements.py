import random
from decimal import Decimal

import pytest

from settleup.core.balances import compute_balances
from settleup.core.errors import UnbalancedLedger, UnknownMember
from settleup.core.settlements import apply_settlements, compute_settlements, mark_recorded, to_cents
from settleup.schemas.balances import Balance
from settleup.schemas.expense import Expense, ExpenseSplit
from settleup.schemas.group import Member
from settleup.schemas.settlements import RecordedSettlement, Settlement

EPS = Decimal("0.01")


def balances(**amounts):
    return [Balance(member_id=m, amount=Decimal(str(a))) for m, a in amounts.items()]


def transfers(settlements):
    return [(s.from_member, s.to_member, s.amount) for s in settlements]


def assert_settled(start, settlements, tolerance=EPS):
    after = apply_settlements(start, settlements)
    assert all(abs(b.amount) < tolerance for b in after), after


def test_one_payer_two_debtors():
    start = balances(a=200, b=-100, c=-100)

    result = compute_settlements(start)

    assert sorted(transfers(result)) == [
        ("b", "a", Decimal("100.00")),
        ("c", "a", Decimal("100.00")),
    ]
    assert_settled(start, result)


def test_all_settled_returns_nothing():
    assert compute_settlements(balances(a=0, b=0)) == []
    assert compute_settlements(balances(a="0.004", b="-0.004")) == []
    assert compute_settlements([]) == []


def test_largest_debtor_pays_largest_creditor_first():
    start = balances(a=70, b=30, c=-60, d=-40)

    result = compute_settlements(start)

    assert transfers(result) == [
        ("c", "a", Decimal("60.00")),
        ("d", "a", Decimal("10.00")),
        ("d", "b", Decimal("30.00")),
    ]
    assert_settled(start, result)


def test_exact_match_settles_both_in_one_step():
    start = balances(a=50, b=-50, c=30, d=-30)

    result = compute_settlements(start)

    assert transfers(result) == [
        ("b", "a", Decimal("50.00")),
        ("d", "c", Decimal("30.00")),
    ]


def test_amounts_are_rounded_to_cents():
    start = compute_balances(
        [Member(id=m, name=m) for m in "abc"],
        [Expense(amount=100, paid_by="a")],
    )

    result = compute_settlements(start)

    assert sorted(transfers(result)) == [
        ("b", "a", Decimal("33.33")),
        ("c", "a", Decimal("33.33")),
    ]
    assert all(s.amount == s.amount.quantize(Decimal("0.01")) for s in result)
    assert_settled(start, result)


def test_near_zero_members_are_left_out():
    start = balances(a=10, b="-0.004", c="-9.996")

    result = compute_settlements(start)

    assert transfers(result) == [("c", "a", Decimal("10.00"))]
    assert_settled(start, result)


def test_more_credit_than_debt_is_unbalanced():
    with pytest.raises(UnbalancedLedger):
        compute_settlements(balances(a=100, b=-50))


def test_only_debtors_is_unbalanced():
    with pytest.raises(UnbalancedLedger):
        compute_settlements(balances(a=-20, b=-30))


def test_input_balances_are_untouched():
    start = balances(a=70, b=30, c=-60, d=-40)
    before = [b.model_copy() for b in start]

    compute_settlements(start)

    assert start == before


def test_custom_epsilon():
    start = balances(a="0.50", b="-0.50")

    assert compute_settlements(start, epsilon=Decimal("1")) == []
    assert transfers(compute_settlements(start)) == [("b", "a", Decimal("0.50"))]


def _random_balances(rng, size):
    while True:
        amounts = [Decimal(rng.randint(-50000, 50000)) / 100 for _ in range(size - 1)]
        amounts.append(-sum(amounts, Decimal("0")))
        # single cents sit inside epsilon and are never transferred
        if all(abs(a) != EPS for a in amounts):
            break
    return [Balance(member_id=f"m{i}", amount=a) for i, a in enumerate(amounts)]


def test_random_balances_are_fully_settled_within_bound():
    rng = random.Random(1234)

    for _ in range(300):
        start = _random_balances(rng, rng.randint(1, 9))

        result = compute_settlements(start)

        debtors = sum(1 for b in start if b.amount < -EPS)
        creditors = sum(1 for b in start if b.amount > EPS)
        assert len(result) <= max(0, debtors + creditors - 1)
        assert all(s.amount > EPS for s in result)
        assert_settled(start, result)


def test_random_groups_from_expenses_are_fully_settled():
    rng = random.Random(99)
    checked = 0

    for _ in range(200):
        group = [Member(id=f"m{i}", name=f"M{i}") for i in range(rng.randint(1, 7))]
        ids = [m.id for m in group]
        expenses = []
        for _ in range(rng.randint(0, 12)):
            amount = Decimal(rng.randint(1, 100000)) / 100
            payer = rng.choice(ids)
            if rng.random() < 0.5:
                expenses.append(Expense(amount=amount, paid_by=payer))
            else:
                owner = rng.choice(ids)
                expenses.append(Expense(
                    amount=amount,
                    paid_by=payer,
                    split_type="manual",
                    splits=[ExpenseSplit(member_id=owner, amount=amount)],
                ))

        start = compute_balances(group, expenses)
        assert abs(sum(b.amount for b in start)) < EPS

        if any(abs(amount) == EPS for _, amount in to_cents(start)):
            # covered by test_stranded_cents_are_unbalanced
            continue

        assert_settled(start, compute_settlements(start))
        checked += 1

    assert checked > 100


def test_stranded_cents_are_unbalanced():
    start = compute_balances(
        [Member(id=m, name=m) for m in "abcd"],
        [Expense(amount=Decimal("0.04"), paid_by="a")],
    )
    assert [b.amount for b in start] == [
        Decimal("0.03"), Decimal("-0.01"), Decimal("-0.01"), Decimal("-0.01"),
    ]

    with pytest.raises(UnbalancedLedger) as excinfo:
        compute_settlements(start)

    assert "a=0.03" in excinfo.value.message


def test_apply_settlements_rejects_strangers():
    with pytest.raises(UnknownMember):
        apply_settlements(
            balances(a=1, b=-1),
            [Settlement(from_member="b", to_member="z", amount=Decimal("1"))],
        )


def test_mark_recorded_flags_matching_payments():
    suggested = [
        Settlement(from_member="b", to_member="a", amount=Decimal("100.00")),
        Settlement(from_member="c", to_member="a", amount=Decimal("100.00")),
    ]
    recorded = [
        RecordedSettlement(from_member="b", to_member="a", amount=Decimal("100.004")),
        RecordedSettlement(from_member="c", to_member="a", amount=Decimal("40")),
    ]

    result = mark_recorded(suggested, recorded)

    assert [s.is_settled for s in result] == [True, False]
    assert not suggested[0].is_settled
