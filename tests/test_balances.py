from decimal import Decimal

import pytest

from settleup.core.balances import compute_balances, equal_shares, validate_manual_splits
from settleup.core.errors import InvalidGroupState, UnknownMember
from settleup.schemas.expense import Expense, ExpenseSplit
from settleup.schemas.group import Member
from settleup.schemas.settlements import RecordedSettlement

EPS = Decimal("0.01")


def members(*ids):
    return [Member(id=i, name=i.upper()) for i in ids]


def as_map(balances):
    return {b.member_id: b.amount for b in balances}


def manual(amount, paid_by, **splits):
    return Expense(
        amount=amount,
        paid_by=paid_by,
        split_type="manual",
        splits=[ExpenseSplit(member_id=m, amount=a) for m, a in splits.items()],
    )


def test_single_equal_expense():
    balances = compute_balances(members("a", "b", "c"), [Expense(amount=300, paid_by="a")])

    assert as_map(balances) == {
        "a": Decimal("200"),
        "b": Decimal("-100"),
        "c": Decimal("-100"),
    }


def test_mutual_expenses_cancel_out():
    balances = compute_balances(
        members("a", "b"),
        [Expense(amount=100, paid_by="a"), Expense(amount=100, paid_by="b")],
    )

    assert as_map(balances) == {"a": Decimal("0"), "b": Decimal("0")}


def test_one_balance_per_member_in_member_order():
    balances = compute_balances(members("c", "a", "b", "d"), [Expense(amount=10, paid_by="a")])

    assert [b.member_id for b in balances] == ["c", "a", "b", "d"]


def test_members_without_expenses_have_zero_balance():
    balances = compute_balances(members("a", "b"), [])

    assert as_map(balances) == {"a": Decimal("0"), "b": Decimal("0")}


def test_uneven_division_still_conserves_money():
    balances = compute_balances(members("a", "b", "c"), [Expense(amount=100, paid_by="a")])

    assert abs(sum(b.amount for b in balances)) < EPS
    assert abs(as_map(balances)["b"] - Decimal("-33.33")) < EPS


def test_manual_split_uses_split_rows():
    balances = compute_balances(
        members("a", "b", "c"),
        [manual(100, "a", a=20, b=80)],
    )

    # c is not part of the manual split and owes nothing
    assert as_map(balances) == {"a": Decimal("80"), "b": Decimal("-80"), "c": Decimal("0")}


def test_manual_and_equal_expenses_accumulate():
    balances = compute_balances(
        members("a", "b"),
        [Expense(amount=50, paid_by="b"), manual(30, "a", b=30)],
    )

    assert as_map(balances) == {"a": Decimal("5"), "b": Decimal("-5")}


def test_recorded_settlements_are_applied():
    recorded = [RecordedSettlement(from_member="b", to_member="a", amount=100)]

    balances = compute_balances(
        members("a", "b", "c"),
        [Expense(amount=300, paid_by="a")],
        recorded,
    )

    assert as_map(balances) == {
        "a": Decimal("100"),
        "b": Decimal("0"),
        "c": Decimal("-100"),
    }


def test_expense_order_does_not_matter():
    group = members("a", "b", "c", "d")
    expenses = [
        Expense(amount="12.34", paid_by="a"),
        Expense(amount="99.99", paid_by="c"),
        manual("40.00", "d", a="10.00", b="30.00"),
        Expense(amount="7", paid_by="b"),
    ]

    forward = as_map(compute_balances(group, expenses))
    backward = as_map(compute_balances(group, list(reversed(expenses))))

    for member_id in forward:
        assert abs(forward[member_id] - backward[member_id]) < Decimal("1e-20")


def test_same_input_gives_same_output():
    group = members("a", "b", "c")
    expenses = [Expense(amount=100, paid_by="a"), Expense(amount="45.50", paid_by="c")]

    assert compute_balances(group, expenses) == compute_balances(group, expenses)


def test_inputs_are_not_modified():
    group = members("a", "b")
    expense = manual(10, "a", b=10)
    before = expense.model_copy(deep=True)

    compute_balances(group, [expense])

    assert expense == before
    assert [m.id for m in group] == ["a", "b"]


def test_empty_group_is_rejected():
    with pytest.raises(InvalidGroupState):
        compute_balances([], [Expense(amount=10, paid_by="a")])


def test_duplicate_members_are_rejected():
    with pytest.raises(InvalidGroupState):
        compute_balances(members("a", "a"), [])


def test_unknown_payer_is_rejected():
    with pytest.raises(UnknownMember) as exc:
        compute_balances(members("a", "b"), [Expense(amount=10, paid_by="z")])

    assert exc.value.member_id == "z"


def test_unknown_split_member_is_rejected():
    with pytest.raises(UnknownMember):
        compute_balances(members("a", "b"), [manual(10, "a", z=10)])


def test_unknown_member_in_recorded_settlement_is_rejected():
    recorded = [RecordedSettlement(from_member="z", to_member="a", amount=5)]

    with pytest.raises(UnknownMember):
        compute_balances(members("a", "b"), [], recorded)


@pytest.mark.parametrize(
    "splits,total,expected",
    [
        ([40, 40], 100, False),
        ([40, 60], 100, True),
        (["33.33", "33.33", "33.34"], "100.00", True),
        ([33.33, 33.33, 33.33], 100, False),
        ([100.004], 100, True),
        ([], 0, True),
        ([Decimal("10.50"), 20, 19.5, "50"], Decimal("100"), True),
    ],
)
def test_validate_manual_splits(splits, total, expected):
    assert validate_manual_splits(splits, total) is expected


def test_equal_shares_put_remainder_on_last_member():
    shares = equal_shares(Decimal("100"), ["a", "b", "c"])

    assert shares == [
        ("a", Decimal("33.33")),
        ("b", Decimal("33.33")),
        ("c", Decimal("33.34")),
    ]
    assert sum(amount for _, amount in shares) == Decimal("100")


def test_equal_shares_need_members():
    with pytest.raises(InvalidGroupState):
        equal_shares(Decimal("10"), [])


def test_equal_shares_round_down_and_stay_non_negative():
    ids = [f"m{i}" for i in range(7)]

    shares = equal_shares(Decimal("0.05"), ids)

    assert [amount for _, amount in shares] == [Decimal("0.00")] * 6 + [Decimal("0.05")]
    assert sum(amount for _, amount in shares) == Decimal("0.05")


def test_equal_shares_put_whole_remainder_on_last_member():
    shares = equal_shares(Decimal("10"), ["a", "b", "c", "d", "e", "f"])

    assert [amount for _, amount in shares] == [Decimal("1.66")] * 5 + [Decimal("1.70")]
