from decimal import Decimal, ROUND_DOWN, ROUND_HALF_UP
from typing import Dict, Iterable, List, Sequence, Tuple

from settleup.core.errors import InvalidGroupState, UnknownMember
from settleup.core.utils import CENTS, ZERO, to_decimal
from settleup.schemas.balances import Balance
from settleup.schemas.expense import Expense
from settleup.schemas.group import Member
from settleup.schemas.settlements import RecordedSettlement


def _member_ledger(members: Sequence[Member]) -> Dict[str, Decimal]:
    if not members:
        raise InvalidGroupState("Cannot compute balances for a group without members")

    ledger: Dict[str, Decimal] = {}
    for member in members:
        if member.id in ledger:
            raise InvalidGroupState(f"Member {member.id!r} is listed more than once")
        ledger[member.id] = ZERO
    return ledger


def _apply_equal(ledger: Dict[str, Decimal], expense: Expense) -> None:
    share = expense.amount / len(ledger)
    for member_id in ledger:
        ledger[member_id] -= share


def _apply_manual(ledger: Dict[str, Decimal], expense: Expense) -> None:
    # Split totals are validated when the expense is created, not here.
    for split in expense.splits:
        if split.member_id not in ledger:
            raise UnknownMember(split.member_id, context="expense split")
        ledger[split.member_id] -= split.amount


def compute_balances(
    members: Sequence[Member],
    expenses: Iterable[Expense],
    recorded: Iterable[RecordedSettlement] = (),
) -> List[Balance]:
    """
    Net position of every member of a group.

    The payer of an expense is credited the full amount and every member
    it is split between is debited their share, so a positive balance
    means the member is owed money. Payments already recorded move the
    payer up and the receiver down by the paid amount.

    Returns one balance per member, in member order. Raises
    InvalidGroupState for an empty or duplicated member list and
    UnknownMember when an expense or payment references a non-member.
    """
    ledger = _member_ledger(members)

    for expense in expenses:
        if expense.paid_by not in ledger:
            raise UnknownMember(expense.paid_by, context="expense payer")

        ledger[expense.paid_by] += expense.amount

        if expense.split_type == "equal":
            _apply_equal(ledger, expense)
        elif expense.split_type == "manual":
            _apply_manual(ledger, expense)
        else:
            raise InvalidGroupState(f"Unsupported split type {expense.split_type!r}")

    for payment in recorded:
        for member_id in (payment.from_member, payment.to_member):
            if member_id not in ledger:
                raise UnknownMember(member_id, context="recorded settlement")

        ledger[payment.from_member] += payment.amount
        ledger[payment.to_member] -= payment.amount

    return [Balance(member_id=member_id, amount=amount) for member_id, amount in ledger.items()]


def validate_manual_splits(
    splits: Iterable[Decimal | int | float | str],
    total: Decimal | int | float | str,
    tolerance: Decimal = CENTS,
) -> bool:
    """True when the split amounts add up to the expense total."""
    allocated = sum((to_decimal(s) for s in splits), ZERO)
    return abs(allocated - to_decimal(total)) < tolerance


def equal_shares(amount: Decimal, member_ids: Sequence[str]) -> List[Tuple[str, Decimal]]:
    """
    Equal shares of ``amount`` rounded down to the cent. The remainder lands
    on the last member so the shares add up to the amount exactly and none
    of them is negative.
    """
    count = len(member_ids)
    if count == 0:
        raise InvalidGroupState("Cannot split an expense between zero members")

    per_person = (amount / count).quantize(CENTS, rounding=ROUND_DOWN)
    shares: List[Tuple[str, Decimal]] = []
    total_assigned = ZERO

    for member_id in member_ids[:-1]:
        shares.append((member_id, per_person))
        total_assigned += per_person

    last_share = (amount - total_assigned).quantize(CENTS, rounding=ROUND_HALF_UP)
    shares.append((member_ids[-1], last_share))

    return shares
