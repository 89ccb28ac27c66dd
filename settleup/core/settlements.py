import logging
from decimal import Decimal
from typing import Iterable, List, Sequence

from settleup.core.config import settings
from settleup.core.errors import UnbalancedLedger, UnknownMember
from settleup.core.utils import CENTS, ZERO, qround
from settleup.schemas.balances import Balance
from settleup.schemas.settlements import RecordedSettlement, Settlement

logger = logging.getLogger(__name__)


def to_cents(balances: Sequence[Balance]) -> List[list]:
    """
    Rounds balances to whole cents while keeping their total, rounded to
    the cent, intact (largest remainder). Equal splits leave thirds of a
    cent everywhere; rounding each balance on its own would make the
    transfers drift apart from the total.

    Returns ``[member_id, cents]`` pairs in input order.
    """
    cents = [[b.member_id, qround(b.amount)] for b in balances]
    total = sum((b.amount for b in balances), ZERO)
    steps = int((qround(total) - sum((c for _, c in cents), ZERO)) / CENTS)

    if steps:
        direction = 1 if steps > 0 else -1
        # the members rounded furthest away from where the total needs to go
        order = sorted(
            range(len(cents)),
            key=lambda k: -direction * (balances[k].amount - cents[k][1]),
        )
        for k in order[:abs(steps)]:
            cents[k][1] += direction * CENTS

    return cents


def compute_settlements(
    balances: Sequence[Balance],
    epsilon: Decimal | None = None,
) -> List[Settlement]:
    """
    Greedy algorithm turning net balances into payment instructions.

    The most indebted member pays the largest creditor, whichever of the
    two hits zero first is done and its cursor moves on. This yields at
    most ``#debtors + #creditors - 1`` transfers, fewer whenever a debt
    and a credit match exactly.

    Balances within epsilon of zero are left alone. Raises UnbalancedLedger
    when a balance is still open after one side runs out, either because
    the balances do not sum to zero or because its counterpart is made of
    balances within epsilon.
    """
    eps = settings.SETTLEMENT_EPSILON if epsilon is None else epsilon

    cents = to_cents(balances)
    total = sum((amount for _, amount in cents), ZERO)

    debtors = [entry for entry in cents if entry[1] < -eps]
    creditors = [entry for entry in cents if entry[1] > eps]

    # most negative first / largest credit first, ties keep input order
    debtors.sort(key=lambda x: x[1])
    creditors.sort(key=lambda x: x[1], reverse=True)

    settlements: List[Settlement] = []
    i = 0
    j = 0

    for _ in range(len(debtors) + len(creditors)):
        if i >= len(debtors) or j >= len(creditors):
            break

        debtor = debtors[i]
        creditor = creditors[j]

        amount = min(abs(debtor[1]), creditor[1])

        if amount > eps:
            settlements.append(Settlement(
                from_member=debtor[0],
                to_member=creditor[0],
                amount=amount,
            ))

        debtor[1] += amount
        creditor[1] -= amount

        if abs(debtor[1]) < eps:
            i += 1
        if abs(creditor[1]) < eps:
            j += 1

    residual = [entry for entry in debtors[i:] + creditors[j:] if abs(entry[1]) >= eps]
    if residual:
        logger.warning(
            "Unbalanced ledger (off by %s), residual balances: %s",
            total,
            ", ".join(f"{member_id}={amount}" for member_id, amount in residual),
        )
        if abs(total) >= eps:
            raise UnbalancedLedger(f"Balances do not sum to zero (off by {total})")
        # the counterpart is spread over balances too small to settle
        raise UnbalancedLedger(
            "Balances cannot be settled: "
            + ", ".join(f"{member_id}={amount}" for member_id, amount in residual)
            + " is left once every balance above the threshold is paid"
        )

    return settlements


def apply_settlements(
    balances: Sequence[Balance],
    settlements: Iterable[Settlement],
) -> List[Balance]:
    """Balances after every settlement has been paid."""
    ledger = {b.member_id: b.amount for b in balances}

    for s in settlements:
        for member_id in (s.from_member, s.to_member):
            if member_id not in ledger:
                raise UnknownMember(member_id, context="settlement")
        ledger[s.from_member] += s.amount
        ledger[s.to_member] -= s.amount

    return [Balance(member_id=member_id, amount=amount) for member_id, amount in ledger.items()]


def mark_recorded(
    settlements: Iterable[Settlement],
    recorded: Sequence[RecordedSettlement],
    epsilon: Decimal | None = None,
) -> List[Settlement]:
    """
    Flags suggested settlements that a recorded payment already covers
    (same payer and receiver, amount within epsilon).
    """
    eps = settings.SETTLEMENT_EPSILON if epsilon is None else epsilon
    out = []

    for s in settlements:
        match = next(
            (
                r for r in recorded
                if r.from_member == s.from_member
                and r.to_member == s.to_member
                and abs(r.amount - s.amount) < eps
            ),
            None,
        )
        if match:
            s = s.model_copy(update={"is_settled": True, "settled_at": match.settled_at})
        out.append(s)

    return out
