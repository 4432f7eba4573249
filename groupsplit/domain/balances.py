"""Balance aggregation - folds expenses and settlements into per-member net balances"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence
from groupsplit.domain.models import Expense, MemberBalance, MemberInfo, Settlement
from groupsplit.utils.money import round2


@dataclass(frozen=True)
class UnknownReference:
    """A record pointing at a member id outside the group"""

    source: str  # "payer" | "split" | "settlement_from" | "settlement_to"
    member_id: str


def calculate_balances(
    members: Sequence[MemberInfo],
    expenses: Iterable[Expense],
    settlements: Iterable[Settlement] = (),
) -> List[MemberBalance]:
    """
    Calculate each member's net balance.

    - balance > 0: member is owed money by others
    - balance < 0: member owes money to others
    - balance = 0: settled

    A settlement "from A to B" is folded in as A.paid += amount and
    B.owed += amount, so the same paid - owed formula covers both.

    References to ids that are not in `members` are ignored. Totals are
    rounded to 2 decimals once, after aggregation.

    Returns one MemberBalance per member, in input order.
    """
    paid: Dict[str, float] = {}
    owed: Dict[str, float] = {}
    for member in members:
        paid[member.id] = 0.0
        owed[member.id] = 0.0

    for expense in expenses:
        if expense.payer_id in paid:
            paid[expense.payer_id] += expense.amount

        for split in expense.splits:
            if split.member_id in owed:
                owed[split.member_id] += split.amount

    for settlement in settlements:
        if settlement.from_id in paid:
            paid[settlement.from_id] += settlement.amount
        if settlement.to_id in owed:
            owed[settlement.to_id] += settlement.amount

    balances = []
    for member in members:
        total_paid = round2(paid[member.id])
        total_owed = round2(owed[member.id])
        balances.append(
            MemberBalance(
                member=member,
                total_paid=total_paid,
                total_owed=total_owed,
                balance=round2(total_paid - total_owed),
            )
        )

    return balances


def find_unknown_references(
    members: Sequence[MemberInfo],
    expenses: Iterable[Expense],
    settlements: Iterable[Settlement] = (),
) -> List[UnknownReference]:
    """List every expense/settlement reference that calculate_balances would ignore"""
    known = {member.id for member in members}
    unknown = []

    for expense in expenses:
        if expense.payer_id not in known:
            unknown.append(UnknownReference("payer", expense.payer_id))
        unknown.extend(
            UnknownReference("split", split.member_id)
            for split in expense.splits
            if split.member_id not in known
        )

    for settlement in settlements:
        if settlement.from_id not in known:
            unknown.append(UnknownReference("settlement_from", settlement.from_id))
        if settlement.to_id not in known:
            unknown.append(UnknownReference("settlement_to", settlement.to_id))

    return unknown
