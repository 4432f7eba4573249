"""Debt simplification - turns net balances into a short list of suggested payments"""

from dataclasses import dataclass
from typing import Iterable, List, Sequence
from groupsplit.domain.balances import calculate_balances
from groupsplit.domain.models import (
    Expense,
    MemberBalance,
    MemberInfo,
    Settlement,
    SettlementPlan,
    Transaction,
)
from groupsplit.utils.money import EPSILON, round2


@dataclass
class _Position:
    member: MemberInfo
    remaining: float


def simplify_debts(balances: Iterable[MemberBalance]) -> List[Transaction]:
    """
    Produce suggested payments that settle all balances.

    Greedy largest-first matching:
    1. Split members into creditors (balance > 0.01) and debtors (balance < -0.01)
    2. Sort both by magnitude, largest first (stable, ties keep input order)
    3. Walk both lists with two pointers, paying min(credit, debt) each step
    4. Advance a pointer once its remaining amount drops below 0.01

    Not guaranteed globally minimal, but deterministic for a given input order.
    Credits and debits are not required to match; the walk stops when either
    side runs out.
    """
    balances = list(balances)

    creditors = sorted(
        (_Position(b.member, b.balance) for b in balances if b.balance > EPSILON),
        key=lambda p: p.remaining,
        reverse=True,
    )
    debtors = sorted(
        (_Position(b.member, abs(b.balance)) for b in balances if b.balance < -EPSILON),
        key=lambda p: p.remaining,
        reverse=True,
    )

    transactions = []
    ci = 0
    di = 0

    while ci < len(creditors) and di < len(debtors):
        credit = creditors[ci]
        debt = debtors[di]

        amount = round2(min(credit.remaining, debt.remaining))
        transactions.append(Transaction(from_member=debt.member, to_member=credit.member, amount=amount))

        credit.remaining = round2(credit.remaining - amount)
        debt.remaining = round2(debt.remaining - amount)

        if credit.remaining < EPSILON:
            ci += 1
        if debt.remaining < EPSILON:
            di += 1

    return transactions


def get_settlement_plan(
    members: Sequence[MemberInfo],
    expenses: Iterable[Expense],
    settlements: Iterable[Settlement] = (),
) -> SettlementPlan:
    """
    Main entry point: compute balances and the suggested payments that settle them.
    """
    balances = calculate_balances(members, expenses, settlements)
    transactions = simplify_debts(balances)
    return SettlementPlan(balances=balances, transactions=transactions)
