"""POST /v1/settlement-plan and POST /v1/balances - group balance endpoints"""

import time
import logging
from typing import List, Tuple
from fastapi import APIRouter, Depends, HTTPException, Request

from groupsplit.api.v1.schemas import (
    BalancesResponse,
    GroupLedgerRequest,
    MemberBalanceSchema,
    SettlementPlanResponse,
)
from groupsplit.api.dependencies import get_request_id, get_settings
from groupsplit.config import Settings
from groupsplit.domain.balances import calculate_balances, find_unknown_references
from groupsplit.domain.debts import get_settlement_plan
from groupsplit.domain.exceptions import DomainException
from groupsplit.domain.models import Expense, MemberInfo, Settlement
from groupsplit.domain.splits import validate_splits
from groupsplit.infrastructure.observability.metrics import (
    record_settlement_plan,
    rejected_expense_counter,
    unknown_reference_counter,
)
from groupsplit.infrastructure.observability.logging import log_settlement_plan, log_unknown_reference

router = APIRouter()


def load_ledger(
    body: GroupLedgerRequest,
    request_id: str,
    config: Settings,
) -> Tuple[List[MemberInfo], List[Expense], List[Settlement]]:
    """
    Convert request records to domain records and check them at the boundary.

    Raises:
        InvalidSplitError: If an expense's splits do not sum to its amount
    """
    members = [m.to_domain() for m in body.members]
    expenses = [e.to_domain() for e in body.expenses]
    settlements = [s.to_domain() for s in body.settlements]

    for expense in expenses:
        try:
            validate_splits(expense.amount, expense.splits, config.split_tolerance)
        except DomainException:
            rejected_expense_counter.inc()
            raise

    # Unknown ids are excluded from balances, not rejected
    for ref in find_unknown_references(members, expenses, settlements):
        unknown_reference_counter.labels(source=ref.source).inc()
        log_unknown_reference(request_id, ref.source, ref.member_id)

    return members, expenses, settlements


@router.post("/settlement-plan", response_model=SettlementPlanResponse)
def create_settlement_plan(
    body: GroupLedgerRequest,
    request: Request,
    config: Settings = Depends(get_settings),
):
    """
    Compute member balances and the suggested payments that settle them.

    Flow:
    1. Validate expense splits against expense amounts
    2. Log and count references to non-members
    3. Aggregate balances from expenses and recorded settlements
    4. Simplify debts into suggested transactions
    """
    start_time = time.perf_counter()
    request_id = get_request_id(request)

    try:
        members, expenses, settlements = load_ledger(body, request_id, config)
        plan = get_settlement_plan(members, expenses, settlements)

        duration_ms = (time.perf_counter() - start_time) * 1000
        record_settlement_plan(len(plan.transactions))
        log_settlement_plan(
            request_id,
            member_count=len(members),
            expense_count=len(expenses),
            settlement_count=len(settlements),
            transaction_count=len(plan.transactions),
            duration_ms=duration_ms,
        )

        return SettlementPlanResponse.from_domain(plan)

    except DomainException as e:
        logging.warning(f"Invalid ledger input: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/balances", response_model=BalancesResponse)
def get_balances(
    body: GroupLedgerRequest,
    request: Request,
    config: Settings = Depends(get_settings),
):
    """
    Compute each member's total paid, total owed and net balance.

    Returns:
        One balance per member, in request order
    """
    request_id = get_request_id(request)

    try:
        members, expenses, settlements = load_ledger(body, request_id, config)
        balances = calculate_balances(members, expenses, settlements)
        return BalancesResponse(balances=[MemberBalanceSchema.from_domain(b) for b in balances])

    except DomainException as e:
        logging.warning(f"Invalid ledger input: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")
