"""POST /v1/debts/simplify - suggested payments for known balances"""

from fastapi import APIRouter

from groupsplit.api.v1.schemas import SimplifyRequest, SimplifyResponse, TransactionSchema
from groupsplit.domain.debts import simplify_debts

router = APIRouter()


@router.post("/debts/simplify", response_model=SimplifyResponse)
def simplify(body: SimplifyRequest):
    """
    Turn net balances into suggested payments (greedy largest-first matching).

    Balances are not required to sum to zero; unmatched remainder is left over.
    """
    transactions = simplify_debts(b.to_domain() for b in body.balances)
    return SimplifyResponse(transactions=[TransactionSchema.from_domain(t) for t in transactions])
