"""POST /v1/splits - compute expense splits before an expense is recorded"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Request

from groupsplit.api.v1.schemas import SplitOut, SplitRequest, SplitResponse
from groupsplit.api.dependencies import get_request_id, get_settings
from groupsplit.config import Settings
from groupsplit.domain.exceptions import DomainException
from groupsplit.domain.splits import build_splits

router = APIRouter()


@router.post("/splits", response_model=SplitResponse)
def create_splits(
    body: SplitRequest,
    request: Request,
    config: Settings = Depends(get_settings),
):
    """
    Split an amount equally, by custom amounts, by percentage or by shares.

    Returned splits always sum to the amount (custom splits within tolerance).
    """
    try:
        splits = build_splits(
            body.split_type,
            body.amount,
            body.member_ids,
            body.values,
            split_tolerance=config.split_tolerance,
            percentage_tolerance=config.percentage_tolerance,
        )
    except DomainException as e:
        logging.warning(f"Invalid split request: {e}", extra={"request_id": get_request_id(request)})
        raise HTTPException(status_code=422, detail=str(e))

    return SplitResponse(
        split_type=body.split_type,
        amount=body.amount,
        splits=[SplitOut(member_id=s.member_id, amount=s.amount) for s in splits],
    )
