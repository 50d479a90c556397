"""GET /v1/accounts/summary and GET /v1/accounts/{account_id}/summary - Credit utilization summaries"""

import logging
from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from statement_gateway.api.v1.schemas import AccountSummarySchema, SummaryListResponse
from statement_gateway.api.dependencies import get_request_id
from statement_gateway.config import settings
from statement_gateway.domain.exceptions import InvalidArgumentError
from statement_gateway.domain.summary import build_account_summary
from statement_gateway.infrastructure.database.session import get_db
from statement_gateway.infrastructure.database.repositories import AccountRepository
from statement_gateway.utils.money import to_decimal

router = APIRouter()


@router.get("/accounts/summary", response_model=SummaryListResponse)
def list_account_summaries(
    request: Request,
    as_of: Optional[date] = Query(None, alias="date", description="Reference date (YYYY-MM-DD)"),
    active_only: bool = Query(False, description="Only include active accounts"),
    db: Session = Depends(get_db),
):
    """Summaries for every account, ordered by account id"""
    request_id = get_request_id(request)
    minimum_percent = to_decimal(settings.minimum_payment_percent)

    try:
        summaries = [
            AccountSummarySchema.from_summary(build_account_summary(a, as_of, minimum_percent), a.name)
            for a in AccountRepository(db).list_accounts(active_only=active_only)
        ]
    except InvalidArgumentError as e:
        logging.warning(f"Invalid summary request: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=400, detail=str(e))

    return SummaryListResponse(count=len(summaries), summaries=summaries)


@router.get("/accounts/{account_id}/summary", response_model=AccountSummarySchema)
def get_account_summary(
    account_id: str,
    request: Request,
    as_of: Optional[date] = Query(None, alias="date", description="Reference date (YYYY-MM-DD)"),
    db: Session = Depends(get_db),
):
    """
    Summarize one account's live balance against its terms.

    Returns:
        Utilization, available credit, monthly interest estimate,
        suggested minimum payment and the next due/cutoff dates
    """
    request_id = get_request_id(request)

    account = AccountRepository(db).get_account(account_id)
    if account is None:
        logging.warning(f"Account not found: {account_id}", extra={"request_id": request_id})
        raise HTTPException(status_code=404, detail=f"Account {account_id} not found")

    try:
        summary = build_account_summary(account, as_of, to_decimal(settings.minimum_payment_percent))
    except InvalidArgumentError as e:
        logging.warning(f"Invalid summary request: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=400, detail=str(e))

    return AccountSummarySchema.from_summary(summary, account.name)
