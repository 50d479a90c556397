"""GET /v1/accounts/{account_id}/statements - Fetch an account's statement history"""

from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from statement_gateway.api.v1.schemas import HistoryResponse, StatementSchema
from statement_gateway.config import settings
from statement_gateway.infrastructure.database.session import get_db
from statement_gateway.infrastructure.database.repositories import AccountRepository, StatementRepository

router = APIRouter()


@router.get("/accounts/{account_id}/statements", response_model=HistoryResponse)
def get_statement_history(
    account_id: str,
    limit: Optional[int] = Query(None, ge=1, le=120, description="Maximum statements to return"),
    db: Session = Depends(get_db),
):
    """
    Retrieve recorded statements for an account.

    Returns:
        Statements, most recent statement date first
    """
    if AccountRepository(db).get_account(account_id) is None:
        raise HTTPException(status_code=404, detail=f"Account {account_id} not found")

    records = StatementRepository(db).list_for_account(account_id, limit=limit or settings.statement_history_limit)

    return HistoryResponse(
        account_id=account_id,
        statements=[StatementSchema.from_record(r) for r in records],
    )
