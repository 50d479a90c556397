"""POST /v1/accounts/{account_id}/statements and GET .../statements/preview - statement computation endpoints"""

import time
import logging
from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from statement_gateway.api.v1.schemas import StatementResponse
from statement_gateway.api.dependencies import get_request_id, get_statement_recorder
from statement_gateway.infrastructure.database.session import get_db
from statement_gateway.domain.models import StatementOutcome
from statement_gateway.domain.recorder import StatementRecorder
from statement_gateway.domain.exceptions import InvalidArgumentError, NotFoundError, StoreConflictError
from statement_gateway.infrastructure.observability.metrics import (
    record_statement,
    statement_compute_histogram,
    store_conflict_counter,
)
from statement_gateway.infrastructure.observability.logging import log_statement

router = APIRouter()


def _observe(request_id: str, outcome: StatementOutcome, start_time: float) -> None:
    duration = time.perf_counter() - start_time
    statement_compute_histogram.observe(duration)
    record_statement(
        outcome.status.value,
        outcome.breakdown.carry_over_interest if outcome.breakdown else None,
    )
    log_statement(
        request_id,
        outcome.account_id,
        outcome.status.value,
        outcome.record.statement_date.isoformat() if outcome.record else None,
        duration * 1000,
        reason=outcome.reason,
    )


@router.post("/accounts/{account_id}/statements", response_model=StatementResponse)
def create_statement(
    account_id: str,
    request: Request,
    period: Optional[str] = Query(None, description="Target cycle as YYYY-MM"),
    as_of: Optional[date] = Query(None, alias="date", description="Reference date (YYYY-MM-DD)"),
    recompute: bool = Query(False, description="Overwrite an already-recorded cycle"),
    db: Session = Depends(get_db),
    recorder: StatementRecorder = Depends(get_statement_recorder),
):
    """
    Compute and record the statement for one billing cycle.

    Flow:
    1. Load account (404 if unknown, skipped if inactive)
    2. Resolve cycle from period or date (default: today)
    3. Return the stored record if the cycle is already billed and recompute is false
    4. Otherwise compute from the ledger and the prior cycle's record, then write
    """
    start_time = time.perf_counter()
    request_id = get_request_id(request)

    try:
        outcome = recorder.compute(account_id, period=period, as_of=as_of, recompute=recompute)
        db.commit()

    except NotFoundError as e:
        db.rollback()
        logging.warning(f"Account not found: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=404, detail=str(e))

    except InvalidArgumentError as e:
        db.rollback()
        logging.warning(f"Invalid statement request: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=400, detail=str(e))

    except StoreConflictError as e:
        store_conflict_counter.inc()
        db.rollback()
        logging.warning(f"Statement store conflict: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=409, detail=str(e))

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    _observe(request_id, outcome, start_time)
    return StatementResponse.from_outcome(outcome)


@router.get("/accounts/{account_id}/statements/preview", response_model=StatementResponse)
def preview_statement(
    account_id: str,
    request: Request,
    period: Optional[str] = Query(None, description="Target cycle as YYYY-MM"),
    as_of: Optional[date] = Query(None, alias="date", description="Reference date (YYYY-MM-DD)"),
    recompute: bool = Query(False, description="Ignore an already-recorded cycle and compute afresh"),
    recorder: StatementRecorder = Depends(get_statement_recorder),
):
    """
    Compute a statement without persisting it.

    Returns the recorded statement as-is when the cycle is already billed,
    unless recompute is true.
    """
    start_time = time.perf_counter()
    request_id = get_request_id(request)

    try:
        outcome = recorder.preview(account_id, period=period, as_of=as_of, recompute=recompute)

    except NotFoundError as e:
        logging.warning(f"Account not found: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=404, detail=str(e))

    except InvalidArgumentError as e:
        logging.warning(f"Invalid preview request: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=400, detail=str(e))

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    _observe(request_id, outcome, start_time)
    return StatementResponse.from_outcome(outcome)
