"""Dependency injection for FastAPI endpoints"""

from fastapi import Depends, Request
from sqlalchemy.orm import Session
from statement_gateway.domain.recorder import StatementRecorder
from statement_gateway.infrastructure.database.session import get_db
from statement_gateway.infrastructure.database.repositories import (
    AccountRepository,
    LedgerRepository,
    StatementRepository,
)


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_statement_recorder(db: Session = Depends(get_db)) -> StatementRecorder:
    """Provide a statement recorder bound to the request's session"""
    return StatementRecorder(
        accounts=AccountRepository(db),
        ledger=LedgerRepository(db),
        store=StatementRepository(db),
    )
