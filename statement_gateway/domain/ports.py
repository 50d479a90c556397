"""Collaborator interfaces the statement engine reads from and writes to"""

from datetime import date
from decimal import Decimal
from typing import List, Optional, Protocol
from statement_gateway.domain.models import Account, LedgerEvent, StatementRecord


class AccountReader(Protocol):
    def get_account(self, account_id: str) -> Optional[Account]:
        ...


class LedgerReader(Protocol):
    def get_events(self, account_id: str, start: date, end: date) -> List[LedgerEvent]:
        """Events with start <= date < end"""
        ...

    def sum_payments(self, account_id: str, start: date, end: date) -> Decimal:
        """Total payments with start <= date <= end"""
        ...


class StatementStore(Protocol):
    """
    Statement persistence keyed by (account_id, statement_date).

    put(overwrite=False) must be insert-if-absent and raise StoreConflictError
    when another writer got there first; put(overwrite=True) is last-writer-wins.
    """

    def find(self, account_id: str, statement_date: date) -> Optional[StatementRecord]:
        ...

    def put(self, record: StatementRecord, overwrite: bool = False) -> StatementRecord:
        ...

    def list_for_account(self, account_id: str, limit: int = 12) -> List[StatementRecord]:
        ...
