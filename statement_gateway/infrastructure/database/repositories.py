"""Data access layer implementing the statement engine's collaborator interfaces"""

from datetime import date
from decimal import Decimal
from typing import List, Optional
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from statement_gateway.infrastructure.database.models import CreditAccount, CreditStatement, LedgerEntry
from statement_gateway.domain.models import Account, EventKind, LedgerEvent, StatementRecord
from statement_gateway.domain.exceptions import StoreConflictError
from statement_gateway.utils.money import round_currency, to_decimal

_RECORD_FIELDS = (
    "due_date",
    "previous_balance",
    "charges",
    "interests",
    "payments",
    "statement_balance",
    "forgivable_interest",
    "installment_balance",
    "annual_rate",
    "period_days",
    "payment_made",
)


class AccountRepository:
    """Repository for credit accounts"""

    def __init__(self, db: Session):
        self.db = db

    def get_account(self, account_id: str) -> Optional[Account]:
        """Fetch an account snapshot, None if unknown"""
        row = self.db.get(CreditAccount, str(account_id))
        if row is None:
            return None
        return self._to_account(row)

    def list_accounts(self, active_only: bool = False) -> List[Account]:
        """All accounts ordered by id"""
        query = self.db.query(CreditAccount)
        if active_only:
            query = query.filter(CreditAccount.active.is_(True))
        return [self._to_account(row) for row in query.order_by(CreditAccount.id).all()]

    @staticmethod
    def _to_account(row: CreditAccount) -> Account:
        return Account(
            account_id=row.id,
            name=row.name or "",
            credit_limit=to_decimal(row.credit_limit),
            balance=to_decimal(row.balance),
            due_day=row.due_day,
            cut_off_day=row.cut_off_day,
            annual_rate=to_decimal(row.annual_rate) if row.annual_rate is not None else None,
            active=bool(row.active),
        )

    def create_account(
        self,
        account_id: str,
        credit_limit,
        balance,
        due_day: Optional[int] = None,
        cut_off_day: Optional[int] = None,
        annual_rate=None,
        active: bool = True,
        name: str = "",
    ) -> CreditAccount:
        """Persist a credit account"""
        row = CreditAccount(
            id=str(account_id),
            name=name,
            credit_limit=to_decimal(credit_limit),
            balance=to_decimal(balance),
            due_day=due_day,
            cut_off_day=cut_off_day,
            annual_rate=to_decimal(annual_rate) if annual_rate is not None else None,
            active=active,
        )
        self.db.add(row)
        self.db.flush()
        return row


class LedgerRepository:
    """Repository for charge/payment ledger entries"""

    def __init__(self, db: Session):
        self.db = db

    def add_entry(self, account_id: str, entry_date: date, entry_type: str, amount, description: str | None = None) -> LedgerEntry:
        """Append one ledger entry"""
        row = LedgerEntry(
            account_id=str(account_id),
            entry_date=entry_date,
            entry_type=str(entry_type).lower(),
            amount=to_decimal(amount),
            description=description,
        )
        self.db.add(row)
        self.db.flush()
        return row

    def get_events(self, account_id: str, start: date, end: date) -> List[LedgerEvent]:
        """Entries with start <= entry_date < end, in posting order"""
        rows = (
            self.db.query(LedgerEntry)
            .filter(
                LedgerEntry.account_id == str(account_id),
                LedgerEntry.entry_date >= start,
                LedgerEntry.entry_date < end,
            )
            .order_by(LedgerEntry.entry_date, LedgerEntry.created_at)
            .all()
        )
        return [
            LedgerEvent(
                account_id=row.account_id,
                date=row.entry_date,
                kind=row.entry_type,
                amount=to_decimal(row.amount),
            )
            for row in rows
        ]

    def sum_payments(self, account_id: str, start: date, end: date) -> Decimal:
        """Total positive payments with start <= entry_date <= end"""
        total = (
            self.db.query(func.sum(LedgerEntry.amount))
            .filter(
                LedgerEntry.account_id == str(account_id),
                func.lower(LedgerEntry.entry_type) == EventKind.PAYMENT.value,
                LedgerEntry.amount > 0,
                LedgerEntry.entry_date >= start,
                LedgerEntry.entry_date <= end,
            )
            .scalar()
        )
        return round_currency(total)


class StatementRepository:
    """Repository for recorded statements, unique per (account_id, statement_date)"""

    def __init__(self, db: Session):
        self.db = db

    def _row(self, account_id: str, statement_date: date) -> Optional[CreditStatement]:
        return (
            self.db.query(CreditStatement)
            .filter(
                CreditStatement.account_id == str(account_id),
                CreditStatement.statement_date == statement_date,
            )
            .first()
        )

    def find(self, account_id: str, statement_date: date) -> Optional[StatementRecord]:
        """Fetch the record for one cycle"""
        row = self._row(account_id, statement_date)
        return to_record(row) if row is not None else None

    def put(self, record: StatementRecord, overwrite: bool = False) -> StatementRecord:
        """
        Write a statement.

        overwrite=False inserts only if absent; overwrite=True updates in place
        (or inserts when absent).

        Raises:
            StoreConflictError: Key already recorded and overwrite=False
        """
        row = self._row(record.account_id, record.statement_date)
        if row is not None:
            if not overwrite:
                raise StoreConflictError(f"Statement {record.key} already recorded")
            for field in _RECORD_FIELDS:
                setattr(row, field, getattr(record, field))
            self.db.flush()
            return record

        self.db.add(
            CreditStatement(
                account_id=record.account_id,
                statement_date=record.statement_date,
                **{field: getattr(record, field) for field in _RECORD_FIELDS},
            )
        )
        try:
            self.db.flush()
        except IntegrityError as e:
            # Unique constraint lost to a concurrent writer; caller rolls back
            raise StoreConflictError(f"Statement {record.key} already recorded") from e
        return record

    def list_for_account(self, account_id: str, limit: int = 12) -> List[StatementRecord]:
        """Most recent statements first"""
        rows = (
            self.db.query(CreditStatement)
            .filter(CreditStatement.account_id == str(account_id))
            .order_by(CreditStatement.statement_date.desc())
            .limit(limit)
            .all()
        )
        return [to_record(row) for row in rows]


def to_record(row: CreditStatement) -> StatementRecord:
    """Map an ORM row to the immutable domain record"""
    return StatementRecord(
        account_id=row.account_id,
        statement_date=row.statement_date,
        due_date=row.due_date,
        previous_balance=round_currency(row.previous_balance),
        charges=round_currency(row.charges),
        interests=round_currency(row.interests),
        payments=round_currency(row.payments),
        statement_balance=round_currency(row.statement_balance),
        forgivable_interest=round_currency(row.forgivable_interest),
        installment_balance=round_currency(row.installment_balance),
        annual_rate=to_decimal(row.annual_rate).normalize(),
        period_days=row.period_days,
        payment_made=round_currency(row.payment_made),
    )
