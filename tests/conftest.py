"""Pytest fixtures for testing"""

import pytest
from datetime import date
from decimal import Decimal
from typing import Dict, Generator, List, Optional, Tuple
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from statement_gateway.api.main import create_app
from statement_gateway.infrastructure.database.models import Base
from statement_gateway.infrastructure.database.session import get_db
from statement_gateway.domain.models import Account, LedgerEvent, StatementRecord
from statement_gateway.domain.exceptions import StoreConflictError
from statement_gateway.domain.recorder import StatementRecorder


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


class InMemoryAccounts:
    """Account reader over a dict"""

    def __init__(self, *accounts: Account):
        self.accounts = {a.account_id: a for a in accounts}

    def get_account(self, account_id: str) -> Optional[Account]:
        return self.accounts.get(account_id)


class InMemoryLedger:
    """Ledger reader over a list of events"""

    def __init__(self, events: Optional[List[LedgerEvent]] = None):
        self.events = list(events or [])

    def get_events(self, account_id: str, start: date, end: date) -> List[LedgerEvent]:
        return [e for e in self.events if e.account_id == account_id and start <= e.date < end]

    def sum_payments(self, account_id: str, start: date, end: date) -> Decimal:
        return sum(
            (
                e.amount
                for e in self.events
                if e.account_id == account_id and e.kind == "payment" and start <= e.date <= end
            ),
            Decimal("0"),
        )


class InMemoryStore:
    """Statement store that counts writes"""

    def __init__(self, *records: StatementRecord):
        self.records: Dict[Tuple[str, date], StatementRecord] = {
            (r.account_id, r.statement_date): r for r in records
        }
        self.writes = 0

    def find(self, account_id: str, statement_date: date) -> Optional[StatementRecord]:
        return self.records.get((account_id, statement_date))

    def put(self, record: StatementRecord, overwrite: bool = False) -> StatementRecord:
        key = (record.account_id, record.statement_date)
        if key in self.records and not overwrite:
            raise StoreConflictError(f"Statement {record.key} already recorded")
        self.records[key] = record
        self.writes += 1
        return record

    def list_for_account(self, account_id: str, limit: int = 12) -> List[StatementRecord]:
        records = [r for (acc, _), r in self.records.items() if acc == account_id]
        return sorted(records, key=lambda r: r.statement_date, reverse=True)[:limit]


def charge(on: date, amount: str, account_id: str = "card_1") -> LedgerEvent:
    return LedgerEvent(account_id=account_id, date=on, kind="charge", amount=Decimal(amount))


def payment(on: date, amount: str, account_id: str = "card_1") -> LedgerEvent:
    return LedgerEvent(account_id=account_id, date=on, kind="payment", amount=Decimal(amount))


@pytest.fixture
def card_account() -> Account:
    """5000 limit, cutoff 20, due 5, 36% annual, 1000 opening balance"""
    return Account(
        account_id="card_1",
        credit_limit=Decimal("5000"),
        balance=Decimal("1000"),
        due_day=5,
        cut_off_day=20,
        annual_rate=Decimal("36"),
        active=True,
        name="Visa Oro",
    )


@pytest.fixture
def scenario_events() -> List[LedgerEvent]:
    """Charge 200 on day 5 and payment 300 on day 10 of the 2024-04-20 -> 2024-05-20 cycle"""
    return [
        charge(date(2024, 4, 25), "200.00"),
        payment(date(2024, 4, 30), "300.00"),
    ]


@pytest.fixture
def make_recorder():
    """Build a recorder over in-memory collaborators"""

    def _make(accounts: List[Account], events: Optional[List[LedgerEvent]] = None, records=()):
        store = InMemoryStore(*records)
        recorder = StatementRecorder(InMemoryAccounts(*accounts), InMemoryLedger(events), store)
        return recorder, store

    return _make
