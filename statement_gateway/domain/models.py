"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional


class EventKind(str, Enum):
    """Ledger entry types the statement engine understands"""

    CHARGE = "charge"
    PAYMENT = "payment"


class StatementStatus(str, Enum):
    """How a recorder call resolved"""

    CREATED = "created"
    RECOMPUTED = "recomputed"
    EXISTING = "existing"  # already billed this cycle, returned unchanged
    SKIPPED = "skipped"  # inactive account
    PREVIEW = "preview"  # computed, not persisted


@dataclass(frozen=True)
class Account:
    """Revolving credit line, read-only to the engine"""

    account_id: str
    credit_limit: Decimal
    balance: Decimal
    due_day: Optional[int] = None
    cut_off_day: Optional[int] = None  # None means last calendar day
    annual_rate: Optional[Decimal] = None  # percentage 0-100, None means 0%
    active: bool = True
    name: str = ""


@dataclass(frozen=True)
class LedgerEvent:
    """One charge or payment against an account"""

    account_id: str
    date: date
    kind: str  # "charge" or "payment"; other entry types are ignored
    amount: Decimal


@dataclass(frozen=True)
class BillingCycle:
    """Resolved boundaries of one statement"""

    previous_statement_date: date
    statement_date: date
    next_statement_date: date
    due_date: date
    period_days: int


@dataclass(frozen=True)
class BalanceDays:
    """Day-weighted balance sums produced by the daily-balance walk"""

    carried: Decimal
    new: Decimal


@dataclass(frozen=True)
class InterestBreakdown:
    """Interest components behind a statement's totals"""

    carried_interest: Decimal
    forgivable_interest: Decimal
    carry_over_interest: Decimal


@dataclass(frozen=True)
class StatementRecord:
    """Persisted output of one billing cycle, keyed by (account_id, statement_date)"""

    account_id: str
    statement_date: date
    due_date: date
    previous_balance: Decimal
    charges: Decimal
    interests: Decimal
    payments: Decimal
    statement_balance: Decimal
    forgivable_interest: Decimal
    installment_balance: Decimal
    annual_rate: Decimal  # unit fraction, 0.36 for 36%
    period_days: int
    payment_made: Decimal

    @property
    def key(self) -> str:
        return f"{self.account_id}|{self.statement_date.isoformat()}"


@dataclass(frozen=True)
class StatementOutcome:
    """Result of a recorder call"""

    status: StatementStatus
    account_id: str
    record: Optional[StatementRecord] = None
    breakdown: Optional[InterestBreakdown] = None
    reason: Optional[str] = None

    @property
    def skipped(self) -> bool:
        return self.status in (StatementStatus.SKIPPED, StatementStatus.EXISTING)

    @property
    def idempotency_key(self) -> Optional[str]:
        return self.record.key if self.record is not None else None


@dataclass(frozen=True)
class AccountSummary:
    """Point-in-time view of a credit line's utilization and upcoming dates"""

    account_id: str
    as_of: date
    credit_limit: Decimal
    balance: Decimal
    available_credit: Decimal
    utilization_percent: Optional[Decimal]  # None when the account has no credit limit
    monthly_rate: Decimal  # unit fraction, compounded from the annual effective rate
    interest_this_month: Decimal
    suggested_minimum_payment: Decimal
    next_due_date: date
    next_cut_off_date: date
    days_to_due: int
    active: bool = True
