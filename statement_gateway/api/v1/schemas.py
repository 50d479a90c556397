"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel
from datetime import date
from decimal import Decimal
from typing import List, Optional
from statement_gateway.domain.models import AccountSummary, InterestBreakdown, StatementOutcome, StatementRecord


class StatementSchema(BaseModel):
    """One billing-cycle statement"""

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
    annual_rate: Decimal
    period_days: int
    payment_made: Decimal

    @classmethod
    def from_record(cls, record: StatementRecord) -> "StatementSchema":
        return cls(
            account_id=record.account_id,
            statement_date=record.statement_date,
            due_date=record.due_date,
            previous_balance=record.previous_balance,
            charges=record.charges,
            interests=record.interests,
            payments=record.payments,
            statement_balance=record.statement_balance,
            forgivable_interest=record.forgivable_interest,
            installment_balance=record.installment_balance,
            annual_rate=record.annual_rate,
            period_days=record.period_days,
            payment_made=record.payment_made,
        )


class InterestBreakdownSchema(BaseModel):
    """Interest components of a freshly computed statement"""

    carried_interest: Decimal
    forgivable_interest: Decimal
    carry_over_interest: Decimal

    @classmethod
    def from_breakdown(cls, breakdown: InterestBreakdown) -> "InterestBreakdownSchema":
        return cls(
            carried_interest=breakdown.carried_interest,
            forgivable_interest=breakdown.forgivable_interest,
            carry_over_interest=breakdown.carry_over_interest,
        )


class StatementResponse(BaseModel):
    """Response for POST /v1/accounts/{account_id}/statements and the preview endpoint"""

    account_id: str
    status: str
    skipped: bool
    reason: Optional[str] = None
    idempotency_key: Optional[str] = None
    statement: Optional[StatementSchema] = None
    interest_breakdown: Optional[InterestBreakdownSchema] = None

    @classmethod
    def from_outcome(cls, outcome: StatementOutcome) -> "StatementResponse":
        return cls(
            account_id=outcome.account_id,
            status=outcome.status.value,
            skipped=outcome.skipped,
            reason=outcome.reason,
            idempotency_key=outcome.idempotency_key,
            statement=StatementSchema.from_record(outcome.record) if outcome.record else None,
            interest_breakdown=(
                InterestBreakdownSchema.from_breakdown(outcome.breakdown) if outcome.breakdown else None
            ),
        )


class HistoryResponse(BaseModel):
    """Response for GET /v1/accounts/{account_id}/statements"""

    account_id: str
    statements: List[StatementSchema]


class AccountSummarySchema(BaseModel):
    """Utilization and upcoming dates for one credit account"""

    account_id: str
    name: str
    active: bool
    as_of: date
    credit_limit: Decimal
    balance: Decimal
    available_credit: Decimal
    utilization_percent: Optional[Decimal] = None
    monthly_rate: Decimal
    interest_this_month: Decimal
    suggested_minimum_payment: Decimal
    next_due_date: date
    next_cut_off_date: date
    days_to_due: int

    @classmethod
    def from_summary(cls, summary: AccountSummary, name: str = "") -> "AccountSummarySchema":
        return cls(
            account_id=summary.account_id,
            name=name,
            active=summary.active,
            as_of=summary.as_of,
            credit_limit=summary.credit_limit,
            balance=summary.balance,
            available_credit=summary.available_credit,
            utilization_percent=summary.utilization_percent,
            monthly_rate=summary.monthly_rate,
            interest_this_month=summary.interest_this_month,
            suggested_minimum_payment=summary.suggested_minimum_payment,
            next_due_date=summary.next_due_date,
            next_cut_off_date=summary.next_cut_off_date,
            days_to_due=summary.days_to_due,
        )


class SummaryListResponse(BaseModel):
    """Response for GET /v1/accounts/summary"""

    count: int
    summaries: List[AccountSummarySchema]
