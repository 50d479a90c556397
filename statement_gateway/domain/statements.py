"""Statement assembly - combines cycle aggregates, interest and carry-over into one record"""

from decimal import Decimal
from typing import Optional, Sequence, Tuple
from statement_gateway.domain.models import (
    Account,
    BillingCycle,
    EventKind,
    InterestBreakdown,
    LedgerEvent,
    StatementRecord,
)
from statement_gateway.domain.interest import compute_interest, normalize_annual_rate
from statement_gateway.domain.ledger_window import sum_by_kind
from statement_gateway.utils.money import ZERO, round_currency, to_decimal


def resolve_previous_balance(account: Account, prior: Optional[StatementRecord]) -> Decimal:
    """Prior cycle's statement balance, or the account's live balance on a first statement"""
    if prior is not None:
        return to_decimal(prior.statement_balance)
    return to_decimal(account.balance)


def compute_interest_carry_over(prior: Optional[StatementRecord], payments_in_grace) -> Decimal:
    """
    Unpaid forgivable interest from the prior cycle.

    Grace is earned only when payments between the prior statement date and
    its due date cover the prior forgivable interest; otherwise the shortfall
    becomes unconditional interest this cycle.

    Example: forgivable 10.00, paid 6.00 -> 4.00; paid 10.00 or more -> 0.00
    """
    if prior is None:
        return round_currency(ZERO)

    forgivable = to_decimal(prior.forgivable_interest)
    paid = to_decimal(payments_in_grace)
    return round_currency(max(ZERO, forgivable - paid))


def compute_statement_balance(previous_balance, charges, interests, payments) -> Decimal:
    """max(0, previous + charges + interests - payments), rounded"""
    total = to_decimal(previous_balance) + to_decimal(charges) + to_decimal(interests) - to_decimal(payments)
    return round_currency(max(ZERO, total))


def compute_installment_balance(statement_balance, forgivable_interest) -> Decimal:
    """Exposure if grace is not earned: statement balance plus forgivable interest"""
    return round_currency(to_decimal(statement_balance) + to_decimal(forgivable_interest))


def assemble_statement(
    account: Account,
    cycle: BillingCycle,
    events: Sequence[LedgerEvent],
    prior: Optional[StatementRecord] = None,
    payments_in_grace=ZERO,
    payment_made=ZERO,
) -> Tuple[StatementRecord, InterestBreakdown]:
    """
    Build the immutable statement for one cycle. Performs no I/O.

    Args:
        account: Account snapshot (rate, live balance for first statements)
        cycle: Resolved billing cycle
        events: Window events, already filtered and ordered
        prior: Previous cycle's record, if any
        payments_in_grace: Payments made in the prior record's due window
        payment_made: Payments made in this record's own due window so far

    Returns:
        (StatementRecord, InterestBreakdown)
    """
    previous_balance = resolve_previous_balance(account, prior)
    annual_rate = normalize_annual_rate(account.annual_rate)

    charges = sum_by_kind(events, EventKind.CHARGE)
    payments = sum_by_kind(events, EventKind.PAYMENT)

    carried_interest, forgivable_interest = compute_interest(
        previous_balance,
        events,
        annual_rate,
        cycle.previous_statement_date,
        cycle.statement_date,
    )
    carry_over = compute_interest_carry_over(prior, payments_in_grace)

    interests = round_currency(carried_interest + carry_over)
    statement_balance = compute_statement_balance(previous_balance, charges, interests, payments)

    record = StatementRecord(
        account_id=account.account_id,
        statement_date=cycle.statement_date,
        due_date=cycle.due_date,
        previous_balance=round_currency(previous_balance),
        charges=charges,
        interests=interests,
        payments=payments,
        statement_balance=statement_balance,
        forgivable_interest=forgivable_interest,
        installment_balance=compute_installment_balance(statement_balance, forgivable_interest),
        annual_rate=annual_rate,
        period_days=cycle.period_days,
        payment_made=round_currency(payment_made),
    )
    breakdown = InterestBreakdown(
        carried_interest=carried_interest,
        forgivable_interest=forgivable_interest,
        carry_over_interest=carry_over,
    )
    return record, breakdown
