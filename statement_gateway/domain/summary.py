"""Account summary - utilization, monthly interest estimate and upcoming cycle dates"""

from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional
from statement_gateway.domain.models import Account, AccountSummary
from statement_gateway.domain.exceptions import InvalidArgumentError
from statement_gateway.domain.periods import next_day_of_month, resolve_due_date, validate_day
from statement_gateway.utils.date_utils import days_between
from statement_gateway.utils.money import ZERO, round_currency, to_decimal

DEFAULT_MINIMUM_PAYMENT_PERCENT = Decimal("5")
RATE_PLACES = Decimal("0.000001")
PERCENT_PLACES = Decimal("0.01")


def monthly_rate_from_annual(annual_rate: Optional[Decimal]) -> Decimal:
    """
    Monthly effective rate equivalent to an annual effective percentage.

    (1 + annual / 100) ** (1 / 12) - 1, so 12 compounded months reproduce the
    annual rate. Null or non-positive rates give 0.
    """
    annual = to_decimal(annual_rate) / 100
    if annual <= ZERO:
        return ZERO
    return (1 + annual) ** (Decimal(1) / Decimal(12)) - 1


def suggested_minimum_payment(balance: Decimal, percent: Decimal = DEFAULT_MINIMUM_PAYMENT_PERCENT) -> Decimal:
    """Percentage of the outstanding balance, never below zero"""
    return round_currency(max(ZERO, to_decimal(balance) * to_decimal(percent) / 100))


def utilization_percent(balance: Decimal, credit_limit: Decimal) -> Optional[Decimal]:
    """Balance as a percentage of the credit limit, None without a positive limit"""
    limit = to_decimal(credit_limit)
    if limit <= ZERO:
        return None
    return (to_decimal(balance) / limit * 100).quantize(PERCENT_PLACES, rounding=ROUND_HALF_UP)


def build_account_summary(
    account: Account,
    as_of: Optional[date] = None,
    minimum_payment_percent: Decimal = DEFAULT_MINIMUM_PAYMENT_PERCENT,
) -> AccountSummary:
    """
    Summarize an account's live balance against its terms.

    The next due date follows the same rule as statement due dates (default
    day 25). A missing cutoff day closes on the month's last day, so the next
    cutoff is the current month end.

    Raises:
        InvalidArgumentError: cutoff/due day outside 1-31, or no representable next date
    """
    validate_day("cut_off_day", account.cut_off_day)
    validate_day("due_day", account.due_day)

    today = as_of or date.today()
    balance = to_decimal(account.balance)
    credit_limit = to_decimal(account.credit_limit)
    monthly_rate = monthly_rate_from_annual(account.annual_rate)

    try:
        next_due_date = resolve_due_date(today, account.due_day)
        next_cut_off_date = next_day_of_month(
            today, account.cut_off_day if account.cut_off_day is not None else 31
        )
    except (ValueError, OverflowError) as e:
        raise InvalidArgumentError(f"Summary date outside the supported date range: {e}") from e

    return AccountSummary(
        account_id=account.account_id,
        as_of=today,
        credit_limit=round_currency(credit_limit),
        balance=round_currency(balance),
        available_credit=round_currency(max(ZERO, credit_limit - balance)),
        utilization_percent=utilization_percent(balance, credit_limit),
        monthly_rate=monthly_rate.quantize(RATE_PLACES, rounding=ROUND_HALF_UP),
        interest_this_month=round_currency(max(ZERO, balance) * monthly_rate),
        suggested_minimum_payment=suggested_minimum_payment(balance, minimum_payment_percent),
        next_due_date=next_due_date,
        next_cut_off_date=next_cut_off_date,
        days_to_due=days_between(today, next_due_date),
        active=account.active,
    )
