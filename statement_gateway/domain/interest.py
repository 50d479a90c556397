"""Average-daily-balance interest with separate carried and new balance tracks"""

from datetime import date
from decimal import Decimal
from typing import Iterable, Tuple
from statement_gateway.domain.models import BalanceDays, EventKind, LedgerEvent
from statement_gateway.utils.date_utils import days_between
from statement_gateway.utils.money import ZERO, round_currency, to_decimal

DAYS_PER_YEAR = Decimal(365)


def normalize_annual_rate(rate_percent) -> Decimal:
    """
    Convert an annual rate percentage (0-100) to a unit fraction.

    None means 0%. The rate is taken as already annualized/effective and is
    not de-compounded.
    """
    return (to_decimal(rate_percent) / Decimal(100)).normalize()


def accrue_balance_days(
    previous_balance,
    events: Iterable[LedgerEvent],
    start: date,
    end: date,
) -> BalanceDays:
    """
    Walk ordered events segment by segment and accumulate balance-days.

    Two running balances:
    - carried: inherited from the previous statement, starts at max(0, previous_balance)
    - new: charges made during this cycle, starts at 0

    Before each event the elapsed days since the cursor are weighted by both
    balances. A payment pays down carried first and the remainder reduces new;
    a charge increases new. The tail segment runs to `end`.

    Example (start day 0, end day 30, previous 1000, charge 200 on day 5, payment 300 on day 10):
        carried: 1000 * 10 + 700 * 20 = 24000
        new:        0 * 5  + 200 * 25 = 5000
    """
    carried = max(ZERO, to_decimal(previous_balance))
    new = ZERO
    carried_days = ZERO
    new_days = ZERO
    cursor = start

    for event in events:
        elapsed = days_between(cursor, event.date)
        if elapsed > 0:
            carried_days += carried * elapsed
            new_days += new * elapsed
            cursor = event.date

        amount = to_decimal(event.amount)
        if event.kind == EventKind.PAYMENT.value:
            applied = min(carried, amount)
            carried -= applied
            new = max(ZERO, new - (amount - applied))
        elif event.kind == EventKind.CHARGE.value:
            new += amount

    elapsed = days_between(cursor, end)
    if elapsed > 0:
        carried_days += carried * elapsed
        new_days += new * elapsed

    return BalanceDays(carried=carried_days, new=new_days)


def interest_for_balance_days(balance_days: Decimal, annual_rate_unit: Decimal) -> Decimal:
    """balance_days * (annual_rate / 365), unrounded"""
    return balance_days * to_decimal(annual_rate_unit) / DAYS_PER_YEAR


def compute_interest(
    previous_balance,
    events: Iterable[LedgerEvent],
    annual_rate_unit: Decimal,
    start: date,
    end: date,
) -> Tuple[Decimal, Decimal]:
    """
    Interest on the carried and new tracks for one window.

    Returns:
        (carried_interest, forgivable_interest), each rounded to 2 decimals.
        Forgivable interest is waived when the statement is paid in full by
        its due date; carried interest accrues regardless.
    """
    balance_days = accrue_balance_days(previous_balance, events, start, end)
    carried_interest = interest_for_balance_days(balance_days.carried, annual_rate_unit)
    forgivable_interest = interest_for_balance_days(balance_days.new, annual_rate_unit)
    return round_currency(carried_interest), round_currency(forgivable_interest)
