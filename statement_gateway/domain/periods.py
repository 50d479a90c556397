"""Billing-cycle resolution from an account's cutoff/due-day configuration"""

import re
from datetime import date
from typing import Optional, Tuple
from statement_gateway.domain.models import BillingCycle
from statement_gateway.domain.exceptions import InvalidArgumentError
from statement_gateway.utils.date_utils import clamp_day, days_between, shift_month

DEFAULT_DUE_DAY = 25

# Both neighbouring months of a period must stay representable as dates
MIN_PERIOD_YEAR = 2
MAX_PERIOD_YEAR = 9998

_PERIOD_RE = re.compile(r"^(\d{4})-(\d{2})$")


def parse_period(tag: str) -> Tuple[int, int]:
    """
    Parse a "YYYY-MM" period tag.

    Raises:
        InvalidArgumentError: tag is not YYYY-MM, the month is outside 1-12,
            or the year leaves no room for the neighbouring cycles
    """
    match = _PERIOD_RE.match(str(tag).strip())
    if not match:
        raise InvalidArgumentError(f"Invalid period format {tag!r}. Expected YYYY-MM")

    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        raise InvalidArgumentError(f"Invalid period {tag!r}: month must be 01-12")
    if not MIN_PERIOD_YEAR <= year <= MAX_PERIOD_YEAR:
        raise InvalidArgumentError(
            f"Invalid period {tag!r}: year must be {MIN_PERIOD_YEAR}-{MAX_PERIOD_YEAR}"
        )
    return year, month


def validate_day(name: str, day: Optional[int]) -> None:
    if day is not None and not 1 <= day <= 31:
        raise InvalidArgumentError(f"{name} must be between 1 and 31, got {day}")


def _cutoff_in_month(year: int, month: int, cut_off_day: Optional[int]) -> date:
    # No cutoff configured closes the cycle on the month's last day
    return clamp_day(year, month, cut_off_day if cut_off_day is not None else 31)


def next_day_of_month(anchor: date, day: int) -> date:
    """First occurrence of a day-of-month on or after anchor, clamped per month"""
    candidate = clamp_day(anchor.year, anchor.month, day)
    if candidate < anchor:
        candidate = shift_month(anchor, 1, day)
    return candidate


def resolve_due_date(statement_date: date, due_day: Optional[int]) -> date:
    """First due-day occurrence on or after the statement date"""
    return next_day_of_month(statement_date, due_day if due_day is not None else DEFAULT_DUE_DAY)


def resolve_statement_date(
    cut_off_day: Optional[int],
    period: Optional[str] = None,
    as_of: Optional[date] = None,
) -> date:
    """
    Statement (cutoff) date for an explicit period or a reference date.

    Period tag wins over as_of. With neither, as_of defaults to today.
    """
    if period is not None:
        year, month = parse_period(period)
        return _cutoff_in_month(year, month, cut_off_day)

    base = as_of or date.today()
    this_month_cut = _cutoff_in_month(base.year, base.month, cut_off_day)
    if base >= this_month_cut:
        return this_month_cut

    # Reference date is before this month's cutoff: fall back one month
    previous = shift_month(base, -1, 1)
    return _cutoff_in_month(previous.year, previous.month, cut_off_day)


def resolve_billing_cycle(
    cut_off_day: Optional[int],
    due_day: Optional[int],
    period: Optional[str] = None,
    as_of: Optional[date] = None,
) -> BillingCycle:
    """
    Resolve the boundary dates of one billing cycle.

    Example (cutoff 31, due 10, period "2024-02"):
        previous statement 2024-01-31, statement 2024-02-29,
        next statement 2024-03-31, due 2024-03-10, 29 period days

    Raises:
        InvalidArgumentError: malformed period, or cutoff/due day outside 1-31
    """
    validate_day("cut_off_day", cut_off_day)
    validate_day("due_day", due_day)

    try:
        statement_date = resolve_statement_date(cut_off_day, period=period, as_of=as_of)
        previous_statement_date = shift_month(statement_date, -1, cut_off_day)
        next_statement_date = shift_month(statement_date, 1, cut_off_day)
        due_date = resolve_due_date(statement_date, due_day)
    except (ValueError, OverflowError) as e:
        # Reference dates in year 1 or 9999 have no neighbouring cycle
        raise InvalidArgumentError(f"Billing cycle outside the supported date range: {e}") from e

    return BillingCycle(
        previous_statement_date=previous_statement_date,
        statement_date=statement_date,
        next_statement_date=next_statement_date,
        due_date=due_date,
        period_days=days_between(previous_statement_date, statement_date),
    )
