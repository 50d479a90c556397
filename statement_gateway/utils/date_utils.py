"""Date manipulation utilities for billing-cycle arithmetic"""

import calendar
from datetime import date
from dateutil.relativedelta import relativedelta


def last_day_of_month(year: int, month: int) -> int:
    """Number of days in the given month (28-31)"""
    return calendar.monthrange(year, month)[1]


def clamp_day(year: int, month: int, day: int) -> date:
    """Build a date, clamping day-of-month into the month (31 in April -> 30)"""
    return date(year, month, min(max(1, day), last_day_of_month(year, month)))


def shift_month(anchor: date, months: int, day: int | None = None) -> date:
    """
    Move `months` months from anchor and place the result on `day`, clamped.

    With no day the result is the last calendar day of the target month.
    """
    target = anchor.replace(day=1) + relativedelta(months=months)
    if day is None:
        return clamp_day(target.year, target.month, 31)
    return clamp_day(target.year, target.month, day)


def days_between(start: date, end: date) -> int:
    """Whole calendar days from start to end (negative if end precedes start)"""
    return (end - start).days
