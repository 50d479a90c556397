"""Unit tests for the daily-balance interest calculator"""

from datetime import date, timedelta
from decimal import Decimal
from hypothesis import given, strategies as st
from statement_gateway.domain.models import LedgerEvent
from statement_gateway.domain.interest import (
    accrue_balance_days,
    compute_interest,
    normalize_annual_rate,
)

START = date(2024, 4, 20)
END = date(2024, 5, 20)  # 30 days


def event(day: int, kind: str, amount) -> LedgerEvent:
    return LedgerEvent(account_id="card_1", date=START + timedelta(days=day), kind=kind, amount=Decimal(amount))


def test_normalize_annual_rate():
    """Test percentage to unit fraction, None as zero"""
    assert normalize_annual_rate(Decimal("36")) == Decimal("0.36")
    assert normalize_annual_rate(None) == Decimal("0")
    assert normalize_annual_rate(0) == Decimal("0")


def test_balance_days_scenario():
    """Test carried and new tracks over the reference cycle"""
    events = [event(5, "charge", "200"), event(10, "payment", "300")]

    balance_days = accrue_balance_days(Decimal("1000"), events, START, END)

    # carried: 1000 for 10 days, then 700 for 20 days
    assert balance_days.carried == Decimal("24000")
    # new: 200 from day 5 to day 30
    assert balance_days.new == Decimal("5000")


def test_interest_scenario():
    """Test interest is balance-days times annual rate / 365, rounded at output"""
    events = [event(5, "charge", "200"), event(10, "payment", "300")]

    carried, forgivable = compute_interest(Decimal("1000"), events, Decimal("0.36"), START, END)

    assert carried == Decimal("23.67")  # 24000 * 0.36 / 365 = 23.6712...
    assert forgivable == Decimal("4.93")  # 5000 * 0.36 / 365 = 4.9315...


def test_payment_spills_from_carried_into_new():
    """Test payment larger than carried balance reduces the new balance"""
    events = [event(0, "charge", "500"), event(10, "payment", "300")]

    balance_days = accrue_balance_days(Decimal("100"), events, START, END)

    # carried 100 for 10 days, then 0
    assert balance_days.carried == Decimal("1000")
    # new 500 for 10 days, then 300 for 20 days
    assert balance_days.new == Decimal("11000")


def test_overpayment_floors_balances_at_zero():
    """Test neither track goes negative"""
    events = [event(0, "charge", "50"), event(15, "payment", "1000")]

    balance_days = accrue_balance_days(Decimal("100"), events, START, END)

    assert balance_days.carried == Decimal("1500")
    assert balance_days.new == Decimal("750")


def test_negative_previous_balance_treated_as_zero():
    """Test a credit balance does not produce negative interest"""
    carried, forgivable = compute_interest(Decimal("-250"), [], Decimal("0.36"), START, END)
    assert carried == Decimal("0.00")
    assert forgivable == Decimal("0.00")


def test_zero_rate_yields_no_interest():
    """Test 0% rate"""
    carried, forgivable = compute_interest(Decimal("1000"), [event(3, "charge", "90")], Decimal("0"), START, END)
    assert (carried, forgivable) == (Decimal("0.00"), Decimal("0.00"))


def test_no_events_accrues_full_window():
    """Test carried balance accrues for the whole window without activity"""
    balance_days = accrue_balance_days(Decimal("1000"), [], START, END)
    assert balance_days.carried == Decimal("30000")
    assert balance_days.new == Decimal("0")


amounts = st.decimals(min_value=Decimal("0.01"), max_value=Decimal("10000"), places=2)


@given(previous=amounts, charge_amount=amounts, payment_amount=amounts, day=st.integers(min_value=0, max_value=29))
def test_payment_first_never_increases_carried_interest(previous, charge_amount, payment_amount, day):
    """Test same-day payment-before-charge yields carried interest <= charge-before-payment"""
    payment_first = [event(day, "payment", payment_amount), event(day, "charge", charge_amount)]
    charge_first = [event(day, "charge", charge_amount), event(day, "payment", payment_amount)]

    carried_pf, _ = compute_interest(previous, payment_first, Decimal("0.36"), START, END)
    carried_cf, _ = compute_interest(previous, charge_first, Decimal("0.36"), START, END)

    assert carried_pf <= carried_cf
