"""Unit tests for ledger window extraction"""

from datetime import date
from decimal import Decimal
from statement_gateway.domain.models import EventKind, LedgerEvent
from statement_gateway.domain.ledger_window import extract_window, sum_by_kind

START = date(2024, 4, 20)
END = date(2024, 5, 20)


def event(on: date, kind: str, amount: str, account_id: str = "card_1") -> LedgerEvent:
    return LedgerEvent(account_id=account_id, date=on, kind=kind, amount=Decimal(amount))


def test_window_is_half_open():
    """Test lower bound included, upper bound excluded"""
    events = [
        event(date(2024, 4, 19), "charge", "1.00"),
        event(START, "charge", "2.00"),
        event(date(2024, 5, 19), "charge", "3.00"),
        event(END, "charge", "4.00"),
    ]

    window = extract_window(events, "card_1", START, END)

    assert [e.amount for e in window] == [Decimal("2.00"), Decimal("3.00")]


def test_filters_other_accounts_kinds_and_amounts():
    """Test only positive charges/payments of the target account survive"""
    events = [
        event(date(2024, 4, 25), "charge", "10.00", account_id="card_2"),
        event(date(2024, 4, 25), "expense", "10.00"),
        event(date(2024, 4, 25), "charge", "0"),
        event(date(2024, 4, 25), "payment", "-5.00"),
        event(date(2024, 4, 26), "CHARGE", "7.50"),
    ]

    window = extract_window(events, "card_1", START, END)

    assert len(window) == 1
    assert window[0].kind == "charge"
    assert window[0].amount == Decimal("7.50")


def test_orders_by_date_with_payments_first_on_ties():
    """Test same-day payment sorts ahead of charge"""
    events = [
        event(date(2024, 5, 1), "charge", "50.00"),
        event(date(2024, 4, 28), "charge", "20.00"),
        event(date(2024, 5, 1), "payment", "30.00"),
    ]

    window = extract_window(events, "card_1", START, END)

    assert [(e.date, e.kind) for e in window] == [
        (date(2024, 4, 28), "charge"),
        (date(2024, 5, 1), "payment"),
        (date(2024, 5, 1), "charge"),
    ]


def test_extraction_does_not_mutate_input():
    """Test the ledger slice is left untouched"""
    events = [
        event(date(2024, 5, 1), "charge", "50.00"),
        event(date(2024, 5, 1), "payment", "30.00"),
    ]
    snapshot = list(events)

    extract_window(events, "card_1", START, END)

    assert events == snapshot


def test_sum_by_kind_rounds_each_total():
    """Test charges and payments are summed independently and rounded"""
    events = [
        event(date(2024, 4, 25), "charge", "10.005"),
        event(date(2024, 4, 26), "charge", "0.001"),
        event(date(2024, 4, 27), "payment", "3.333"),
    ]

    assert sum_by_kind(events, EventKind.CHARGE) == Decimal("10.01")
    assert sum_by_kind(events, EventKind.PAYMENT) == Decimal("3.33")
    assert sum_by_kind([], EventKind.CHARGE) == Decimal("0.00")
