"""Selection and ordering of the ledger events that belong to one billing window"""

from datetime import date
from decimal import Decimal
from typing import Iterable, Tuple
from statement_gateway.domain.models import EventKind, LedgerEvent
from statement_gateway.utils.money import round_currency, to_decimal

_KINDS = {EventKind.CHARGE.value, EventKind.PAYMENT.value}

# Payments sort ahead of charges on the same date
_KIND_ORDER = {EventKind.PAYMENT.value: 0, EventKind.CHARGE.value: 1}


def normalize_kind(kind) -> str:
    """Lower-cased entry type, tolerant of enum members and stray whitespace"""
    if isinstance(kind, EventKind):
        return kind.value
    return str(kind or "").strip().lower()


def extract_window(
    events: Iterable[LedgerEvent],
    account_id: str,
    start: date,
    end: date,
) -> Tuple[LedgerEvent, ...]:
    """
    Project the ledger onto one account's half-open window [start, end).

    Keeps charges and payments with a positive amount, ordered by date with
    payments before charges on the same day. Pure: the input is not mutated.
    """
    selected = []
    for event in events:
        if str(event.account_id) != str(account_id):
            continue
        if not start <= event.date < end:
            continue
        kind = normalize_kind(event.kind)
        amount = to_decimal(event.amount)
        if kind not in _KINDS or amount <= 0:
            continue
        selected.append(LedgerEvent(account_id=event.account_id, date=event.date, kind=kind, amount=amount))

    # sorted() is stable so same-day same-kind events keep ledger order
    return tuple(sorted(selected, key=lambda e: (e.date, _KIND_ORDER[e.kind])))


def sum_by_kind(events: Iterable[LedgerEvent], kind: EventKind) -> Decimal:
    """Total of one event kind, rounded to 2 decimals"""
    return round_currency(sum((e.amount for e in events if e.kind == kind.value), Decimal("0")))
