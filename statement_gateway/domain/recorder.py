"""Idempotent statement recording per (account, statement date)"""

import logging
from datetime import date
from typing import Optional, Tuple
from statement_gateway.domain.models import (
    Account,
    BillingCycle,
    InterestBreakdown,
    StatementOutcome,
    StatementRecord,
    StatementStatus,
)
from statement_gateway.domain.exceptions import NotFoundError
from statement_gateway.domain.ledger_window import extract_window
from statement_gateway.domain.periods import resolve_billing_cycle
from statement_gateway.domain.ports import AccountReader, LedgerReader, StatementStore
from statement_gateway.domain.statements import assemble_statement
from statement_gateway.utils.money import ZERO

logger = logging.getLogger(__name__)

INACTIVE_REASON = "Account is inactive"
EXISTING_REASON = "Already billed for this statement date"


class StatementRecorder:
    """
    Computes statements and records them at most once per cycle.

    State per (account_id, statement_date):
    - absent   + compute(recompute=False) -> write, status "created"
    - recorded + compute(recompute=False) -> stored record, status "existing", no write
    - any      + compute(recompute=True)  -> full recompute, overwrite, "recomputed"/"created"

    Inactive accounts are skipped before any of the above. Collaborator
    errors propagate unchanged; nothing is written unless the full record
    was assembled.
    """

    def __init__(self, accounts: AccountReader, ledger: LedgerReader, store: StatementStore):
        self.accounts = accounts
        self.ledger = ledger
        self.store = store

    def compute(
        self,
        account_id: str,
        period: Optional[str] = None,
        as_of: Optional[date] = None,
        recompute: bool = False,
    ) -> StatementOutcome:
        """
        Compute and persist the statement for the cycle selected by period or as_of.

        Raises:
            NotFoundError: Unknown account
            InvalidArgumentError: Malformed period or account day configuration
            StoreConflictError: A concurrent writer recorded the same key first
        """
        account = self._load_account(account_id)
        if not account.active:
            return StatementOutcome(status=StatementStatus.SKIPPED, account_id=account_id, reason=INACTIVE_REASON)

        cycle = resolve_billing_cycle(account.cut_off_day, account.due_day, period=period, as_of=as_of)
        existing = self.store.find(account_id, cycle.statement_date)
        if existing is not None and not recompute:
            return StatementOutcome(
                status=StatementStatus.EXISTING,
                account_id=account_id,
                record=existing,
                reason=EXISTING_REASON,
            )

        record, breakdown = self.build_statement(account, cycle)
        stored = self.store.put(record, overwrite=recompute)

        if existing is not None:
            logger.info(
                "Statement recomputed",
                extra={"account_id": account_id, "statement_date": cycle.statement_date.isoformat()},
            )
            status = StatementStatus.RECOMPUTED
        else:
            status = StatementStatus.CREATED

        return StatementOutcome(status=status, account_id=account_id, record=stored, breakdown=breakdown)

    def preview(
        self,
        account_id: str,
        period: Optional[str] = None,
        as_of: Optional[date] = None,
        recompute: bool = False,
    ) -> StatementOutcome:
        """Same resolution as compute() but never writes; a stored record is returned as-is unless recompute"""
        account = self._load_account(account_id)
        if not account.active:
            return StatementOutcome(status=StatementStatus.SKIPPED, account_id=account_id, reason=INACTIVE_REASON)

        cycle = resolve_billing_cycle(account.cut_off_day, account.due_day, period=period, as_of=as_of)
        if not recompute:
            existing = self.store.find(account_id, cycle.statement_date)
            if existing is not None:
                return StatementOutcome(
                    status=StatementStatus.EXISTING,
                    account_id=account_id,
                    record=existing,
                    reason=EXISTING_REASON,
                )

        record, breakdown = self.build_statement(account, cycle)
        return StatementOutcome(status=StatementStatus.PREVIEW, account_id=account_id, record=record, breakdown=breakdown)

    def build_statement(self, account: Account, cycle: BillingCycle) -> Tuple[StatementRecord, InterestBreakdown]:
        """Gather ledger and prior-record inputs for one cycle and assemble the statement"""
        account_id = account.account_id
        events = extract_window(
            self.ledger.get_events(account_id, cycle.previous_statement_date, cycle.statement_date),
            account_id,
            cycle.previous_statement_date,
            cycle.statement_date,
        )

        # One hop back: the prior record already carries its own previous balance
        prior = self.store.find(account_id, cycle.previous_statement_date)
        payments_in_grace = (
            self.ledger.sum_payments(account_id, prior.statement_date, prior.due_date)
            if prior is not None
            else ZERO
        )
        payment_made = self.ledger.sum_payments(account_id, cycle.statement_date, cycle.due_date)

        return assemble_statement(
            account,
            cycle,
            events,
            prior=prior,
            payments_in_grace=payments_in_grace,
            payment_made=payment_made,
        )

    def _load_account(self, account_id: str) -> Account:
        account = self.accounts.get_account(account_id)
        if account is None:
            raise NotFoundError(f"Account {account_id} not found")
        return account
