import logging
from dataclasses import dataclass, field
from decimal import Decimal, Inexact, InvalidOperation, localcontext
from typing import List, Optional

from errors import (
    AmountOverflowError,
    InsufficientFundsError,
    InsufficientFundsForDisputeError,
    InvalidChargebackError,
    InvalidDisputeError,
    InvalidResolveError,
    LockedAccountError,
)
from models import AccountSnapshot, DisputeStatus, LedgerEvent, Transaction, TransactionType, round_amount

logger = logging.getLogger(__name__)


@dataclass
class ClientAccount:
    """
    Balances and deposit history of a single client.
    Every handler validates before it mutates, so a raised LedgerError
    leaves the account exactly as it was.
    """

    client_id: int
    available: Decimal = Decimal("0")
    held: Decimal = Decimal("0")
    locked: bool = False
    transactions: List[Transaction] = field(default_factory=list)

    @property
    def total(self) -> Decimal:
        return self.available + self.held

    def credit(self, amount: Decimal) -> None:
        self.available += amount

    def debit(self, amount: Decimal) -> None:
        self.available -= amount

    def hold(self, amount: Decimal) -> None:
        self.available -= amount
        self.held += amount

    def release_hold(self, amount: Decimal) -> None:
        self.held -= amount
        self.available += amount

    def remove_held(self, amount: Decimal) -> None:
        self.held -= amount

    def find_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Return the first deposit recorded with this id, if any."""
        return next((t for t in self.transactions if t.transaction_id == transaction_id), None)

    def snapshot(self) -> AccountSnapshot:
        return AccountSnapshot(
            client_id=self.client_id,
            available=self.available,
            held=self.held,
            total=self.total,
            locked=self.locked,
        )

    def apply(self, event: LedgerEvent) -> None:
        """
        Apply a single ledger event.

        Raises:
            LockedAccountError: the account was locked by an earlier chargeback
            InsufficientFundsError: withdrawal exceeds available funds
            InsufficientFundsForDisputeError: available funds cannot cover the disputed deposit
            AmountOverflowError: amount or resulting balance exceeds the decimal precision
            InvalidDisputeError, InvalidResolveError, InvalidChargebackError:
                referenced deposit is missing or in the wrong dispute state
        """
        if self.locked:
            raise LockedAccountError(client_id=self.client_id, transaction_id=event.transaction_id)

        match event.transaction_type:
            case TransactionType.DEPOSIT:
                self._handle_deposit(event)
            case TransactionType.WITHDRAWAL:
                self._handle_withdrawal(event)
            case TransactionType.DISPUTE:
                self._handle_dispute(event)
            case TransactionType.RESOLVE:
                self._handle_resolve(event)
            case TransactionType.CHARGEBACK:
                self._handle_chargeback(event)

    def _round(self, event: LedgerEvent) -> Decimal:
        try:
            return round_amount(event.amount)
        except InvalidOperation:
            raise AmountOverflowError(client_id=self.client_id, transaction_id=event.transaction_id) from None

    def _check_capacity(self, amount: Decimal, event: LedgerEvent) -> None:
        """Reject a credit whose resulting total the decimal context cannot hold exactly."""
        with localcontext() as ctx:
            ctx.traps[Inexact] = True
            try:
                self.total + amount
            except Inexact:
                raise AmountOverflowError(client_id=self.client_id, transaction_id=event.transaction_id) from None

    def _handle_deposit(self, event: LedgerEvent) -> None:
        amount = self._round(event)
        self._check_capacity(amount, event)
        self.credit(amount)
        self.transactions.append(Transaction(transaction_id=event.transaction_id, amount=amount))

    # Withdrawals are not recorded: funds have left the account and cannot be disputed.
    def _handle_withdrawal(self, event: LedgerEvent) -> None:
        amount = self._round(event)
        if self.available < amount:
            raise InsufficientFundsError(client_id=self.client_id, transaction_id=event.transaction_id)
        self.debit(amount)

    def _handle_dispute(self, event: LedgerEvent) -> None:
        transaction = self.find_transaction(event.transaction_id)

        if transaction is None:
            raise InvalidDisputeError(
                "disputed transaction not found",
                client_id=self.client_id,
                transaction_id=event.transaction_id,
            )

        if transaction.status in (DisputeStatus.OPEN, DisputeStatus.CHARGED_BACK):
            raise InvalidDisputeError(
                f"transaction is already {transaction.status.value}",
                client_id=self.client_id,
                transaction_id=event.transaction_id,
            )

        if self.available < transaction.amount:
            raise InsufficientFundsForDisputeError(client_id=self.client_id, transaction_id=event.transaction_id)

        self.hold(transaction.amount)
        transaction.status = DisputeStatus.OPEN

    def _handle_resolve(self, event: LedgerEvent) -> None:
        transaction = self.find_transaction(event.transaction_id)

        if transaction is None or not transaction.disputed:
            raise InvalidResolveError(client_id=self.client_id, transaction_id=event.transaction_id)

        self.release_hold(transaction.amount)
        transaction.status = DisputeStatus.RESOLVED

    def _handle_chargeback(self, event: LedgerEvent) -> None:
        transaction = self.find_transaction(event.transaction_id)

        if transaction is None or not transaction.disputed:
            raise InvalidChargebackError(client_id=self.client_id, transaction_id=event.transaction_id)

        self.remove_held(transaction.amount)
        transaction.status = DisputeStatus.CHARGED_BACK
        self.locked = True
        logger.info(f"Account {self.client_id} locked by chargeback of tx {event.transaction_id}")
