import sys
import os
from decimal import Decimal

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from errors import InsufficientFundsError, InvalidDisputeError, LockedAccountError
from models import LedgerEvent, TransactionType
from registry import AccountRegistry


class TestAccountRegistry:
    def setup_method(self):
        self.registry = AccountRegistry()

    def test_route_creates_account_lazily(self):
        assert 1 not in self.registry

        self.registry.route(LedgerEvent(TransactionType.DEPOSIT, client_id=1, transaction_id=1, amount=Decimal("2.00")))

        assert 1 in self.registry
        assert len(self.registry) == 1
        assert self.registry.get_account(1).available == Decimal("2.00")

    def test_get_or_create_returns_same_account(self):
        first = self.registry.get_or_create_account(3)
        second = self.registry.get_or_create_account(3)

        assert first is second
        assert len(self.registry) == 1

    def test_get_account_unknown_client(self):
        assert self.registry.get_account(42) is None
        assert 42 not in self.registry

    def test_failed_event_still_creates_account(self):
        with pytest.raises(InsufficientFundsError):
            self.registry.route(LedgerEvent(TransactionType.WITHDRAWAL, client_id=5, transaction_id=1, amount=Decimal("1")))

        account = self.registry.get_account(5)
        assert account is not None
        assert account.total == Decimal("0")
        assert account.locked is False

    def test_events_routed_to_their_own_client(self):
        self.registry.route(LedgerEvent(TransactionType.DEPOSIT, client_id=1, transaction_id=1, amount=Decimal("1.0")))
        self.registry.route(LedgerEvent(TransactionType.DEPOSIT, client_id=2, transaction_id=2, amount=Decimal("2.0")))

        assert self.registry.get_account(1).available == Decimal("1.0")
        assert self.registry.get_account(2).available == Decimal("2.0")

    def test_dispute_of_other_clients_transaction_rejected(self):
        self.registry.route(LedgerEvent(TransactionType.DEPOSIT, client_id=1, transaction_id=1, amount=Decimal("100")))

        with pytest.raises(InvalidDisputeError):
            self.registry.route(LedgerEvent(TransactionType.DISPUTE, client_id=2, transaction_id=1))

        assert self.registry.get_account(1).available == Decimal("100")
        assert self.registry.get_account(1).held == Decimal("0")

    def test_locked_account_does_not_affect_other_clients(self):
        self.registry.route(LedgerEvent(TransactionType.DEPOSIT, client_id=1, transaction_id=1, amount=Decimal("2.00")))
        self.registry.route(LedgerEvent(TransactionType.DISPUTE, client_id=1, transaction_id=1))
        self.registry.route(LedgerEvent(TransactionType.CHARGEBACK, client_id=1, transaction_id=1))

        with pytest.raises(LockedAccountError):
            self.registry.route(LedgerEvent(TransactionType.DEPOSIT, client_id=1, transaction_id=2, amount=Decimal("5.00")))

        self.registry.route(LedgerEvent(TransactionType.DEPOSIT, client_id=2, transaction_id=3, amount=Decimal("5.00")))
        assert self.registry.get_account(2).available == Decimal("5.00")

    def test_snapshot_sorted_by_client(self):
        for client_id in (9, 2, 5):
            self.registry.route(LedgerEvent(TransactionType.DEPOSIT, client_id=client_id, transaction_id=client_id, amount=Decimal("1")))

        snapshot = self.registry.snapshot()

        assert [s.client_id for s in snapshot] == [2, 5, 9]

    def test_snapshot_is_read_only_view(self):
        self.registry.route(LedgerEvent(TransactionType.DEPOSIT, client_id=1, transaction_id=1, amount=Decimal("1")))
        snapshot = self.registry.snapshot()[0]

        self.registry.route(LedgerEvent(TransactionType.DEPOSIT, client_id=1, transaction_id=2, amount=Decimal("1")))

        assert snapshot.available == Decimal("1")
        with pytest.raises(AttributeError):
            snapshot.available = Decimal("10")

    def test_empty_snapshot(self):
        assert self.registry.snapshot() == []
