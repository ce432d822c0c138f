from collections import Counter
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Dict, Optional

AMOUNT_PRECISION = Decimal("0.0001")
# Integer digits an amount may carry: 28-digit context precision minus 4 fractional digits
MAX_AMOUNT_DIGITS = 24


def round_amount(amount: Decimal) -> Decimal:
    """Round an incoming amount to 4 decimal places (half up)."""
    return amount.quantize(AMOUNT_PRECISION, rounding=ROUND_HALF_UP)


class TransactionType(Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    DISPUTE = "dispute"
    RESOLVE = "resolve"
    CHARGEBACK = "chargeback"


class DisputeStatus(Enum):
    NONE = "none"
    OPEN = "open"
    RESOLVED = "resolved"
    CHARGED_BACK = "charged_back"


@dataclass
class LedgerEvent:
    transaction_type: TransactionType
    client_id: int
    transaction_id: int
    amount: Optional[Decimal] = None

    def __repr__(self) -> str:
        return f"LedgerEvent({self.transaction_type.value}, client={self.client_id}, tx={self.transaction_id}, amount={self.amount})"


@dataclass
class Transaction:
    """A deposit recorded on its account, kept for later dispute lookups."""

    transaction_id: int
    amount: Decimal
    status: DisputeStatus = DisputeStatus.NONE

    @property
    def disputed(self) -> bool:
        return self.status is DisputeStatus.OPEN


@dataclass(frozen=True)
class AccountSnapshot:
    client_id: int
    available: Decimal
    held: Decimal
    total: Decimal
    locked: bool


class ProcessingStats:
    """Counters for tracking processing statistics."""

    def __init__(self):
        self.processed = 0
        self.failed = 0
        self.failures_by_kind: Counter = Counter()

    def record_success(self):
        self.processed += 1

    def record_failure(self, kind: str):
        self.failed += 1
        self.failures_by_kind[kind] += 1

    def as_dict(self) -> Dict[str, int]:
        return {"processed": self.processed, "failed": self.failed, **self.failures_by_kind}
