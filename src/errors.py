from typing import Optional


class LedgerError(Exception):
    """
    Base class for every rejected ledger event.
    A raised LedgerError guarantees the target account was left untouched.
    """

    kind = "ledger_error"
    default_message = "ledger event rejected"

    def __init__(
        self,
        message: Optional[str] = None,
        client_id: Optional[int] = None,
        transaction_id: Optional[int] = None,
    ):
        super().__init__(message or self.default_message)
        self.client_id = client_id
        self.transaction_id = transaction_id

    def __str__(self) -> str:
        message = super().__str__()
        if self.client_id is None and self.transaction_id is None:
            return message
        return f"{message} (client={self.client_id}, tx={self.transaction_id})"


class LockedAccountError(LedgerError):
    kind = "locked_account"
    default_message = "account is locked"


class InsufficientFundsError(LedgerError):
    kind = "insufficient_funds"
    default_message = "insufficient funds to complete a withdrawal"


class InsufficientFundsForDisputeError(LedgerError):
    kind = "insufficient_funds_for_dispute"
    default_message = "insufficient available funds to hold the disputed amount"


class AmountOverflowError(LedgerError):
    kind = "amount_overflow"
    default_message = "amount exceeds the supported balance precision"


class InvalidDisputeError(LedgerError):
    kind = "invalid_dispute"
    default_message = "invalid dispute"


class InvalidResolveError(LedgerError):
    kind = "invalid_resolve"
    default_message = "invalid resolve"


class InvalidChargebackError(LedgerError):
    kind = "invalid_chargeback"
    default_message = "invalid chargeback"


class InvalidRecordError(LedgerError):
    """Malformed input row. Raised by the CSV reader, never by an account."""

    kind = "invalid_record"
    default_message = "the csv contains an invalid row"

    def __init__(self, message: Optional[str] = None, line_number: Optional[int] = None):
        super().__init__(message)
        self.line_number = line_number

    def __str__(self) -> str:
        message = super().__str__()
        if self.line_number is None:
            return message
        return f"line {self.line_number}: {message}"
