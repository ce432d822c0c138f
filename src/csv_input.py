import csv
import re
from decimal import Decimal
from typing import Dict, Iterator, Optional

from errors import InvalidRecordError
from models import LedgerEvent, TransactionType, MAX_AMOUNT_DIGITS

REQUIRED_COLUMNS = ("type", "client", "tx")
MAX_CLIENT_ID = 2**16 - 1
MAX_TRANSACTION_ID = 2**32 - 1

AMOUNT_TYPES = {TransactionType.DEPOSIT, TransactionType.WITHDRAWAL}
AMOUNT_PATTERN = re.compile(r"\d+(?:\.\d*)?|\.\d+", re.ASCII)


def _parse_id(value: Optional[str], name: str, maximum: int, line_number: Optional[int]) -> int:
    if not value or not (value.isascii() and value.isdigit()):
        raise InvalidRecordError(f"invalid {name} {value!r}", line_number=line_number)
    parsed = int(value)
    if parsed > maximum:
        raise InvalidRecordError(f"{name} {parsed} out of range", line_number=line_number)
    return parsed


def _parse_amount(value: Optional[str], line_number: Optional[int]) -> Decimal:
    if not value:
        raise InvalidRecordError("missing amount", line_number=line_number)
    if not AMOUNT_PATTERN.fullmatch(value):
        raise InvalidRecordError(f"invalid amount {value!r}", line_number=line_number)
    amount = Decimal(value)
    # The integer part plus 4 fractional digits must fit the decimal precision
    if amount and amount.adjusted() >= MAX_AMOUNT_DIGITS:
        raise InvalidRecordError(f"amount {value!r} too large", line_number=line_number)
    return amount


def parse_row(row: Dict[Optional[str], Optional[str]], line_number: Optional[int] = None) -> LedgerEvent:
    """Parse a CSV row (as produced by csv.DictReader) into a LedgerEvent."""
    normalized = {
        k.strip(): v.strip() if isinstance(v, str) else v
        for k, v in row.items()
        if k is not None
    }

    type_str = (normalized.get("type") or "").lower()
    try:
        transaction_type = TransactionType(type_str)
    except ValueError:
        raise InvalidRecordError(f"unknown transaction type {type_str!r}", line_number=line_number) from None

    client_id = _parse_id(normalized.get("client"), "client", MAX_CLIENT_ID, line_number)
    transaction_id = _parse_id(normalized.get("tx"), "tx", MAX_TRANSACTION_ID, line_number)

    amount = None
    if transaction_type in AMOUNT_TYPES:
        amount = _parse_amount(normalized.get("amount"), line_number)

    return LedgerEvent(
        transaction_type=transaction_type,
        client_id=client_id,
        transaction_id=transaction_id,
        amount=amount,
    )


def read_events(filepath: str) -> Iterator[LedgerEvent]:
    """Stream LedgerEvents from a CSV file, raising InvalidRecordError on the first bad row."""
    with open(filepath, "r", newline="", encoding="utf-8-sig") as f:
        reader = csv.DictReader(f)
        try:
            header = [name.strip() for name in reader.fieldnames or []]
            missing = [column for column in REQUIRED_COLUMNS if column not in header]
            if missing:
                raise InvalidRecordError(f"missing columns: {', '.join(missing)}", line_number=1)

            for row in reader:
                if not any(v and v.strip() for v in row.values() if isinstance(v, str)):
                    continue
                yield parse_row(row, line_number=reader.line_num)
        except (UnicodeDecodeError, csv.Error) as e:
            raise InvalidRecordError(f"unreadable row: {e}", line_number=reader.line_num) from None
