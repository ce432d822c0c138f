import csv
from decimal import Decimal
from typing import Iterable, TextIO

from models import AccountSnapshot, AMOUNT_PRECISION

HEADER = ["client", "available", "held", "total", "locked"]


def format_amount(value: Decimal) -> str:
    """Format decimal with exactly 4 decimal places."""
    return f"{value.quantize(AMOUNT_PRECISION):f}"


def write_accounts(snapshots: Iterable[AccountSnapshot], stream: TextIO) -> None:
    writer = csv.writer(stream, lineterminator="\n")
    writer.writerow(HEADER)
    for snapshot in snapshots:
        writer.writerow([
            snapshot.client_id,
            format_amount(snapshot.available),
            format_amount(snapshot.held),
            format_amount(snapshot.total),
            str(snapshot.locked).lower(),
        ])
