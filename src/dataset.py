"""
Synthetic input generator for load testing.

Every client gets one deposit of 10.0; afterwards each client either
disputes and charges back that deposit or withdraws it in full.
"""
import csv
import logging
import random
import sys
from decimal import Decimal
from typing import Iterator, List, Optional

logger = logging.getLogger(__name__)

DEFAULT_NUM_CLIENTS = 2**16 - 1
DEPOSIT_AMOUNT = Decimal("10.0")


def generate_rows(num_clients: int = DEFAULT_NUM_CLIENTS, seed: Optional[int] = None) -> Iterator[List[str]]:
    rng = random.Random(seed)

    for client_id in range(1, num_clients + 1):
        yield ["deposit", str(client_id), str(client_id), str(DEPOSIT_AMOUNT)]

    for client_id in range(1, num_clients + 1):
        if rng.random() < 0.5:
            yield ["dispute", str(client_id), str(client_id), ""]
            yield ["chargeback", str(client_id), str(client_id), ""]
        else:
            yield ["withdrawal", str(client_id), str(client_id), str(DEPOSIT_AMOUNT)]


def write_dataset(filepath: str, num_clients: int = DEFAULT_NUM_CLIENTS, seed: Optional[int] = None) -> int:
    """Write a generated dataset and return the number of data rows."""
    count = 0
    with open(filepath, "w", newline="") as f:
        writer = csv.writer(f, lineterminator="\n")
        writer.writerow(["type", "client", "tx", "amount"])
        for row in generate_rows(num_clients, seed):
            writer.writerow(row)
            count += 1
    logger.info(f"Wrote {count} rows for {num_clients} clients to {filepath}")
    return count


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s", stream=sys.stderr)

    if len(argv) not in (1, 2):
        print("Usage: python dataset.py <output.csv> [num_clients]", file=sys.stderr)
        return 1

    num_clients = int(argv[1]) if len(argv) == 2 else DEFAULT_NUM_CLIENTS
    write_dataset(argv[0], num_clients)
    return 0


if __name__ == "__main__":
    sys.exit(main())
