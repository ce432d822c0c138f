import logging
import os
import sys

from errors import InvalidRecordError
from ledger import LedgerEngine
from writer import write_accounts

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    level = os.environ.get("LEDGER_LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    configure_logging()

    if len(argv) != 1:
        print("Usage: python main.py <input.csv>", file=sys.stderr)
        return 1

    filepath = argv[0]
    engine = LedgerEngine()
    try:
        accounts = engine.process_file(filepath)
    except OSError as e:
        logger.error(f"Unable to read {filepath}: {e}")
        return 1
    except InvalidRecordError as e:
        logger.error(f"Invalid record in {filepath}: {e}")
        return 1

    write_accounts(accounts, sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())
