import logging
from typing import Iterable, List, Optional

from csv_input import read_events
from errors import LedgerError
from models import AccountSnapshot, LedgerEvent, ProcessingStats
from registry import AccountRegistry

logger = logging.getLogger(__name__)


class LedgerEngine:
    """
    Applies ledger events to client accounts strictly in arrival order.
    Rejected events are logged and skipped; an invalid record from the
    event source aborts the run with earlier events left applied.
    """

    def __init__(self, registry: Optional[AccountRegistry] = None):
        self._registry = registry if registry is not None else AccountRegistry()
        self._stats = ProcessingStats()

    @property
    def registry(self) -> AccountRegistry:
        return self._registry

    @property
    def stats(self) -> ProcessingStats:
        return self._stats

    def process_file(self, filepath: str) -> List[AccountSnapshot]:
        """Process CSV file and return final account states."""
        logger.info(f"Processing {filepath}")
        return self.process_events(read_events(filepath))

    def process_events(self, events: Iterable[LedgerEvent]) -> List[AccountSnapshot]:
        for event in events:
            self.process_event(event)

        logger.info(f"Run summary: {self._stats.as_dict()}, accounts: {len(self._registry)}")
        return self._registry.snapshot()

    def process_event(self, event: LedgerEvent) -> bool:
        """Apply one event. Returns False if the account rejected it."""
        try:
            self._registry.route(event)
        except LedgerError as e:
            self._stats.record_failure(e.kind)
            logger.warning(f"Rejected {event}: {e}")
            return False
        self._stats.record_success()
        return True
