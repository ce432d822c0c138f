from typing import Dict, List, Optional

from account import ClientAccount
from models import AccountSnapshot, LedgerEvent


class AccountRegistry:
    """
    Owns every client account, keyed by client id.
    Accounts are created on first reference and never removed.
    """

    def __init__(self):
        self._accounts: Dict[int, ClientAccount] = {}

    def __len__(self) -> int:
        return len(self._accounts)

    def __contains__(self, client_id: int) -> bool:
        return client_id in self._accounts

    def get_or_create_account(self, client_id: int) -> ClientAccount:
        """Get existing account or create new one."""
        if client_id not in self._accounts:
            self._accounts[client_id] = ClientAccount(client_id=client_id)
        return self._accounts[client_id]

    def get_account(self, client_id: int) -> Optional[ClientAccount]:
        return self._accounts.get(client_id)

    def route(self, event: LedgerEvent) -> None:
        """Forward an event to its client's account. LedgerErrors propagate unchanged."""
        self.get_or_create_account(event.client_id).apply(event)

    def snapshot(self) -> List[AccountSnapshot]:
        """Return read-only views of all accounts, ordered by client id."""
        return [self._accounts[client_id].snapshot() for client_id in sorted(self._accounts)]
