import logging
from typing import Dict, Optional

from account import ClientAccount
from models import CreateTransactionCommand

logger = logging.getLogger(__name__)


class StateManager:
    """
    State owned by one processor: client accounts and the transaction registry.
    The registry is global across clients and append-only.
    """

    def __init__(self):
        self._accounts: Dict[int, ClientAccount] = {}
        self._transactions: Dict[int, CreateTransactionCommand] = {}

    def get_or_create_account(self, client_id: int) -> ClientAccount:
        """Get existing account or create new one."""
        if client_id not in self._accounts:
            logger.debug(f"Creating account for client {client_id}")
            self._accounts[client_id] = ClientAccount(client_id=client_id)
        return self._accounts[client_id]

    def get_account(self, client_id: int) -> Optional[ClientAccount]:
        return self._accounts.get(client_id)

    def store_transaction(self, command: CreateTransactionCommand) -> None:
        """Commit an accepted creation command. Existing entries are never replaced."""
        if command.transaction_id in self._transactions:
            raise ValueError(f"Transaction {command.transaction_id} is already registered")
        self._transactions[command.transaction_id] = command

    def get_transaction(self, transaction_id: int) -> Optional[CreateTransactionCommand]:
        """Registry slot for transaction_id: the stored command, or None when vacant."""
        return self._transactions.get(transaction_id)

    def transaction_count(self) -> int:
        return len(self._transactions)

    def get_all_accounts(self) -> Dict[int, ClientAccount]:
        """Return all accounts (for final output)."""
        return dict(self._accounts)
