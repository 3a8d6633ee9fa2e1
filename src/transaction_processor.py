from decimal import Decimal
from typing import Optional

from command import parse_command
from models import CreateTransactionCommand, Transaction, TransactionType
from state_manager import StateManager


class TransactionProcessor:
    """
    Processes transactions against state, one record at a time, in order.
    Either the whole record succeeds or nothing is changed.
    """

    def __init__(self, state: StateManager):
        self._state = state

    def process_transaction(
        self,
        transaction_id: int,
        client_id: int,
        amount: Optional[Decimal],
        transaction_type: TransactionType,
    ) -> None:
        """
        Process a single record.

        Raises:
            CommandError: record is structurally invalid against the registry
            AccountError: account rejected the command
        """
        existing = self._state.get_transaction(transaction_id)
        command = parse_command(existing, transaction_id, transaction_type, amount)

        account = self._state.get_or_create_account(client_id)

        if isinstance(command, CreateTransactionCommand):
            event = account.handle_create_transaction(command)
            account.apply(event)
            self._state.store_transaction(command)
        else:
            event = account.handle_modify_transaction(command)
            account.apply(event)

    def process(self, transaction: Transaction) -> None:
        self.process_transaction(
            transaction.transaction_id,
            transaction.client_id,
            transaction.amount,
            transaction.transaction_type,
        )
