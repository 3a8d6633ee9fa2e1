from dataclasses import dataclass, field
from decimal import Decimal
from typing import Set

from models import (
    AccountEvent,
    AccountEventKind,
    AccountSnapshot,
    CreateTransactionAction,
    CreateTransactionCommand,
    ModifyTransactionAction,
    ModifyTransactionCommand,
)
from errors import AccountFrozen, DisputeNotSupported, InsufficientFunds, TransactionDisputeStateMismatch


@dataclass
class ClientAccount:
    """
    Balance and dispute state of a single client.

    Commands are checked by handle_create_transaction / handle_modify_transaction,
    which never mutate and return the event to apply. apply() is the only mutator.
    """

    client_id: int
    available: Decimal = Decimal("0")
    held: Decimal = Decimal("0")
    locked: bool = False
    disputed_transaction_ids: Set[int] = field(default_factory=set)

    @property
    def total(self) -> Decimal:
        return self.available + self.held

    def is_transaction_disputed(self, transaction_id: int) -> bool:
        return transaction_id in self.disputed_transaction_ids

    def handle_create_transaction(self, command: CreateTransactionCommand) -> AccountEvent:
        if self.locked:
            raise AccountFrozen()

        match command.action:
            case CreateTransactionAction.DEPOSIT:
                kind = AccountEventKind.DEPOSITED
            case CreateTransactionAction.WITHDRAW:
                if self.available < command.amount:
                    raise InsufficientFunds()
                kind = AccountEventKind.WITHDRAWN

        return AccountEvent(transaction_id=command.transaction_id, amount=command.amount, kind=kind)

    def handle_modify_transaction(self, command: ModifyTransactionCommand) -> AccountEvent:
        if self.locked:
            raise AccountFrozen()

        under_dispute = self.is_transaction_disputed(command.transaction_id)

        match (command.action, under_dispute):
            case (ModifyTransactionAction.DISPUTE, False):
                # Only deposits can be disputed. Available is not checked and may go negative.
                if command.create_action != CreateTransactionAction.DEPOSIT:
                    raise DisputeNotSupported()
                kind = AccountEventKind.DISPUTED
            case (ModifyTransactionAction.RESOLVE, True):
                kind = AccountEventKind.RESOLVED
            case (ModifyTransactionAction.CHARGEBACK, True):
                kind = AccountEventKind.CHARGEDBACK
            case _:
                raise TransactionDisputeStateMismatch(command.action, under_dispute)

        return AccountEvent(transaction_id=command.transaction_id, amount=command.amount, kind=kind)

    def apply(self, event: AccountEvent) -> None:
        """Apply an already validated event. Never fails."""
        match event.kind:
            case AccountEventKind.DEPOSITED:
                self.available += event.amount
            case AccountEventKind.WITHDRAWN:
                self.available -= event.amount
            case AccountEventKind.DISPUTED:
                self.available -= event.amount
                self.held += event.amount
                self.disputed_transaction_ids.add(event.transaction_id)
            case AccountEventKind.RESOLVED:
                self.available += event.amount
                self.held -= event.amount
                self.disputed_transaction_ids.discard(event.transaction_id)
            case AccountEventKind.CHARGEDBACK:
                self.held -= event.amount
                self.locked = True
                self.disputed_transaction_ids.discard(event.transaction_id)

    def snapshot(self) -> AccountSnapshot:
        return AccountSnapshot(
            client_id=self.client_id,
            available=self.available,
            held=self.held,
            total=self.total,
            locked=self.locked,
        )
