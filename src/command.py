from decimal import Decimal
from typing import Optional, Union

from models import (
    CreateTransactionAction,
    CreateTransactionCommand,
    ModifyTransactionAction,
    ModifyTransactionCommand,
    TransactionType,
)
from errors import AmountRequired, DuplicateTransaction, ExistingTxRequired, NegativeAmount

AccountCommand = Union[CreateTransactionCommand, ModifyTransactionCommand]

CREATE_ACTIONS = {
    TransactionType.DEPOSIT: CreateTransactionAction.DEPOSIT,
    TransactionType.WITHDRAWAL: CreateTransactionAction.WITHDRAW,
}

MODIFY_ACTIONS = {
    TransactionType.DISPUTE: ModifyTransactionAction.DISPUTE,
    TransactionType.RESOLVE: ModifyTransactionAction.RESOLVE,
    TransactionType.CHARGEBACK: ModifyTransactionAction.CHARGEBACK,
}


def parse_command(
    existing: Optional[CreateTransactionCommand],
    transaction_id: int,
    transaction_type: TransactionType,
    amount: Optional[Decimal],
) -> AccountCommand:
    """
    Turn a raw record into a domain command.

    `existing` is the registry entry currently stored for transaction_id, or None
    when the slot is vacant. Nothing is mutated here; the caller commits the
    registry entry once the whole chain has succeeded.

    Raises:
        DuplicateTransaction: creation against an occupied slot
        AmountRequired: creation without an amount
        NegativeAmount: creation with amount < 0
        ExistingTxRequired: dispute/resolve/chargeback against a vacant slot
    """
    if transaction_type in CREATE_ACTIONS:
        return _parse_create_command(existing, transaction_id, CREATE_ACTIONS[transaction_type], amount)
    return _parse_modify_command(existing, transaction_id, MODIFY_ACTIONS[transaction_type])


def _parse_create_command(
    existing: Optional[CreateTransactionCommand],
    transaction_id: int,
    action: CreateTransactionAction,
    amount: Optional[Decimal],
) -> CreateTransactionCommand:
    if existing is not None:
        raise DuplicateTransaction(action)
    if amount is None:
        raise AmountRequired(action)
    if amount < 0:
        raise NegativeAmount(action)
    return CreateTransactionCommand(transaction_id=transaction_id, action=action, amount=amount)


def _parse_modify_command(
    existing: Optional[CreateTransactionCommand],
    transaction_id: int,
    action: ModifyTransactionAction,
) -> ModifyTransactionCommand:
    if existing is None:
        raise ExistingTxRequired(action)
    return ModifyTransactionCommand(
        transaction_id=transaction_id,
        action=action,
        amount=existing.amount,
        create_action=existing.action,
    )
