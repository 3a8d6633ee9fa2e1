from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Optional

MAX_CLIENT_ID = 2**16 - 1
MAX_TRANSACTION_ID = 2**32 - 1


class TransactionType(Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    DISPUTE = "dispute"
    RESOLVE = "resolve"
    CHARGEBACK = "chargeback"


class CreateTransactionAction(Enum):
    DEPOSIT = "Deposit"
    WITHDRAW = "Withdraw"


class ModifyTransactionAction(Enum):
    DISPUTE = "Dispute"
    RESOLVE = "Resolve"
    CHARGEBACK = "Chargeback"


class AccountEventKind(Enum):
    DEPOSITED = "deposited"
    WITHDRAWN = "withdrawn"
    DISPUTED = "disputed"
    RESOLVED = "resolved"
    CHARGEDBACK = "chargedback"


@dataclass
class Transaction:
    """Raw input record, as delivered by the ingestion layer."""

    transaction_type: TransactionType
    client_id: int
    transaction_id: int
    amount: Optional[Decimal] = None

    def __repr__(self) -> str:
        return f"Transaction({self.transaction_type.value}, client={self.client_id}, tx={self.transaction_id}, amount={self.amount})"


@dataclass(frozen=True)
class CreateTransactionCommand:
    """Canonical record of an originating transaction. Stored in the registry once accepted."""

    transaction_id: int
    action: CreateTransactionAction
    amount: Decimal


@dataclass(frozen=True)
class ModifyTransactionCommand:
    """
    Command against an existing transaction.
    amount and create_action always come from the registry entry.
    """

    transaction_id: int
    action: ModifyTransactionAction
    amount: Decimal
    create_action: CreateTransactionAction


@dataclass(frozen=True)
class AccountEvent:
    transaction_id: int
    amount: Decimal
    kind: AccountEventKind


@dataclass(frozen=True)
class AccountSnapshot:
    client_id: int
    available: Decimal
    held: Decimal
    total: Decimal
    locked: bool


class ProcessingStats:
    """Counters for tracking processing outcomes."""

    def __init__(self):
        self.processed = 0
        self.command_failed = 0
        self.account_failed = 0
        self.malformed = 0

    @property
    def failed(self) -> int:
        return self.command_failed + self.account_failed

    def record_success(self):
        self.processed += 1

    def record_command_failure(self):
        self.command_failed += 1

    def record_account_failure(self):
        self.account_failed += 1

    def record_malformed(self):
        self.malformed += 1
