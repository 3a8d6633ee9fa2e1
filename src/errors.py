from models import CreateTransactionAction, ModifyTransactionAction


class TransactionProcessError(Exception):
    """Base class for every per-record failure raised by the processor."""


class CommandError(TransactionProcessError):
    """Structural problem with the record itself, detected before any account is consulted."""

    def __init__(self, action):
        self.action = action
        super().__init__(self._message())

    def _message(self) -> str:
        raise NotImplementedError


class AmountRequired(CommandError):
    action: CreateTransactionAction

    def _message(self) -> str:
        return f"Amount is required for {self.action.value}"


class NegativeAmount(CommandError):
    action: CreateTransactionAction

    def _message(self) -> str:
        return f"Amount must not be negative for {self.action.value}"


class ExistingTxRequired(CommandError):
    action: ModifyTransactionAction

    def _message(self) -> str:
        return f"There should be an existing transaction for {self.action.value}"


class DuplicateTransaction(CommandError):
    action: CreateTransactionAction

    def _message(self) -> str:
        return f"There shouldn't be an existing transaction for {self.action.value}"


class AccountError(TransactionProcessError):
    """Business rule rejection from the account state machine."""


class AccountFrozen(AccountError):
    def __init__(self):
        super().__init__("Account is frozen, no further operations are allowed")


class InsufficientFunds(AccountError):
    def __init__(self):
        super().__init__("Insufficient funds")


class DisputeNotSupported(AccountError):
    def __init__(self):
        super().__init__("Dispute operation is not supported for parent transaction")


class TransactionDisputeStateMismatch(AccountError):
    """
    The requested action does not fit the transaction's dispute state.
    Carries the attempted action and the actual flag; the text is rendered on demand.
    """

    def __init__(self, action: ModifyTransactionAction, under_dispute: bool):
        self.action = action
        self.under_dispute = under_dispute
        super().__init__(action, under_dispute)

    @property
    def dispute_state(self) -> str:
        return "already under dispute" if self.under_dispute else "not under dispute"

    def __str__(self) -> str:
        return f"{self.action.value} cannot be initiated, because the transaction is {self.dispute_state}"
