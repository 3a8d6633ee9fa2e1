import csv
import logging
import sys
from decimal import Decimal, InvalidOperation
from typing import Callable, Dict, Iterable, Iterator, List, Optional, TextIO, Tuple

from account import ClientAccount
from errors import AccountError, CommandError, TransactionProcessError
from models import (
    MAX_CLIENT_ID,
    MAX_TRANSACTION_ID,
    AccountSnapshot,
    ProcessingStats,
    Transaction,
    TransactionType,
)
from state_manager import StateManager
from transaction_processor import TransactionProcessor

logger = logging.getLogger(__name__)

ErrorSink = Callable[[int, TransactionProcessError], None]


def log_processing_error(line: int, error: TransactionProcessError) -> None:
    """Default error sink: command errors at WARNING, account errors at INFO."""
    if isinstance(error, CommandError):
        logger.warning(f"Error at line {line}: {error}")
    else:
        logger.info(f"Rejected at line {line}: {error}")


class PaymentsEngine:
    """
    Feeds transactions from a CSV file to the processor in file order
    and reports per-record failures to an error sink.
    """

    def __init__(self, error_sink: Optional[ErrorSink] = None):
        self._state = StateManager()
        self._processor = TransactionProcessor(self._state)
        self._error_sink = error_sink or log_processing_error
        self.stats = ProcessingStats()

    def process_file(self, filepath: str) -> Dict[int, ClientAccount]:
        """Process CSV file and return final account states."""
        logger.info(f"Processing transactions from {filepath}")

        with open(filepath, "r", newline="") as f:
            self.process_records(self._read_csv(f))

        logger.info("Processing complete")
        print(
            f"Processed: {self.stats.processed}, "
            f"Failed: {self.stats.failed}",
            file=sys.stderr
        )

        return self._state.get_all_accounts()

    def process_records(self, records: Iterable[Tuple[int, Transaction]]) -> None:
        """Process (line, transaction) pairs in order. A failed record never stops the run."""
        for line, transaction in records:
            try:
                self._processor.process(transaction)
            except CommandError as e:
                self.stats.record_command_failure()
                self._error_sink(line, e)
            except AccountError as e:
                self.stats.record_account_failure()
                self._error_sink(line, e)
            else:
                self.stats.record_success()

    def get_accounts(self) -> Dict[int, ClientAccount]:
        return self._state.get_all_accounts()

    def get_account_snapshots(self) -> List[AccountSnapshot]:
        accounts = self._state.get_all_accounts()
        return [accounts[client_id].snapshot() for client_id in sorted(accounts)]

    def _read_csv(self, f: TextIO) -> Iterator[Tuple[int, Transaction]]:
        """Read CSV rows, yielding (line, transaction). Malformed rows are logged and skipped."""
        reader = csv.reader(f)
        header = next(reader, None)
        if header is None:
            return
        fields = [name.strip().lower() for name in header]

        for row in reader:
            line = reader.line_num
            if not any(value.strip() for value in row):
                continue
            transaction = self._parse_csv_row(dict(zip(fields, row)), line)
            if transaction is None:
                self.stats.record_malformed()
                continue
            yield line, transaction

    def _parse_csv_row(self, row: Dict[str, str], line: int) -> Optional[Transaction]:
        """Parse CSV row into Transaction."""
        try:
            normalized = {k: v.strip() for k, v in row.items()}

            transaction_type_str = normalized["type"].lower()
            client_id = int(normalized["client"])
            transaction_id = int(normalized["tx"])

            if not 0 <= client_id <= MAX_CLIENT_ID:
                raise ValueError(f"client id {client_id} out of range")
            if not 0 <= transaction_id <= MAX_TRANSACTION_ID:
                raise ValueError(f"tx id {transaction_id} out of range")

            amount = None
            amount_str = normalized.get("amount", "")
            if amount_str:
                amount = Decimal(amount_str)
                if not amount.is_finite():
                    raise ValueError(f"amount {amount_str} is not a finite number")

            return Transaction(
                transaction_type=TransactionType(transaction_type_str),
                client_id=client_id,
                transaction_id=transaction_id,
                amount=amount,
            )
        except (KeyError, ValueError, InvalidOperation) as e:
            logger.warning(f"Failed to parse row at line {line} {row}: {e}")
            return None
