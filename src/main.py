import csv
import sys
import logging
from decimal import Decimal
from typing import Iterable, TextIO

from models import AccountSnapshot
from payments_engine import PaymentsEngine

logger = logging.getLogger(__name__)

OUTPUT_FIELDS = ["client", "available", "held", "total", "locked"]


def format_decimal(value: Decimal) -> str:
    """Format decimal without trailing zeros or exponent."""
    normalized = value.normalize()
    return f"{normalized:f}"


def write_accounts(output: TextIO, snapshots: Iterable[AccountSnapshot]) -> None:
    writer = csv.writer(output, lineterminator="\n")
    writer.writerow(OUTPUT_FIELDS)
    for snapshot in snapshots:
        writer.writerow([
            snapshot.client_id,
            format_decimal(snapshot.available),
            format_decimal(snapshot.held),
            format_decimal(snapshot.total),
            str(snapshot.locked).lower(),
        ])


def main(argv=None) -> int:
    logging.basicConfig(
        level=logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    args = sys.argv[1:] if argv is None else argv
    if len(args) != 1:
        print("Usage: python main.py <input.csv>", file=sys.stderr)
        return 1

    filepath = args[0]
    engine = PaymentsEngine()
    try:
        engine.process_file(filepath)
    except OSError as e:
        logger.error(f"Failed to open `{filepath}`: {e}")
        return 1

    write_accounts(sys.stdout, engine.get_account_snapshots())
    return 0


if __name__ == "__main__":
    sys.exit(main())
