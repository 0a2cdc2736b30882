#!/usr/bin/env python3
"""Generate a sample ledger for manual validation.

This script creates borrowers, loans and payment histories, writes them as
JSON files through the ledger storage, and prints per-loan and portfolio
figures computed by the engine.
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from iou_ledger.config import LedgerConfig
from iou_ledger.formatting import format_currency, format_date
from iou_ledger.generators import LedgerGenerator
from iou_ledger.logging import get_logger, setup_logging
from iou_ledger.models import LoanSummary
from iou_ledger.storage import JsonFileStorage
from iou_ledger.store import LedgerStore

logger = get_logger(__name__)


def print_loans(store: LedgerStore, symbol: str) -> None:
    """Print one line per loan."""
    print("\n" + "=" * 78)
    print(f"{'Borrower':24}{'Start':14}{'Status':10}{'Principal':>15}{'Interest':>15}")
    print("=" * 78)
    for loan in store.loans.values():
        state = store.loan_state(loan.loan_id)
        print(
            f"{loan.borrower_name[:23]:24}"
            f"{format_date(loan.start_date):14}"
            f"{loan.status.value:10}"
            f"{format_currency(state.outstanding_principal, symbol):>15}"
            f"{format_currency(state.outstanding_interest, symbol):>15}"
        )


def print_summary(summary: LoanSummary, symbol: str, output_dir: Path) -> None:
    """Print portfolio summary."""
    print("\n" + "=" * 60)
    print("Summary")
    print("=" * 60)
    rows = {
        "Total lent": summary.total_lent,
        "Loan outstanding": summary.total_outstanding_principal,
        "Loan repaid": summary.total_principal_repaid,
        "Interest outstanding": summary.total_outstanding_interest,
        "Interest paid": summary.total_interest_paid,
    }
    for name, amount in rows.items():
        print(f"{name + ':':24}{format_currency(amount, symbol)}")
    print(f"\nAll files saved to: {output_dir}")
    print("=" * 60)


def main() -> None:
    """Generate the sample ledger."""
    config = LedgerConfig.from_env()

    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--loans", type=int, default=10, help="Number of loans (default: 10)")
    parser.add_argument("--seed", type=int, default=config.seed if config.seed is not None else 42)
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=config.storage.data_dir,
        help="Directory for loans.json / payments.json",
    )
    args = parser.parse_args()

    setup_logging(config.log_level, config.log_format)

    storage = JsonFileStorage(args.output_dir, pretty=config.storage.pretty_json)
    store = LedgerStore(storage=storage)
    store.clear()

    logger.info("Generating %d loans (seed=%d)", args.loans, args.seed)
    LedgerGenerator(seed=args.seed).populate(store, num_loans=args.loans)
    store.refresh_statuses()

    symbol = config.display.currency.symbol
    print_loans(store, symbol)
    print_summary(store.summary(), symbol, args.output_dir)


if __name__ == "__main__":
    main()
