#!/usr/bin/env python3
"""
Preview the transaction list a customer account snapshot produces.

Usage:
    python3 scripts/preview_transactions.py --snapshot account.json --regime SANCTIONS
    python3 scripts/preview_transactions.py --snapshot account.json --regime late-filing \\
        --config-dir penalty_config/sets/default

The snapshot file is JSON with ``customer_code``, ``company_code`` and a
``lines`` (or ``account_penalties``) array of ledger lines.  The
transaction list is printed as JSON on stdout; log records go to stderr.
"""

import argparse
import json
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

from penalty_config import PenaltySettings, load_reference_data
from penalty_kernel.domain.ledger import CustomerAccountSnapshot
from penalty_kernel.exceptions import PenaltyKernelError
from penalty_kernel.logging_config import configure_logging
from penalty_kernel.services import TransactionListService


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Build the transaction list for a ledger snapshot.",
    )
    parser.add_argument(
        "--snapshot", type=Path, required=True,
        help="Path to a customer account snapshot JSON file",
    )
    parser.add_argument(
        "--regime", type=str, required=True,
        help="LATE_FILING, SANCTIONS or SANCTIONS_ROE (late-filing also accepted)",
    )
    parser.add_argument(
        "--config-dir", type=Path, default=None,
        help="Configuration set directory (default: PENALTY_CONFIG_DIR or bundled set)",
    )
    parser.add_argument(
        "--no-list-etag", action="store_true",
        help="Do not stamp an etag on the list itself",
    )
    args = parser.parse_args()

    settings = PenaltySettings.from_env()
    configure_logging(level=settings.log_level, stream=sys.stderr)

    with open(args.snapshot) as f:
        snapshot = CustomerAccountSnapshot.from_dict(json.load(f))

    try:
        reference_data = load_reference_data(args.config_dir, settings)
        service = TransactionListService(reference_data, stamp_list=not args.no_list_etag)
        transaction_list = service.generate(snapshot, args.regime)
    except PenaltyKernelError as exc:
        print(f"Error [{exc.code}]: {exc}", file=sys.stderr)
        return 1

    print(json.dumps(transaction_list.to_dict(), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
