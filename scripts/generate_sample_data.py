#!/usr/bin/env python3
"""Generate a sample JSON customer store for manual runs of the CLI.

Writes the CLI's JSON store (``HYGIENE_STORE_PATH``, default
``customers.json``) with synthetic Brazilian customers that
carry the usual import defects, so that ``customer-hygiene format-addresses``
and ``sanitize-consumers`` have something to clean up.
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from customer_hygiene.config import HygieneConfig
from customer_hygiene.generators import DefectRates, DirtyCustomerGenerator
from customer_hygiene.store.json_file import JsonFileCustomerStore


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate a sample customer store")
    parser.add_argument("--customers", type=int, default=200, help="Number of customers (default: 200)")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    parser.add_argument(
        "--output",
        type=Path,
        default=HygieneConfig.from_env().store.json_path,
        help="Output file (default: HYGIENE_STORE_PATH or customers.json)",
    )
    parser.add_argument("--clean", action="store_true", help="Generate records without defects")
    return parser


def main() -> None:
    """Generate the sample store."""
    args = build_parser().parse_args()

    if args.output.exists():
        args.output.unlink()

    store = JsonFileCustomerStore(args.output)
    defects = DefectRates.clean() if args.clean else DefectRates()
    DirtyCustomerGenerator(seed=args.seed, defects=defects).populate(store, args.customers)
    store.flush()

    print("=" * 60)
    print("Sample customer store")
    print("=" * 60)
    for name, count in store.get_stats().items():
        print(f"{name + ':':18}{count}")
    print(f"\nSaved to: {args.output}")


if __name__ == "__main__":
    main()
