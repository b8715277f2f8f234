"""Command-line entry point: format-addresses, sanitize-consumers and init-schema."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from customer_hygiene.batch import BatchRunner
from customer_hygiene.config import HygieneConfig
from customer_hygiene.exceptions import ConfigurationError, PersistenceError
from customer_hygiene.logging import setup_logging
from customer_hygiene.reconcilers.customer import CustomerReconciler
from customer_hygiene.reconcilers.sanitize import SanitizeConsumer
from customer_hygiene.sinks.audit_csv import AuditLog
from customer_hygiene.store.base import CustomerRepository

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CONFIG = 2


def _delete_flag(value: str) -> bool:
    if value not in ("0", "1"):
        raise argparse.ArgumentTypeError("--delete expects 0 or 1")
    return value == "1"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="customer-hygiene",
        description="Validate and normalize Brazilian customer records",
    )
    parser.add_argument("--store", choices=["json", "postgres"], help="Repository backend (default: from env)")
    parser.add_argument("--store-path", help="JSON store file (json backend)")
    parser.add_argument("--audit-dir", help="Base directory for the audit CSV files")
    parser.add_argument("--log-level", help="Log level (default: INFO)")
    parser.add_argument("--log-format", choices=["standard", "json"], help="Log format")

    subparsers = parser.add_subparsers(dest="command", required=True)

    fmt = subparsers.add_parser("format-addresses", help="Brazilian format address data")
    fmt.add_argument("--batch-size", type=int, help="Customers per page (default: 100)")

    sanitize = subparsers.add_parser("sanitize-consumers", help="Sanitize invalid customers")
    sanitize.add_argument("--batch-size", type=int, help="Customers per page (default: 100)")
    sanitize.add_argument(
        "--delete",
        type=_delete_flag,
        default=False,
        help="Delete customers that cannot be saved (0 or 1, default: 0)",
    )

    subparsers.add_parser("init-schema", help="Create the customer tables (postgres backend)")
    return parser


def load_config(args: argparse.Namespace) -> HygieneConfig:
    """Environment config overridden by command-line flags."""
    config = HygieneConfig.from_env()
    if args.store:
        config.store.backend = args.store
    if args.store_path:
        config.store.json_path = Path(args.store_path)
    if args.audit_dir:
        config.audit.output_dir = Path(args.audit_dir)
    if args.log_level:
        config.log_level = args.log_level
    if args.log_format:
        config.log_format = args.log_format
    if getattr(args, "batch_size", None) is not None:
        config.batch.batch_size = args.batch_size
    config.validate()
    return config


def open_repository(config: HygieneConfig) -> CustomerRepository:
    if config.store.backend == "postgres":
        from customer_hygiene.store.postgres import PostgresCustomerStore

        return PostgresCustomerStore.connect(config.postgres)

    from customer_hygiene.store.json_file import JsonFileCustomerStore

    return JsonFileCustomerStore(config.store.json_path)


def init_schema(config: HygieneConfig) -> int:
    """Create the customer tables and indexes in PostgreSQL."""
    if config.store.backend != "postgres":
        print("configuration error: init-schema requires the postgres backend", file=sys.stderr)
        return EXIT_CONFIG

    from customer_hygiene.store.postgres import PostgresCustomerStore

    try:
        store = PostgresCustomerStore.connect(config.postgres)
    except PersistenceError:
        logger.exception("Cannot connect to PostgreSQL")
        return EXIT_FAILURE

    try:
        store.create_schema()
    except PersistenceError:
        logger.exception("Schema creation failed")
        return EXIT_FAILURE
    finally:
        store.close()

    logger.info("Schema ready on %s:%d/%s", config.postgres.host, config.postgres.port, config.postgres.database)
    return EXIT_OK


def main(argv: Sequence[str] | None = None) -> int:
    """Run one command and return the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args)
    except ConfigurationError as exc:
        print(f"configuration error: {exc}", file=sys.stderr)
        return EXIT_CONFIG

    setup_logging(config.log_level, config.log_format)

    if args.command == "init-schema":
        return init_schema(config)

    audit_log = AuditLog(config.audit)
    repository = None

    try:
        repository = open_repository(config)
        runner = BatchRunner(repository, config.batch.batch_size)

        if args.command == "format-addresses":
            logger.info("Starting address formatting...")
            reconciler = CustomerReconciler(repository, audit_log)
            runner.run(reconciler.process_customer)
        else:
            logger.info("Starting customer sanitation (delete=%s)...", args.delete)
            consumer = SanitizeConsumer(repository, audit_log)
            runner.run(lambda customer: consumer.process_customer(customer, args.delete))
    except Exception:
        logger.exception("Batch aborted")
        return EXIT_FAILURE
    finally:
        audit_log.close()
        if repository is not None and hasattr(repository, "close"):
            repository.close()

    logger.info("Process completed successfully")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
