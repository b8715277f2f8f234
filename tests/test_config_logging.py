"""Tests for config and logging."""

import json
import logging
import os
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

from customer_hygiene.config import (
    AuditConfig,
    BatchConfig,
    HygieneConfig,
    PostgresConfig,
    StoreConfig,
)
from customer_hygiene.exceptions import ConfigurationError
from customer_hygiene.logging import JsonFormatter, setup_logging


class TestAuditConfig:
    """Tests for AuditConfig."""

    def test_default_values(self) -> None:
        config = AuditConfig()

        assert config.output_dir == Path("var/export")
        assert config.success_file == "customer-changes.csv"
        assert config.failure_file == "customer-errors.csv"

    def test_directory(self) -> None:
        config = AuditConfig(output_dir=Path("/tmp/out"), subdirectory="audit")

        assert config.directory == Path("/tmp/out/audit")


class TestPostgresConfig:
    """Tests for PostgresConfig."""

    def test_connection_string(self) -> None:
        config = PostgresConfig(host="db", port=5433, database="shop", user="u", password="p")

        assert config.connection_string == "postgresql://u:p@db:5433/shop"


class TestHygieneConfig:
    """Tests for HygieneConfig."""

    def test_default_values(self) -> None:
        config = HygieneConfig()

        assert isinstance(config.audit, AuditConfig)
        assert isinstance(config.store, StoreConfig)
        assert config.batch.batch_size == 100
        assert config.store.backend == "json"
        assert config.log_level == "INFO"

    def test_validate_ok(self) -> None:
        HygieneConfig().validate()

    @pytest.mark.parametrize(
        "config",
        [
            HygieneConfig(batch=BatchConfig(batch_size=0)),
            HygieneConfig(store=StoreConfig(backend="mysql")),
            HygieneConfig(log_format="xml"),
            HygieneConfig(audit=AuditConfig(subdirectory="")),
        ],
    )
    def test_validate_rejects(self, config: HygieneConfig) -> None:
        with pytest.raises(ConfigurationError):
            config.validate()

    def test_from_env_defaults(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            config = HygieneConfig.from_env()

        assert config.store.json_path == Path("customers.json")
        assert config.postgres.port == 5432
        assert config.batch.batch_size == 100

    def test_from_env_custom(self) -> None:
        env = {
            "HYGIENE_AUDIT_DIR": "/data/export",
            "HYGIENE_STORE_BACKEND": "POSTGRES",
            "HYGIENE_STORE_PATH": "/data/c.json",
            "HYGIENE_BATCH_SIZE": "250",
            "POSTGRES_HOST": "pg",
            "POSTGRES_PORT": "6543",
            "LOG_LEVEL": "DEBUG",
            "LOG_FORMAT": "json",
        }
        with patch.dict(os.environ, env, clear=True):
            config = HygieneConfig.from_env()

        assert config.audit.output_dir == Path("/data/export")
        assert config.store.backend == "postgres"
        assert config.store.json_path == Path("/data/c.json")
        assert config.batch.batch_size == 250
        assert config.postgres.host == "pg"
        assert config.postgres.port == 6543
        assert config.log_level == "DEBUG"
        assert config.log_format == "json"

    def test_from_env_bad_integer(self) -> None:
        with patch.dict(os.environ, {"HYGIENE_BATCH_SIZE": "lots"}, clear=True):
            with pytest.raises(ConfigurationError, match="HYGIENE_BATCH_SIZE"):
                HygieneConfig.from_env()


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_standard_format(self) -> None:
        setup_logging(level="DEBUG", format_type="standard")

        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert not isinstance(root.handlers[0].formatter, JsonFormatter)

    def test_json_format(self) -> None:
        setup_logging(level="INFO", format_type="json")

        assert isinstance(logging.getLogger().handlers[0].formatter, JsonFormatter)

    def test_unknown_level_falls_back_to_info(self) -> None:
        setup_logging(level="LOUD")

        assert logging.getLogger().level == logging.INFO

    def test_library_loggers_quieted(self) -> None:
        setup_logging(level="DEBUG")

        assert logging.getLogger("psycopg").level == logging.WARNING
        assert logging.getLogger("faker").level == logging.WARNING


class TestJsonFormatter:
    """Tests for JsonFormatter."""

    def _record(self, msg: str = "hello %s", args: tuple = ("world",)) -> logging.LogRecord:
        return logging.LogRecord("customer_hygiene.test", logging.INFO, __file__, 1, msg, args, None)

    def test_basic_fields(self) -> None:
        data = json.loads(JsonFormatter().format(self._record()))

        assert data["message"] == "hello world"
        assert data["level"] == "INFO"
        assert data["logger"] == "customer_hygiene.test"
        assert "timestamp" in data

    def test_extra_fields(self) -> None:
        record = self._record()
        record.extra = {"customer_id": 7}

        data = json.loads(JsonFormatter().format(record))

        assert data["customer_id"] == 7

    def test_customer_id_attribute(self) -> None:
        record = self._record()
        record.customer_id = 42

        data = json.loads(JsonFormatter().format(record))

        assert data["customer_id"] == 42

    def test_no_customer_id_by_default(self) -> None:
        data = json.loads(JsonFormatter().format(self._record()))

        assert "customer_id" not in data

    def test_exception(self) -> None:
        try:
            raise ValueError("bad")
        except ValueError:
            record = logging.LogRecord("x", logging.ERROR, __file__, 1, "failed", (), sys.exc_info())

        data = json.loads(JsonFormatter().format(record))

        assert "ValueError: bad" in data["exception"]

    def test_non_ascii_kept(self) -> None:
        output = JsonFormatter().format(self._record("Conceição", ()))

        assert "Conceição" in output

