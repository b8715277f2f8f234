"""Configuration management for customer-hygiene."""

from dataclasses import dataclass, field
from pathlib import Path

from customer_hygiene.exceptions import ConfigurationError

STORE_BACKENDS = ("json", "postgres")
LOG_FORMATS = ("standard", "json")


@dataclass
class AuditConfig:
    """Audit log destination configuration."""

    output_dir: Path = field(default_factory=lambda: Path("var/export"))
    subdirectory: str = "brazilian_customer"
    success_file: str = "customer-changes.csv"
    failure_file: str = "customer-errors.csv"

    @property
    def directory(self) -> Path:
        """Get the directory holding both audit files."""
        return self.output_dir / self.subdirectory


@dataclass
class PostgresConfig:
    """PostgreSQL connection configuration."""

    host: str = "localhost"
    port: int = 5432
    database: str = "shop"
    user: str = "postgres"
    password: str = "postgres"

    @property
    def connection_string(self) -> str:
        """Get connection string."""
        return f"postgresql://{self.user}:{self.password}@{self.host}:{self.port}/{self.database}"


@dataclass
class StoreConfig:
    """Customer repository backend configuration."""

    backend: str = "json"
    json_path: Path = field(default_factory=lambda: Path("customers.json"))


@dataclass
class BatchConfig:
    """Batch driver configuration."""

    batch_size: int = 100


@dataclass
class HygieneConfig:
    """Main configuration for customer-hygiene."""

    audit: AuditConfig = field(default_factory=AuditConfig)
    postgres: PostgresConfig = field(default_factory=PostgresConfig)
    store: StoreConfig = field(default_factory=StoreConfig)
    batch: BatchConfig = field(default_factory=BatchConfig)
    log_level: str = "INFO"
    log_format: str = "standard"

    def validate(self) -> None:
        """Check the settings for values the batch cannot run with.

        Raises
        ------
        ConfigurationError
            If any setting is out of range or unknown.
        """
        if self.batch.batch_size < 1:
            raise ConfigurationError(f"batch size must be positive, got {self.batch.batch_size}")
        if self.store.backend not in STORE_BACKENDS:
            raise ConfigurationError(
                f"unknown store backend {self.store.backend!r}, expected one of {STORE_BACKENDS}"
            )
        if self.log_format not in LOG_FORMATS:
            raise ConfigurationError(f"unknown log format {self.log_format!r}")
        if not self.audit.subdirectory:
            raise ConfigurationError("audit subdirectory must not be empty")

    @classmethod
    def from_env(cls) -> "HygieneConfig":
        """Create config from environment variables."""
        import os

        audit = AuditConfig(
            output_dir=Path(os.getenv("HYGIENE_AUDIT_DIR", "var/export")),
            subdirectory=os.getenv("HYGIENE_AUDIT_SUBDIR", "brazilian_customer"),
        )

        postgres = PostgresConfig(
            host=os.getenv("POSTGRES_HOST", "localhost"),
            port=_int_env("POSTGRES_PORT", "5432"),
            database=os.getenv("POSTGRES_DB", "shop"),
            user=os.getenv("POSTGRES_USER", "postgres"),
            password=os.getenv("POSTGRES_PASSWORD", "postgres"),
        )

        store = StoreConfig(
            backend=os.getenv("HYGIENE_STORE_BACKEND", "json").lower(),
            json_path=Path(os.getenv("HYGIENE_STORE_PATH", "customers.json")),
        )

        batch = BatchConfig(batch_size=_int_env("HYGIENE_BATCH_SIZE", "100"))

        return cls(
            audit=audit,
            postgres=postgres,
            store=store,
            batch=batch,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "standard"),
        )


def _int_env(name: str, default: str) -> int:
    import os

    raw = os.getenv(name, default)
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from exc
