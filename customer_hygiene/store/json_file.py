"""Customer store persisted as a single JSON document."""

import json
import logging
import os
from dataclasses import asdict
from pathlib import Path
from typing import Any

from customer_hygiene.exceptions import PersistenceError
from customer_hygiene.models.base import Address, Customer
from customer_hygiene.store.memory import InMemoryCustomerStore

logger = logging.getLogger(__name__)


class JsonFileCustomerStore(InMemoryCustomerStore):
    """In-memory store loaded from and flushed to a JSON file.

    The document layout is ``{"customers": [...], "addresses": [...]}``.
    Every successful mutation rewrites the file atomically.
    """

    def __init__(self, path: str | Path, pretty: bool = True) -> None:
        """Initialize JSON file store.

        Parameters
        ----------
        path : str | Path
            JSON document. Created on first flush if missing.
        pretty : bool
            Pretty-print JSON output.
        """
        super().__init__()
        self.path = Path(path)
        self.pretty = pretty
        if self.path.exists():
            self._load()

    def _load(self) -> None:
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            raise PersistenceError(f"cannot read {self.path}: {exc}") from exc

        for row in data.get("customers", []):
            self.add_customer(Customer(**row))
        for row in data.get("addresses", []):
            self.add_address(Address(**row))
        logger.info("Loaded %d customers, %d addresses from %s", *self.get_stats().values(), self.path)

    def flush(self) -> None:
        """Write the current state to disk."""
        data: dict[str, Any] = {
            "customers": [asdict(c) for c in self.customers.values()],
            "addresses": [asdict(a) for a in self.addresses.values()],
        }
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                if self.pretty:
                    json.dump(data, f, indent=2, ensure_ascii=False)
                else:
                    json.dump(data, f, ensure_ascii=False)
            os.replace(tmp_path, self.path)
        except OSError as exc:
            raise PersistenceError(f"cannot write {self.path}: {exc}") from exc

    def save_address(self, address: Address) -> None:
        super().save_address(address)
        self.flush()

    def delete_address(self, address_id: int) -> None:
        super().delete_address(address_id)
        self.flush()

    def save_customer(self, customer: Customer) -> None:
        super().save_customer(customer)
        self.flush()

    def delete_customer(self, customer: Customer, allow_hard_delete: bool = False) -> None:
        super().delete_customer(customer, allow_hard_delete=allow_hard_delete)
        self.flush()
