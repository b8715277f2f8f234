"""Tests for the name/e-mail sanitation pass."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from customer_hygiene.exceptions import HardDeleteNotAllowedError, PersistenceError
from customer_hygiene.models.base import Customer
from customer_hygiene.models.enums import SanitizeResult
from customer_hygiene.reconcilers.sanitize import SanitizeConsumer, sanitize_email, sanitize_name
from customer_hygiene.sinks.audit_csv import AuditLog
from customer_hygiene.store.memory import InMemoryCustomerStore


def _rows(path: Path) -> list[str]:
    if not path.exists():
        return []
    return path.read_text(encoding="utf-8").splitlines()[1:]


class TestSanitizeName:
    """Tests for sanitize_name."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("João", "Joao"),
            ("Conceição", "Conceicao"),
            ("ÁLVARO", "ALVARO"),
            ("Muñoz", "Munoz"),
            ("Ana-Maria!", "AnaMaria"),
            ("O'Neil Jr.", "ONeil Jr"),
            ("José 2", "Jose 2"),
        ],
    )
    def test_cleans_and_transliterates(self, raw: str, expected: str) -> None:
        assert sanitize_name(raw) == expected

    def test_letters_outside_set_dropped(self) -> None:
        """Only the Portuguese accent set survives; other accents are removed."""
        assert sanitize_name("Zoë Ñandú") == "Zo andu"

    def test_none(self) -> None:
        assert sanitize_name(None) == ""


class TestSanitizeEmail:
    """Tests for sanitize_email."""

    def test_trim_and_lowercase(self) -> None:
        assert sanitize_email("  Maria@Example.COM ") == "maria@example.com"

    def test_none(self) -> None:
        assert sanitize_email(None) == ""


class TestSanitizeConsumer:
    """Tests for SanitizeConsumer.process_customer."""

    def test_saves_sanitized_customer(self, store: InMemoryCustomerStore, audit_log: AuditLog) -> None:
        store.add_customer(Customer(customer_id=1, email=" JOSE@X.COM", firstname="José!", lastname="Conceição"))
        consumer = SanitizeConsumer(store, audit_log)

        result = consumer.process_customer(store.list_customers(None, 1)[0])

        assert result == SanitizeResult.SAVED
        saved = store.customers[1]
        assert saved.firstname == "Jose"
        assert saved.lastname == "Conceicao"
        assert saved.email == "jose@x.com"
        assert not audit_log.output_dir.exists()

    def test_empty_lastname_falls_back_to_firstname(self, store: InMemoryCustomerStore, audit_log: AuditLog) -> None:
        customer = Customer(customer_id=1, email="a@x.com", firstname="Ana", lastname="###")
        store.add_customer(customer)

        SanitizeConsumer(store, audit_log).process_customer(customer)

        assert store.customers[1].lastname == "Ana"

    def test_save_failure_logged_without_delete(self, store: InMemoryCustomerStore, audit_log: AuditLog) -> None:
        store.add_customer(Customer(customer_id=1, email="dup@x.com"))
        customer = Customer(customer_id=2, email="DUP@x.com", firstname="Bia")
        store.add_customer(customer)

        result = SanitizeConsumer(store, audit_log).process_customer(customer)

        assert result == SanitizeResult.SAVE_FAILED
        assert 2 in store.customers
        rows = _rows(audit_log.path_for(False))
        assert rows == [
            "2,dup@x.com,A customer with the same email address already exists in an associated website."
        ]

    def test_save_failure_with_delete(self, store: InMemoryCustomerStore, audit_log: AuditLog) -> None:
        store.add_customer(Customer(customer_id=1, email="dup@x.com"))
        customer = Customer(customer_id=2, email="dup@x.com")
        store.add_customer(customer)

        result = SanitizeConsumer(store, audit_log).process_customer(customer, delete_option=True)

        assert result == SanitizeResult.DELETED
        assert 2 not in store.customers
        assert len(_rows(audit_log.path_for(False))) == 1

    def test_delete_passes_explicit_authorization(self, audit_log: AuditLog) -> None:
        repository = MagicMock()
        repository.save_customer.side_effect = PersistenceError("invalid")
        customer = Customer(customer_id=9, email="x@x.com")

        SanitizeConsumer(repository, audit_log).process_customer(customer, delete_option=True)

        repository.delete_customer.assert_called_once_with(customer, allow_hard_delete=True)

    def test_delete_failure_propagates(self, audit_log: AuditLog) -> None:
        repository = MagicMock()
        repository.save_customer.side_effect = PersistenceError("invalid")
        repository.delete_customer.side_effect = HardDeleteNotAllowedError("forbidden")

        with pytest.raises(PersistenceError):
            SanitizeConsumer(repository, audit_log).process_customer(Customer(9, "x@x.com"), delete_option=True)

    def test_no_delete_when_save_succeeds(self, audit_log: AuditLog) -> None:
        repository = MagicMock()

        result = SanitizeConsumer(repository, audit_log).process_customer(Customer(9, "x@x.com"), delete_option=True)

        assert result == SanitizeResult.SAVED
        repository.delete_customer.assert_not_called()
