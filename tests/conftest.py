"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest

from customer_hygiene.config import AuditConfig
from customer_hygiene.models.base import Address, Customer
from customer_hygiene.sinks.audit_csv import AuditLog
from customer_hygiene.store.memory import InMemoryCustomerStore


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def valid_cpf() -> str:
    """Verified-valid CPF digits."""
    return "11144477735"


@pytest.fixture
def valid_cnpj() -> str:
    """Verified-valid CNPJ digits."""
    return "11222333000181"


@pytest.fixture
def audit_config(tmp_path: Path) -> AuditConfig:
    """Audit destination inside the test's temp dir."""
    return AuditConfig(output_dir=tmp_path / "export")


@pytest.fixture
def audit_log(audit_config: AuditConfig) -> AuditLog:
    """Fresh audit log writing under tmp_path."""
    return AuditLog(audit_config)


@pytest.fixture
def store() -> InMemoryCustomerStore:
    """Create a fresh store for each test."""
    return InMemoryCustomerStore()


@pytest.fixture
def sample_customer(valid_cpf: str) -> Customer:
    """BR customer with a default billing address and a valid CPF."""
    return Customer(
        customer_id=1,
        email="maria@example.com",
        firstname="Maria",
        lastname="Silva",
        tax_id=valid_cpf,
        default_billing_address_id=10,
        default_shipping_address_id=10,
    )


@pytest.fixture
def sample_address() -> Address:
    """Complete BR address with an unformatted mobile number."""
    return Address(
        address_id=10,
        customer_id=1,
        country_code="BR",
        street_lines=["Av Paulista", "1000", "Bela Vista"],
        phone="11 98765-4321",
        city="São Paulo",
        region="SP",
        postcode="01310-100",
    )


@pytest.fixture
def populated_store(
    store: InMemoryCustomerStore,
    sample_customer: Customer,
    sample_address: Address,
) -> InMemoryCustomerStore:
    """Store holding the sample customer and address."""
    store.add_customer(sample_customer)
    store.add_address(sample_address)
    return store

