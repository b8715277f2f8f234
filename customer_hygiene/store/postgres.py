"""PostgreSQL customer store backed by psycopg 3."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import psycopg

from customer_hygiene.config import PostgresConfig
from customer_hygiene.exceptions import (
    EntityNotFoundError,
    HardDeleteNotAllowedError,
    PersistenceError,
)
from customer_hygiene.models.base import Address, Customer

logger = logging.getLogger(__name__)

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS customers (
    id               BIGINT PRIMARY KEY,
    email            TEXT NOT NULL UNIQUE,
    firstname        TEXT NOT NULL DEFAULT '',
    lastname         TEXT NOT NULL DEFAULT '',
    taxvat           TEXT,
    default_billing  BIGINT,
    default_shipping BIGINT
);

CREATE TABLE IF NOT EXISTS customer_addresses (
    id         BIGINT PRIMARY KEY,
    parent_id  BIGINT NOT NULL REFERENCES customers (id) ON DELETE CASCADE,
    country_id VARCHAR(2) NOT NULL,
    street     TEXT NOT NULL DEFAULT '',
    vat_id     TEXT,
    telephone  TEXT NOT NULL,
    fax        TEXT,
    city       TEXT NOT NULL DEFAULT '',
    region     TEXT NOT NULL DEFAULT '',
    postcode   TEXT NOT NULL DEFAULT ''
);

CREATE INDEX IF NOT EXISTS idx_customer_addresses_parent ON customer_addresses (parent_id, id);
"""

_CUSTOMER_COLUMNS = "id, email, firstname, lastname, taxvat, default_billing, default_shipping"
_ADDRESS_COLUMNS = "id, parent_id, country_id, street, vat_id, telephone, fax, city, region, postcode"


class PostgresCustomerStore:
    """Customer repository over the ``customers`` and ``customer_addresses`` tables.

    Street lines are stored newline-joined in a single ``street`` column.
    Each repository call runs in its own transaction.
    """

    def __init__(self, conn: psycopg.Connection) -> None:
        self._conn = conn

    @classmethod
    def connect(cls, config: PostgresConfig) -> PostgresCustomerStore:
        """Open a connection using ``config.connection_string``."""
        try:
            conn = psycopg.connect(config.connection_string)
        except psycopg.Error as exc:
            raise PersistenceError(f"cannot connect to {config.host}:{config.port}: {exc}") from exc
        logger.info("Connected to PostgreSQL %s:%d/%s", config.host, config.port, config.database)
        return cls(conn)

    def close(self) -> None:
        self._conn.close()

    @contextmanager
    def _cursor(self) -> Iterator[psycopg.Cursor]:
        try:
            with self._conn.transaction():
                with self._conn.cursor() as cur:
                    yield cur
        except psycopg.Error as exc:
            raise PersistenceError(str(exc).strip()) from exc

    def create_schema(self) -> None:
        """Create tables and indexes if they do not exist."""
        with self._cursor() as cur:
            cur.execute(SCHEMA_SQL)

    def list_customers(self, after_id: int | None, limit: int) -> list[Customer]:
        with self._cursor() as cur:
            cur.execute(
                f"SELECT {_CUSTOMER_COLUMNS} FROM customers WHERE id > %s ORDER BY id LIMIT %s",
                (after_id if after_id is not None else -1, limit),
            )
            rows = cur.fetchall()
        return [_customer_from_row(row) for row in rows]

    def find_addresses(self, customer_id: int) -> list[Address]:
        with self._cursor() as cur:
            cur.execute(
                f"SELECT {_ADDRESS_COLUMNS} FROM customer_addresses WHERE parent_id = %s ORDER BY id",
                (customer_id,),
            )
            rows = cur.fetchall()
        return [_address_from_row(row) for row in rows]

    def save_address(self, address: Address) -> None:
        with self._cursor() as cur:
            cur.execute(
                f"""
                INSERT INTO customer_addresses ({_ADDRESS_COLUMNS})
                VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
                ON CONFLICT (id) DO UPDATE SET
                    parent_id = EXCLUDED.parent_id,
                    country_id = EXCLUDED.country_id,
                    street = EXCLUDED.street,
                    vat_id = EXCLUDED.vat_id,
                    telephone = EXCLUDED.telephone,
                    fax = EXCLUDED.fax,
                    city = EXCLUDED.city,
                    region = EXCLUDED.region,
                    postcode = EXCLUDED.postcode
                """,
                _address_params(address),
            )

    def delete_address(self, address_id: int) -> None:
        with self._cursor() as cur:
            cur.execute("DELETE FROM customer_addresses WHERE id = %s", (address_id,))
            if cur.rowcount == 0:
                raise EntityNotFoundError(f"No such entity with addressId = {address_id}")
            cur.execute(
                "UPDATE customers SET default_billing = NULL WHERE default_billing = %s",
                (address_id,),
            )
            cur.execute(
                "UPDATE customers SET default_shipping = NULL WHERE default_shipping = %s",
                (address_id,),
            )

    def save_customer(self, customer: Customer) -> None:
        with self._cursor() as cur:
            cur.execute(
                f"""
                INSERT INTO customers ({_CUSTOMER_COLUMNS})
                VALUES (%s, %s, %s, %s, %s, %s, %s)
                ON CONFLICT (id) DO UPDATE SET
                    email = EXCLUDED.email,
                    firstname = EXCLUDED.firstname,
                    lastname = EXCLUDED.lastname,
                    taxvat = EXCLUDED.taxvat,
                    default_billing = EXCLUDED.default_billing,
                    default_shipping = EXCLUDED.default_shipping
                """,
                (
                    customer.customer_id,
                    customer.email,
                    customer.firstname,
                    customer.lastname,
                    customer.tax_id,
                    customer.default_billing_address_id,
                    customer.default_shipping_address_id,
                ),
            )

    def delete_customer(self, customer: Customer, allow_hard_delete: bool = False) -> None:
        if not allow_hard_delete:
            raise HardDeleteNotAllowedError("Delete operation is forbidden for current area")
        with self._cursor() as cur:
            cur.execute("DELETE FROM customers WHERE id = %s", (customer.customer_id,))
            if cur.rowcount == 0:
                raise EntityNotFoundError(f"No such entity with customerId = {customer.customer_id}")


def _customer_from_row(row: tuple[Any, ...]) -> Customer:
    return Customer(
        customer_id=row[0],
        email=row[1],
        firstname=row[2] or "",
        lastname=row[3] or "",
        tax_id=row[4],
        default_billing_address_id=row[5],
        default_shipping_address_id=row[6],
    )


def _address_from_row(row: tuple[Any, ...]) -> Address:
    street = row[3] or ""
    return Address(
        address_id=row[0],
        customer_id=row[1],
        country_code=row[2],
        street_lines=street.split("\n") if street else [],
        vat_id=row[4],
        phone=row[5],
        fax=row[6],
        city=row[7] or "",
        region=row[8] or "",
        postcode=row[9] or "",
    )


def _address_params(address: Address) -> tuple[Any, ...]:
    return (
        address.address_id,
        address.customer_id,
        address.country_code,
        "\n".join(address.street_lines),
        address.vat_id,
        address.phone,
        address.fax,
        address.city,
        address.region,
        address.postcode,
    )
