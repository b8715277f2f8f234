"""In-memory customer store with referential integrity."""

import copy
from dataclasses import dataclass, field

from customer_hygiene.exceptions import (
    EntityNotFoundError,
    HardDeleteNotAllowedError,
    PersistenceError,
    ReferentialIntegrityError,
)
from customer_hygiene.models.base import Address, Customer


@dataclass
class InMemoryCustomerStore:
    """In-memory store for customers and addresses with relationship tracking.

    Enforces the host constraints that make saves fail in practice: an
    address needs a telephone and an existing parent, a customer needs a
    non-empty e-mail that no other customer uses.
    """

    customers: dict[int, Customer] = field(default_factory=dict)
    addresses: dict[int, Address] = field(default_factory=dict)

    # Relationship index, insertion ordered
    _customer_addresses: dict[int, list[int]] = field(default_factory=dict)

    def add_customer(self, customer: Customer) -> None:
        """Add a customer to the store without constraint checks."""
        self.customers[customer.customer_id] = customer
        self._customer_addresses.setdefault(customer.customer_id, [])

    def add_address(self, address: Address) -> None:
        """Add an address to the store without constraint checks."""
        if address.customer_id not in self.customers:
            raise ReferentialIntegrityError(f"Customer {address.customer_id} not found")

        self.addresses[address.address_id] = address
        ids = self._customer_addresses[address.customer_id]
        if address.address_id not in ids:
            ids.append(address.address_id)

    def list_customers(self, after_id: int | None, limit: int) -> list[Customer]:
        ids = sorted(cid for cid in self.customers if after_id is None or cid > after_id)
        return [copy.deepcopy(self.customers[cid]) for cid in ids[:limit]]

    def find_addresses(self, customer_id: int) -> list[Address]:
        # copies, so a failed save leaves the stored record untouched
        return [
            copy.deepcopy(self.addresses[aid])
            for aid in self._customer_addresses.get(customer_id, [])
        ]

    def save_address(self, address: Address) -> None:
        if not address.phone:
            raise PersistenceError('"telephone" is required. Enter and try again.')
        self.add_address(copy.deepcopy(address))

    def delete_address(self, address_id: int) -> None:
        address = self.addresses.pop(address_id, None)
        if address is None:
            raise EntityNotFoundError(f"No such entity with addressId = {address_id}")

        self._customer_addresses[address.customer_id].remove(address_id)

        # Host platform clears dangling default references on delete
        customer = self.customers.get(address.customer_id)
        if customer is not None:
            if customer.default_billing_address_id == address_id:
                customer.default_billing_address_id = None
            if customer.default_shipping_address_id == address_id:
                customer.default_shipping_address_id = None

    def save_customer(self, customer: Customer) -> None:
        if not customer.email:
            raise PersistenceError('"Email" is a required value.')
        for other in self.customers.values():
            if other.customer_id != customer.customer_id and other.email == customer.email:
                raise PersistenceError(
                    "A customer with the same email address already exists in an associated website."
                )
        for address_id in (customer.default_billing_address_id, customer.default_shipping_address_id):
            if address_id is not None and address_id not in self.addresses:
                raise ReferentialIntegrityError(f"Address {address_id} not found")

        self.add_customer(copy.deepcopy(customer))

    def delete_customer(self, customer: Customer, allow_hard_delete: bool = False) -> None:
        if not allow_hard_delete:
            raise HardDeleteNotAllowedError("Delete operation is forbidden for current area")
        if customer.customer_id not in self.customers:
            raise EntityNotFoundError(f"No such entity with customerId = {customer.customer_id}")

        for address_id in self._customer_addresses.pop(customer.customer_id, []):
            self.addresses.pop(address_id, None)
        del self.customers[customer.customer_id]

    def get_stats(self) -> dict[str, int]:
        """Get statistics about stored data."""
        return {
            "customers": len(self.customers),
            "addresses": len(self.addresses),
        }
