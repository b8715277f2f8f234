"""Repository interface the reconcilers persist through."""

from typing import Protocol

from customer_hygiene.models.base import Address, Customer


class CustomerRepository(Protocol):
    """Persistence operations consumed by the reconcilers and batch driver.

    Every mutating call raises a ``PersistenceError`` subclass on failure.
    """

    def list_customers(self, after_id: int | None, limit: int) -> list[Customer]:
        """Return up to ``limit`` customers with id greater than ``after_id``, by id."""
        ...

    def find_addresses(self, customer_id: int) -> list[Address]:
        """Return the customer's addresses in storage order."""
        ...

    def save_address(self, address: Address) -> None: ...

    def delete_address(self, address_id: int) -> None: ...

    def save_customer(self, customer: Customer) -> None: ...

    def delete_customer(self, customer: Customer, allow_hard_delete: bool = False) -> None:
        """Remove a customer and its addresses.

        Raises ``HardDeleteNotAllowedError`` unless ``allow_hard_delete``.
        """
        ...
