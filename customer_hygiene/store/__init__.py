"""Customer repositories."""

from customer_hygiene.store.base import CustomerRepository
from customer_hygiene.store.json_file import JsonFileCustomerStore
from customer_hygiene.store.memory import InMemoryCustomerStore

__all__ = ["CustomerRepository", "InMemoryCustomerStore", "JsonFileCustomerStore"]
