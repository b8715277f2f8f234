"""Reconciliation passes over customer records."""

from customer_hygiene.reconcilers.address import AddressReconciler
from customer_hygiene.reconcilers.customer import CustomerOutcome, CustomerReconciler
from customer_hygiene.reconcilers.sanitize import SanitizeConsumer

__all__ = ["AddressReconciler", "CustomerOutcome", "CustomerReconciler", "SanitizeConsumer"]
