"""Synthetic data generators."""

from customer_hygiene.generators.customer import DefectRates, DirtyCustomerGenerator

__all__ = ["DefectRates", "DirtyCustomerGenerator"]
