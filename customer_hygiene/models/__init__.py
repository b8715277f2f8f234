"""Domain models for customer hygiene."""

from customer_hygiene.models.audit import (
    AuditFailure,
    AuditRecord,
    AuditSuccess,
    ValidationOutcome,
)
from customer_hygiene.models.base import Address, Customer
from customer_hygiene.models.enums import AddressState, CustomerAction, SanitizeResult

__all__ = [
    "Address",
    "AddressState",
    "AuditFailure",
    "AuditRecord",
    "AuditSuccess",
    "Customer",
    "CustomerAction",
    "SanitizeResult",
    "ValidationOutcome",
]
