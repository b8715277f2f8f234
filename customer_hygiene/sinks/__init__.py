"""Output sinks for reconciliation results."""

from customer_hygiene.sinks.audit_csv import FAILURE_HEADER, SUCCESS_HEADER, AuditLog

__all__ = ["AuditLog", "FAILURE_HEADER", "SUCCESS_HEADER"]
