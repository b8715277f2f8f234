"""Per-address validation, formatting and persistence."""

from __future__ import annotations

import logging

from customer_hygiene.exceptions import PersistenceError
from customer_hygiene.formatting import format_phone, format_tax_id
from customer_hygiene.models.audit import AuditFailure, AuditSuccess, ValidationOutcome
from customer_hygiene.models.base import Address, Customer
from customer_hygiene.models.enums import AddressState
from customer_hygiene.sinks.audit_csv import AuditLog
from customer_hygiene.store.base import CustomerRepository
from customer_hygiene.validators.tax_id import validate_tax_id

logger = logging.getLogger(__name__)

BRAZIL = "BR"
MIN_STREET_LINES = 3


def check_tax_id(tax_id: str | None) -> ValidationOutcome:
    if validate_tax_id(tax_id):
        return ValidationOutcome.ok()
    return ValidationOutcome.invalid(f"CPF/CNPJ invalid: {tax_id or ''}")


def check_street(street_lines: list[str]) -> ValidationOutcome:
    """Brazilian addresses need street, number and complement/neighborhood."""
    if len(street_lines) >= MIN_STREET_LINES:
        return ValidationOutcome.ok()
    return ValidationOutcome.invalid(f"Street Address invalid: {','.join(street_lines)}")


class AddressReconciler:
    """Validate one Brazilian address and either commit or purge it.

    The address walks ValidateTaxId -> ValidateStreet -> FormatPhone ->
    Persist and stops at the first failing step. Every terminal state
    except ``SKIPPED`` leaves exactly one audit row.

    Parameters
    ----------
    repository : CustomerRepository
        Where addresses and customers are saved or deleted.
    audit_log : AuditLog
        Destination for success/failure rows.
    """

    def __init__(self, repository: CustomerRepository, audit_log: AuditLog) -> None:
        self.repository = repository
        self.audit_log = audit_log

    def reconcile(self, customer: Customer, address: Address) -> AddressState:
        """Run the state machine for one (customer, address) pair.

        Returns
        -------
        AddressState
            Terminal state reached.
        """
        if address.country_code != BRAZIL:
            return AddressState.SKIPPED

        outcome = check_tax_id(customer.tax_id)
        if not outcome:
            self._purge(customer, address, outcome.reason)
            return AddressState.PURGED_INVALID_TAX

        outcome = check_street(address.street_lines)
        if not outcome:
            self._purge(customer, address, outcome.reason)
            return AddressState.PURGED_INVALID_STREET

        address.phone, address.fax = format_phone(address.phone, address.fax)
        address.vat_id = format_tax_id(customer.tax_id)

        try:
            self.repository.save_address(address)
        except PersistenceError as exc:
            self._purge(customer, address, str(exc))
            return AddressState.PURGED_ON_SAVE_FAILURE

        self.audit_log.record(
            AuditSuccess(customer.customer_id, customer.email, address.vat_id, address.phone)
        )

        customer.set_default_address(address.address_id)
        save_customer_or_log(self.repository, self.audit_log, customer)
        return AddressState.COMMITTED

    def _purge(self, customer: Customer, address: Address, reason: str | None) -> None:
        try:
            self.repository.delete_address(address.address_id)
        except PersistenceError as exc:
            logger.warning("Could not delete address %s: %s", address.address_id, exc)
        else:
            logger.info(
                "Purged address %s of customer %s: %s",
                address.address_id,
                customer.customer_id,
                reason,
            )
        self.audit_log.record(AuditFailure(customer.customer_id, customer.email, reason or ""))


def save_customer_or_log(
    repository: CustomerRepository,
    audit_log: AuditLog,
    customer: Customer,
) -> bool:
    """Persist a customer; a failure goes to the failure log instead of raising."""
    try:
        repository.save_customer(customer)
    except PersistenceError as exc:
        logger.warning("Could not save customer %s: %s", customer.customer_id, exc)
        audit_log.record(AuditFailure(customer.customer_id, customer.email, str(exc)))
        return False
    return True
