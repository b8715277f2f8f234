"""Name and e-mail sanitation pass."""

from __future__ import annotations

import logging
import re
import unicodedata

from customer_hygiene.exceptions import PersistenceError
from customer_hygiene.models.audit import AuditFailure
from customer_hygiene.models.base import Customer
from customer_hygiene.models.enums import SanitizeResult
from customer_hygiene.sinks.audit_csv import AuditLog
from customer_hygiene.store.base import CustomerRepository

logger = logging.getLogger(__name__)

_NAME_DISALLOWED = re.compile(r"[^a-zA-Z0-9áàâãéèêíìóòôõúùçñÁÀÂÃÉÈÊÍÌÓÒÔÕÚÙÇ ]")


def sanitize_name(value: str | None) -> str:
    """Drop symbols, keep Portuguese letters, then fold them to ASCII."""
    kept = _NAME_DISALLOWED.sub("", value or "")
    decomposed = unicodedata.normalize("NFKD", kept)
    return decomposed.encode("ascii", "ignore").decode("ascii")


def sanitize_email(value: str | None) -> str:
    return (value or "").strip().lower()


class SanitizeConsumer:
    """Normalize customer names and e-mails, optionally deleting unsavable ones.

    Parameters
    ----------
    repository : CustomerRepository
        Customer persistence.
    audit_log : AuditLog
        Failed saves are written to the failure stream.
    """

    def __init__(self, repository: CustomerRepository, audit_log: AuditLog) -> None:
        self.repository = repository
        self.audit_log = audit_log

    def process_customer(self, customer: Customer, delete_option: bool = False) -> SanitizeResult:
        """Sanitize and save one customer.

        Parameters
        ----------
        customer : Customer
            Mutated in place.
        delete_option : bool
            Hard-delete the customer when the save fails.

        Returns
        -------
        SanitizeResult
            Outcome of the save (and delete, if attempted).

        Raises
        ------
        PersistenceError
            If the hard delete itself fails.
        """
        firstname = sanitize_name(customer.firstname)
        lastname = sanitize_name(customer.lastname) or firstname

        customer.firstname = firstname
        customer.lastname = lastname
        customer.email = sanitize_email(customer.email)

        try:
            self.repository.save_customer(customer)
        except PersistenceError as exc:
            self.audit_log.record(AuditFailure(customer.customer_id, customer.email, str(exc)))
            if not delete_option:
                logger.warning("Customer %s not saved: %s", customer.customer_id, exc)
                return SanitizeResult.SAVE_FAILED

            self.repository.delete_customer(customer, allow_hard_delete=True)
            logger.info("Deleted customer %s after failed save: %s", customer.customer_id, exc)
            return SanitizeResult.DELETED

        return SanitizeResult.SAVED
