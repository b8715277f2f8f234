"""Per-customer default-address selection and address reconciliation."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from customer_hygiene.exceptions import InvalidEntityStateError
from customer_hygiene.models.base import Customer
from customer_hygiene.models.enums import AddressState, CustomerAction
from customer_hygiene.reconcilers.address import AddressReconciler, save_customer_or_log
from customer_hygiene.sinks.audit_csv import AuditLog
from customer_hygiene.store.base import CustomerRepository

logger = logging.getLogger(__name__)


@dataclass
class CustomerOutcome:
    """What a pass did to one customer."""

    action: CustomerAction
    address_states: list[AddressState] = field(default_factory=list)
    default_assigned: bool = False


class CustomerReconciler:
    """Make sure a customer has a default address, then reconcile its addresses.

    Parameters
    ----------
    repository : CustomerRepository
        Customer/address persistence.
    audit_log : AuditLog
        Destination for success/failure rows.
    address_reconciler : AddressReconciler | None
        Defaults to one built over the same repository and audit log.
    """

    def __init__(
        self,
        repository: CustomerRepository,
        audit_log: AuditLog,
        address_reconciler: AddressReconciler | None = None,
    ) -> None:
        self.repository = repository
        self.audit_log = audit_log
        self.address_reconciler = address_reconciler or AddressReconciler(repository, audit_log)

    def process_customer(self, customer: Customer) -> CustomerOutcome:
        """Reconcile one customer.

        A customer without a default billing address first gets its first
        address as default, then goes through the regular pass once.
        """
        default_assigned = False
        if not customer.has_default_billing:
            if not self.set_default_address(customer):
                return CustomerOutcome(CustomerAction.NO_ADDRESSES)
            if not customer.has_default_billing:
                raise InvalidEntityStateError(
                    f"customer {customer.customer_id} still has no default billing address"
                )
            default_assigned = True

        if not customer.has_tax_id:
            # Tax-id-less customers with a default address are left alone.
            return CustomerOutcome(CustomerAction.SKIPPED_NO_TAX_ID, default_assigned=default_assigned)

        states = self._process_addresses(customer)
        return CustomerOutcome(CustomerAction.RECONCILED, states, default_assigned)

    def set_default_address(self, customer: Customer) -> bool:
        """Make the first stored address the default billing and shipping one.

        Returns
        -------
        bool
            False when the customer has no addresses.
        """
        addresses = self.repository.find_addresses(customer.customer_id)
        if not addresses:
            return False

        customer.set_default_address(addresses[0].address_id)
        save_customer_or_log(self.repository, self.audit_log, customer)
        logger.debug("Customer %s default address set to %s", customer.customer_id, addresses[0].address_id)
        return True

    def _process_addresses(self, customer: Customer) -> list[AddressState]:
        states = []
        for address in self.repository.find_addresses(customer.customer_id):
            states.append(self.address_reconciler.reconcile(customer, address))
        return states
