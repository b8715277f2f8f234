"""Enumeration types for reconciliation outcomes."""

from enum import Enum


class AddressState(str, Enum):
    """Terminal state of one address after a reconciliation pass."""

    SKIPPED = "SKIPPED"  # not a BR address
    PURGED_INVALID_TAX = "PURGED_INVALID_TAX"
    PURGED_INVALID_STREET = "PURGED_INVALID_STREET"
    PURGED_ON_SAVE_FAILURE = "PURGED_ON_SAVE_FAILURE"
    COMMITTED = "COMMITTED"


class CustomerAction(str, Enum):
    RECONCILED = "RECONCILED"
    NO_ADDRESSES = "NO_ADDRESSES"
    SKIPPED_NO_TAX_ID = "SKIPPED_NO_TAX_ID"


class SanitizeResult(str, Enum):
    SAVED = "SAVED"
    SAVE_FAILED = "SAVE_FAILED"
    DELETED = "DELETED"
