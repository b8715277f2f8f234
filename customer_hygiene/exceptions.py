"""Custom exception hierarchy for customer-hygiene."""


class HygieneError(Exception):
    """Base exception for all customer-hygiene errors."""


class ValidationError(HygieneError):
    """Raised when an identifier or address fails validation."""


class PersistenceError(HygieneError):
    """Raised when saving or deleting a record fails."""


class EntityNotFoundError(PersistenceError):
    """Raised when a referenced entity does not exist."""


class ReferentialIntegrityError(EntityNotFoundError):
    """Raised when a parent reference is violated."""


class HardDeleteNotAllowedError(PersistenceError):
    """Raised when a customer delete is attempted without authorization."""


class AuditWriteError(HygieneError):
    """Raised when the audit log cannot be written."""


class InvalidEntityStateError(HygieneError):
    """Raised when an entity is in an invalid state for the operation."""


class ConfigurationError(HygieneError):
    """Raised when configuration is invalid or missing."""


# Errors the batch driver absorbs per record; anything else halts the run.
RECOVERABLE_ERRORS: tuple[type[HygieneError], ...] = (
    ValidationError,
    PersistenceError,
    AuditWriteError,
)
