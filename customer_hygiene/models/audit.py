"""Audit records and transient validation outcomes."""

from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True)
class AuditSuccess:
    """Address committed with a formatted tax id and phone."""

    customer_id: int
    email: str | None
    vat_id: str | None
    phone: str | None

    is_success: ClassVar[bool] = True

    def fields(self) -> list[str]:
        return _render([self.customer_id, self.email, self.vat_id, self.phone])


@dataclass(frozen=True)
class AuditFailure:
    """Record purged or left unsaved, with the reason."""

    customer_id: int
    email: str | None
    reason: str

    is_success: ClassVar[bool] = False

    def fields(self) -> list[str]:
        return _render([self.customer_id, self.email, self.reason])


AuditRecord = AuditSuccess | AuditFailure


def _render(values: list[object]) -> list[str]:
    return ["" if value is None else str(value) for value in values]


@dataclass(frozen=True)
class ValidationOutcome:
    """Result of a single validation step; never persisted."""

    valid: bool
    reason: str | None = None

    @classmethod
    def ok(cls) -> "ValidationOutcome":
        return cls(valid=True)

    @classmethod
    def invalid(cls, reason: str) -> "ValidationOutcome":
        return cls(valid=False, reason=reason)

    def __bool__(self) -> bool:
        return self.valid
