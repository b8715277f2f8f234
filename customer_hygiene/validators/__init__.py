"""Identifier validators."""

from customer_hygiene.validators.tax_id import (
    only_digits,
    validate_cnpj,
    validate_cpf,
    validate_tax_id,
)

__all__ = ["only_digits", "validate_cnpj", "validate_cpf", "validate_tax_id"]
