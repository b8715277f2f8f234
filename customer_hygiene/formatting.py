"""Canonical display formats for Brazilian tax ids and phone numbers."""

from __future__ import annotations

from customer_hygiene.exceptions import ValidationError
from customer_hygiene.validators.tax_id import CNPJ_LENGTH, CPF_LENGTH, only_digits

MOBILE_LENGTH = 11


def format_tax_id(valid_digits: str) -> str:
    """Format an already validated CPF or CNPJ.

    Check digits are not re-validated here.

    Parameters
    ----------
    valid_digits : str
        CPF (11 digits) or CNPJ (14 digits), separators allowed.

    Returns
    -------
    str
        ``DDD.DDD.DDD-DD`` for CPF, ``DD.DDD.DDD/DDDD-DD`` for CNPJ.

    Raises
    ------
    ValidationError
        If the digit count is neither 11 nor 14.
    """
    raw = only_digits(valid_digits)
    if len(raw) == CPF_LENGTH:
        return f"{raw[:3]}.{raw[3:6]}.{raw[6:9]}-{raw[9:]}"
    if len(raw) == CNPJ_LENGTH:
        return f"{raw[:2]}.{raw[2:5]}.{raw[5:8]}/{raw[8:12]}-{raw[12:]}"
    raise ValidationError(f"tax id must have 11 or 14 digits, got {len(raw)}")


def format_mobile(digits: str) -> str:
    """Format 11 digits (area code + 9-digit mobile) as ``(DD)DDDDD-DDDD``."""
    return f"({digits[:2]}){digits[2:7]}-{digits[7:]}"


def format_phone(raw_phone: str | None, raw_fax: str | None) -> tuple[str, str]:
    """Normalize the phone/fax pair of an address.

    Two sequential steps, both evaluated against the stripped input phone:

    1. phone is not a mobile number but fax is: the formatted fax becomes
       the phone and the old phone digits move to fax.
    2. phone is a mobile number: it is formatted in place.

    Anything neither step touches is returned as its bare digits.

    Returns
    -------
    tuple[str, str]
        The new ``(phone, fax)``.
    """
    phone = only_digits(raw_phone)
    fax = only_digits(raw_fax)
    new_phone, new_fax = phone, fax

    if len(phone) != MOBILE_LENGTH and len(fax) == MOBILE_LENGTH:
        new_phone = format_mobile(fax)
        new_fax = phone

    if len(phone) == MOBILE_LENGTH:
        new_phone = format_mobile(phone)

    return new_phone, new_fax
