"""Brazilian tax identifier (CPF/CNPJ) check-digit validation.

All functions are pure. ``validate_cpf`` and ``validate_cnpj`` expect a bare
digit string; ``validate_tax_id`` accepts any formatting and dispatches on
the number of digits left after stripping separators.
"""

from __future__ import annotations

import re

CPF_LENGTH = 11
CNPJ_LENGTH = 14

_NON_DIGIT = re.compile(r"[^0-9]")
_CPF_RE = re.compile(r"[0-9]{11}")
_CNPJ_RE = re.compile(r"[0-9]{14}")

# "00000000000" .. "99999999999" pass the arithmetic but are not issued
_COMMON_CPF = frozenset(str(d) * CPF_LENGTH for d in range(10))
_COMMON_CNPJ = frozenset(str(d) * CNPJ_LENGTH for d in range(10))


def only_digits(value: str | None) -> str:
    """Strip everything that is not an ASCII digit (``None`` -> ``""``)."""
    if value is None:
        return ""
    return _NON_DIGIT.sub("", str(value))


def _cpf_check_digit(digits: str) -> int:
    # weights run from len+1 down to 2
    total = sum(int(d) * w for d, w in zip(digits, range(len(digits) + 1, 1, -1)))
    rev = 11 - total % 11
    return 0 if rev in (10, 11) else rev


def validate_cpf(cpf: str) -> bool:
    """Validate an 11-digit CPF.

    Parameters
    ----------
    cpf : str
        CPF as a bare digit string.

    Returns
    -------
    bool
        True when both check digits match.
    """
    if not isinstance(cpf, str) or not _CPF_RE.fullmatch(cpf):
        return False
    if cpf in _COMMON_CPF:
        return False
    if _cpf_check_digit(cpf[:9]) != int(cpf[9]):
        return False
    return _cpf_check_digit(cpf[:10]) == int(cpf[10])


def _cnpj_weights(size: int) -> list[int]:
    """Cyclic CNPJ weights: start at ``size - 7``, count down, wrap 2 -> 9."""
    weights = []
    pos = size - 7
    for _ in range(size):
        weights.append(pos)
        pos -= 1
        if pos < 2:
            pos = 9
    return weights


def _cnpj_check_digit(digits: str) -> int:
    total = sum(int(d) * w for d, w in zip(digits, _cnpj_weights(len(digits))))
    remainder = total % 11
    return 0 if remainder < 2 else 11 - remainder


def validate_cnpj(cnpj: str) -> bool:
    """Validate a 14-digit CNPJ.

    Parameters
    ----------
    cnpj : str
        CNPJ as a bare digit string.

    Returns
    -------
    bool
        True when both check digits match.
    """
    if not isinstance(cnpj, str) or not _CNPJ_RE.fullmatch(cnpj):
        return False
    if cnpj in _COMMON_CNPJ:
        return False
    if _cnpj_check_digit(cnpj[:12]) != int(cnpj[12]):
        return False
    return _cnpj_check_digit(cnpj[:13]) == int(cnpj[13])


def validate_tax_id(value: str | None) -> bool:
    """Validate a CPF or CNPJ in any formatting.

    Non-digits are stripped first; 11 digits are checked as CPF, 14 as
    CNPJ, any other length is invalid.
    """
    document = only_digits(value)

    if len(document) == CNPJ_LENGTH:
        return validate_cnpj(document)

    if len(document) == CPF_LENGTH:
        return validate_cpf(document)

    return False
