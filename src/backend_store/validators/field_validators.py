"""
Small, reusable checks shared by settings normalisation and model validation.

Model `validate()` methods call these helpers and raise `InvalidDataError`
naming the offending field; the helpers themselves never raise.
"""

import re

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
PHONE_PATTERN = re.compile(r"^\(\d{2}\) \d{4}-\d{4}$")
CELL_PATTERN = re.compile(r"^\(\d{2}\) \d{5}-\d{4}$")
POSTAL_CODE_PATTERN = re.compile(r"^\d{5}-?\d{3}$")
CPF_PATTERN = re.compile(r"^\d{3}\.?\d{3}\.?\d{3}-?\d{2}$")
CNPJ_PATTERN = re.compile(r"^\d{2}\.?\d{3}\.?\d{3}/?\d{4}-?\d{2}$")


def to_uppercase(value: str | None) -> str | None:
    if value is None:
        return None
    return value.upper()


def to_lowercase(value: str | None) -> str | None:
    if value is None:
        return None
    return value.lower()


def is_blank(value: str | None) -> bool:
    """True for None, empty strings and whitespace-only strings."""
    return value is None or not value.strip()


def length_between(value: str | None, minimum: int, maximum: int) -> bool:
    if value is None:
        return False
    size = len(value.strip())
    return minimum <= size <= maximum


def is_valid_email(value: str | None) -> bool:
    return bool(value) and len(value) <= 100 and EMAIL_PATTERN.match(value) is not None


def is_valid_phone(value: str | None) -> bool:
    return bool(value) and PHONE_PATTERN.match(value) is not None


def is_valid_cell(value: str | None) -> bool:
    return bool(value) and CELL_PATTERN.match(value) is not None


def is_valid_postal_code(value: str | None) -> bool:
    return bool(value) and POSTAL_CODE_PATTERN.match(value) is not None


def is_valid_cpf(value: str | None) -> bool:
    return bool(value) and CPF_PATTERN.match(value) is not None


def is_valid_cnpj(value: str | None) -> bool:
    return bool(value) and CNPJ_PATTERN.match(value) is not None


def is_positive_id(value: int | None) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0
