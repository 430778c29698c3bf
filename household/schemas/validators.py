# household/schemas/validators.py - Shared field normalisers
from typing import Any

from household.core.config import settings


def blank_to_none(v: Any) -> Any:
    """Strip strings and store empty ones as null."""
    if isinstance(v, str):
        v = v.strip()
        return v or None
    return v


def require_text(v: str, field_name: str) -> str:
    if not v or not v.strip():
        raise ValueError(f"{field_name} cannot be empty or whitespace")
    return v.strip()


def validate_income_person(v: str) -> str:
    """Income and deductions may belong to either household person or be joint."""
    v = v.strip().lower()
    if v not in settings.income_persons:
        raise ValueError(f"person must be one of: {settings.income_persons}")
    return v


def validate_household_person(v: str) -> str:
    """Super contributions always belong to one person."""
    v = v.strip().lower()
    if v not in settings.household_persons:
        raise ValueError(f"person must be one of: {settings.household_persons}")
    return v
