"""
Input validation for user, category and record payloads.

All functions are pure. They return the cleaned value or raise BadInput
before any storage access happens.
"""
import math
import re
from typing import Optional
from app.core.errors import BadInput

# Pagination
DEFAULT_CATEGORIES_LIMIT = 100
DEFAULT_RECORDS_LIMIT = 500
MAX_LIMIT = 1000
MAX_OFFSET = 1_000_000

# Field limits
MAX_CATEGORY_NAME_LENGTH = 100
MAX_RECORD_NAME_LENGTH = 255
MAX_CATEGORY_ID_LENGTH = 100
MAX_SEARCH_TERM_LENGTH = 100
MIN_USERNAME_LENGTH = 4
MAX_USERNAME_LENGTH = 50
MIN_PASSWORD_LENGTH = 6

USERNAME_PATTERN = re.compile(r"[A-Za-z0-9_-]+")


def validate_length(value: str, field_name: str, max_length: int) -> str:
    """
    Check that a string is non-empty after trimming and no longer than max_length.

    Returns the trimmed value, which is what callers should store.
    """
    trimmed = value.strip()
    if not trimmed:
        raise BadInput(f"{field_name} cannot be empty", field=field_name)
    if len(trimmed) > max_length:
        raise BadInput(
            f"{field_name} must be less than {max_length} characters",
            field=field_name,
        )
    return trimmed


def validate_amount(amount: float) -> float:
    """Reject zero and non-finite amounts. Negative amounts (refunds, corrections) are allowed."""
    if not math.isfinite(amount):
        raise BadInput("Record amount must be a finite number", field="amount")
    if amount == 0.0:
        raise BadInput("Record amount cannot be zero", field="amount")
    return amount


def validate_limit(limit: Optional[int], default: int, max_limit: int = MAX_LIMIT) -> int:
    if limit is None:
        return default
    if limit <= 0:
        raise BadInput("Limit must be greater than 0", field="limit")
    if limit > max_limit:
        raise BadInput(f"Limit cannot exceed {max_limit}", field="limit")
    return limit


def validate_offset(offset: Optional[int], max_offset: int = MAX_OFFSET) -> int:
    if offset is None:
        return 0
    if offset < 0:
        raise BadInput("Offset cannot be negative", field="offset")
    if offset > max_offset:
        raise BadInput(f"Offset cannot exceed {max_offset}", field="offset")
    return offset


def validate_categories_limit(limit: Optional[int]) -> int:
    return validate_limit(limit, DEFAULT_CATEGORIES_LIMIT)


def validate_records_limit(limit: Optional[int]) -> int:
    return validate_limit(limit, DEFAULT_RECORDS_LIMIT)


def validate_category_name(name: str) -> str:
    return validate_length(name, "Category name", MAX_CATEGORY_NAME_LENGTH)


def validate_record_name(name: str) -> str:
    return validate_length(name, "Record name", MAX_RECORD_NAME_LENGTH)


def validate_category_id(category_id: str) -> str:
    return validate_length(category_id, "Category ID", MAX_CATEGORY_ID_LENGTH)


def validate_search_term(search: Optional[str]) -> Optional[str]:
    """Blank search terms mean "no filter"."""
    if search is None or not search.strip():
        return None
    return validate_length(search, "Search term", MAX_SEARCH_TERM_LENGTH)


def validate_username(username: str) -> str:
    if not username:
        raise BadInput("Username cannot be empty", field="username")
    if not MIN_USERNAME_LENGTH <= len(username) <= MAX_USERNAME_LENGTH:
        raise BadInput(
            f"Username must be between {MIN_USERNAME_LENGTH} and "
            f"{MAX_USERNAME_LENGTH} characters",
            field="username",
        )
    if not USERNAME_PATTERN.fullmatch(username):
        raise BadInput(
            "Username may only contain letters, digits, '_' and '-'",
            field="username",
        )
    return username


def validate_password(password: str) -> str:
    if len(password) < MIN_PASSWORD_LENGTH:
        raise BadInput(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
            field="password",
        )
    return password
