"""Input validation utilities."""

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from app.config.business_constants import (
    EMAIL_PATTERN,
    MONEY_QUANTUM,
    PAYOUT_PLATFORMS,
    USERNAME_PATTERN,
)

_USERNAME_RE = re.compile(USERNAME_PATTERN)
_EMAIL_RE = re.compile(EMAIL_PATTERN)
_ACCOUNT_NUMBER_RE = re.compile(r"^\+?[0-9][0-9 \-]{5,30}$")


def normalize_username(username: str | None) -> str:
    """Strip whitespace and a leading @ from a username."""
    if not username:
        return ""
    return username.strip().lstrip("@")


def validate_username(username: str | None) -> bool:
    """
    Validate username format.

    3 to 32 characters: latin letters, digits and underscore.
    """
    return bool(_USERNAME_RE.match(normalize_username(username)))


def validate_email(email: str | None) -> bool:
    """Validate basic email shape (local@domain.tld)."""
    if not email:
        return False
    return bool(_EMAIL_RE.match(email.strip()))


def validate_account_number(number: str | None) -> bool:
    """Validate mobile wallet / bank account number (digits, spaces, dashes)."""
    if not number:
        return False
    return bool(_ACCOUNT_NUMBER_RE.match(number.strip()))


def normalize_platform(platform: str | None) -> str | None:
    """
    Match a payout platform name case-insensitively.

    Returns:
        Canonical platform name or None if not accepted
    """
    if not platform:
        return None
    wanted = platform.strip().lower()
    for name in PAYOUT_PLATFORMS:
        if name.lower() == wanted:
            return name
    return None


def parse_amount(text: Decimal | str | None) -> Decimal | None:
    """
    Parse a user-entered amount.

    Accepts thousands separators and a decimal point. The result is rounded
    half-up to cents, the scale of every money column.

    Returns:
        Finite Decimal or None if the text is not a number
    """
    if text is None:
        return None
    cleaned = str(text).strip().replace(",", "").replace(" ", "")
    if not cleaned:
        return None
    try:
        value = Decimal(cleaned)
    except InvalidOperation:
        return None
    if not value.is_finite():
        return None
    try:
        return value.quantize(MONEY_QUANTUM, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        # too many digits for the decimal context
        return None
