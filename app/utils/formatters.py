"""
Formatters utility.

Utility functions for formatting data in the app layer.
"""

from decimal import ROUND_HALF_UP, Decimal

from app.config.business_constants import CURRENCY, MONEY_QUANTUM


def format_amount(amount: Decimal | int | float | None) -> str:
    """
    Format money amount with thousands separator.

    Whole amounts are shown without decimals.

    Args:
        amount: Amount to format

    Returns:
        Formatted string like "6,000" or "1,250.50"
    """
    if amount is None:
        amount = Decimal("0")
    value = Decimal(str(amount)).quantize(MONEY_QUANTUM, rounding=ROUND_HALF_UP)
    if value == value.to_integral_value():
        return f"{int(value):,}"
    return f"{value:,.2f}"


def format_pkr(amount: Decimal | int | float | None) -> str:
    """Format amount in the display currency, e.g. "PKR 6,000"."""
    return f"{CURRENCY} {format_amount(amount)}"


def format_user_identifier(user) -> str:
    """
    Format user as @username or ID:telegram_id.

    Args:
        user: Object with username and telegram_id attributes

    Returns:
        Formatted string like "@username" or "ID:123456"
    """
    if hasattr(user, 'username') and user.username:
        return f"@{user.username}"
    if hasattr(user, 'telegram_id'):
        return f"ID:{user.telegram_id}"
    return "Unknown"


def mask_account_number(number: str | None) -> str:
    """Mask all but the last 4 digits of an account number."""
    if not number:
        return "-"
    if len(number) <= 4:
        return number
    return "*" * (len(number) - 4) + number[-4:]

