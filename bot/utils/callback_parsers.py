"""
Helpers for safe parsing of callback data.

Extract IDs from Telegram callback_data with validation.
"""


def parse_callback_id(callback_data: str, prefix: str) -> int | None:
    """
    Safely extract an ID from prefixed callback data.

    Args:
        callback_data: Callback data string (e.g. "pay_ok_12345")
        prefix: Expected prefix (e.g. "pay_ok_")

    Returns:
        int | None: Extracted ID or None on error

    Examples:
        >>> parse_callback_id("pay_ok_123", "pay_ok_")
        123
        >>> parse_callback_id("pay_ok_abc", "pay_ok_")
        None
        >>> parse_callback_id("wd_ok_123", "pay_ok_")
        None
    """
    if not callback_data or not isinstance(callback_data, str):
        return None

    if not callback_data.startswith(prefix):
        return None

    id_str = callback_data[len(prefix):]

    if not id_str:
        return None

    if not id_str.isdigit():
        return None

    try:
        return int(id_str)
    except (ValueError, OverflowError):
        return None


def parse_callback_value(callback_data: str, prefix: str) -> str | None:
    """
    Extract the text value after a prefix.

    Args:
        callback_data: Callback data string (e.g. "payout_platform_JazzCash")
        prefix: Expected prefix

    Returns:
        Value or None if the prefix does not match or value is empty
    """
    if not callback_data or not callback_data.startswith(prefix):
        return None
    value = callback_data[len(prefix):]
    return value or None
