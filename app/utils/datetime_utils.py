"""
Datetime utilities.

Provides timezone-aware datetime functions.
"""

from datetime import UTC, date, datetime, time
from zoneinfo import ZoneInfo

from app.config.settings import settings


def utc_now() -> datetime:
    """
    Get current UTC datetime with timezone info.

    Returns:
        Current datetime in UTC with timezone awareness
    """
    return datetime.now(UTC)


def accrual_zone() -> ZoneInfo:
    """Timezone in which calendar days are counted for accrual."""
    return ZoneInfo(settings.accrual_timezone)


def to_local_date(moment: datetime, tz: ZoneInfo | None = None) -> date:
    """
    Convert a moment to a calendar date in the accrual timezone.

    Naive datetimes are treated as UTC.

    Args:
        moment: Datetime to convert
        tz: Target timezone (defaults to the accrual timezone)

    Returns:
        Calendar date
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return moment.astimezone(tz or accrual_zone()).date()


def local_midnight(day: date, tz: ZoneInfo | None = None) -> datetime:
    """Midnight of a calendar date in the accrual timezone, as aware datetime."""
    return datetime.combine(day, time.min, tzinfo=tz or accrual_zone())


def format_datetime(moment: datetime | None, tz: ZoneInfo | None = None) -> str:
    """Format a moment for display (local time, minutes precision)."""
    if moment is None:
        return "-"
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return moment.astimezone(tz or accrual_zone()).strftime("%Y-%m-%d %H:%M")
