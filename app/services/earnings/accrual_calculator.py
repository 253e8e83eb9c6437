"""
Daily return accrual calculator.

Counts whole calendar days elapsed since the last accrual anchor and
produces the entries to credit. No database access.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from decimal import Decimal
from zoneinfo import ZoneInfo

from app.utils.datetime_utils import local_midnight, to_local_date


@dataclass
class AccrualResult:
    """Outcome of an accrual calculation."""

    days: int
    daily_amount: Decimal
    entry_dates: list[datetime] = field(default_factory=list)
    new_anchor: datetime | None = None

    @property
    def total(self) -> Decimal:
        """Total amount to credit."""
        return self.daily_amount * self.days

    @property
    def is_empty(self) -> bool:
        """True when nothing has to be credited."""
        return self.days <= 0


def calculate_accrual(
    anchor: datetime,
    now: datetime,
    daily_amount: Decimal,
    tz: ZoneInfo | None = None,
) -> AccrualResult:
    """
    Calculate the daily returns due between anchor and now.

    Both moments are truncated to calendar dates in the accrual timezone.
    For N elapsed days, N entries dated anchor_date + 1 .. anchor_date + N
    (local midnight) are produced, and the new anchor is today's midnight.

    Args:
        anchor: Last accrual moment (or registration moment)
        now: Current moment
        daily_amount: Amount credited per day
        tz: Accrual timezone (defaults to configured one)

    Returns:
        AccrualResult (days == 0 when nothing is due)
    """
    anchor_date = to_local_date(anchor, tz)
    today = to_local_date(now, tz)
    days = (today - anchor_date).days

    if days <= 0:
        return AccrualResult(days=0, daily_amount=daily_amount)

    entry_dates = [
        local_midnight(anchor_date + timedelta(days=i), tz)
        for i in range(1, days + 1)
    ]
    return AccrualResult(
        days=days,
        daily_amount=daily_amount,
        entry_dates=entry_dates,
        new_anchor=local_midnight(today, tz),
    )
