"""Dramatiq actors."""

from jobs.tasks.daily_accrual import accrue_daily_earnings
from jobs.tasks.stale_payments import notify_stale_payments

__all__ = ["accrue_daily_earnings", "notify_stale_payments"]
