"""
Dramatiq worker entry module.

Start with: dramatiq jobs.worker
"""

from loguru import logger

from jobs.broker import broker
from jobs.tasks import accrue_daily_earnings, notify_stale_payments

logger.add(
    "logs/worker.log",
    rotation="1 day",
    retention="7 days",
    level="INFO",
    encoding="utf-8",
)

__all__ = ["broker", "accrue_daily_earnings", "notify_stale_payments"]
