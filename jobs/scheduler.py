"""
Task scheduler.

Enqueues periodic dramatiq tasks:
- daily accrual shortly after local midnight
- stale payment check every minute
"""

import asyncio
import sys

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger
from apscheduler.triggers.interval import IntervalTrigger
from loguru import logger

from app.config.settings import settings
from jobs.broker import broker  # noqa: F401
from jobs.tasks import accrue_daily_earnings, notify_stale_payments

STALE_PAYMENT_CHECK_SECONDS = 60


def create_scheduler() -> AsyncIOScheduler:
    """Build the scheduler with all periodic jobs."""
    scheduler = AsyncIOScheduler(timezone=settings.accrual_timezone)

    scheduler.add_job(
        accrue_daily_earnings.send,
        trigger=CronTrigger(hour=0, minute=5, timezone=settings.accrual_timezone),
        id="daily_accrual",
        name="Daily accrual",
        replace_existing=True,
        misfire_grace_time=3600,
        coalesce=True,
    )
    scheduler.add_job(
        notify_stale_payments.send,
        trigger=IntervalTrigger(seconds=STALE_PAYMENT_CHECK_SECONDS),
        id="stale_payments",
        name="Stale payment notices",
        replace_existing=True,
        coalesce=True,
        max_instances=1,
    )
    return scheduler


async def main() -> None:
    """Start the scheduler and keep it running."""
    logger.add(
        "logs/scheduler.log",
        rotation="1 day",
        retention="7 days",
        level="INFO",
        encoding="utf-8",
    )

    scheduler = create_scheduler()
    scheduler.start()
    for job in scheduler.get_jobs():
        logger.info(f"Scheduled job {job.id}: next run {job.next_run_time}")

    try:
        await asyncio.Event().wait()
    finally:
        scheduler.shutdown(wait=False)
        logger.info("Scheduler stopped")


def run() -> None:
    """Console entry point."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Scheduler stopped by user")
    except Exception as e:
        logger.exception(f"Scheduler crashed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    run()
