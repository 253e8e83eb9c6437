"""
Daily accrual task.

Credits pending daily returns to every invested user. Accrual also runs
lazily when a user opens the dashboard; this task keeps balances current
for users who do not.
"""

import dramatiq
from loguru import logger

from app.services.earnings import AccrualService
from jobs.async_runner import create_local_session, run_async


@dramatiq.actor(max_retries=3, time_limit=600_000)
def accrue_daily_earnings() -> None:
    """Run accrual for all eligible users."""
    logger.info("Starting daily accrual...")
    stats = run_async(_accrue_daily_earnings_async())
    logger.info(
        f"Daily accrual complete: {stats['credited_users']} users credited, "
        f"{stats['credited_days']} days, {stats['failed']} failed "
        f"(of {stats['processed']})"
    )


async def _accrue_daily_earnings_async() -> dict[str, int]:
    async with create_local_session() as session:
        service = AccrualService(session)
        return await service.accrue_all()
