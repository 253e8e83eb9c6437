"""
Stale payment review task.

Tells submitters and admins when a payment proof has waited longer than
the review window.
"""

import dramatiq
from aiogram import Bot
from loguru import logger

from app.config.settings import settings
from app.services.notification_service import NotificationService
from app.services.payment import PaymentApprovalService
from jobs.async_runner import create_local_session, run_async


@dramatiq.actor(max_retries=1, time_limit=120_000)
def notify_stale_payments() -> None:
    """Send review-timeout notices for stale pending payments."""
    count = run_async(_notify_stale_payments_async())
    if count:
        logger.info(f"Stale payment notices sent for {count} payment(s)")


async def _notify_stale_payments_async() -> int:
    bot = Bot(token=settings.telegram_bot_token)
    try:
        async with create_local_session() as session:
            service = PaymentApprovalService(
                session, notifier=NotificationService(bot)
            )
            return await service.notify_stale_payments()
    finally:
        await bot.session.close()
