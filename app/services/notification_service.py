"""
Notification service.

Sends Telegram messages to users and admins. State changes (payment
review, withdrawal decision, referral bonus) are announced through it.
"""

import asyncio

from aiogram import Bot
from aiogram.exceptions import TelegramAPIError, TelegramBadRequest
from loguru import logger

from app.config.settings import settings
from app.services.bot_provider import get_bot

TELEGRAM_TIMEOUT = 10.0


class NotificationService:
    """Telegram notification sender."""

    def __init__(self, bot: Bot | None = None) -> None:
        """
        Initialize notification service.

        Args:
            bot: Bot instance (defaults to the registered bot)
        """
        self.bot = bot or get_bot()

    async def send_notification(
        self,
        user_telegram_id: int,
        message: str,
        reply_markup=None,
    ) -> bool:
        """
        Send text notification.

        Args:
            user_telegram_id: Telegram user ID
            message: Message text (HTML)
            reply_markup: Optional keyboard

        Returns:
            True if sent successfully
        """
        if self.bot is None:
            logger.warning(
                "Notification skipped: bot is not available",
                extra={"telegram_id": user_telegram_id},
            )
            return False

        try:
            await asyncio.wait_for(
                self.bot.send_message(
                    chat_id=user_telegram_id,
                    text=message,
                    parse_mode="HTML",
                    reply_markup=reply_markup,
                ),
                timeout=TELEGRAM_TIMEOUT,
            )
            return True
        except (TelegramAPIError, asyncio.TimeoutError) as e:
            logger.warning(
                "Failed to send notification",
                extra={"telegram_id": user_telegram_id, "error": str(e)},
            )
            return False

    async def send_photo(
        self,
        user_telegram_id: int,
        file_id: str,
        caption: str,
        reply_markup=None,
    ) -> bool:
        """
        Send an image by Telegram file_id with a caption.

        Screenshots uploaded as files carry a document file_id, which
        send_photo refuses; those are resent as documents.
        """
        if self.bot is None:
            return False

        try:
            try:
                await asyncio.wait_for(
                    self.bot.send_photo(
                        chat_id=user_telegram_id,
                        photo=file_id,
                        caption=caption,
                        parse_mode="HTML",
                        reply_markup=reply_markup,
                    ),
                    timeout=TELEGRAM_TIMEOUT,
                )
            except TelegramBadRequest:
                await asyncio.wait_for(
                    self.bot.send_document(
                        chat_id=user_telegram_id,
                        document=file_id,
                        caption=caption,
                        parse_mode="HTML",
                        reply_markup=reply_markup,
                    ),
                    timeout=TELEGRAM_TIMEOUT,
                )
            return True
        except (TelegramAPIError, asyncio.TimeoutError) as e:
            logger.warning(
                "Failed to send photo",
                extra={"telegram_id": user_telegram_id, "error": str(e)},
            )
            return False

    async def notify_admins(self, message: str, reply_markup=None) -> int:
        """
        Send a message to every configured admin.

        Returns:
            Number of admins notified
        """
        admin_ids = settings.get_admin_ids()
        if not admin_ids:
            logger.warning("No admins configured to notify")
            return 0

        sent = 0
        for admin_id in admin_ids:
            if await self.send_notification(admin_id, message, reply_markup):
                sent += 1
        return sent

    async def notify_admins_photo(
        self, file_id: str, caption: str, reply_markup=None
    ) -> int:
        """
        Send an image with caption to every configured admin.

        Returns:
            Number of admins notified
        """
        sent = 0
        for admin_id in settings.get_admin_ids():
            if await self.send_photo(admin_id, file_id, caption, reply_markup):
                sent += 1
        return sent
