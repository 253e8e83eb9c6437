"""
Global Error Handler Middleware.

Catches unhandled exceptions and notifies admins.
Sends friendly message to users - never shows technical details.
"""

import html
import traceback
from collections.abc import Awaitable, Callable
from typing import Any

from aiogram import BaseMiddleware, Bot
from aiogram.types import CallbackQuery, Message, TelegramObject, Update, User
from loguru import logger

from app.config.settings import settings
from bot.messages.user_messages import GENERIC_ERROR


class ErrorHandlerMiddleware(BaseMiddleware):
    """
    Global error handler middleware.

    - Logs all exceptions
    - Notifies the first admin with technical details
    - Sends friendly message to user (no technical info!)
    """

    def _get_user(self, event: TelegramObject) -> User | None:
        """Extract user from event."""
        if isinstance(event, Update):
            if event.message:
                return event.message.from_user
            if event.callback_query:
                return event.callback_query.from_user
        elif isinstance(event, Message):
            return event.from_user
        elif isinstance(event, CallbackQuery):
            return event.from_user
        return None

    async def __call__(
        self,
        handler: Callable[[TelegramObject, dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: dict[str, Any],
    ) -> Any:
        """Execute middleware."""
        try:
            return await handler(event, data)
        except Exception as e:
            logger.exception(f"Unhandled exception: {e}")

            bot: Bot | None = data.get("bot")
            user = self._get_user(event)

            # 1. Send friendly message to user
            if bot and user:
                try:
                    await bot.send_message(chat_id=user.id, text=GENERIC_ERROR)
                except Exception as user_notify_error:
                    logger.warning(f"Failed to notify user: {user_notify_error}")

            # 2. Notify admin with technical details
            admin_ids = settings.get_admin_ids()
            if bot and admin_ids:
                try:
                    trace = html.escape(traceback.format_exc()[-1500:])
                    user_info = f"{user.id} (@{user.username})" if user else "unknown"
                    text = (
                        f"🚨 <b>ERROR</b>\n\n"
                        f"👤 User: {user_info}\n"
                        f"❌ Exception: <code>{type(e).__name__}</code>\n"
                        f"📝 Message: <code>{html.escape(str(e)[:200])}</code>\n\n"
                        f"<pre>{trace}</pre>"
                    )
                    await bot.send_message(
                        chat_id=admin_ids[0],
                        text=text[:4096],
                        parse_mode="HTML",
                    )
                except Exception as notify_error:
                    logger.error(f"Failed to notify admin: {notify_error}")

            return None
