"""
Ban middleware.

Stops updates from banned users (admins are never blocked).
"""

from collections.abc import Awaitable, Callable
from typing import Any

from aiogram import BaseMiddleware
from aiogram.types import CallbackQuery, Message, TelegramObject
from loguru import logger

from bot.messages.user_messages import ACCOUNT_BLOCKED


class BanMiddleware(BaseMiddleware):
    """Rejects updates from banned profiles."""

    async def __call__(
        self,
        handler: Callable[[TelegramObject, dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: dict[str, Any],
    ) -> Any:
        """Check ban flag."""
        user = data.get("user")
        if user is None or not user.is_banned or data.get("is_admin"):
            return await handler(event, data)

        logger.info(f"Update from banned user {user.id} ignored")
        if isinstance(event, Message):
            await event.answer(ACCOUNT_BLOCKED)
        elif isinstance(event, CallbackQuery):
            await event.answer(ACCOUNT_BLOCKED, show_alert=True)
        return None
