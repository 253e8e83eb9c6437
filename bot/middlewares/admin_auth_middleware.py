"""
Admin authentication middleware.

Lets only configured admins reach admin routers.
"""

from collections.abc import Awaitable, Callable
from typing import Any

from aiogram import BaseMiddleware
from aiogram.dispatcher.event.bases import SkipHandler
from aiogram.types import CallbackQuery, TelegramObject
from loguru import logger


class AdminAuthMiddleware(BaseMiddleware):
    """
    Admin authentication middleware.

    Relies on data["is_admin"] set by AuthMiddleware. Updates from
    non-admins are skipped so that user routers can still match them;
    callbacks from non-admins are answered with a refusal.
    """

    async def __call__(
        self,
        handler: Callable[[TelegramObject, dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: dict[str, Any],
    ) -> Any:
        """
        Check admin flag.

        Args:
            handler: Next handler
            event: Telegram event
            data: Handler data

        Returns:
            Handler result
        """
        if data.get("is_admin", False):
            return await handler(event, data)

        telegram_user = data.get("event_from_user")
        if isinstance(event, CallbackQuery):
            logger.warning(
                "Non-admin attempted admin action",
                extra={"telegram_id": telegram_user.id if telegram_user else None},
            )
            await event.answer("⛔ Admins only", show_alert=True)
            return None
        raise SkipHandler()
