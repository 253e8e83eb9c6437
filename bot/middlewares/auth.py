"""
Auth middleware.

Loads the profile of the Telegram user and marks admins.
"""

from collections.abc import Awaitable, Callable
from typing import Any

from aiogram import BaseMiddleware
from aiogram.types import TelegramObject
from aiogram.types import User as TelegramUser
from sqlalchemy.ext.asyncio import AsyncSession

from app.config.settings import settings
from app.repositories.user_repository import UserRepository


class AuthMiddleware(BaseMiddleware):
    """
    Puts data["user"] (profile or None) and data["is_admin"] for handlers.

    Requires DatabaseMiddleware to run first.
    """

    async def __call__(
        self,
        handler: Callable[[TelegramObject, dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: dict[str, Any],
    ) -> Any:
        """Load user and admin flag."""
        telegram_user: TelegramUser | None = data.get("event_from_user")
        session: AsyncSession | None = data.get("session")

        data["user"] = None
        data["is_admin"] = False

        if telegram_user is not None:
            data["is_admin"] = settings.is_admin(telegram_user.id)
            if session is not None:
                user_repo = UserRepository(session)
                data["user"] = await user_repo.get_by_telegram_id(
                    telegram_user.id
                )

        return await handler(event, data)
