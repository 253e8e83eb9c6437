"""
Bot Initialization - Middlewares Module.

Registers all bot middlewares in the correct order.
"""

from aiogram import Dispatcher
from loguru import logger

from app.config.database import async_session_maker
from bot.middlewares.auth import AuthMiddleware
from bot.middlewares.ban_middleware import BanMiddleware
from bot.middlewares.database import DatabaseMiddleware
from bot.middlewares.error_handler import ErrorHandlerMiddleware


def register_middlewares(dp: Dispatcher) -> None:
    """
    Register all middlewares.

    Middleware order is critical:
    1. Error handler
    2. Database (session)
    3. Auth (needs session)
    4. Ban (needs user)

    Args:
        dp: Dispatcher instance
    """
    dp.update.middleware(ErrorHandlerMiddleware())
    dp.update.middleware(DatabaseMiddleware(session_pool=async_session_maker))
    dp.update.middleware(AuthMiddleware())
    dp.update.middleware(BanMiddleware())

    logger.info("Middlewares registered successfully")
