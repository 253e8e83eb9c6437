"""
Bot Initialization - Handlers Module.

Registers all bot handlers. Handler order matters for proper routing.
"""

from aiogram import Dispatcher
from loguru import logger

from bot.handlers import get_routers


def register_all_handlers(dp: Dispatcher) -> None:
    """Register all handlers in the correct order."""
    for router in get_routers():
        dp.include_router(router)

    logger.info("Handlers registered successfully")
