"""
Bot main entry point.

Initializes and runs the Telegram bot with aiogram 3.x. Initialization
is delegated to modules in bot/initialization/.
"""

import asyncio
import sys

from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties
from aiogram.exceptions import TelegramAPIError
from aiogram.types import ErrorEvent
from loguru import logger

from app.config.settings import settings
from app.services.bot_provider import set_bot_getter
from bot.initialization.handlers import register_all_handlers
from bot.initialization.logging import setup_logging
from bot.initialization.middlewares import register_middlewares
from bot.initialization.shutdown import shutdown_handler
from bot.initialization.storage import setup_fsm_storage
from bot.messages.user_messages import GENERIC_ERROR

# Global bot instance for external access (e.g. from services)
bot_instance: Bot | None = None


async def main() -> None:
    """Initialize and run the bot."""
    setup_logging()

    storage, redis_client = await setup_fsm_storage()

    # No default parse mode: handlers set HTML explicitly
    global bot_instance
    bot = Bot(
        token=settings.telegram_bot_token,
        default=DefaultBotProperties(),
    )
    bot_instance = bot
    set_bot_getter(lambda: bot_instance)

    dp = Dispatcher(storage=storage)
    register_middlewares(dp)

    @dp.error()
    async def error_handler(event: ErrorEvent) -> bool:
        """Global error handler for unhandled exceptions."""
        logger.exception(
            f"Unhandled error in bot: {event.exception.__class__.__name__}: {event.exception}",
            extra={"update": str(event.update) if event.update else None},
        )

        try:
            if event.update and event.update.message:
                await event.update.message.answer(GENERIC_ERROR)
        except TelegramAPIError as send_error:
            logger.error(f"Failed to send error message: {send_error}")

        return True

    register_all_handlers(dp)

    try:
        bot_info = await bot.get_me()
    except TelegramAPIError as e:
        logger.error(f"Failed to connect to Telegram API: {e}")
        raise

    logger.info(f"Bot connected: @{bot_info.username} (ID: {bot_info.id})")
    if not settings.telegram_bot_username:
        # Invite links need the bot username
        settings.telegram_bot_username = bot_info.username
        logger.info(f"Set bot username to: {bot_info.username}")

    try:
        logger.info("Starting polling...")
        await dp.start_polling(bot, allowed_updates=dp.resolve_used_update_types())
    finally:
        await shutdown_handler()
        if redis_client:
            await redis_client.aclose()
        await bot.session.close()


def run() -> None:
    """Console entry point."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Bot stopped by user (KeyboardInterrupt)")
    except Exception as e:
        logger.exception(f"Bot crashed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    run()
