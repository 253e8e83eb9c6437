"""Provider of the bot instance for services, without circular imports."""
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from aiogram import Bot

_bot_getter: Callable[[], "Bot | None"] | None = None


def set_bot_getter(getter: Callable[[], "Bot | None"]) -> None:
    """Register the bot getter. Called during bot or worker startup."""
    global _bot_getter
    _bot_getter = getter


def get_bot() -> "Bot | None":
    """Get the bot instance, or None if none is registered."""
    if _bot_getter is None:
        return None
    return _bot_getter()
