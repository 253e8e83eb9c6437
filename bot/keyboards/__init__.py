"""
Keyboards.

Reply and inline keyboards used by handlers.
"""

from bot.keyboards.reply import (
    admin_keyboard,
    cancel_keyboard,
    main_menu_reply_keyboard,
    withdrawal_menu_keyboard,
)

__all__ = [
    "admin_keyboard",
    "cancel_keyboard",
    "main_menu_reply_keyboard",
    "withdrawal_menu_keyboard",
]
