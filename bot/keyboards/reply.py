"""
Reply keyboards.

Main menu and section menus for users and admins.
"""

from aiogram.types import KeyboardButton, ReplyKeyboardMarkup
from aiogram.utils.keyboard import ReplyKeyboardBuilder

from app.models.user import User
from bot.keyboards.buttons import (
    AdminButtons,
    MainMenuButtons,
    NavigationButtons,
    WithdrawalButtons,
)


def main_menu_reply_keyboard(
    user: User | None = None,
    is_admin: bool = False,
) -> ReplyKeyboardMarkup:
    """
    Main menu reply keyboard.

    Unregistered users see the investment flow; registered users see the
    dashboard, referrals and withdrawals.

    Args:
        user: Current profile, None if not registered
        is_admin: Whether the user is an admin

    Returns:
        ReplyKeyboardMarkup with main menu buttons
    """
    builder = ReplyKeyboardBuilder()

    if user is None:
        builder.row(
            KeyboardButton(text=MainMenuButtons.INVEST),
            KeyboardButton(text=MainMenuButtons.PAYMENT_STATUS),
        )
        builder.row(KeyboardButton(text=MainMenuButtons.REGISTER))
    else:
        builder.row(
            KeyboardButton(text=MainMenuButtons.DASHBOARD),
            KeyboardButton(text=MainMenuButtons.EARNINGS),
        )
        builder.row(
            KeyboardButton(text=MainMenuButtons.REFERRALS),
            KeyboardButton(text=MainMenuButtons.WITHDRAW),
        )
        if not user.is_invested:
            builder.row(KeyboardButton(text=MainMenuButtons.INVEST))

    builder.row(KeyboardButton(text=MainMenuButtons.HELP))

    if is_admin:
        builder.row(KeyboardButton(text=MainMenuButtons.ADMIN_PANEL))

    return builder.as_markup(resize_keyboard=True)


def withdrawal_menu_keyboard() -> ReplyKeyboardMarkup:
    """Withdrawal section keyboard."""
    builder = ReplyKeyboardBuilder()
    builder.row(KeyboardButton(text=WithdrawalButtons.REQUEST))
    builder.row(
        KeyboardButton(text=WithdrawalButtons.PAYOUT_INFO),
        KeyboardButton(text=WithdrawalButtons.HISTORY),
    )
    builder.row(KeyboardButton(text=NavigationButtons.MAIN_MENU))
    return builder.as_markup(resize_keyboard=True)


def cancel_keyboard() -> ReplyKeyboardMarkup:
    """Single cancel button for FSM input steps."""
    builder = ReplyKeyboardBuilder()
    builder.row(KeyboardButton(text=NavigationButtons.CANCEL))
    return builder.as_markup(resize_keyboard=True)


def admin_keyboard() -> ReplyKeyboardMarkup:
    """Admin panel keyboard."""
    builder = ReplyKeyboardBuilder()
    builder.row(
        KeyboardButton(text=AdminButtons.PAYMENTS),
        KeyboardButton(text=AdminButtons.WITHDRAWALS),
    )
    builder.row(
        KeyboardButton(text=AdminButtons.USERS),
        KeyboardButton(text=AdminButtons.FIND_USER),
    )
    builder.row(
        KeyboardButton(text=AdminButtons.ACCOUNTS),
        KeyboardButton(text=AdminButtons.REFERRALS),
    )
    builder.row(KeyboardButton(text=AdminButtons.EXPORT))
    builder.row(KeyboardButton(text=NavigationButtons.MAIN_MENU))
    return builder.as_markup(resize_keyboard=True)
