"""
Inline keyboards for reviews, confirmations and admin user actions.
"""

from aiogram.types import InlineKeyboardButton, InlineKeyboardMarkup
from aiogram.utils.keyboard import InlineKeyboardBuilder

from app.config.business_constants import PAYOUT_PLATFORMS
from app.models.user import User


def payment_review_keyboard(payment_id: int) -> InlineKeyboardMarkup:
    """Approve / reject buttons for a payment proof."""
    builder = InlineKeyboardBuilder()
    builder.row(
        InlineKeyboardButton(text="✅ Approve", callback_data=f"pay_ok_{payment_id}"),
        InlineKeyboardButton(text="❌ Reject", callback_data=f"pay_no_{payment_id}"),
    )
    return builder.as_markup()


def payment_status_keyboard() -> InlineKeyboardMarkup:
    """Refresh button for the payment status message."""
    builder = InlineKeyboardBuilder()
    builder.row(
        InlineKeyboardButton(text="🔄 Refresh status", callback_data="pay_status_refresh")
    )
    return builder.as_markup()


def withdrawal_review_keyboard(withdrawal_id: int) -> InlineKeyboardMarkup:
    """Approve / reject buttons for a withdrawal request."""
    builder = InlineKeyboardBuilder()
    builder.row(
        InlineKeyboardButton(text="✅ Approve", callback_data=f"wd_ok_{withdrawal_id}"),
        InlineKeyboardButton(text="❌ Reject", callback_data=f"wd_no_{withdrawal_id}"),
    )
    return builder.as_markup()


def withdrawal_confirm_keyboard() -> InlineKeyboardMarkup:
    """Confirm / cancel for a withdrawal request."""
    builder = InlineKeyboardBuilder()
    builder.row(
        InlineKeyboardButton(text="✅ Confirm", callback_data="wd_confirm"),
        InlineKeyboardButton(text="❌ Cancel", callback_data="wd_cancel"),
    )
    return builder.as_markup()


def payout_platform_keyboard() -> InlineKeyboardMarkup:
    """One button per accepted payout platform."""
    builder = InlineKeyboardBuilder()
    for platform in PAYOUT_PLATFORMS:
        builder.button(text=platform, callback_data=f"payout_platform_{platform}")
    builder.adjust(len(PAYOUT_PLATFORMS))
    return builder.as_markup()


def admin_user_list_keyboard(users: list[User]) -> InlineKeyboardMarkup:
    """One button per user opening the detail card."""
    builder = InlineKeyboardBuilder()
    for user in users:
        builder.button(
            text=f"@{user.username}",
            callback_data=f"usr_view_{user.id}",
        )
    builder.adjust(2)
    return builder.as_markup()


def admin_user_actions_keyboard(user: User) -> InlineKeyboardMarkup:
    """Actions available on a user card."""
    override_text = (
        "🔓 Override: ON" if user.can_withdraw_override else "🔒 Override: OFF"
    )
    builder = InlineKeyboardBuilder()
    builder.row(
        InlineKeyboardButton(text="✏️ Edit balance", callback_data=f"usr_bal_{user.id}"),
        InlineKeyboardButton(text=override_text, callback_data=f"usr_ovr_{user.id}"),
    )
    builder.row(
        InlineKeyboardButton(text="🗑 Delete", callback_data=f"usr_del_{user.id}"),
    )
    return builder.as_markup()


def admin_confirm_delete_keyboard(user_id: int) -> InlineKeyboardMarkup:
    """Second step of user deletion."""
    builder = InlineKeyboardBuilder()
    builder.row(
        InlineKeyboardButton(
            text="⚠️ Yes, delete", callback_data=f"usr_delok_{user_id}"
        ),
        InlineKeyboardButton(text="Cancel", callback_data=f"usr_view_{user_id}"),
    )
    return builder.as_markup()
