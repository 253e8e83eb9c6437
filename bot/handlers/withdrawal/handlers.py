"""Withdrawal menu handlers."""

from typing import Any

from aiogram import F, Router
from aiogram.fsm.context import FSMContext
from aiogram.types import Message
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User
from app.services.earnings import AccrualService
from app.services.withdrawal_service import WithdrawalService
from bot.keyboards.buttons import MainMenuButtons
from bot.keyboards.reply import withdrawal_menu_keyboard
from bot.messages.user_messages import NOT_REGISTERED, format_withdrawal_menu
from bot.utils.state_utils import (
    clear_state_preserve_referral,
    mark_withdrawal_notice_seen,
)

router = Router(name="withdrawal_menu")


@router.message(F.text == MainMenuButtons.WITHDRAW)
async def show_withdrawal_menu(
    message: Message,
    state: FSMContext,
    session: AsyncSession,
    user: User | None = None,
    **data: Any,
) -> None:
    """
    Show the withdrawal section.

    Pending returns are credited first so the available balance is current.
    """
    await clear_state_preserve_referral(state)
    if user is None:
        await message.answer(NOT_REGISTERED)
        return

    await AccrualService(session).accrue_for_user(user.id)

    withdrawal_service = WithdrawalService(session)
    eligibility = await withdrawal_service.get_eligibility(user)
    show_notice = eligibility.is_locked and await mark_withdrawal_notice_seen(
        state
    )
    await message.answer(
        format_withdrawal_menu(eligibility, user, show_referral_notice=show_notice),
        parse_mode="HTML",
        reply_markup=withdrawal_menu_keyboard(),
    )
