"""Referral section handler."""

from typing import Any

from aiogram import F, Router
from aiogram.fsm.context import FSMContext
from aiogram.types import Message
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User
from app.services.referral import ReferralQueryManager, build_referral_link
from bot.keyboards.buttons import MainMenuButtons
from bot.messages.user_messages import NOT_REGISTERED, format_referrals
from bot.utils.state_utils import clear_state_preserve_referral
from bot.utils.text_utils import answer_long

router = Router(name="referral")


@router.message(F.text == MainMenuButtons.REFERRALS)
async def show_referrals(
    message: Message,
    state: FSMContext,
    session: AsyncSession,
    user: User | None = None,
    **data: Any,
) -> None:
    """Show invite link, referral count, bonus total and referral list."""
    await clear_state_preserve_referral(state)
    if user is None:
        await message.answer(NOT_REGISTERED)
        return

    query_manager = ReferralQueryManager(session)
    entries = await query_manager.get_referrals(user.id)
    total_bonus = await query_manager.get_total_bonus(user.id)
    link = build_referral_link(user.username)

    await answer_long(
        message,
        format_referrals(link, entries, total_bonus),
        parse_mode="HTML",
        disable_web_page_preview=True,
    )
