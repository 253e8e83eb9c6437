"""Withdrawal history handler."""

from typing import Any

from aiogram import F, Router
from aiogram.fsm.context import FSMContext
from aiogram.types import Message
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User
from app.services.withdrawal_service import WithdrawalService
from bot.keyboards.buttons import WithdrawalButtons
from bot.messages.user_messages import NOT_REGISTERED, format_withdrawal_history
from bot.utils.state_utils import clear_state_preserve_referral
from bot.utils.text_utils import answer_long

router = Router(name="withdrawal_history")

HISTORY_LIMIT = 30


@router.message(F.text == WithdrawalButtons.HISTORY)
async def show_history(
    message: Message,
    state: FSMContext,
    session: AsyncSession,
    user: User | None = None,
    **data: Any,
) -> None:
    """Show the user's withdrawal requests, newest first."""
    await clear_state_preserve_referral(state)
    if user is None:
        await message.answer(NOT_REGISTERED)
        return

    withdrawal_service = WithdrawalService(session)
    withdrawals = await withdrawal_service.get_history(user.id, limit=HISTORY_LIMIT)
    await answer_long(
        message, format_withdrawal_history(withdrawals), parse_mode="HTML"
    )
