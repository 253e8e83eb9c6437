"""
Dashboard handlers.

Opening the dashboard credits any pending daily returns first.
"""

from typing import Any

from aiogram import F, Router
from aiogram.fsm.context import FSMContext
from aiogram.types import Message
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User
from app.services.earnings import AccrualService
from app.services.user import UserService
from bot.keyboards.buttons import MainMenuButtons
from bot.messages.user_messages import (
    NOT_REGISTERED,
    format_dashboard,
    format_earnings_history,
)
from bot.utils.state_utils import clear_state_preserve_referral
from bot.utils.text_utils import answer_long

router = Router(name="dashboard")

EARNINGS_HISTORY_LIMIT = 50


@router.message(F.text == MainMenuButtons.DASHBOARD)
async def show_dashboard(
    message: Message,
    state: FSMContext,
    session: AsyncSession,
    user: User | None = None,
    **data: Any,
) -> None:
    """Accrue pending returns and show the dashboard."""
    await clear_state_preserve_referral(state)
    if user is None:
        await message.answer(NOT_REGISTERED)
        return

    accrual_service = AccrualService(session)
    result, error = await accrual_service.accrue_for_user(user.id)
    credited_days = result.days if result else 0
    if error:
        await message.answer(f"⚠️ {error}")

    user_service = UserService(session)
    summary = await user_service.get_dashboard(user)
    await message.answer(
        format_dashboard(summary, credited_days=credited_days),
        parse_mode="HTML",
    )


@router.message(F.text == MainMenuButtons.EARNINGS)
async def show_earnings_history(
    message: Message,
    state: FSMContext,
    session: AsyncSession,
    user: User | None = None,
    **data: Any,
) -> None:
    """Show the earnings log, newest first."""
    await clear_state_preserve_referral(state)
    if user is None:
        await message.answer(NOT_REGISTERED)
        return

    user_service = UserService(session)
    earnings = await user_service.get_earnings(
        user.id, limit=EARNINGS_HISTORY_LIMIT
    )
    await answer_long(message, format_earnings_history(earnings), parse_mode="HTML")
