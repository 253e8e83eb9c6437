"""
Payout details handlers.

Platform choice (inline), then account holder and account number.
"""

from typing import Any

from aiogram import F, Router
from aiogram.fsm.context import FSMContext
from aiogram.types import CallbackQuery, Message
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User
from app.services.user import UserService
from app.utils.validation import normalize_platform, validate_account_number
from bot.keyboards.buttons import MENU_BUTTON_TEXTS, WithdrawalButtons
from bot.keyboards.inline import payout_platform_keyboard
from bot.keyboards.reply import cancel_keyboard, withdrawal_menu_keyboard
from bot.messages.user_messages import (
    CHOOSE_PLATFORM,
    ENTER_PAYOUT_HOLDER,
    ENTER_PAYOUT_NUMBER,
    NOT_REGISTERED,
    PAYOUT_SAVED,
)
from bot.states.withdrawal import PayoutInfoStates
from bot.utils.callback_parsers import parse_callback_value
from bot.utils.state_utils import clear_state_preserve_referral

router = Router(name="withdrawal_payout_info")


@router.message(F.text == WithdrawalButtons.PAYOUT_INFO)
async def start_payout_info(
    message: Message,
    state: FSMContext,
    user: User | None = None,
    **data: Any,
) -> None:
    """Ask for payout platform."""
    await clear_state_preserve_referral(state)
    if user is None:
        await message.answer(NOT_REGISTERED)
        return

    await state.set_state(PayoutInfoStates.choosing_platform)
    await message.answer("🏦 Payout details", reply_markup=cancel_keyboard())
    await message.answer(CHOOSE_PLATFORM, reply_markup=payout_platform_keyboard())


@router.callback_query(
    PayoutInfoStates.choosing_platform, F.data.startswith("payout_platform_")
)
async def choose_platform(callback: CallbackQuery, state: FSMContext) -> None:
    """Store chosen platform."""
    platform = normalize_platform(
        parse_callback_value(callback.data, "payout_platform_")
    )
    if not platform:
        await callback.answer("Unknown platform", show_alert=True)
        return

    await state.update_data(payout_platform=platform)
    await state.set_state(PayoutInfoStates.entering_holder_name)
    if callback.message:
        await callback.message.edit_text(f"🏦 Platform: <b>{platform}</b>", parse_mode="HTML")
        await callback.message.answer(ENTER_PAYOUT_HOLDER, parse_mode="HTML")
    await callback.answer()


@router.message(
    PayoutInfoStates.entering_holder_name, F.text, ~F.text.in_(MENU_BUTTON_TEXTS)
)
async def process_holder(message: Message, state: FSMContext) -> None:
    """Store payout account holder name."""
    holder = message.text.strip()
    if len(holder) < 2:
        await message.answer("Please enter the full account holder name.")
        return

    await state.update_data(payout_account_holder=holder)
    await state.set_state(PayoutInfoStates.entering_account_number)
    await message.answer(ENTER_PAYOUT_NUMBER, parse_mode="HTML")


@router.message(
    PayoutInfoStates.entering_account_number, F.text, ~F.text.in_(MENU_BUTTON_TEXTS)
)
async def process_account_number(
    message: Message,
    state: FSMContext,
    session: AsyncSession,
    user: User | None = None,
    **data: Any,
) -> None:
    """Validate the account number and save payout details."""
    number = message.text.strip()
    if not validate_account_number(number):
        await message.answer("❌ Please enter a valid account number:")
        return

    if user is None:
        await clear_state_preserve_referral(state)
        await message.answer(NOT_REGISTERED)
        return

    state_data = await state.get_data()
    user_service = UserService(session)
    _, error = await user_service.save_payout_info(
        user.id,
        state_data.get("payout_platform"),
        state_data.get("payout_account_holder"),
        number,
    )
    await clear_state_preserve_referral(state)

    if error:
        await message.answer(f"❌ {error}", reply_markup=withdrawal_menu_keyboard())
        return

    await message.answer(PAYOUT_SAVED, reply_markup=withdrawal_menu_keyboard())
