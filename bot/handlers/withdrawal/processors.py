"""
Withdrawal request processing.

Amount entry, preview and confirmation.
"""

from typing import Any

from aiogram import F, Router
from aiogram.fsm.context import FSMContext
from aiogram.types import CallbackQuery, Message
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User
from app.services.notification_service import NotificationService
from app.services.withdrawal_service import WithdrawalService
from app.utils.formatters import format_pkr, mask_account_number
from app.utils.validation import parse_amount
from bot.keyboards.buttons import MENU_BUTTON_TEXTS, WithdrawalButtons
from bot.keyboards.inline import withdrawal_confirm_keyboard
from bot.keyboards.reply import cancel_keyboard, withdrawal_menu_keyboard
from bot.messages.user_messages import (
    ENTER_WITHDRAWAL_AMOUNT,
    NOT_REGISTERED,
    WITHDRAWAL_CANCELLED,
    WITHDRAWAL_CREATED,
    format_withdrawal_menu,
)
from bot.states.withdrawal import WithdrawalStates
from bot.utils.state_utils import clear_state_preserve_referral

router = Router(name="withdrawal_processors")


@router.message(F.text == WithdrawalButtons.REQUEST)
async def start_withdrawal(
    message: Message,
    state: FSMContext,
    session: AsyncSession,
    user: User | None = None,
    **data: Any,
) -> None:
    """Ask for amount if the user is eligible."""
    await clear_state_preserve_referral(state)
    if user is None:
        await message.answer(NOT_REGISTERED)
        return

    withdrawal_service = WithdrawalService(session)
    eligibility = await withdrawal_service.get_eligibility(user)
    if not eligibility.can_request:
        await message.answer(
            format_withdrawal_menu(eligibility, user),
            parse_mode="HTML",
            reply_markup=withdrawal_menu_keyboard(),
        )
        return

    await state.set_state(WithdrawalStates.entering_amount)
    await message.answer(ENTER_WITHDRAWAL_AMOUNT, reply_markup=cancel_keyboard())


@router.message(
    WithdrawalStates.entering_amount, F.text, ~F.text.in_(MENU_BUTTON_TEXTS)
)
async def process_amount(
    message: Message,
    state: FSMContext,
    user: User | None = None,
    **data: Any,
) -> None:
    """Parse amount and show confirmation preview."""
    amount = parse_amount(message.text)
    if amount is None or amount <= 0:
        await message.answer("❌ Enter a valid amount, for example 1500:")
        return

    if user is None:
        await clear_state_preserve_referral(state)
        await message.answer(NOT_REGISTERED)
        return

    await state.update_data(amount=str(amount))
    await state.set_state(WithdrawalStates.confirming)
    await message.answer(
        "💸 <b>Confirm withdrawal</b>\n\n"
        f"Amount: <b>{format_pkr(amount)}</b>\n"
        f"To: {user.payout_platform or '-'} · "
        f"{mask_account_number(user.payout_account_number)}",
        parse_mode="HTML",
        reply_markup=withdrawal_confirm_keyboard(),
    )


@router.callback_query(WithdrawalStates.confirming, F.data == "wd_confirm")
async def confirm_withdrawal(
    callback: CallbackQuery,
    state: FSMContext,
    session: AsyncSession,
    user: User | None = None,
    **data: Any,
) -> None:
    """Create the withdrawal request."""
    state_data = await state.get_data()
    await clear_state_preserve_referral(state)

    if user is None:
        await callback.answer(NOT_REGISTERED, show_alert=True)
        return

    withdrawal_service = WithdrawalService(
        session, notifier=NotificationService(callback.bot)
    )
    withdrawal, error = await withdrawal_service.request_withdrawal(
        user.id, state_data.get("amount")
    )

    if callback.message:
        await callback.message.edit_reply_markup(reply_markup=None)

    if error:
        logger.info(
            "Withdrawal refused",
            extra={"user_id": user.id, "reason": error},
        )
        if callback.message:
            await callback.message.answer(
                f"❌ {error}", reply_markup=withdrawal_menu_keyboard()
            )
        await callback.answer()
        return

    if callback.message:
        await callback.message.answer(
            WITHDRAWAL_CREATED.format(amount=format_pkr(withdrawal.amount)),
            parse_mode="HTML",
            reply_markup=withdrawal_menu_keyboard(),
        )
    await callback.answer()


@router.callback_query(F.data == "wd_cancel")
async def cancel_withdrawal(callback: CallbackQuery, state: FSMContext) -> None:
    """Cancel the pending confirmation."""
    await clear_state_preserve_referral(state)
    if callback.message:
        await callback.message.edit_reply_markup(reply_markup=None)
        await callback.message.answer(
            WITHDRAWAL_CANCELLED, reply_markup=withdrawal_menu_keyboard()
        )
    await callback.answer()
