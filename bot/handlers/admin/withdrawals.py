"""
Admin withdrawal review.

Approve pays out; reject asks for an optional reason and refunds.
"""

from aiogram import F, Router
from aiogram.fsm.context import FSMContext
from aiogram.types import CallbackQuery, Message
from sqlalchemy.ext.asyncio import AsyncSession

from app.services.notification_service import NotificationService
from app.services.withdrawal_service import WithdrawalService
from bot.keyboards.buttons import MENU_BUTTON_TEXTS, AdminButtons
from bot.keyboards.inline import withdrawal_review_keyboard
from bot.keyboards.reply import admin_keyboard, cancel_keyboard
from bot.messages.admin_messages import (
    ENTER_REJECT_REASON,
    NO_PROCESSING_WITHDRAWALS,
    format_withdrawal_for_review,
)
from bot.states.admin_states import AdminStates
from bot.utils.callback_parsers import parse_callback_id

router = Router(name="admin_withdrawals")

SKIP_REASON = "-"


@router.message(F.text == AdminButtons.WITHDRAWALS)
async def list_processing_withdrawals(
    message: Message, session: AsyncSession
) -> None:
    """Send each processing withdrawal with review buttons."""
    withdrawal_service = WithdrawalService(session)
    withdrawals = await withdrawal_service.list_processing()
    if not withdrawals:
        await message.answer(NO_PROCESSING_WITHDRAWALS)
        return

    for withdrawal in withdrawals:
        username = withdrawal.user.username if withdrawal.user else None
        await message.answer(
            format_withdrawal_for_review(withdrawal, username),
            parse_mode="HTML",
            reply_markup=withdrawal_review_keyboard(withdrawal.id),
        )


@router.callback_query(F.data.startswith("wd_ok_"))
async def approve_withdrawal(callback: CallbackQuery, session: AsyncSession) -> None:
    """Approve a processing withdrawal."""
    withdrawal_id = parse_callback_id(callback.data, "wd_ok_")
    if withdrawal_id is None:
        await callback.answer("Invalid request", show_alert=True)
        return

    withdrawal_service = WithdrawalService(
        session, notifier=NotificationService(callback.bot)
    )
    withdrawal, error = await withdrawal_service.approve_withdrawal(
        withdrawal_id, callback.from_user.id
    )
    if error:
        await callback.answer(error, show_alert=True)
        return

    if callback.message:
        await callback.message.edit_text(
            f"{callback.message.html_text}\n\n✅ Approved",
            parse_mode="HTML",
            reply_markup=None,
        )
    await callback.answer("Withdrawal approved")


@router.callback_query(F.data.startswith("wd_no_"))
async def start_reject_withdrawal(
    callback: CallbackQuery, state: FSMContext
) -> None:
    """Ask for a rejection reason."""
    withdrawal_id = parse_callback_id(callback.data, "wd_no_")
    if withdrawal_id is None:
        await callback.answer("Invalid request", show_alert=True)
        return

    await state.set_state(AdminStates.entering_reject_reason)
    await state.update_data(withdrawal_id=withdrawal_id)
    if callback.message:
        await callback.message.answer(ENTER_REJECT_REASON, reply_markup=cancel_keyboard())
    await callback.answer()


@router.message(
    AdminStates.entering_reject_reason, F.text, ~F.text.in_(MENU_BUTTON_TEXTS)
)
async def process_reject_reason(
    message: Message,
    state: FSMContext,
    session: AsyncSession,
) -> None:
    """Reject the withdrawal with the entered reason."""
    data = await state.get_data()
    await state.clear()

    reason = message.text.strip()
    if reason == SKIP_REASON:
        reason = None

    withdrawal_service = WithdrawalService(
        session, notifier=NotificationService(message.bot)
    )
    withdrawal, error = await withdrawal_service.reject_withdrawal(
        data.get("withdrawal_id"), message.from_user.id, reason
    )
    if error:
        await message.answer(f"❌ {error}", reply_markup=admin_keyboard())
        return

    await message.answer(
        f"❌ Withdrawal #{withdrawal.id} rejected and refunded.",
        reply_markup=admin_keyboard(),
    )
