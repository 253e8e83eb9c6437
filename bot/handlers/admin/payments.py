"""
Admin payment review.

Pending payment proofs are listed with their screenshots and approved
or rejected inline.
"""

from aiogram import F, Router
from aiogram.types import CallbackQuery, Message
from sqlalchemy.ext.asyncio import AsyncSession

from app.services.notification_service import NotificationService
from app.services.payment import PaymentApprovalService, PaymentIntakeService
from bot.keyboards.buttons import AdminButtons
from bot.keyboards.inline import payment_review_keyboard
from bot.messages.admin_messages import (
    NO_PENDING_PAYMENTS,
    format_payment_for_review,
)
from bot.utils.callback_parsers import parse_callback_id

router = Router(name="admin_payments")


@router.message(F.text == AdminButtons.PAYMENTS)
async def list_pending_payments(message: Message, session: AsyncSession) -> None:
    """Send each pending payment proof with review buttons."""
    intake = PaymentIntakeService(session)
    payments = await intake.list_pending()
    if not payments:
        await message.answer(NO_PENDING_PAYMENTS)
        return

    notifier = NotificationService(message.bot)
    for payment in payments:
        await notifier.send_photo(
            message.chat.id,
            payment.screenshot_file_id,
            format_payment_for_review(payment),
            reply_markup=payment_review_keyboard(payment.id),
        )


async def _finish_review(callback: CallbackQuery, verdict: str) -> None:
    """Append the verdict to the reviewed card and drop its buttons."""
    if callback.message is None:
        return
    caption = callback.message.html_text or ""
    await callback.message.edit_caption(
        caption=f"{caption}\n\n{verdict}",
        parse_mode="HTML",
        reply_markup=None,
    )


@router.callback_query(F.data.startswith("pay_ok_"))
async def approve_payment(callback: CallbackQuery, session: AsyncSession) -> None:
    """Approve a payment proof."""
    payment_id = parse_callback_id(callback.data, "pay_ok_")
    if payment_id is None:
        await callback.answer("Invalid request", show_alert=True)
        return

    service = PaymentApprovalService(
        session, notifier=NotificationService(callback.bot)
    )
    payment, error = await service.approve_payment(payment_id, callback.from_user.id)
    if error:
        await callback.answer(error, show_alert=True)
        return

    await _finish_review(callback, f"✅ Approved by {callback.from_user.id}")
    await callback.answer("Payment approved")


@router.callback_query(F.data.startswith("pay_no_"))
async def reject_payment(callback: CallbackQuery, session: AsyncSession) -> None:
    """Reject a payment proof."""
    payment_id = parse_callback_id(callback.data, "pay_no_")
    if payment_id is None:
        await callback.answer("Invalid request", show_alert=True)
        return

    service = PaymentApprovalService(
        session, notifier=NotificationService(callback.bot)
    )
    payment, error = await service.reject_payment(payment_id, callback.from_user.id)
    if error:
        await callback.answer(error, show_alert=True)
        return

    await _finish_review(callback, f"❌ Rejected by {callback.from_user.id}")
    await callback.answer("Payment rejected")
