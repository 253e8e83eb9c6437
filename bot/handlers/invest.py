"""
Invest handlers.

Payment proof submission (holder name, account number, screenshot) and
payment status check.
"""

from typing import Any

from aiogram import F, Router
from aiogram.fsm.context import FSMContext
from aiogram.types import CallbackQuery, Message
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User
from app.services.notification_service import NotificationService
from app.services.payment import PaymentIntakeService
from app.services.payment.payment_intake_service import is_image_mime_type
from bot.keyboards.buttons import MENU_BUTTON_TEXTS, MainMenuButtons
from bot.keyboards.inline import payment_review_keyboard, payment_status_keyboard
from bot.keyboards.reply import cancel_keyboard, main_menu_reply_keyboard
from bot.messages.admin_messages import format_payment_for_review
from bot.messages.user_messages import (
    ENTER_ACCOUNT_NUMBER,
    NO_PAYMENT,
    PAYMENT_SUBMITTED,
    SCREENSHOT_NOT_IMAGE,
    SEND_SCREENSHOT,
    format_invest_instructions,
    format_payment_status,
)
from bot.states.invest import InvestStates
from bot.utils.state_utils import clear_state_preserve_referral

router = Router(name="invest")


@router.message(F.text == MainMenuButtons.INVEST)
async def start_invest(
    message: Message,
    state: FSMContext,
    session: AsyncSession,
    user: User | None = None,
    **data: Any,
) -> None:
    """Show payment instructions and ask for the account holder name."""
    await clear_state_preserve_referral(state)

    if user is not None and user.is_invested:
        await message.answer(
            "✅ Your investment is already active.",
            reply_markup=main_menu_reply_keyboard(
                user=user, is_admin=data.get("is_admin", False)
            ),
        )
        return

    intake = PaymentIntakeService(session)
    latest = await intake.get_latest_payment(message.from_user.id)
    if latest and latest.is_pending:
        await message.answer(
            format_payment_status(latest),
            parse_mode="HTML",
            reply_markup=payment_status_keyboard(),
        )
        return

    await state.set_state(InvestStates.entering_holder_name)
    await message.answer(
        format_invest_instructions(),
        parse_mode="HTML",
        reply_markup=cancel_keyboard(),
    )


@router.message(
    InvestStates.entering_holder_name, F.text, ~F.text.in_(MENU_BUTTON_TEXTS)
)
async def process_holder_name(message: Message, state: FSMContext) -> None:
    """Store account holder name."""
    holder = message.text.strip()
    if len(holder) < 2:
        await message.answer("Please enter the full account holder name.")
        return

    await state.update_data(account_holder_name=holder)
    await state.set_state(InvestStates.entering_account_number)
    await message.answer(ENTER_ACCOUNT_NUMBER, parse_mode="HTML")


@router.message(
    InvestStates.entering_account_number, F.text, ~F.text.in_(MENU_BUTTON_TEXTS)
)
async def process_account_number(message: Message, state: FSMContext) -> None:
    """Store account number."""
    await state.update_data(account_number=message.text.strip())
    await state.set_state(InvestStates.waiting_for_screenshot)
    await message.answer(SEND_SCREENSHOT, parse_mode="HTML")


@router.message(InvestStates.waiting_for_screenshot, F.photo | F.document)
async def process_screenshot(
    message: Message,
    state: FSMContext,
    session: AsyncSession,
    user: User | None = None,
    **data: Any,
) -> None:
    """Accept a photo or image document and submit the payment proof."""
    file_id = None
    if message.photo:
        file_id = message.photo[-1].file_id
    elif message.document and is_image_mime_type(message.document.mime_type):
        file_id = message.document.file_id

    if not file_id:
        await message.answer(SCREENSHOT_NOT_IMAGE)
        return

    state_data = await state.get_data()
    intake = PaymentIntakeService(session)
    payment, error = await intake.submit_payment(
        telegram_id=message.from_user.id,
        account_holder_name=state_data.get("account_holder_name"),
        account_number=state_data.get("account_number"),
        screenshot_file_id=file_id,
    )

    await clear_state_preserve_referral(state)
    reply_markup = main_menu_reply_keyboard(
        user=user, is_admin=data.get("is_admin", False)
    )

    if error:
        await message.answer(f"❌ {error}", reply_markup=reply_markup)
        return

    await message.answer(PAYMENT_SUBMITTED, parse_mode="HTML", reply_markup=reply_markup)

    notifier = NotificationService(message.bot)
    caption = format_payment_for_review(payment)
    sent = await notifier.notify_admins_photo(
        payment.screenshot_file_id,
        caption,
        reply_markup=payment_review_keyboard(payment.id),
    )
    logger.info(
        "Payment proof forwarded to admins",
        extra={"payment_id": payment.id, "admins_notified": sent},
    )


@router.message(InvestStates.entering_holder_name, ~F.text)
@router.message(InvestStates.entering_account_number, ~F.text)
async def expect_text(message: Message) -> None:
    """Non-text input while text is expected."""
    await message.answer("Please send text.")


@router.message(
    InvestStates.waiting_for_screenshot, ~F.text.in_(MENU_BUTTON_TEXTS)
)
async def expect_screenshot(message: Message) -> None:
    """Anything but an image while the screenshot is expected."""
    await message.answer(SCREENSHOT_NOT_IMAGE)


@router.message(F.text == MainMenuButtons.PAYMENT_STATUS)
async def payment_status(
    message: Message,
    state: FSMContext,
    session: AsyncSession,
) -> None:
    """Show status of the latest payment."""
    await clear_state_preserve_referral(state)
    intake = PaymentIntakeService(session)
    payment = await intake.get_latest_payment(message.from_user.id)
    if not payment:
        await message.answer(NO_PAYMENT, parse_mode="HTML")
        return

    await message.answer(
        format_payment_status(payment),
        parse_mode="HTML",
        reply_markup=payment_status_keyboard() if payment.is_pending else None,
    )


@router.callback_query(F.data == "pay_status_refresh")
async def refresh_payment_status(
    callback: CallbackQuery,
    session: AsyncSession,
) -> None:
    """Refresh the payment status message in place."""
    intake = PaymentIntakeService(session)
    payment = await intake.get_latest_payment(callback.from_user.id)
    if not payment:
        await callback.answer("No payment found", show_alert=True)
        return

    text = format_payment_status(payment)
    if callback.message and callback.message.html_text != text:
        await callback.message.edit_text(
            text,
            parse_mode="HTML",
            reply_markup=payment_status_keyboard() if payment.is_pending else None,
        )
    await callback.answer()
