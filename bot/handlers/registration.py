"""
Registration handlers.

Username and email collection after the payment proof is approved.
"""

from typing import Any

from aiogram import F, Router
from aiogram.fsm.context import FSMContext
from aiogram.types import Message
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User
from app.services.notification_service import NotificationService
from app.services.payment import PaymentIntakeService
from app.services.user import UserService
from app.utils.validation import (
    normalize_username,
    validate_email,
    validate_username,
)
from bot.keyboards.buttons import MENU_BUTTON_TEXTS, MainMenuButtons
from bot.keyboards.reply import cancel_keyboard, main_menu_reply_keyboard
from bot.messages.user_messages import (
    ALREADY_REGISTERED,
    ENTER_EMAIL,
    ENTER_USERNAME,
    REGISTER_NEEDS_APPROVAL,
    REGISTRATION_DONE,
)
from bot.states.registration import RegistrationStates
from bot.utils.state_utils import (
    REFERRAL_CODE_KEY,
    clear_state_preserve_referral,
)

router = Router(name="registration")


@router.message(F.text == MainMenuButtons.REGISTER)
async def start_registration(
    message: Message,
    state: FSMContext,
    session: AsyncSession,
    user: User | None = None,
    **data: Any,
) -> None:
    """Start registration if the payment has been approved."""
    await clear_state_preserve_referral(state)
    is_admin = data.get("is_admin", False)

    if user is not None:
        await message.answer(
            ALREADY_REGISTERED,
            reply_markup=main_menu_reply_keyboard(user=user, is_admin=is_admin),
        )
        return

    intake = PaymentIntakeService(session)
    if not await intake.has_approved_payment(message.from_user.id):
        await message.answer(
            REGISTER_NEEDS_APPROVAL,
            parse_mode="HTML",
            reply_markup=main_menu_reply_keyboard(user=None, is_admin=is_admin),
        )
        return

    await state.set_state(RegistrationStates.entering_username)
    await message.answer(
        ENTER_USERNAME, parse_mode="HTML", reply_markup=cancel_keyboard()
    )


@router.message(
    RegistrationStates.entering_username, F.text, ~F.text.in_(MENU_BUTTON_TEXTS)
)
async def process_username(
    message: Message,
    state: FSMContext,
    session: AsyncSession,
) -> None:
    """Validate and store the username."""
    username = normalize_username(message.text)

    if not validate_username(username):
        await message.answer(
            "❌ Username must be 3-32 characters: letters, digits and "
            "underscore. Try again:"
        )
        return

    user_service = UserService(session)
    if await user_service.username_exists(username):
        await message.answer("❌ This username is already taken. Try another:")
        return

    await state.update_data(username=username)
    await state.set_state(RegistrationStates.entering_email)
    await message.answer(ENTER_EMAIL, parse_mode="HTML")


@router.message(
    RegistrationStates.entering_email, F.text, ~F.text.in_(MENU_BUTTON_TEXTS)
)
async def process_email(
    message: Message,
    state: FSMContext,
    session: AsyncSession,
    **data: Any,
) -> None:
    """Validate the email and create the account."""
    email = message.text.strip()
    if not validate_email(email):
        await message.answer("❌ Please enter a valid email address:")
        return

    state_data = await state.get_data()
    user_service = UserService(session)
    user, error = await user_service.register_user(
        telegram_id=message.from_user.id,
        username=state_data.get("username"),
        email=email,
        referral_code=state_data.get(REFERRAL_CODE_KEY),
        notifier=NotificationService(message.bot),
    )

    if error:
        await message.answer(f"❌ {error}")
        if "username" in error.lower():
            await state.set_state(RegistrationStates.entering_username)
            await message.answer(ENTER_USERNAME, parse_mode="HTML")
        return

    await state.clear()
    logger.info(
        "Registration completed via bot",
        extra={"user_id": user.id, "telegram_id": message.from_user.id},
    )
    await message.answer(
        REGISTRATION_DONE,
        parse_mode="HTML",
        reply_markup=main_menu_reply_keyboard(
            user=user, is_admin=data.get("is_admin", False)
        ),
    )
