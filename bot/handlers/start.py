"""
Start handler.

/start with optional invite deep link (ref_<username>).
"""

from typing import Any

from aiogram import Router
from aiogram.filters import CommandObject, CommandStart
from aiogram.fsm.context import FSMContext
from aiogram.types import Message
from loguru import logger

from app.models.user import User
from app.services.referral import parse_referral_code
from bot.keyboards.reply import main_menu_reply_keyboard
from bot.messages.user_messages import WELCOME_BACK_MESSAGE, WELCOME_MESSAGE
from bot.utils.state_utils import (
    REFERRAL_CODE_KEY,
    clear_state_preserve_referral,
)

router = Router(name="start")


@router.message(CommandStart())
async def cmd_start(
    message: Message,
    state: FSMContext,
    command: CommandObject,
    user: User | None = None,
    **data: Any,
) -> None:
    """
    Handle /start.

    For unregistered users a referral code from the deep link is kept in
    FSM data until registration.
    """
    await clear_state_preserve_referral(state)
    is_admin = data.get("is_admin", False)

    if user is not None:
        await message.answer(
            WELCOME_BACK_MESSAGE.format(username=user.username),
            parse_mode="HTML",
            reply_markup=main_menu_reply_keyboard(user=user, is_admin=is_admin),
        )
        return

    referral_code = parse_referral_code(command.args)
    if referral_code:
        await state.update_data({REFERRAL_CODE_KEY: referral_code})
        logger.info(
            "Referral code received",
            extra={"telegram_id": message.from_user.id, "code": referral_code},
        )

    await message.answer(
        WELCOME_MESSAGE,
        parse_mode="HTML",
        reply_markup=main_menu_reply_keyboard(user=None, is_admin=is_admin),
    )
