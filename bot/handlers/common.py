"""
Common handlers for all states.

Cancel, main menu and help work from any FSM state.
"""

from typing import Any

from aiogram import F, Router
from aiogram.fsm.context import FSMContext
from aiogram.types import Message
from loguru import logger

from app.models.user import User
from bot.keyboards.buttons import MainMenuButtons, NavigationButtons
from bot.keyboards.reply import main_menu_reply_keyboard
from bot.messages.user_messages import ACTION_CANCELLED, HELP_MESSAGE
from bot.utils.state_utils import clear_state_preserve_referral

router = Router(name="common")


@router.message(F.text == NavigationButtons.CANCEL)
async def cancel_handler(
    message: Message,
    state: FSMContext,
    user: User | None = None,
    **data: Any,
) -> None:
    """
    Universal cancel handler for any FSM state.

    Clears the state and returns to the main menu.
    """
    current_state = await state.get_state()
    if current_state:
        logger.info(
            f"User {message.from_user.id} cancelled operation from state: {current_state}"
        )
    await clear_state_preserve_referral(state)

    await message.answer(
        ACTION_CANCELLED,
        reply_markup=main_menu_reply_keyboard(
            user=user, is_admin=data.get("is_admin", False)
        ),
    )


@router.message(F.text.in_({NavigationButtons.MAIN_MENU, NavigationButtons.BACK}))
async def main_menu_handler(
    message: Message,
    state: FSMContext,
    user: User | None = None,
    **data: Any,
) -> None:
    """Return to the main menu."""
    await clear_state_preserve_referral(state)
    await message.answer(
        "🏠 Main menu",
        reply_markup=main_menu_reply_keyboard(
            user=user, is_admin=data.get("is_admin", False)
        ),
    )


@router.message(F.text == MainMenuButtons.HELP)
async def help_handler(
    message: Message,
    state: FSMContext,
    user: User | None = None,
    **data: Any,
) -> None:
    """Show how the scheme works."""
    await clear_state_preserve_referral(state)
    await message.answer(
        HELP_MESSAGE,
        parse_mode="HTML",
        reply_markup=main_menu_reply_keyboard(
            user=user, is_admin=data.get("is_admin", False)
        ),
    )
