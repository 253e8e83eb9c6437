"""Admin panel entry."""

from aiogram import F, Router
from aiogram.filters import Command
from aiogram.fsm.context import FSMContext
from aiogram.types import Message

from bot.keyboards.buttons import MainMenuButtons
from bot.keyboards.reply import admin_keyboard
from bot.messages.admin_messages import ADMIN_PANEL
from bot.utils.state_utils import clear_state_preserve_referral

router = Router(name="admin_panel")


@router.message(Command("admin"))
@router.message(F.text == MainMenuButtons.ADMIN_PANEL)
async def show_admin_panel(message: Message, state: FSMContext) -> None:
    """Show admin keyboard."""
    await clear_state_preserve_referral(state)
    await message.answer(ADMIN_PANEL, parse_mode="HTML", reply_markup=admin_keyboard())
