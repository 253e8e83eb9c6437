"""
Admin user management.

List, search, view, edit balance, toggle withdrawal override, delete.
"""

from aiogram import F, Router
from aiogram.fsm.context import FSMContext
from aiogram.types import CallbackQuery, Message
from sqlalchemy.ext.asyncio import AsyncSession

from app.services.admin_user_service import AdminUserService
from app.utils.formatters import format_pkr
from bot.keyboards.buttons import MENU_BUTTON_TEXTS, AdminButtons
from bot.keyboards.inline import (
    admin_confirm_delete_keyboard,
    admin_user_actions_keyboard,
    admin_user_list_keyboard,
)
from bot.keyboards.reply import admin_keyboard, cancel_keyboard
from bot.messages.admin_messages import (
    ENTER_NEW_BALANCE,
    ENTER_USER_SEARCH,
    NO_USERS,
    USER_NOT_FOUND,
    format_user_detail,
    format_user_list,
)
from bot.states.admin_states import AdminStates
from bot.utils.callback_parsers import parse_callback_id
from bot.utils.user_search_utils import search_user_by_input

router = Router(name="admin_users")


async def _send_user_detail(
    message: Message, session: AsyncSession, user_id: int, edit: bool = False
) -> bool:
    service = AdminUserService(session)
    detail = await service.get_user_detail(user_id)
    if detail is None:
        return False

    text = format_user_detail(detail)
    markup = admin_user_actions_keyboard(detail.user)
    if edit:
        await message.edit_text(text, parse_mode="HTML", reply_markup=markup)
    else:
        await message.answer(text, parse_mode="HTML", reply_markup=markup)
    return True


@router.message(F.text == AdminButtons.USERS)
async def list_users(message: Message, session: AsyncSession) -> None:
    """Show users as inline buttons."""
    service = AdminUserService(session)
    users = await service.list_users()
    if not users:
        await message.answer(NO_USERS)
        return

    await message.answer(
        format_user_list(users),
        parse_mode="HTML",
        reply_markup=admin_user_list_keyboard(users),
    )


@router.message(F.text == AdminButtons.FIND_USER)
async def start_user_search(message: Message, state: FSMContext) -> None:
    """Ask for username or Telegram ID."""
    await state.set_state(AdminStates.entering_user_search)
    await message.answer(ENTER_USER_SEARCH, reply_markup=cancel_keyboard())


@router.message(
    AdminStates.entering_user_search, F.text, ~F.text.in_(MENU_BUTTON_TEXTS)
)
async def process_user_search(
    message: Message, state: FSMContext, session: AsyncSession
) -> None:
    """Find a user and show the detail card."""
    user = await search_user_by_input(message.text, session)
    if user is None:
        await message.answer(USER_NOT_FOUND)
        return

    await state.clear()
    await message.answer("🔍 Found", reply_markup=admin_keyboard())
    await _send_user_detail(message, session, user.id)


@router.callback_query(F.data.startswith("usr_view_"))
async def view_user(callback: CallbackQuery, session: AsyncSession) -> None:
    """Show user detail."""
    user_id = parse_callback_id(callback.data, "usr_view_")
    if user_id is None or callback.message is None:
        await callback.answer("Invalid request", show_alert=True)
        return

    if not await _send_user_detail(callback.message, session, user_id, edit=True):
        await callback.answer(USER_NOT_FOUND, show_alert=True)
        return
    await callback.answer()


@router.callback_query(F.data.startswith("usr_bal_"))
async def start_edit_balance(
    callback: CallbackQuery, state: FSMContext, session: AsyncSession
) -> None:
    """Ask for the new balance."""
    user_id = parse_callback_id(callback.data, "usr_bal_")
    service = AdminUserService(session)
    detail = await service.get_user_detail(user_id) if user_id else None
    if detail is None:
        await callback.answer(USER_NOT_FOUND, show_alert=True)
        return

    await state.set_state(AdminStates.entering_balance)
    await state.update_data(user_id=user_id)
    if callback.message:
        await callback.message.answer(
            ENTER_NEW_BALANCE.format(
                username=detail.user.username,
                balance=format_pkr(detail.user.balance),
            ),
            reply_markup=cancel_keyboard(),
        )
    await callback.answer()


@router.message(
    AdminStates.entering_balance, F.text, ~F.text.in_(MENU_BUTTON_TEXTS)
)
async def process_new_balance(
    message: Message, state: FSMContext, session: AsyncSession
) -> None:
    """Set the balance."""
    data = await state.get_data()
    service = AdminUserService(session)
    user, error = await service.set_balance(
        data.get("user_id"), message.text, message.from_user.id
    )
    if error:
        await message.answer(f"❌ {error}")
        return

    await state.clear()
    await message.answer(
        f"✅ Balance of @{user.username} set to {format_pkr(user.balance)}.",
        reply_markup=admin_keyboard(),
    )


@router.callback_query(F.data.startswith("usr_ovr_"))
async def toggle_override(callback: CallbackQuery, session: AsyncSession) -> None:
    """Toggle the referral-gating override."""
    user_id = parse_callback_id(callback.data, "usr_ovr_")
    if user_id is None:
        await callback.answer("Invalid request", show_alert=True)
        return

    service = AdminUserService(session)
    user, error = await service.toggle_withdraw_override(
        user_id, callback.from_user.id
    )
    if error:
        await callback.answer(error, show_alert=True)
        return

    if callback.message:
        await _send_user_detail(callback.message, session, user_id, edit=True)
    state_text = "enabled" if user.can_withdraw_override else "disabled"
    await callback.answer(f"Withdraw override {state_text}")


@router.callback_query(F.data.startswith("usr_delok_"))
async def confirm_delete_user(callback: CallbackQuery, session: AsyncSession) -> None:
    """Delete the user."""
    user_id = parse_callback_id(callback.data, "usr_delok_")
    if user_id is None:
        await callback.answer("Invalid request", show_alert=True)
        return

    service = AdminUserService(session)
    deleted, error = await service.delete_user(user_id, callback.from_user.id)
    if error:
        await callback.answer(error, show_alert=True)
        return

    if callback.message:
        await callback.message.edit_text(f"🗑 User #{user_id} deleted.", reply_markup=None)
    await callback.answer("Deleted")


@router.callback_query(F.data.startswith("usr_del_"))
async def ask_delete_user(callback: CallbackQuery) -> None:
    """Ask for delete confirmation."""
    user_id = parse_callback_id(callback.data, "usr_del_")
    if user_id is None:
        await callback.answer("Invalid request", show_alert=True)
        return

    if callback.message:
        await callback.message.edit_reply_markup(
            reply_markup=admin_confirm_delete_keyboard(user_id)
        )
    await callback.answer("Confirm deletion")
