"""Admin reports: accounts, referral pairs, JSON export."""

from aiogram import F, Router
from aiogram.types import BufferedInputFile, Message
from sqlalchemy.ext.asyncio import AsyncSession

from app.services.admin_user_service import AdminUserService
from app.utils.datetime_utils import utc_now
from bot.keyboards.buttons import AdminButtons
from bot.messages.admin_messages import format_accounts, format_referral_pairs
from bot.utils.text_utils import answer_long

router = Router(name="admin_reports")


@router.message(F.text == AdminButtons.ACCOUNTS)
async def show_accounts(message: Message, session: AsyncSession) -> None:
    """List id, username and email of every user."""
    service = AdminUserService(session)
    accounts = await service.list_accounts()
    await answer_long(message, format_accounts(accounts), parse_mode="HTML")


@router.message(F.text == AdminButtons.REFERRALS)
async def show_referral_pairs(message: Message, session: AsyncSession) -> None:
    """List referrer to referee pairs."""
    service = AdminUserService(session)
    pairs = await service.list_referral_pairs()
    await answer_long(message, format_referral_pairs(pairs), parse_mode="HTML")


@router.message(F.text == AdminButtons.EXPORT)
async def export_users(message: Message, session: AsyncSession) -> None:
    """Send all users as a JSON file."""
    service = AdminUserService(session)
    payload = await service.export_users_json()
    filename = f"users_{utc_now():%Y%m%d_%H%M%S}.json"
    await message.answer_document(
        BufferedInputFile(payload.encode("utf-8"), filename=filename),
        caption="📤 Users export",
    )
