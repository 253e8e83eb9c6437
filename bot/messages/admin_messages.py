"""
Admin message templates and formatting functions.
"""

from html import escape

from app.models.payment_request import PaymentRequest
from app.models.user import User
from app.models.withdrawal_request import WithdrawalRequest
from app.services.admin_user_service import UserDetail
from app.utils.datetime_utils import format_datetime
from app.utils.formatters import format_pkr

ADMIN_PANEL = "🛡 <b>Admin panel</b>"
NO_PENDING_PAYMENTS = "No pending payments."
NO_PROCESSING_WITHDRAWALS = "No withdrawals awaiting review."
NO_USERS = "No users yet."
ENTER_REJECT_REASON = "Enter the rejection reason (or send - to skip):"
ENTER_NEW_BALANCE = "Enter the new balance for @{username} (current {balance}):"
ENTER_USER_SEARCH = "Enter a username or Telegram ID:"
USER_NOT_FOUND = "User not found."


def format_payment_for_review(payment: PaymentRequest) -> str:
    """Caption of a payment proof sent to admins."""
    return (
        f"🧾 <b>Payment #{payment.id}</b>\n\n"
        f"Telegram ID: <code>{payment.telegram_id}</code>\n"
        f"Account holder: {escape(payment.account_holder_name)}\n"
        f"Account number: <code>{escape(payment.account_number)}</code>\n"
        f"Submitted: {format_datetime(payment.submitted_at)}"
    )


def format_withdrawal_for_review(
    withdrawal: WithdrawalRequest, username: str | None = None
) -> str:
    """Withdrawal card shown to admins."""
    who = f"@{escape(username)}" if username else f"user #{withdrawal.user_id}"
    return (
        f"💸 <b>Withdrawal #{withdrawal.id}</b>\n\n"
        f"User: {who}\n"
        f"Amount: <b>{format_pkr(withdrawal.amount)}</b>\n"
        f"Platform: {escape(withdrawal.payout_platform or '-')}\n"
        f"Holder: {escape(withdrawal.payout_account_holder or '-')}\n"
        f"Account: <code>{escape(withdrawal.payout_account_number or '-')}</code>\n"
        f"Submitted: {format_datetime(withdrawal.submitted_at)}"
    )


def format_user_detail(detail: UserDetail) -> str:
    """Full user card."""
    user = detail.user
    text = (
        f"👤 <b>@{escape(user.username)}</b> (#{user.id})\n\n"
        f"Telegram ID: <code>{user.telegram_id}</code>\n"
        f"Email: {escape(user.email or '-')}\n"
        f"Investment: {format_pkr(user.investment)}\n"
        f"Total earnings: <b>{format_pkr(user.balance)}</b>\n"
        f"Referrals: {detail.referral_count}\n"
        f"Referred by: {('@' + escape(detail.referrer_username)) if detail.referrer_username else '-'}\n"
        f"Withdraw override: {'yes' if user.can_withdraw_override else 'no'}\n"
        f"Banned: {'yes' if user.is_banned else 'no'}\n"
        f"Payout: {escape(user.payout_platform or '-')} · "
        f"{escape(user.payout_account_holder or '-')} · "
        f"{escape(user.payout_account_number or '-')}\n"
        f"Registered: {format_datetime(user.registration_date)}\n"
        f"Last accrual: {format_datetime(user.last_earning_date)}\n"
        f"Withdrawals: {detail.withdrawals_count}"
    )
    if detail.recent_earnings:
        text += "\n\n<b>Recent earnings</b>\n" + "\n".join(
            f"• {format_datetime(e.earned_at)[:10]} {e.type_label} +{format_pkr(e.amount)}"
            for e in detail.recent_earnings
        )
    return text


def format_user_list(users: list[User]) -> str:
    """Compact user list header."""
    return f"👤 <b>Users</b> ({len(users)})"


def format_accounts(accounts: list[tuple[int, str, str | None]]) -> str:
    """Accounts list: id, username, email."""
    if not accounts:
        return NO_USERS
    lines = [
        f"#{user_id} · @{escape(username)} · {escape(email or '-')}"
        for user_id, username, email in accounts
    ]
    return "📇 <b>Accounts</b>\n\n" + "\n".join(lines)


def format_referral_pairs(pairs: list[tuple[str, str]]) -> str:
    """Referral pairs list."""
    if not pairs:
        return "No referrals yet."
    lines = [
        f"@{escape(referrer)} → @{escape(referee)}" for referrer, referee in pairs
    ]
    return "🔗 <b>Referral pairs</b>\n\n" + "\n".join(lines)
