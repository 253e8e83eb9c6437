"""
User-facing message templates and formatting functions.

This module contains all user-facing messages and helper functions
for formatting data in a consistent way across the bot. Messages use
HTML parse mode.
"""

from html import escape

from app.config.business_constants import (
    DAILY_RETURN_AMOUNT,
    INVESTMENT_AMOUNT,
    MAX_WITHDRAWAL_AMOUNT,
    MIN_REFERRALS_FOR_WITHDRAWAL,
    MIN_WITHDRAWAL_AMOUNT,
    PAYMENT_REVIEW_WINDOW_SECONDS,
    REFERRAL_BONUS_AMOUNT,
)
from app.config.settings import settings
from app.models.earning import Earning
from app.models.enums import PaymentStatus, WithdrawalStatus
from app.models.payment_request import PaymentRequest
from app.models.withdrawal_request import WithdrawalRequest
from app.services.referral.query_manager import ReferralEntry
from app.services.user.statistics import DashboardSummary
from app.services.withdrawal.withdrawal_query_service import (
    WithdrawalEligibility,
)
from app.utils.datetime_utils import format_datetime
from app.utils.formatters import format_pkr, mask_account_number

# ============================================================================
# MESSAGE TEMPLATES
# ============================================================================

WELCOME_MESSAGE = (
    "👋 <b>Welcome to ENVO-EARN!</b>\n\n"
    f"Invest {format_pkr(INVESTMENT_AMOUNT)} once and earn "
    f"{format_pkr(DAILY_RETURN_AMOUNT)} every day.\n"
    f"Invite friends and get {format_pkr(REFERRAL_BONUS_AMOUNT)} for each "
    "registration.\n\n"
    "Press <b>💰 Invest</b> to get started."
)

WELCOME_BACK_MESSAGE = "👋 Welcome back, <b>@{username}</b>!"

HELP_MESSAGE = (
    "ℹ️ <b>How it works</b>\n\n"
    f"1. Send {format_pkr(INVESTMENT_AMOUNT)} to our account and submit the proof.\n"
    "2. Wait for the admin to approve your payment.\n"
    "3. Register with a username and email.\n"
    f"4. Earn {format_pkr(DAILY_RETURN_AMOUNT)} per day, credited when you "
    "open the dashboard.\n"
    f"5. Withdraw {format_pkr(MIN_WITHDRAWAL_AMOUNT)} to "
    f"{format_pkr(MAX_WITHDRAWAL_AMOUNT)} once you have "
    f"{MIN_REFERRALS_FOR_WITHDRAWAL} referrals."
)

INVEST_INSTRUCTIONS = (
    "💰 <b>Invest {amount}</b>\n\n"
    "Send the amount to:\n"
    "Platform: <b>{platform}</b>\n"
    "Account: <code>{account}</code>\n\n"
    "Then enter the <b>account holder name</b> of the account you sent from:"
)

ENTER_ACCOUNT_NUMBER = "Enter the <b>account number</b> you sent the payment from:"
SEND_SCREENSHOT = "📸 Send a <b>screenshot</b> of the transfer (photo or image file):"
SCREENSHOT_NOT_IMAGE = "⚠️ Please send an image of the payment screenshot."
PAYMENT_SUBMITTED = (
    "✅ <b>Payment submitted!</b>\n\n"
    f"An admin will review it within about {PAYMENT_REVIEW_WINDOW_SECONDS // 60} "
    "minutes. You will be notified here."
)
NO_PAYMENT = "You have not submitted a payment yet. Press <b>💰 Invest</b>."

REGISTER_NEEDS_APPROVAL = (
    "⏳ Registration opens after your payment is approved.\n"
    "Check <b>⏳ Payment Status</b>."
)
ENTER_USERNAME = (
    "📝 Choose a <b>username</b> (3-32 characters: letters, digits, underscore):"
)
ENTER_EMAIL = "📧 Enter your <b>email</b>:"
REGISTRATION_DONE = (
    "🎉 <b>Registration complete!</b>\n\n"
    f"Your investment of {format_pkr(INVESTMENT_AMOUNT)} is active. "
    f"You will earn {format_pkr(DAILY_RETURN_AMOUNT)} every day."
)
ALREADY_REGISTERED = "You are already registered."
NOT_REGISTERED = "Please register first."

CHOOSE_PLATFORM = "🏦 Choose your payout platform:"
ENTER_PAYOUT_HOLDER = "Enter the <b>account holder name</b> for payouts:"
ENTER_PAYOUT_NUMBER = "Enter the <b>account number</b> for payouts:"
PAYOUT_SAVED = "✅ Payout details saved."

ENTER_WITHDRAWAL_AMOUNT = (
    "💸 Enter the amount to withdraw "
    f"({format_pkr(MIN_WITHDRAWAL_AMOUNT)} - {format_pkr(MAX_WITHDRAWAL_AMOUNT)}):"
)
WITHDRAWAL_CREATED = (
    "✅ <b>Withdrawal requested</b>\n\n"
    "Amount: {amount}\n"
    "Status: processing\n\n"
    "The amount has been deducted from your balance. "
    "You will be notified when it is processed."
)
WITHDRAWAL_CANCELLED = "Withdrawal cancelled."

ACTION_CANCELLED = "Cancelled."
ACCOUNT_BLOCKED = "⛔ Your account is blocked. Please contact support."
DATABASE_ERROR = "⚠️ Service is temporarily unavailable. Please try again later."
GENERIC_ERROR = (
    "❌ Something went wrong.\n\n"
    "The admins have been notified. Please try again later."
)

# ============================================================================
# FORMATTERS
# ============================================================================

_PAYMENT_STATUS_TEXT = {
    PaymentStatus.PENDING.value: "⏳ Pending review",
    PaymentStatus.APPROVED.value: "✅ Approved",
    PaymentStatus.REJECTED.value: "❌ Rejected",
}

_WITHDRAWAL_STATUS_TEXT = {
    WithdrawalStatus.PROCESSING.value: "⏳ Processing",
    WithdrawalStatus.APPROVED.value: "✅ Approved",
    WithdrawalStatus.REJECTED.value: "❌ Rejected",
}


def format_invest_instructions() -> str:
    """Payment instructions with the configured account."""
    return INVEST_INSTRUCTIONS.format(
        amount=format_pkr(INVESTMENT_AMOUNT),
        platform=escape(settings.payment_platform),
        account=escape(settings.payment_account_number),
    )


def format_payment_status(payment: PaymentRequest) -> str:
    """Payment status card."""
    status = _PAYMENT_STATUS_TEXT.get(payment.status, payment.status)
    text = (
        "🧾 <b>Payment status</b>\n\n"
        f"Status: {status}\n"
        f"Submitted: {format_datetime(payment.submitted_at)}\n"
        f"Account holder: {escape(payment.account_holder_name)}\n"
        f"Account: {mask_account_number(payment.account_number)}"
    )
    if payment.status == PaymentStatus.APPROVED.value:
        text += "\n\nPress <b>📝 Register</b> to create your account."
    elif payment.status == PaymentStatus.REJECTED.value:
        text += "\n\nYou can submit a new payment with <b>💰 Invest</b>."
    return text


def format_dashboard(summary: DashboardSummary, credited_days: int = 0) -> str:
    """
    Dashboard card.

    Args:
        summary: Dashboard figures
        credited_days: Days credited by the accrual that just ran

    Returns:
        HTML text
    """
    text = (
        f"📊 <b>Dashboard</b> · @{escape(summary.username)}\n\n"
        f"💼 Investment: <b>{format_pkr(summary.investment)}</b>\n"
        f"💰 Total earnings: <b>{format_pkr(summary.balance)}</b>\n"
        f"📈 Daily return: {format_pkr(summary.daily_return)}\n"
        f"🗓 Days active: {summary.days_active}\n"
        f"📥 Daily returns so far: {format_pkr(summary.total_daily_returns)}\n"
        f"👥 Referrals: {summary.referral_count} "
        f"(bonus {format_pkr(summary.referral_bonus_total)})"
    )
    if credited_days > 0:
        text += (
            f"\n\n✨ {credited_days} day(s) of returns were just credited."
        )
    if summary.recent_earnings:
        text += "\n\n<b>Recent earnings</b>\n" + format_earnings_lines(
            summary.recent_earnings
        )
    return text


def format_earnings_lines(earnings: list[Earning]) -> str:
    """One line per earning entry."""
    return "\n".join(
        f"• {format_datetime(e.earned_at)[:10]}  {e.type_label}  "
        f"+{format_pkr(e.amount)}"
        for e in earnings
    )


def format_earnings_history(earnings: list[Earning]) -> str:
    """Earnings log message."""
    if not earnings:
        return "📈 No earnings yet."
    return "📈 <b>Earnings history</b>\n\n" + format_earnings_lines(earnings)


def format_referrals(
    link: str, entries: list[ReferralEntry], total_bonus
) -> str:
    """Referral section: invite link, count, bonus and list."""
    text = (
        "👥 <b>Referrals</b>\n\n"
        f"Your invite link:\n<code>{escape(link)}</code>\n\n"
        f"Referrals: <b>{len(entries)}</b>\n"
        f"Referral bonus earned: <b>{format_pkr(total_bonus)}</b>\n"
        f"You get {format_pkr(REFERRAL_BONUS_AMOUNT)} for every friend who registers."
    )
    if entries:
        text += "\n\n" + "\n".join(
            f"• @{escape(e.username)} · {format_datetime(e.joined_at)[:10]}"
            for e in entries
        )
    return text


def format_withdrawal_menu(
    eligibility: WithdrawalEligibility, user, show_referral_notice: bool = True
) -> str:
    """
    Withdrawal section header.

    The referral requirement notice is shown only when show_referral_notice
    is set; the menu shows it on the first visit only.
    """
    text = (
        "💸 <b>Withdrawals</b>\n\n"
        f"Available: <b>{format_pkr(eligibility.balance)}</b>\n"
        f"Limits: {format_pkr(eligibility.min_amount)} - "
        f"{format_pkr(eligibility.max_amount)}\n"
        f"Referrals: {eligibility.referral_count}/{eligibility.required_referrals}"
    )
    if eligibility.override:
        text += " (override active)"

    if user.has_payout_info:
        text += (
            f"\n\n🏦 Payout: {escape(user.payout_platform)} · "
            f"{escape(user.payout_account_holder)} · "
            f"{mask_account_number(user.payout_account_number)}"
        )
    else:
        text += "\n\n⚠️ Save your payout details before withdrawing."

    if eligibility.is_locked and show_referral_notice:
        text += (
            f"\n\n🔒 You need {eligibility.required_referrals} referrals to "
            f"withdraw. Invite {eligibility.referrals_missing} more."
        )
    return text


def format_withdrawal_history(withdrawals: list[WithdrawalRequest]) -> str:
    """Withdrawal history list."""
    if not withdrawals:
        return "📜 No withdrawals yet."
    lines = []
    for w in withdrawals:
        status = _WITHDRAWAL_STATUS_TEXT.get(w.status, w.status)
        line = (
            f"• {format_datetime(w.submitted_at)}  {format_pkr(w.amount)}  {status}"
        )
        if w.reject_reason:
            line += f"\n   Reason: {escape(w.reject_reason)}"
        lines.append(line)
    return "📜 <b>Withdrawal history</b>\n\n" + "\n".join(lines)
