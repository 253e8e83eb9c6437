"""
Button text constants.

All button texts used in reply keyboards across the bot.
"""


class MainMenuButtons:
    """Main menu buttons."""

    # Before registration
    INVEST = "💰 Invest"
    PAYMENT_STATUS = "⏳ Payment Status"
    REGISTER = "📝 Register"

    # Registered users
    DASHBOARD = "📊 Dashboard"
    REFERRALS = "👥 Referrals"
    WITHDRAW = "💸 Withdraw"
    EARNINGS = "📈 Earnings History"

    # Common
    HELP = "ℹ️ Help"
    ADMIN_PANEL = "🛡 Admin Panel"


class WithdrawalButtons:
    """Withdrawal menu buttons."""

    REQUEST = "💸 Request Withdrawal"
    PAYOUT_INFO = "🏦 Payout Details"
    HISTORY = "📜 Withdrawal History"


class NavigationButtons:
    """Navigation buttons."""

    BACK = "◀️ Back"
    CANCEL = "❌ Cancel"
    MAIN_MENU = "🏠 Main Menu"


class AdminButtons:
    """Admin panel buttons."""

    PAYMENTS = "🧾 Pending Payments"
    WITHDRAWALS = "💸 Pending Withdrawals"
    USERS = "👤 Users"
    FIND_USER = "🔍 Find User"
    ACCOUNTS = "📇 Accounts"
    REFERRALS = "🔗 Referral Pairs"
    EXPORT = "📤 Export Users"


def _button_texts(*groups: type) -> frozenset[str]:
    return frozenset(
        value
        for group in groups
        for name, value in vars(group).items()
        if name.isupper() and isinstance(value, str)
    )


# Texts that must never be consumed as free-form FSM input
MENU_BUTTON_TEXTS = _button_texts(
    MainMenuButtons, WithdrawalButtons, NavigationButtons, AdminButtons
)
