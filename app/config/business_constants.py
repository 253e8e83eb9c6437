"""
Business logic constants for ENVO-EARN.

Central location for business rules and constants used across the application.
This module can be imported by both app.services and bot handlers without circular dependencies.
"""

from decimal import Decimal

from app.config.settings import settings


# Display currency
CURRENCY = "PKR"

# Fixed investment assigned once the payment proof is approved
INVESTMENT_AMOUNT: Decimal = settings.investment_amount

# Fixed daily return credited per elapsed calendar day
DAILY_RETURN_AMOUNT: Decimal = settings.daily_return_amount

# Bonus credited to the referrer for every referred registration
REFERRAL_BONUS_AMOUNT: Decimal = settings.referral_bonus_amount

# Withdrawal bounds (inclusive)
MIN_WITHDRAWAL_AMOUNT: Decimal = settings.min_withdrawal_amount
MAX_WITHDRAWAL_AMOUNT: Decimal = settings.max_withdrawal_amount

# Referrals required before withdrawals unlock (admin override bypasses it)
MIN_REFERRALS_FOR_WITHDRAWAL: int = settings.min_referrals_for_withdrawal

# Expected admin review time for payment proofs
PAYMENT_REVIEW_WINDOW_SECONDS: int = settings.payment_review_window_seconds

# Money columns keep two decimal places
MONEY_QUANTUM = Decimal("0.01")

# Accepted payout platforms
PAYOUT_PLATFORMS = ("Easypaisa", "JazzCash")

# Username and email rules
USERNAME_PATTERN = r"^[A-Za-z0-9_]{3,32}$"
EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[A-Za-z]{2,}$"

# Referral deep link prefix: https://t.me/<bot>?start=ref_<username>
REFERRAL_LINK_PREFIX = "ref_"
