"""
Withdrawal basic checks module.

Contains the eligibility checks run before a withdrawal request:
- Emergency stop check
- User ban check
- Payout info check
- Referral gating check
- Amount validity and range checks
- Balance check
"""

from decimal import Decimal

from loguru import logger

from app.config.business_constants import (
    MAX_WITHDRAWAL_AMOUNT,
    MIN_REFERRALS_FOR_WITHDRAWAL,
    MIN_WITHDRAWAL_AMOUNT,
)
from app.config.settings import settings
from app.models.user import User
from app.utils.formatters import format_pkr


class BasicChecksMixin:
    """Mixin providing basic validation checks."""

    async def check_emergency_stop(self) -> tuple[bool, str | None]:
        """
        Check if emergency stop is active.

        Returns:
            Tuple of (is_valid, error_message)
        """
        if settings.emergency_stop_withdrawals:
            logger.warning("Withdrawal blocked by emergency stop")
            return False, (
                "⚠️ Withdrawals are temporarily paused for maintenance.\n\n"
                "Your funds are safe. Please try again later."
            )
        return True, None

    async def check_user_banned(
        self, user: User | None
    ) -> tuple[bool, str | None]:
        """
        Check that the user exists and is not banned.

        Args:
            user: User or None

        Returns:
            Tuple of (is_valid, error_message)
        """
        if not user:
            return False, "User not found"

        if user.is_banned:
            logger.warning(f"Withdrawal blocked: User {user.id} is banned")
            return False, (
                "Your account is blocked. Please contact support."
            )

        return True, None

    async def check_payout_info(
        self, user: User
    ) -> tuple[bool, str | None]:
        """Check that platform, account holder and number are saved."""
        if not user.has_payout_info:
            return False, (
                "Please save your payout details (platform, account holder "
                "and account number) before requesting a withdrawal."
            )
        return True, None

    async def check_referrals(
        self, user: User, referral_count: int
    ) -> tuple[bool, str | None]:
        """
        Check referral gating.

        Args:
            user: User
            referral_count: Number of direct referrals

        Returns:
            Tuple of (is_valid, error_message)
        """
        if user.can_withdraw_override:
            return True, None

        if referral_count < MIN_REFERRALS_FOR_WITHDRAWAL:
            return False, (
                f"You need at least {MIN_REFERRALS_FOR_WITHDRAWAL} referrals "
                f"to withdraw. You have {referral_count}."
            )

        return True, None

    async def check_amount_valid(
        self, amount: Decimal | None
    ) -> tuple[bool, str | None]:
        """Check that amount is a finite number."""
        if amount is None or not isinstance(amount, Decimal) or not amount.is_finite():
            return False, "Please enter a valid amount."
        return True, None

    async def check_amount_range(
        self, amount: Decimal
    ) -> tuple[bool, str | None]:
        """
        Check that amount is within the withdrawal bounds (inclusive).

        Args:
            amount: Withdrawal amount

        Returns:
            Tuple of (is_valid, error_message)
        """
        if amount < MIN_WITHDRAWAL_AMOUNT or amount > MAX_WITHDRAWAL_AMOUNT:
            return False, (
                f"Withdrawal amount must be between "
                f"{format_pkr(MIN_WITHDRAWAL_AMOUNT)} and "
                f"{format_pkr(MAX_WITHDRAWAL_AMOUNT)}."
            )
        return True, None

    async def check_balance(
        self, user: User, amount: Decimal
    ) -> tuple[bool, str | None]:
        """Check if user has sufficient balance."""
        if amount > user.balance:
            return False, (
                f"Insufficient balance. Available: {format_pkr(user.balance)}"
            )
        return True, None
