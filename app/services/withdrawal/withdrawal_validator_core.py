"""
Withdrawal validation core module.

Contains the main validation logic and ValidationResult class.
"""

from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User
from app.repositories.referral_repository import ReferralRepository
from app.services.withdrawal.withdrawal_basic_checks import (
    BasicChecksMixin,
)


@dataclass
class ValidationResult:
    """Result of withdrawal validation."""

    is_valid: bool
    error_message: str | None = None
    error_code: str | None = None

    @classmethod
    def success(cls) -> "ValidationResult":
        """Create a successful validation result."""
        return cls(is_valid=True)

    @classmethod
    def error(
        cls, message: str, code: str | None = None
    ) -> "ValidationResult":
        """Create an error validation result."""
        return cls(is_valid=False, error_message=message, error_code=code)


class WithdrawalValidator(BasicChecksMixin):
    """Validator for withdrawal requests."""

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize withdrawal validator.

        Args:
            session: Database session
        """
        self.session = session
        self.referral_repo = ReferralRepository(session)

    async def validate_withdrawal_request(
        self, user: User | None, amount: Decimal | None
    ) -> ValidationResult:
        """
        Run all validations and return result.

        The first failing check wins.

        Args:
            user: User (preferably locked)
            amount: Requested amount

        Returns:
            ValidationResult with is_valid and optional
            error_message/error_code
        """
        # 1. Check emergency stop
        is_valid, error_msg = await self.check_emergency_stop()
        if not is_valid:
            return ValidationResult.error(error_msg, "EMERGENCY_STOP")

        # 2. Check user status
        is_valid, error_msg = await self.check_user_banned(user)
        if not is_valid:
            return ValidationResult.error(error_msg, "USER_BANNED")

        # 3. Check payout info
        is_valid, error_msg = await self.check_payout_info(user)
        if not is_valid:
            return ValidationResult.error(error_msg, "PAYOUT_INFO_MISSING")

        # 4. Check referral gating
        referral_count = await self.referral_repo.count_by_referrer(user.id)
        is_valid, error_msg = await self.check_referrals(user, referral_count)
        if not is_valid:
            return ValidationResult.error(error_msg, "REFERRALS_REQUIRED")

        # 5. Check amount is a number
        is_valid, error_msg = await self.check_amount_valid(amount)
        if not is_valid:
            return ValidationResult.error(error_msg, "INVALID_AMOUNT")

        # 6. Check bounds
        is_valid, error_msg = await self.check_amount_range(amount)
        if not is_valid:
            return ValidationResult.error(error_msg, "AMOUNT_OUT_OF_RANGE")

        # 7. Check balance
        is_valid, error_msg = await self.check_balance(user, amount)
        if not is_valid:
            return ValidationResult.error(error_msg, "INSUFFICIENT_BALANCE")

        return ValidationResult.success()
