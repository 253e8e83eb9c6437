"""
Withdrawal query service.

Read-only queries: history, admin queue and eligibility summary.
"""

from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from app.config.business_constants import (
    MAX_WITHDRAWAL_AMOUNT,
    MIN_REFERRALS_FOR_WITHDRAWAL,
    MIN_WITHDRAWAL_AMOUNT,
)
from app.models.user import User
from app.models.withdrawal_request import WithdrawalRequest
from app.repositories.referral_repository import ReferralRepository
from app.repositories.withdrawal_repository import WithdrawalRepository


@dataclass
class WithdrawalEligibility:
    """Withdrawal eligibility summary shown on the withdrawal menu."""

    referral_count: int
    required_referrals: int
    override: bool
    has_payout_info: bool
    balance: Decimal
    min_amount: Decimal
    max_amount: Decimal

    @property
    def referrals_missing(self) -> int:
        """How many more referrals are needed (0 when unlocked)."""
        if self.override:
            return 0
        return max(self.required_referrals - self.referral_count, 0)

    @property
    def is_locked(self) -> bool:
        """True while referral gating blocks withdrawals."""
        return self.referrals_missing > 0

    @property
    def can_request(self) -> bool:
        """True if a request within bounds could currently pass."""
        return (
            not self.is_locked
            and self.has_payout_info
            and self.balance >= self.min_amount
        )


class WithdrawalQueryService:
    """Queries over withdrawal requests."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize query service."""
        self.session = session
        self.withdrawal_repo = WithdrawalRepository(session)
        self.referral_repo = ReferralRepository(session)

    async def get_history(
        self, user_id: int, limit: int | None = None
    ) -> list[WithdrawalRequest]:
        """User's withdrawal history, newest first."""
        return await self.withdrawal_repo.get_by_user(user_id, limit=limit)

    async def list_processing(self) -> list[WithdrawalRequest]:
        """Requests awaiting admin decision, newest first."""
        return await self.withdrawal_repo.get_processing()

    async def get_eligibility(self, user: User) -> WithdrawalEligibility:
        """
        Build the eligibility summary for a user.

        Args:
            user: User

        Returns:
            WithdrawalEligibility
        """
        referral_count = await self.referral_repo.count_by_referrer(user.id)
        return WithdrawalEligibility(
            referral_count=referral_count,
            required_referrals=MIN_REFERRALS_FOR_WITHDRAWAL,
            override=user.can_withdraw_override,
            has_payout_info=user.has_payout_info,
            balance=user.balance,
            min_amount=MIN_WITHDRAWAL_AMOUNT,
            max_amount=MAX_WITHDRAWAL_AMOUNT,
        )
