"""
User statistics functionality.

Builds the dashboard summary.
"""

from dataclasses import dataclass, field
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from app.config.business_constants import (
    DAILY_RETURN_AMOUNT,
    REFERRAL_BONUS_AMOUNT,
)
from app.models.earning import Earning
from app.models.enums import EarningType
from app.models.user import User
from app.repositories.earning_repository import EarningRepository
from app.repositories.referral_repository import ReferralRepository
from app.utils.datetime_utils import to_local_date, utc_now


@dataclass
class DashboardSummary:
    """Figures shown on the user dashboard."""

    username: str
    investment: Decimal
    balance: Decimal
    daily_return: Decimal
    total_daily_returns: Decimal
    referral_count: int
    referral_bonus_total: Decimal
    days_active: int
    recent_earnings: list[Earning] = field(default_factory=list)


class UserStatisticsMixin:
    """Mixin for user statistics."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize statistics mixin."""
        self.session = session
        self.earning_repo = EarningRepository(session)
        self.referral_repo = ReferralRepository(session)

    async def get_dashboard(
        self, user: User, recent_limit: int = 5
    ) -> DashboardSummary:
        """
        Build the dashboard summary for a user.

        Args:
            user: User (accrual should already be applied)
            recent_limit: Number of recent earnings to include

        Returns:
            DashboardSummary
        """
        referral_count = await self.referral_repo.count_by_referrer(user.id)
        total_daily = await self.earning_repo.get_total_by_type(
            user.id, EarningType.DAILY_RETURN.value
        )
        recent = await self.earning_repo.get_by_user(user.id, limit=recent_limit)
        days_active = (
            to_local_date(utc_now()) - to_local_date(user.registration_date)
        ).days

        return DashboardSummary(
            username=user.username,
            investment=user.investment,
            balance=user.balance,
            daily_return=DAILY_RETURN_AMOUNT if user.is_invested else Decimal("0"),
            total_daily_returns=total_daily,
            referral_count=referral_count,
            referral_bonus_total=REFERRAL_BONUS_AMOUNT * referral_count,
            days_active=max(days_active, 0),
            recent_earnings=recent,
        )
