"""
Referral repository.

Data access layer for Referral model.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from app.models.referral import Referral
from app.models.user import User
from app.repositories.base import BaseRepository


class ReferralRepository(BaseRepository[Referral]):
    """Referral repository with specific queries."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize referral repository."""
        super().__init__(Referral, session)

    async def count_by_referrer(self, referrer_id: int) -> int:
        """Count direct referrals of a user."""
        return await self.count(referrer_id=referrer_id)

    async def is_referred(self, referral_user_id: int) -> bool:
        """Check if a user was already referred by someone."""
        return await self.exists(referral_id=referral_user_id)

    async def get_referees(
        self, referrer_id: int
    ) -> list[tuple[str, "Referral"]]:
        """
        Get referred users of a referrer, oldest first.

        Args:
            referrer_id: Referrer user ID

        Returns:
            List of (referee username, referral) pairs
        """
        stmt = (
            select(User.username, Referral)
            .join(User, User.id == Referral.referral_id)
            .where(Referral.referrer_id == referrer_id)
            .order_by(Referral.created_at.asc())
        )
        result = await self.session.execute(stmt)
        return [(row[0], row[1]) for row in result.all()]

    async def get_all_pairs(self) -> list[tuple[str, str]]:
        """
        Get every referral link.

        Returns:
            List of (referrer username, referee username), newest first
        """
        referrer = aliased(User)
        referee = aliased(User)
        stmt = (
            select(referrer.username, referee.username)
            .select_from(Referral)
            .join(referrer, referrer.id == Referral.referrer_id)
            .join(referee, referee.id == Referral.referral_id)
            .order_by(Referral.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return [(row[0], row[1]) for row in result.all()]
