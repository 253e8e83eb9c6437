"""
Earning repository.

Data access layer for Earning model.
"""

from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.earning import Earning
from app.repositories.base import BaseRepository


class EarningRepository(BaseRepository[Earning]):
    """Earning repository with specific queries."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize earning repository."""
        super().__init__(Earning, session)

    def add_many(self, earnings: list[Earning]) -> None:
        """Stage several earnings; they are written on the next flush."""
        self.session.add_all(earnings)

    async def get_by_user(
        self, user_id: int, limit: int | None = None
    ) -> list[Earning]:
        """
        Get user's earnings log, newest first.

        Args:
            user_id: User ID
            limit: Max number of entries

        Returns:
            List of earnings
        """
        stmt = (
            select(Earning)
            .where(Earning.user_id == user_id)
            .order_by(Earning.earned_at.desc(), Earning.id.desc())
        )
        if limit:
            stmt = stmt.limit(limit)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_total_by_type(self, user_id: int, type: str) -> Decimal:
        """Sum of user's earnings of a given type."""
        stmt = select(func.coalesce(func.sum(Earning.amount), 0)).where(
            Earning.user_id == user_id,
            Earning.type == type,
        )
        result = await self.session.execute(stmt)
        return Decimal(str(result.scalar() or 0))
