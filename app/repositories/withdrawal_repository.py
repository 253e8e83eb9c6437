"""
Withdrawal request repository.

Data access layer for WithdrawalRequest model.
"""


from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.enums import WithdrawalStatus
from app.models.withdrawal_request import WithdrawalRequest
from app.repositories.base import BaseRepository


class WithdrawalRepository(BaseRepository[WithdrawalRequest]):
    """Withdrawal request repository with specific queries."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize withdrawal repository."""
        super().__init__(WithdrawalRequest, session)

    async def get_by_user(
        self, user_id: int, limit: int | None = None
    ) -> list[WithdrawalRequest]:
        """Get user's withdrawal history, newest first."""
        stmt = (
            select(WithdrawalRequest)
            .where(WithdrawalRequest.user_id == user_id)
            .order_by(WithdrawalRequest.submitted_at.desc())
        )
        if limit:
            stmt = stmt.limit(limit)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_processing(self) -> list[WithdrawalRequest]:
        """Get all requests awaiting admin decision, newest first."""
        stmt = (
            select(WithdrawalRequest)
            .where(WithdrawalRequest.status == WithdrawalStatus.PROCESSING.value)
            .options(selectinload(WithdrawalRequest.user))
            .order_by(WithdrawalRequest.submitted_at.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

