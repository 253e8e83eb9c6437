"""
Payment request repository.

Data access layer for PaymentRequest model.
"""

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.enums import PaymentStatus
from app.models.payment_request import PaymentRequest
from app.repositories.base import BaseRepository


class PaymentRepository(BaseRepository[PaymentRequest]):
    """Payment request repository with specific queries."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize payment repository."""
        super().__init__(PaymentRequest, session)

    async def get_latest_by_telegram_id(
        self, telegram_id: int
    ) -> PaymentRequest | None:
        """Get the most recent payment request of a submitter."""
        stmt = (
            select(PaymentRequest)
            .where(PaymentRequest.telegram_id == telegram_id)
            .order_by(PaymentRequest.submitted_at.desc(), PaymentRequest.id.desc())
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_pending_by_telegram_id(
        self, telegram_id: int
    ) -> PaymentRequest | None:
        """Get the pending payment request of a submitter, if any."""
        stmt = (
            select(PaymentRequest)
            .where(
                PaymentRequest.telegram_id == telegram_id,
                PaymentRequest.status == PaymentStatus.PENDING.value,
            )
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_approved_by_telegram_id(
        self, telegram_id: int
    ) -> PaymentRequest | None:
        """Get the latest approved payment request of a submitter."""
        stmt = (
            select(PaymentRequest)
            .where(
                PaymentRequest.telegram_id == telegram_id,
                PaymentRequest.status == PaymentStatus.APPROVED.value,
            )
            .order_by(PaymentRequest.reviewed_at.desc())
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_pending(self) -> list[PaymentRequest]:
        """Get all pending payment requests, oldest first."""
        stmt = (
            select(PaymentRequest)
            .where(PaymentRequest.status == PaymentStatus.PENDING.value)
            .order_by(PaymentRequest.submitted_at.asc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_stale_pending(
        self, submitted_before: datetime
    ) -> list[PaymentRequest]:
        """
        Get pending requests older than a cutoff that were not yet flagged.

        Rows are locked and skipped if another worker holds them.
        """
        stmt = (
            select(PaymentRequest)
            .where(
                PaymentRequest.status == PaymentStatus.PENDING.value,
                PaymentRequest.timeout_notified == False,  # noqa: E712
                PaymentRequest.submitted_at < submitted_before,
            )
            .order_by(PaymentRequest.submitted_at.asc())
            .with_for_update(skip_locked=True)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
