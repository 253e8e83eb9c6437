"""
Payment approval service.

Admin review of payment proofs. Only pending requests can be approved
or rejected; the request row is locked for the transition.
"""

from datetime import datetime, timedelta

from loguru import logger
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config.business_constants import (
    INVESTMENT_AMOUNT,
    PAYMENT_REVIEW_WINDOW_SECONDS,
)
from app.models.enums import PaymentStatus
from app.models.payment_request import PaymentRequest
from app.repositories.payment_repository import PaymentRepository
from app.repositories.user_repository import UserRepository
from app.services.notification_service import NotificationService
from app.utils.datetime_utils import utc_now
from app.utils.formatters import format_pkr


class PaymentApprovalService:
    """Admin review of payment proofs."""

    def __init__(
        self,
        session: AsyncSession,
        notifier: NotificationService | None = None,
    ) -> None:
        """
        Initialize payment approval service.

        Args:
            session: Database session
            notifier: Notification service (defaults to registered bot)
        """
        self.session = session
        self.payment_repo = PaymentRepository(session)
        self.user_repo = UserRepository(session)
        self.notifier = notifier or NotificationService()

    async def _get_pending_for_update(
        self, payment_id: int
    ) -> PaymentRequest | None:
        stmt = (
            select(PaymentRequest)
            .where(
                PaymentRequest.id == payment_id,
                PaymentRequest.status == PaymentStatus.PENDING.value,
            )
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def approve_payment(
        self, payment_id: int, admin_telegram_id: int
    ) -> tuple[PaymentRequest | None, str | None]:
        """
        Approve a pending payment.

        If the submitter already has a profile, its investment is set.

        Args:
            payment_id: Payment request ID
            admin_telegram_id: Reviewing admin

        Returns:
            Tuple of (payment request, error_message)
        """
        try:
            payment = await self._get_pending_for_update(payment_id)
            if not payment:
                return None, "Payment not found or already reviewed"

            payment.status = PaymentStatus.APPROVED.value
            payment.reviewed_at = utc_now()
            payment.reviewed_by = admin_telegram_id

            user = await self.user_repo.get_by_telegram_id(payment.telegram_id)
            if user:
                user.investment = INVESTMENT_AMOUNT
                payment.user_id = user.id

            await self.session.commit()

            logger.info(
                "Payment approved",
                extra={
                    "payment_id": payment_id,
                    "telegram_id": payment.telegram_id,
                    "admin_id": admin_telegram_id,
                    "profile_exists": user is not None,
                },
            )

        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(
                "Failed to approve payment",
                extra={"payment_id": payment_id, "error": str(e)},
                exc_info=True,
            )
            return None, "Failed to approve payment"

        if user:
            text = (
                "✅ <b>Payment approved!</b>\n\n"
                f"Your investment of {format_pkr(INVESTMENT_AMOUNT)} is now active."
            )
        else:
            text = (
                "✅ <b>Payment approved!</b>\n\n"
                "Press <b>📝 Register</b> to create your account and start earning."
            )
        await self.notifier.send_notification(payment.telegram_id, text)
        return payment, None

    async def reject_payment(
        self, payment_id: int, admin_telegram_id: int
    ) -> tuple[PaymentRequest | None, str | None]:
        """
        Reject a pending payment.

        Args:
            payment_id: Payment request ID
            admin_telegram_id: Reviewing admin

        Returns:
            Tuple of (payment request, error_message)
        """
        try:
            payment = await self._get_pending_for_update(payment_id)
            if not payment:
                return None, "Payment not found or already reviewed"

            payment.status = PaymentStatus.REJECTED.value
            payment.reviewed_at = utc_now()
            payment.reviewed_by = admin_telegram_id
            await self.session.commit()

            logger.info(
                "Payment rejected",
                extra={
                    "payment_id": payment_id,
                    "telegram_id": payment.telegram_id,
                    "admin_id": admin_telegram_id,
                },
            )

        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(
                "Failed to reject payment",
                extra={"payment_id": payment_id, "error": str(e)},
                exc_info=True,
            )
            return None, "Failed to reject payment"

        await self.notifier.send_notification(
            payment.telegram_id,
            "❌ <b>Payment rejected.</b>\n\n"
            "We could not verify your payment. Please check the details "
            "and submit a new proof.",
        )
        return payment, None

    async def notify_stale_payments(self, now: datetime | None = None) -> int:
        """
        Send a one-time "still pending" notice for old pending requests.

        Args:
            now: Current moment (defaults to utc_now)

        Returns:
            Number of requests flagged
        """
        now = now or utc_now()
        cutoff = now - timedelta(seconds=PAYMENT_REVIEW_WINDOW_SECONDS)

        stale = await self.payment_repo.get_stale_pending(cutoff)
        if not stale:
            await self.session.commit()
            return 0

        for payment in stale:
            payment.timeout_notified = True
        await self.session.commit()

        for payment in stale:
            await self.notifier.send_notification(
                payment.telegram_id,
                "⏳ Your payment is still under review. "
                "It is taking longer than usual, thank you for your patience.",
            )

        await self.notifier.notify_admins(
            f"⏰ {len(stale)} payment proof(s) have been waiting more than "
            f"{PAYMENT_REVIEW_WINDOW_SECONDS // 60} minutes for review."
        )

        logger.info(
            "Stale payment notices sent",
            extra={"count": len(stale)},
        )
        return len(stale)
