"""
Withdrawal lifecycle handling module.

Handles admin approval and rejection of withdrawal requests.
"""

from loguru import logger
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.enums import WithdrawalStatus
from app.models.withdrawal_request import WithdrawalRequest
from app.services.withdrawal.withdrawal_balance_manager import (
    WithdrawalBalanceManager,
)
from app.utils.datetime_utils import utc_now


class WithdrawalLifecycleHandler:
    """Handles withdrawal lifecycle operations."""

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize withdrawal lifecycle handler.

        Args:
            session: Database session
        """
        self.session = session
        self.balance_manager = WithdrawalBalanceManager(session)

    async def _get_processing_for_update(
        self, withdrawal_id: int
    ) -> WithdrawalRequest | None:
        stmt = (
            select(WithdrawalRequest)
            .where(
                WithdrawalRequest.id == withdrawal_id,
                WithdrawalRequest.status == WithdrawalStatus.PROCESSING.value,
            )
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def approve_withdrawal(
        self,
        withdrawal_id: int,
        admin_telegram_id: int | None = None,
    ) -> tuple[WithdrawalRequest | None, str | None]:
        """
        Approve withdrawal (admin only).

        The balance was already deducted when the request was created.

        Args:
            withdrawal_id: Withdrawal request ID
            admin_telegram_id: Admin Telegram ID

        Returns:
            Tuple of (withdrawal request, error_message)
        """
        try:
            withdrawal = await self._get_processing_for_update(withdrawal_id)
            if not withdrawal:
                return None, "Withdrawal request not found or already processed"

            withdrawal.status = WithdrawalStatus.APPROVED.value
            withdrawal.processed_at = utc_now()
            withdrawal.processed_by = admin_telegram_id
            await self.session.commit()

            logger.info(
                "Withdrawal approved",
                extra={
                    "withdrawal_id": withdrawal_id,
                    "user_id": withdrawal.user_id,
                    "amount": str(withdrawal.amount),
                    "admin_id": admin_telegram_id,
                },
            )
            return withdrawal, None

        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(
                "Failed to approve withdrawal",
                extra={
                    "withdrawal_id": withdrawal_id,
                    "admin_id": admin_telegram_id,
                    "error": str(e),
                },
                exc_info=True,
            )
            return None, "Failed to approve withdrawal"

    async def reject_withdrawal(
        self,
        withdrawal_id: int,
        admin_telegram_id: int | None = None,
        reason: str | None = None,
    ) -> tuple[WithdrawalRequest | None, str | None]:
        """
        Reject withdrawal and RETURN BALANCE to user.

        Args:
            withdrawal_id: Withdrawal request ID
            admin_telegram_id: Admin Telegram ID
            reason: Rejection reason shown to the user

        Returns:
            Tuple of (withdrawal request, error_message)
        """
        try:
            withdrawal = await self._get_processing_for_update(withdrawal_id)
            if not withdrawal:
                return None, "Withdrawal request not found or already processed"

            restored = await self.balance_manager.restore_balance(
                withdrawal.user_id, withdrawal.amount, withdrawal.id
            )
            if not restored:
                await self.session.rollback()
                return None, "Failed to return balance"

            withdrawal.status = WithdrawalStatus.REJECTED.value
            withdrawal.processed_at = utc_now()
            withdrawal.processed_by = admin_telegram_id
            withdrawal.reject_reason = reason
            await self.session.commit()

            logger.info(
                "Withdrawal rejected and balance returned",
                extra={
                    "withdrawal_id": withdrawal_id,
                    "user_id": withdrawal.user_id,
                    "amount": str(withdrawal.amount),
                    "admin_id": admin_telegram_id,
                },
            )
            return withdrawal, None

        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(
                "Failed to reject withdrawal",
                extra={
                    "withdrawal_id": withdrawal_id,
                    "admin_id": admin_telegram_id,
                    "error": str(e),
                },
                exc_info=True,
            )
            return None, "Failed to reject withdrawal"
