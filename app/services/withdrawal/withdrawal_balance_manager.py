"""
Withdrawal balance manager.

Handles balance operations for withdrawal requests: debit on request
and refund on rejection.
"""

from decimal import Decimal

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User
from app.repositories.user_repository import UserRepository


class WithdrawalBalanceManager:
    """Manages balance operations for withdrawal requests."""

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize withdrawal balance manager.

        Args:
            session: Database session
        """
        self.session = session
        self.user_repo = UserRepository(session)

    def deduct_balance(self, user: User, amount: Decimal) -> bool:
        """
        Deduct withdrawal amount from a locked user.

        Args:
            user: User loaded with a row lock
            amount: Amount to deduct

        Returns:
            True if deducted, False if balance is insufficient
        """
        if user.balance < amount:
            logger.warning(
                "Insufficient balance for deduction",
                extra={
                    "user_id": user.id,
                    "available": str(user.balance),
                    "requested": str(amount),
                },
            )
            return False

        user.balance = user.balance - amount
        return True

    async def restore_balance(
        self, user_id: int, amount: Decimal, withdrawal_id: int
    ) -> bool:
        """
        Return withdrawal amount to user balance.

        Args:
            user_id: User ID
            amount: Amount to return
            withdrawal_id: Withdrawal request ID for logging

        Returns:
            True if restored, False if the user no longer exists
        """
        user = await self.user_repo.get_for_update(user_id)
        if not user:
            logger.error(
                "User not found for balance restore",
                extra={"user_id": user_id, "withdrawal_id": withdrawal_id},
            )
            return False

        user.balance = user.balance + amount

        logger.info(
            "Balance restored for rejected withdrawal",
            extra={
                "user_id": user_id,
                "withdrawal_id": withdrawal_id,
                "amount": str(amount),
                "new_balance": str(user.balance),
            },
        )
        return True
