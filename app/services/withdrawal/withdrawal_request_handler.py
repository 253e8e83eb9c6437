"""
Withdrawal request handling module.

Handles the creation of withdrawal requests including validation and
balance deduction in one transaction.
"""

from decimal import Decimal

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.enums import WithdrawalStatus
from app.models.withdrawal_request import WithdrawalRequest
from app.repositories.user_repository import UserRepository
from app.repositories.withdrawal_repository import WithdrawalRepository
from app.services.withdrawal.withdrawal_balance_manager import (
    WithdrawalBalanceManager,
)
from app.services.withdrawal.withdrawal_validator import WithdrawalValidator
from app.utils.validation import parse_amount


class WithdrawalRequestHandler:
    """Handles withdrawal request creation and validation."""

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize withdrawal request handler.

        Args:
            session: Database session
        """
        self.session = session
        self.user_repo = UserRepository(session)
        self.withdrawal_repo = WithdrawalRepository(session)
        self.balance_manager = WithdrawalBalanceManager(session)
        self.validator = WithdrawalValidator(session)

    async def request_withdrawal(
        self,
        user_id: int,
        amount: Decimal | str | None,
    ) -> tuple[WithdrawalRequest | None, str | None]:
        """
        Request withdrawal with balance deduction.

        The user row is locked before validation, so the balance check and
        the deduction see the same balance.

        Args:
            user_id: User ID
            amount: Requested amount (Decimal or user-entered text)

        Returns:
            Tuple of (withdrawal request, error_message)
        """
        amount = parse_amount(amount)

        try:
            user = await self.user_repo.get_for_update(user_id)

            validation_result = await self.validator.validate_withdrawal_request(
                user, amount
            )
            if not validation_result.is_valid:
                await self.session.commit()
                logger.info(
                    "Withdrawal request refused",
                    extra={
                        "user_id": user_id,
                        "amount": str(amount),
                        "code": validation_result.error_code,
                    },
                )
                return None, validation_result.error_message

            if not self.balance_manager.deduct_balance(user, amount):
                await self.session.commit()
                return None, "Insufficient balance"

            withdrawal = await self.withdrawal_repo.create(
                user_id=user.id,
                amount=amount,
                status=WithdrawalStatus.PROCESSING.value,
                payout_platform=user.payout_platform,
                payout_account_holder=user.payout_account_holder,
                payout_account_number=user.payout_account_number,
            )

            await self.session.commit()

            logger.info(
                "Withdrawal request created",
                extra={
                    "withdrawal_id": withdrawal.id,
                    "user_id": user_id,
                    "amount": str(amount),
                    "balance_after": str(user.balance),
                },
            )
            return withdrawal, None

        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(
                "Failed to create withdrawal",
                extra={"user_id": user_id, "error": str(e)},
                exc_info=True,
            )
            return None, "Failed to create withdrawal request. Please try again later."
