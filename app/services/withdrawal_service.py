"""
Withdrawal service - Main service facade.

This service acts as a facade that delegates to specialized modules
and sends the user notifications after admin decisions.

Module structure:
- withdrawal/withdrawal_request_handler: Request creation and validation
- withdrawal/withdrawal_lifecycle_handler: Approval and rejection
- withdrawal/withdrawal_query_service: Queries, history, eligibility
"""

import html
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User
from app.models.withdrawal_request import WithdrawalRequest
from app.repositories.user_repository import UserRepository
from app.services.base_service import BaseService
from app.services.notification_service import NotificationService
from app.services.withdrawal.withdrawal_lifecycle_handler import (
    WithdrawalLifecycleHandler,
)
from app.services.withdrawal.withdrawal_query_service import (
    WithdrawalEligibility,
    WithdrawalQueryService,
)
from app.services.withdrawal.withdrawal_request_handler import (
    WithdrawalRequestHandler,
)
from app.utils.formatters import format_pkr, format_user_identifier


class WithdrawalService(BaseService):
    """
    Withdrawal service for managing withdrawal requests.

    This is a facade that delegates to specialized modules.
    """

    def __init__(
        self,
        session: AsyncSession,
        notifier: NotificationService | None = None,
    ) -> None:
        """Initialize withdrawal service and all sub-components."""
        super().__init__(session)

        self.request_handler = WithdrawalRequestHandler(session)
        self.lifecycle_handler = WithdrawalLifecycleHandler(session)
        self.query_service = WithdrawalQueryService(session)
        self.user_repo = UserRepository(session)
        self.notifier = notifier or NotificationService()

    # ========================================================================
    # REQUEST HANDLING (delegates to WithdrawalRequestHandler)
    # ========================================================================

    async def request_withdrawal(
        self,
        user_id: int,
        amount: Decimal | str | None,
    ) -> tuple[WithdrawalRequest | None, str | None]:
        """
        Request withdrawal with balance deduction.

        Args:
            user_id: User ID
            amount: Withdrawal amount

        Returns:
            Tuple of (withdrawal request, error_message)
        """
        withdrawal, error = await self.request_handler.request_withdrawal(
            user_id, amount
        )
        if withdrawal:
            user = await self.user_repo.get_by_id(user_id)
            who = format_user_identifier(user) if user else f"user #{user_id}"
            await self.notifier.notify_admins(
                f"💸 <b>New withdrawal request #{withdrawal.id}</b>\n\n"
                f"User: {who}\n"
                f"Amount: {format_pkr(withdrawal.amount)}\n"
                f"Platform: {withdrawal.payout_platform}"
            )
        return withdrawal, error

    # ========================================================================
    # LIFECYCLE (delegates to WithdrawalLifecycleHandler)
    # ========================================================================

    async def approve_withdrawal(
        self, withdrawal_id: int, admin_telegram_id: int | None = None
    ) -> tuple[WithdrawalRequest | None, str | None]:
        """Approve a processing request and notify the user."""
        withdrawal, error = await self.lifecycle_handler.approve_withdrawal(
            withdrawal_id, admin_telegram_id
        )
        if withdrawal:
            await self._notify_user(
                withdrawal,
                f"✅ Your withdrawal of {format_pkr(withdrawal.amount)} "
                f"has been approved and sent to your "
                f"{withdrawal.payout_platform} account.",
            )
        return withdrawal, error

    async def reject_withdrawal(
        self,
        withdrawal_id: int,
        admin_telegram_id: int | None = None,
        reason: str | None = None,
    ) -> tuple[WithdrawalRequest | None, str | None]:
        """Reject a processing request, refund it and notify the user."""
        withdrawal, error = await self.lifecycle_handler.reject_withdrawal(
            withdrawal_id, admin_telegram_id, reason
        )
        if withdrawal:
            text = (
                f"❌ Your withdrawal of {format_pkr(withdrawal.amount)} "
                f"was rejected. The amount has been returned to your balance."
            )
            if reason:
                text += f"\n\nReason: {html.escape(reason)}"
            await self._notify_user(withdrawal, text)
        return withdrawal, error

    async def _notify_user(
        self, withdrawal: WithdrawalRequest, text: str
    ) -> None:
        user = await self.user_repo.get_by_id(withdrawal.user_id)
        if user:
            await self.notifier.send_notification(user.telegram_id, text)

    # ========================================================================
    # QUERIES (delegates to WithdrawalQueryService)
    # ========================================================================

    async def get_history(
        self, user_id: int, limit: int | None = None
    ) -> list[WithdrawalRequest]:
        """User's withdrawal history, newest first."""
        return await self.query_service.get_history(user_id, limit=limit)

    async def list_processing(self) -> list[WithdrawalRequest]:
        """Requests awaiting admin decision."""
        return await self.query_service.list_processing()

    async def get_eligibility(self, user: User) -> WithdrawalEligibility:
        """Eligibility summary for the withdrawal menu."""
        return await self.query_service.get_eligibility(user)
