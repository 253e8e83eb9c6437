"""
Integration tests for service flows across modules.

Repositories are mocked at their query methods; everything above them
(validation, balance bookkeeping, notifications) runs for real.

Tests cover:
- Withdrawal request then approval, with admin and user notices
- Withdrawal request then rejection, balance refunded
- Payment approval then registration with referral bonus
- Accrual after registration
"""

from datetime import UTC, datetime, timedelta
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from app.config.business_constants import (
    DAILY_RETURN_AMOUNT,
    INVESTMENT_AMOUNT,
    MIN_REFERRALS_FOR_WITHDRAWAL,
    MIN_WITHDRAWAL_AMOUNT,
    REFERRAL_BONUS_AMOUNT,
)
from app.models.enums import PaymentStatus, WithdrawalStatus
from app.models.payment_request import PaymentRequest
from app.models.withdrawal_request import WithdrawalRequest
from app.services.earnings import AccrualService
from app.services.payment import PaymentApprovalService
from app.services.user import UserService
from app.services.withdrawal_service import WithdrawalService


@pytest.fixture
def investor(make_user):
    """Unlocked investor with enough balance for a minimum withdrawal."""
    return make_user(balance=MIN_WITHDRAWAL_AMOUNT + Decimal("400"))


@pytest.fixture
def withdrawal_service(mock_session, mock_notifier, investor):
    """WithdrawalService wired to a single in-memory user."""
    service = WithdrawalService(mock_session, notifier=mock_notifier)
    created: dict[int, WithdrawalRequest] = {}

    async def create_withdrawal(**kwargs):
        withdrawal = WithdrawalRequest(id=len(created) + 1, **kwargs)
        created[withdrawal.id] = withdrawal
        return withdrawal

    async def get_processing(withdrawal_id):
        withdrawal = created.get(withdrawal_id)
        if withdrawal and withdrawal.status == WithdrawalStatus.PROCESSING.value:
            return withdrawal
        return None

    request_handler = service.request_handler
    request_handler.user_repo.get_for_update = AsyncMock(return_value=investor)
    request_handler.withdrawal_repo.create = AsyncMock(
        side_effect=create_withdrawal
    )
    request_handler.validator.referral_repo.count_by_referrer = AsyncMock(
        return_value=MIN_REFERRALS_FOR_WITHDRAWAL
    )

    lifecycle = service.lifecycle_handler
    lifecycle._get_processing_for_update = AsyncMock(side_effect=get_processing)
    lifecycle.balance_manager.user_repo.get_for_update = AsyncMock(
        return_value=investor
    )

    service.user_repo.get_by_id = AsyncMock(return_value=investor)
    return service


class TestWithdrawalFlow:
    """Request, then admin decision."""

    @pytest.mark.asyncio
    async def test_request_and_approve(
        self, withdrawal_service, investor, mock_notifier
    ):
        """Approved withdrawal stays debited and the user is told."""
        start_balance = investor.balance

        withdrawal, error = await withdrawal_service.request_withdrawal(
            investor.id, str(MIN_WITHDRAWAL_AMOUNT)
        )
        assert error is None
        assert investor.balance == start_balance - MIN_WITHDRAWAL_AMOUNT
        mock_notifier.notify_admins.assert_awaited_once()
        assert "@alice" in mock_notifier.notify_admins.call_args.args[0]

        approved, error = await withdrawal_service.approve_withdrawal(
            withdrawal.id, 111111111
        )
        assert error is None
        assert approved.status == WithdrawalStatus.APPROVED.value
        assert investor.balance == start_balance - MIN_WITHDRAWAL_AMOUNT
        chat_id, text = mock_notifier.send_notification.call_args.args
        assert chat_id == investor.telegram_id
        assert "approved" in text

    @pytest.mark.asyncio
    async def test_request_and_reject(
        self, withdrawal_service, investor, mock_notifier
    ):
        """Rejected withdrawal is refunded and the reason is shown escaped."""
        start_balance = investor.balance

        withdrawal, _ = await withdrawal_service.request_withdrawal(
            investor.id, MIN_WITHDRAWAL_AMOUNT
        )
        rejected, error = await withdrawal_service.reject_withdrawal(
            withdrawal.id, 111111111, "Account <closed>"
        )

        assert error is None
        assert rejected.status == WithdrawalStatus.REJECTED.value
        assert investor.balance == start_balance
        text = mock_notifier.send_notification.call_args.args[1]
        assert "Account &lt;closed&gt;" in text

    @pytest.mark.asyncio
    async def test_second_decision_refused(self, withdrawal_service, investor):
        """A decided request cannot be rejected afterwards."""
        start_balance = investor.balance
        withdrawal, _ = await withdrawal_service.request_withdrawal(
            investor.id, MIN_WITHDRAWAL_AMOUNT
        )
        await withdrawal_service.approve_withdrawal(withdrawal.id, 1)

        rejected, error = await withdrawal_service.reject_withdrawal(
            withdrawal.id, 1
        )

        assert rejected is None
        assert "already processed" in error
        assert investor.balance == start_balance - MIN_WITHDRAWAL_AMOUNT

    @pytest.mark.asyncio
    async def test_refused_request_notifies_nobody(
        self, withdrawal_service, investor, mock_notifier
    ):
        """A refused request leaves balance as is and sends no notices."""
        start_balance = investor.balance

        withdrawal, error = await withdrawal_service.request_withdrawal(
            investor.id, "0"
        )

        assert withdrawal is None
        assert error is not None
        assert investor.balance == start_balance
        mock_notifier.notify_admins.assert_not_awaited()


class TestOnboardingFlow:
    """Payment approval, registration and the first accrual."""

    @pytest.mark.asyncio
    async def test_payment_to_first_returns(
        self, mock_session, mock_notifier, make_user
    ):
        """Approved payer registers via invite link and starts earning."""
        payer_telegram_id = 555000222
        payment = PaymentRequest(
            id=1,
            telegram_id=payer_telegram_id,
            account_holder_name="Bob",
            account_number="03007654321",
            screenshot_file_id="file-1",
            status=PaymentStatus.PENDING.value,
        )
        referrer = make_user(id=1, username="alice", balance=Decimal("0"))

        # Admin approves before a profile exists
        approval = PaymentApprovalService(mock_session, notifier=mock_notifier)
        approval._get_pending_for_update = AsyncMock(return_value=payment)
        approval.user_repo.get_by_telegram_id = AsyncMock(return_value=None)

        approved, error = await approval.approve_payment(1, 111111111)
        assert error is None
        assert approved.status == PaymentStatus.APPROVED.value

        # Payer registers with alice's invite code
        users = UserService(mock_session)
        users.user_repo.get_by_telegram_id = AsyncMock(return_value=None)
        users.user_repo.get_by_username = AsyncMock(return_value=None)
        users.user_repo.get_by_email = AsyncMock(return_value=None)
        users.user_repo.create = AsyncMock(
            side_effect=lambda **kwargs: make_user(id=2, **kwargs)
        )
        users.payment_repo.get_approved_by_telegram_id = AsyncMock(
            return_value=payment
        )
        bonus = users.bonus_processor
        bonus.user_repo.get_by_username = AsyncMock(return_value=referrer)
        bonus.user_repo.get_for_update = AsyncMock(return_value=referrer)
        bonus.referral_repo.is_referred = AsyncMock(return_value=False)
        bonus.referral_repo.create = AsyncMock()
        bonus.earning_repo.create = AsyncMock()

        user, error = await users.register_user(
            payer_telegram_id,
            "bob",
            "bob@example.com",
            referral_code="alice",
            notifier=mock_notifier,
        )

        assert error is None
        assert user.investment == INVESTMENT_AMOUNT
        assert user.referred_by_id == referrer.id
        assert payment.user_id == user.id
        assert referrer.balance == REFERRAL_BONUS_AMOUNT
        assert (
            mock_notifier.send_notification.call_args.args[0]
            == referrer.telegram_id
        )

        # Two days later the dashboard accrual credits two daily returns
        accrual = AccrualService(mock_session)
        accrual.user_repo.get_for_update = AsyncMock(return_value=user)
        accrual.earning_repo.add_many = MagicMock()

        result, error = await accrual.accrue_for_user(
            user.id, now=user.registration_date + timedelta(days=2)
        )

        assert error is None
        assert result.days == 2
        assert user.balance == DAILY_RETURN_AMOUNT * 2


class TestStalePaymentJob:
    """Stale notices are sent once per payment."""

    @pytest.mark.asyncio
    async def test_second_run_sends_nothing(self, mock_session, mock_notifier):
        payment = PaymentRequest(
            id=1,
            telegram_id=100,
            account_holder_name="Bob",
            account_number="03007654321",
            screenshot_file_id="file-1",
            status=PaymentStatus.PENDING.value,
            timeout_notified=False,
            submitted_at=datetime(2026, 3, 10, 6, 0, tzinfo=UTC),
        )

        async def get_stale(cutoff):
            if not payment.timeout_notified and payment.submitted_at <= cutoff:
                return [payment]
            return []

        service = PaymentApprovalService(mock_session, notifier=mock_notifier)
        service.payment_repo.get_stale_pending = AsyncMock(side_effect=get_stale)
        now = datetime(2026, 3, 10, 7, 0, tzinfo=UTC)

        assert await service.notify_stale_payments(now=now) == 1
        assert await service.notify_stale_payments(now=now) == 0
        assert mock_notifier.send_notification.await_count == 1
