"""
Unit tests for withdrawal request creation and lifecycle.

Tests cover:
- Balance is debited when a request is created
- Refused requests do not change the balance
- Approval keeps the balance, rejection refunds it
- Requests that are no longer processing cannot be decided twice
"""

from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import SQLAlchemyError

from app.config.business_constants import MIN_WITHDRAWAL_AMOUNT
from app.models.enums import WithdrawalStatus
from app.models.withdrawal_request import WithdrawalRequest
from app.services.withdrawal import (
    ValidationResult,
    WithdrawalBalanceManager,
    WithdrawalLifecycleHandler,
    WithdrawalRequestHandler,
)


def make_withdrawal(**overrides) -> WithdrawalRequest:
    """Build a processing withdrawal request."""
    fields = {
        "id": 10,
        "user_id": 1,
        "amount": MIN_WITHDRAWAL_AMOUNT,
        "status": WithdrawalStatus.PROCESSING.value,
        "payout_platform": "Easypaisa",
        "payout_account_holder": "Alice Khan",
        "payout_account_number": "03001234567",
    }
    fields.update(overrides)
    return WithdrawalRequest(**fields)


class TestBalanceManager:
    """Test balance deduction and restore."""

    def test_deduct(self, mock_session, make_user):
        """Deduction lowers the balance."""
        manager = WithdrawalBalanceManager(mock_session)
        user = make_user(balance=Decimal("1000"))

        assert manager.deduct_balance(user, Decimal("600")) is True
        assert user.balance == Decimal("400")

    def test_deduct_insufficient(self, mock_session, make_user):
        """Deduction never makes the balance negative."""
        manager = WithdrawalBalanceManager(mock_session)
        user = make_user(balance=Decimal("500"))

        assert manager.deduct_balance(user, Decimal("600")) is False
        assert user.balance == Decimal("500")

    @pytest.mark.asyncio
    async def test_restore(self, mock_session, make_user):
        """Restore adds the amount back."""
        manager = WithdrawalBalanceManager(mock_session)
        user = make_user(balance=Decimal("400"))
        manager.user_repo.get_for_update = AsyncMock(return_value=user)

        assert await manager.restore_balance(user.id, Decimal("600"), 10)
        assert user.balance == Decimal("1000")

    @pytest.mark.asyncio
    async def test_restore_missing_user(self, mock_session):
        """Restore fails when the user is gone."""
        manager = WithdrawalBalanceManager(mock_session)
        manager.user_repo.get_for_update = AsyncMock(return_value=None)

        assert not await manager.restore_balance(1, Decimal("600"), 10)


class TestRequestHandler:
    """Test withdrawal request creation."""

    @pytest.fixture
    def handler(self, mock_session):
        handler = WithdrawalRequestHandler(mock_session)
        handler.user_repo.get_for_update = AsyncMock()
        handler.withdrawal_repo.create = AsyncMock(
            side_effect=lambda **kwargs: make_withdrawal(**kwargs)
        )
        handler.validator.validate_withdrawal_request = AsyncMock(
            return_value=ValidationResult.success()
        )
        return handler

    @pytest.mark.asyncio
    async def test_creates_and_debits(self, handler, mock_session, make_user):
        """Valid request debits balance and stores payout snapshot."""
        user = make_user(balance=Decimal("1000"))
        handler.user_repo.get_for_update.return_value = user

        withdrawal, error = await handler.request_withdrawal(
            user.id, Decimal("600")
        )

        assert error is None
        assert withdrawal.status == WithdrawalStatus.PROCESSING.value
        assert user.balance == Decimal("400")
        kwargs = handler.withdrawal_repo.create.call_args.kwargs
        assert kwargs["amount"] == Decimal("600")
        assert kwargs["payout_platform"] == "Easypaisa"
        assert kwargs["payout_account_number"] == "03001234567"
        mock_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_text_amount_parsed(self, handler, make_user):
        """User-entered text is parsed before validation."""
        user = make_user(balance=Decimal("2000"))
        handler.user_repo.get_for_update.return_value = user

        await handler.request_withdrawal(user.id, "1,000")

        validated_amount = (
            handler.validator.validate_withdrawal_request.call_args.args[1]
        )
        assert validated_amount == Decimal("1000")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("amount", ["600.005", Decimal("600.005")])
    async def test_sub_cent_amount_rounded(self, handler, make_user, amount):
        """Debit and stored amount are the same whole-cent value."""
        user = make_user(balance=Decimal("1000.00"))
        handler.user_repo.get_for_update.return_value = user

        withdrawal, error = await handler.request_withdrawal(user.id, amount)

        assert error is None
        assert withdrawal.amount == Decimal("600.01")
        assert user.balance == Decimal("399.99")
        assert user.balance + withdrawal.amount == Decimal("1000.00")
        assert user.balance.as_tuple().exponent == -2

    @pytest.mark.asyncio
    async def test_refused_request_keeps_balance(
        self, handler, mock_session, make_user
    ):
        """Refused request leaves balance untouched and releases the lock."""
        user = make_user(balance=Decimal("1000"))
        handler.user_repo.get_for_update.return_value = user
        handler.validator.validate_withdrawal_request.return_value = (
            ValidationResult.error("Not enough referrals", "REFERRALS_REQUIRED")
        )

        withdrawal, error = await handler.request_withdrawal(
            user.id, Decimal("600")
        )

        assert withdrawal is None
        assert error == "Not enough referrals"
        assert user.balance == Decimal("1000")
        handler.withdrawal_repo.create.assert_not_awaited()
        mock_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_database_error(self, handler, mock_session):
        """Database failure rolls back."""
        handler.user_repo.get_for_update.side_effect = SQLAlchemyError("down")

        withdrawal, error = await handler.request_withdrawal(1, Decimal("600"))

        assert withdrawal is None
        assert error is not None
        mock_session.rollback.assert_awaited_once()


class TestLifecycleHandler:
    """Test approval and rejection."""

    @pytest.fixture
    def handler(self, mock_session):
        handler = WithdrawalLifecycleHandler(mock_session)
        handler._get_processing_for_update = AsyncMock()
        handler.balance_manager = MagicMock()
        handler.balance_manager.restore_balance = AsyncMock(return_value=True)
        return handler

    @pytest.mark.asyncio
    async def test_approve(self, handler, mock_session):
        """Approval marks the request and does not refund."""
        withdrawal = make_withdrawal()
        handler._get_processing_for_update.return_value = withdrawal

        result, error = await handler.approve_withdrawal(10, 111111111)

        assert error is None
        assert result.status == WithdrawalStatus.APPROVED.value
        assert result.processed_by == 111111111
        assert result.processed_at is not None
        handler.balance_manager.restore_balance.assert_not_awaited()
        mock_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_reject_refunds(self, handler, mock_session):
        """Rejection refunds the amount and stores the reason."""
        withdrawal = make_withdrawal(amount=Decimal("750"))
        handler._get_processing_for_update.return_value = withdrawal

        result, error = await handler.reject_withdrawal(
            10, 111111111, "Wrong account number"
        )

        assert error is None
        assert result.status == WithdrawalStatus.REJECTED.value
        assert result.reject_reason == "Wrong account number"
        handler.balance_manager.restore_balance.assert_awaited_once_with(
            1, Decimal("750"), 10
        )
        mock_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_decided_twice(self, handler):
        """A request that is no longer processing cannot be decided."""
        handler._get_processing_for_update.return_value = None

        approved, approve_error = await handler.approve_withdrawal(10)
        rejected, reject_error = await handler.reject_withdrawal(10)

        assert approved is None and rejected is None
        assert "already processed" in approve_error
        assert "already processed" in reject_error
        handler.balance_manager.restore_balance.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_reject_restore_failure(self, handler, mock_session):
        """Failed refund rolls back and leaves the request processing."""
        withdrawal = make_withdrawal()
        handler._get_processing_for_update.return_value = withdrawal
        handler.balance_manager.restore_balance.return_value = False

        result, error = await handler.reject_withdrawal(10)

        assert result is None
        assert error == "Failed to return balance"
        assert withdrawal.status == WithdrawalStatus.PROCESSING.value
        mock_session.rollback.assert_awaited_once()
        mock_session.commit.assert_not_awaited()
