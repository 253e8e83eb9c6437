"""
Unit tests for payment proof intake and review.

Tests cover:
- Submission requires holder name, account number and screenshot
- One pending proof per submitter
- Approval sets the investment when a profile exists
- Only pending proofs can be reviewed
- One-time notices for proofs waiting longer than the review window
"""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock

import pytest

from app.config.business_constants import (
    INVESTMENT_AMOUNT,
    PAYMENT_REVIEW_WINDOW_SECONDS,
)
from app.models.enums import PaymentStatus
from app.models.payment_request import PaymentRequest
from app.services.payment import PaymentApprovalService, PaymentIntakeService
from app.services.payment.payment_intake_service import is_image_mime_type


def make_payment(**overrides) -> PaymentRequest:
    """Build a pending payment request."""
    fields = {
        "id": 7,
        "telegram_id": 555000111,
        "user_id": None,
        "account_holder_name": "Alice Khan",
        "account_number": "03001234567",
        "screenshot_file_id": "AgACAgIAAxkBAAI",
        "status": PaymentStatus.PENDING.value,
        "timeout_notified": False,
    }
    fields.update(overrides)
    return PaymentRequest(**fields)


class TestPaymentIntake:
    """Test payment proof submission."""

    @pytest.fixture
    def service(self, mock_session):
        service = PaymentIntakeService(mock_session)
        service.user_repo.get_by_telegram_id = AsyncMock(return_value=None)
        service.payment_repo.get_pending_by_telegram_id = AsyncMock(
            return_value=None
        )
        service.payment_repo.create = AsyncMock(
            side_effect=lambda **kwargs: make_payment(**kwargs)
        )
        return service

    @pytest.mark.asyncio
    async def test_submit(self, service, mock_session):
        """Complete proof is stored as pending."""
        payment, error = await service.submit_payment(
            555000111, "  Alice Khan ", "0300 1234567", "file-1"
        )

        assert error is None
        assert payment.status == PaymentStatus.PENDING.value
        kwargs = service.payment_repo.create.call_args.kwargs
        assert kwargs["account_holder_name"] == "Alice Khan"
        assert kwargs["screenshot_file_id"] == "file-1"
        assert kwargs["user_id"] is None
        mock_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "holder,number,file_id",
        [
            ("", "03001234567", "file-1"),
            ("Alice", "  ", "file-1"),
            ("Alice", "03001234567", None),
        ],
    )
    async def test_missing_fields(self, service, holder, number, file_id):
        """All three parts of the proof are required."""
        payment, error = await service.submit_payment(
            555000111, holder, number, file_id
        )

        assert payment is None
        assert error.startswith("Please provide")
        service.payment_repo.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_invalid_account_number(self, service):
        """Account number must look like a phone/account number."""
        payment, error = await service.submit_payment(
            555000111, "Alice", "not-a-number", "file-1"
        )

        assert payment is None
        assert error == "Invalid account number."

    @pytest.mark.asyncio
    async def test_already_invested(self, service, make_user):
        """Invested users cannot submit again."""
        service.user_repo.get_by_telegram_id.return_value = make_user()

        payment, error = await service.submit_payment(
            555000111, "Alice", "03001234567", "file-1"
        )

        assert payment is None
        assert error == "Your investment is already active."

    @pytest.mark.asyncio
    async def test_pending_exists(self, service):
        """Only one proof can be under review at a time."""
        service.payment_repo.get_pending_by_telegram_id.return_value = (
            make_payment()
        )

        payment, error = await service.submit_payment(
            555000111, "Alice", "03001234567", "file-2"
        )

        assert payment is None
        assert "already have a payment under review" in error

    @pytest.mark.parametrize(
        "mime,expected",
        [
            ("image/jpeg", True),
            ("IMAGE/PNG", True),
            ("application/pdf", False),
            (None, False),
        ],
    )
    def test_image_mime_type(self, mime, expected):
        """Only image documents are accepted as screenshots."""
        assert is_image_mime_type(mime) is expected


class TestPaymentApproval:
    """Test admin review of payment proofs."""

    @pytest.fixture
    def service(self, mock_session, mock_notifier):
        service = PaymentApprovalService(mock_session, notifier=mock_notifier)
        service._get_pending_for_update = AsyncMock()
        service.user_repo.get_by_telegram_id = AsyncMock(return_value=None)
        return service

    @pytest.mark.asyncio
    async def test_approve_without_profile(self, service, mock_notifier):
        """Approval without a profile invites the user to register."""
        payment = make_payment()
        service._get_pending_for_update.return_value = payment

        result, error = await service.approve_payment(7, 111111111)

        assert error is None
        assert result.status == PaymentStatus.APPROVED.value
        assert result.reviewed_by == 111111111
        assert result.user_id is None
        chat_id, text = mock_notifier.send_notification.call_args.args
        assert chat_id == payment.telegram_id
        assert "Register" in text

    @pytest.mark.asyncio
    async def test_approve_with_profile(self, service, make_user):
        """Approval activates the investment of an existing profile."""
        user = make_user(id=3, investment=0)
        service._get_pending_for_update.return_value = make_payment()
        service.user_repo.get_by_telegram_id.return_value = user

        result, error = await service.approve_payment(7, 111111111)

        assert error is None
        assert user.investment == INVESTMENT_AMOUNT
        assert result.user_id == 3

    @pytest.mark.asyncio
    async def test_reject(self, service, mock_session, mock_notifier):
        """Rejection marks the proof and tells the user."""
        service._get_pending_for_update.return_value = make_payment()

        result, error = await service.reject_payment(7, 222222222)

        assert error is None
        assert result.status == PaymentStatus.REJECTED.value
        mock_session.commit.assert_awaited_once()
        mock_notifier.send_notification.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_review_twice(self, service, mock_notifier):
        """Already reviewed proofs cannot be reviewed again."""
        service._get_pending_for_update.return_value = None

        approved, approve_error = await service.approve_payment(7, 1)
        rejected, reject_error = await service.reject_payment(7, 1)

        assert approved is None and rejected is None
        assert approve_error == "Payment not found or already reviewed"
        assert reject_error == "Payment not found or already reviewed"
        mock_notifier.send_notification.assert_not_awaited()


class TestStalePayments:
    """Test one-time "still pending" notices."""

    @pytest.fixture
    def service(self, mock_session, mock_notifier):
        service = PaymentApprovalService(mock_session, notifier=mock_notifier)
        service.payment_repo.get_stale_pending = AsyncMock(return_value=[])
        return service

    @pytest.mark.asyncio
    async def test_flags_and_notifies(
        self, service, mock_session, mock_notifier
    ):
        """Each stale proof is flagged and its submitter notified once."""
        stale = [
            make_payment(id=1, telegram_id=100),
            make_payment(id=2, telegram_id=200),
        ]
        service.payment_repo.get_stale_pending.return_value = stale

        count = await service.notify_stale_payments()

        assert count == 2
        assert all(p.timeout_notified for p in stale)
        notified = [
            c.args[0] for c in mock_notifier.send_notification.call_args_list
        ]
        assert notified == [100, 200]
        mock_notifier.notify_admins.assert_awaited_once()
        mock_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_cutoff_uses_review_window(self, service):
        """Cutoff is now minus the review window."""
        now = datetime(2026, 3, 10, 7, 0, tzinfo=UTC)

        await service.notify_stale_payments(now=now)

        cutoff = service.payment_repo.get_stale_pending.call_args.args[0]
        assert cutoff == now - timedelta(seconds=PAYMENT_REVIEW_WINDOW_SECONDS)

    @pytest.mark.asyncio
    async def test_nothing_stale(self, service, mock_session, mock_notifier):
        """No stale proofs, no notices."""
        count = await service.notify_stale_payments()

        assert count == 0
        mock_notifier.notify_admins.assert_not_awaited()
        mock_session.commit.assert_awaited_once()
