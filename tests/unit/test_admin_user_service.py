"""
Unit tests for AdminUserService.

Tests cover:
- Balance edit with adjustment earnings
- Withdrawal override toggle
- User deletion
- Account and referral listings
- JSON export
"""

import json
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from app.models.enums import EarningType
from app.services.admin_user_service import AdminUserService


@pytest.fixture
def service(mock_session):
    """AdminUserService with mocked repositories."""
    service = AdminUserService(mock_session)
    service.user_repo.get_for_update = AsyncMock()
    service.earning_repo.create = AsyncMock()
    return service


class TestSetBalance:
    """Test balance edits."""

    @pytest.mark.asyncio
    async def test_increase_recorded(self, service, mock_session, make_user):
        """Increase is logged as an admin adjustment."""
        user = make_user(balance=Decimal("100"))
        service.user_repo.get_for_update.return_value = user

        result, error = await service.set_balance(user.id, "350", 111111111)

        assert error is None
        assert result.balance == Decimal("350")
        kwargs = service.earning_repo.create.call_args.kwargs
        assert kwargs["amount"] == Decimal("250")
        assert kwargs["type"] == EarningType.ADMIN_ADJUSTMENT.value
        mock_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_decrease_not_recorded(self, service, make_user):
        """Decrease changes balance without an earning entry."""
        user = make_user(balance=Decimal("500"))
        service.user_repo.get_for_update.return_value = user

        result, error = await service.set_balance(user.id, Decimal("0"))

        assert error is None
        assert result.balance == Decimal("0")
        service.earning_repo.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_value_rounded_to_cents(self, service, make_user):
        """New balance is rounded before the adjustment is computed."""
        user = make_user(balance=Decimal("10.00"))
        service.user_repo.get_for_update.return_value = user

        result, error = await service.set_balance(user.id, "10.25499")

        assert error is None
        assert result.balance == Decimal("10.25")
        kwargs = service.earning_repo.create.call_args.kwargs
        assert kwargs["amount"] == Decimal("0.25")

    @pytest.mark.asyncio
    async def test_sub_cent_change_not_recorded(self, service, make_user):
        """A change that rounds away leaves no zero-amount earning."""
        user = make_user(balance=Decimal("10.00"))
        service.user_repo.get_for_update.return_value = user

        result, error = await service.set_balance(user.id, "10.001")

        assert error is None
        assert result.balance == Decimal("10.00")
        service.earning_repo.create.assert_not_awaited()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("value", ["-5", "abc", ""])
    async def test_invalid_value(self, service, value):
        """Negative or non-numeric balance is refused."""
        result, error = await service.set_balance(1, value)

        assert result is None
        assert error == "Balance must be a non-negative number."
        service.user_repo.get_for_update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_user_not_found(self, service):
        """Missing user is reported."""
        service.user_repo.get_for_update.return_value = None

        result, error = await service.set_balance(99, "10")

        assert result is None
        assert error == "User not found"


class TestOverrideAndDelete:
    """Test override toggle and deletion."""

    @pytest.mark.asyncio
    async def test_toggle_override(self, service, make_user):
        """Override flips on and off."""
        user = make_user()
        service.user_repo.get_for_update.return_value = user

        await service.toggle_withdraw_override(user.id)
        assert user.can_withdraw_override is True

        await service.toggle_withdraw_override(user.id)
        assert user.can_withdraw_override is False

    @pytest.mark.asyncio
    async def test_delete(self, service, mock_session):
        """Existing user is deleted."""
        service.user_repo.delete = AsyncMock(return_value=True)

        deleted, error = await service.delete_user(1, 111111111)

        assert deleted is True
        assert error is None
        mock_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_delete_missing(self, service):
        """Deleting a missing user reports it."""
        service.user_repo.delete = AsyncMock(return_value=False)

        deleted, error = await service.delete_user(1)

        assert deleted is False
        assert error == "User not found"

    @pytest.mark.asyncio
    async def test_transaction_rolls_back_on_error(self, service, mock_session):
        """Unexpected errors roll back and propagate."""
        service.user_repo.get_for_update.side_effect = RuntimeError("boom")

        with pytest.raises(RuntimeError):
            await service.toggle_withdraw_override(1)

        mock_session.rollback.assert_awaited_once()
        mock_session.commit.assert_not_awaited()


class TestReports:
    """Test account and referral listings."""

    @pytest.mark.asyncio
    async def test_list_accounts(self, service, make_user):
        """Accounts are (id, username, email) in repository order."""
        service.user_repo.get_all_ordered = AsyncMock(
            return_value=[
                make_user(id=2, telegram_id=2, username="bob", email=None),
                make_user(id=1, username="alice"),
            ]
        )

        accounts = await service.list_accounts()

        assert accounts == [(2, "bob", None), (1, "alice", "alice@example.com")]

    @pytest.mark.asyncio
    async def test_list_referral_pairs(self, service):
        """Referral pairs come straight from the repository."""
        pairs = [("alice", "bob"), ("alice", "carol")]
        service.referral_repo.get_all_pairs = AsyncMock(return_value=pairs)

        assert await service.list_referral_pairs() == pairs


class TestExport:
    """Test JSON export."""

    @pytest.mark.asyncio
    async def test_export_users_json(self, service, make_user):
        """Export lists every user with referral counts."""
        service.user_repo.get_all_ordered = AsyncMock(
            return_value=[
                make_user(id=1, username="alice", balance=Decimal("1250.50")),
                make_user(id=2, telegram_id=2, username="bob", email=None),
            ]
        )
        service.referral_repo.count_by_referrer = AsyncMock(side_effect=[2, 0])

        payload = json.loads(await service.export_users_json())

        assert [u["username"] for u in payload] == ["alice", "bob"]
        assert payload[0]["total_earnings"] == "1250.50"
        assert payload[0]["referral_count"] == 2
        assert payload[1]["email"] is None
        assert payload[0]["registration_date"].startswith("2026-01-01")
