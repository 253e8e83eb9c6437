"""
Unit tests for the withdrawal menu handler.

Tests cover:
- Referral requirement notice shown on the first visit only
- Notice flag surviving other menu navigation
"""

from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from aiogram.fsm.context import FSMContext
from aiogram.fsm.storage.base import StorageKey
from aiogram.fsm.storage.memory import MemoryStorage

from app.services.withdrawal import WithdrawalEligibility
from bot.handlers.withdrawal.handlers import show_withdrawal_menu
from bot.utils.state_utils import clear_state_preserve_referral

LOCKED = WithdrawalEligibility(
    referral_count=0,
    required_referrals=2,
    override=False,
    has_payout_info=True,
    balance=Decimal("1000"),
    min_amount=Decimal("600"),
    max_amount=Decimal("1600"),
)


@pytest.fixture
def state():
    """Real FSM context over in-memory storage."""
    return FSMContext(
        storage=MemoryStorage(),
        key=StorageKey(bot_id=1, chat_id=555000111, user_id=555000111),
    )


@pytest.fixture
def services():
    """Patch accrual and eligibility lookups used by the handler."""
    with patch(
        "bot.handlers.withdrawal.handlers.AccrualService"
    ) as accrual_cls, patch(
        "bot.handlers.withdrawal.handlers.WithdrawalService"
    ) as withdrawal_cls:
        accrual_cls.return_value.accrue_for_user = AsyncMock()
        withdrawal_cls.return_value.get_eligibility = AsyncMock(
            return_value=LOCKED
        )
        yield withdrawal_cls


async def open_menu(state, user, mock_session) -> str:
    message = MagicMock()
    message.answer = AsyncMock()
    await show_withdrawal_menu(message, state, mock_session, user=user)
    return message.answer.call_args.args[0]


class TestWithdrawalMenuNotice:
    """Test the one-time referral requirement notice."""

    @pytest.mark.asyncio
    async def test_first_visit_only(
        self, state, services, mock_session, make_user
    ):
        user = make_user()

        first = await open_menu(state, user, mock_session)
        second = await open_menu(state, user, mock_session)

        assert "Invite 2 more" in first
        assert "Invite" not in second
        assert "Referrals: 0/2" in second

    @pytest.mark.asyncio
    async def test_survives_other_flows(
        self, state, services, mock_session, make_user
    ):
        user = make_user()
        await open_menu(state, user, mock_session)

        await state.update_data({"amount": "600"})
        await clear_state_preserve_referral(state)

        assert "Invite" not in await open_menu(state, user, mock_session)
