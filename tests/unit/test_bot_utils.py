"""
Unit tests for bot helpers.

Tests cover:
- Callback data parsing
- Long message splitting
- Referral code and withdrawal notice flag surviving state resets
- Menu buttons excluded from free-form input
- Admin user lookup formats
- Main menu keyboard variants
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from bot.keyboards.buttons import (
    AdminButtons,
    MainMenuButtons,
    MENU_BUTTON_TEXTS,
    NavigationButtons,
    WithdrawalButtons,
)
from bot.keyboards.reply import main_menu_reply_keyboard
from bot.utils.callback_parsers import parse_callback_id, parse_callback_value
from bot.utils.state_utils import (
    REFERRAL_CODE_KEY,
    WITHDRAWAL_NOTICE_SEEN_KEY,
    clear_state_preserve_referral,
    mark_withdrawal_notice_seen,
)
from bot.utils.text_utils import split_text
from bot.utils.user_search_utils import search_user_by_input


class TestCallbackParsers:
    """Test callback data parsing."""

    @pytest.mark.parametrize(
        "data,prefix,expected",
        [
            ("pay_ok_123", "pay_ok_", 123),
            ("wd_no_7", "wd_no_", 7),
            ("pay_ok_abc", "pay_ok_", None),
            ("pay_ok_", "pay_ok_", None),
            ("wd_ok_5", "pay_ok_", None),
            ("pay_ok_-1", "pay_ok_", None),
            ("", "pay_ok_", None),
        ],
    )
    def test_parse_callback_id(self, data, prefix, expected):
        assert parse_callback_id(data, prefix) == expected

    def test_parse_callback_value(self):
        assert (
            parse_callback_value("payout_platform_JazzCash", "payout_platform_")
            == "JazzCash"
        )
        assert parse_callback_value("payout_platform_", "payout_platform_") is None
        assert parse_callback_value("other_x", "payout_platform_") is None


class TestSplitText:
    """Test message splitting."""

    def test_short_text_unchanged(self):
        assert split_text("hello") == ["hello"]

    def test_splits_on_lines(self):
        text = "\n".join(["x" * 40] * 10)

        chunks = split_text(text, limit=100)

        assert all(len(c) <= 100 for c in chunks)
        assert "\n".join(chunks) == text

    def test_cuts_long_line(self):
        chunks = split_text("y" * 250, limit=100)

        assert [len(c) for c in chunks] == [100, 100, 50]


class TestStateUtils:
    """Test FSM state helpers."""

    @pytest.mark.asyncio
    async def test_referral_code_preserved(self):
        state = MagicMock()
        state.get_data = AsyncMock(
            return_value={REFERRAL_CODE_KEY: "alice", "amount": "600"}
        )
        state.clear = AsyncMock()
        state.update_data = AsyncMock()

        await clear_state_preserve_referral(state)

        state.clear.assert_awaited_once()
        state.update_data.assert_awaited_once_with({REFERRAL_CODE_KEY: "alice"})

    @pytest.mark.asyncio
    async def test_nothing_to_preserve(self):
        state = MagicMock()
        state.get_data = AsyncMock(return_value={"amount": "600"})
        state.clear = AsyncMock()
        state.update_data = AsyncMock()

        await clear_state_preserve_referral(state)

        state.clear.assert_awaited_once()
        state.update_data.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_notice_flag_preserved(self):
        state = MagicMock()
        state.get_data = AsyncMock(
            return_value={WITHDRAWAL_NOTICE_SEEN_KEY: True, "amount": "600"}
        )
        state.clear = AsyncMock()
        state.update_data = AsyncMock()

        await clear_state_preserve_referral(state)

        state.update_data.assert_awaited_once_with(
            {WITHDRAWAL_NOTICE_SEEN_KEY: True}
        )

    @pytest.mark.asyncio
    async def test_notice_marked_once(self):
        state = MagicMock()
        state.get_data = AsyncMock(return_value={})
        state.update_data = AsyncMock()

        assert await mark_withdrawal_notice_seen(state) is True
        state.update_data.assert_awaited_once_with(
            {WITHDRAWAL_NOTICE_SEEN_KEY: True}
        )

        state.get_data.return_value = {WITHDRAWAL_NOTICE_SEEN_KEY: True}
        assert await mark_withdrawal_notice_seen(state) is False


class TestMenuButtonTexts:
    """Test the set of menu texts excluded from FSM input."""

    def test_contains_all_groups(self):
        assert MainMenuButtons.DASHBOARD in MENU_BUTTON_TEXTS
        assert WithdrawalButtons.REQUEST in MENU_BUTTON_TEXTS
        assert NavigationButtons.CANCEL in MENU_BUTTON_TEXTS
        assert AdminButtons.EXPORT in MENU_BUTTON_TEXTS

    def test_free_text_not_included(self):
        assert "alice" not in MENU_BUTTON_TEXTS
        assert "600" not in MENU_BUTTON_TEXTS


class TestUserSearch:
    """Test admin user lookup formats."""

    @pytest.fixture
    def user_service(self):
        service = MagicMock()
        service.get_by_username = AsyncMock(return_value="by_username")
        service.get_by_id = AsyncMock(return_value="by_id")
        service.get_by_telegram_id = AsyncMock(return_value="by_telegram_id")
        with patch(
            "bot.utils.user_search_utils.UserService", return_value=service
        ):
            yield service

    @pytest.mark.asyncio
    async def test_at_username(self, user_service, mock_session):
        assert await search_user_by_input("@alice", mock_session) == "by_username"
        user_service.get_by_username.assert_awaited_once_with("alice")

    @pytest.mark.asyncio
    async def test_internal_id(self, user_service, mock_session):
        assert await search_user_by_input("id:42", mock_session) == "by_id"
        user_service.get_by_id.assert_awaited_once_with(42)

    @pytest.mark.asyncio
    async def test_bad_internal_id(self, user_service, mock_session):
        assert await search_user_by_input("ID:x", mock_session) is None

    @pytest.mark.asyncio
    async def test_telegram_id(self, user_service, mock_session):
        result = await search_user_by_input("555000111", mock_session)
        assert result == "by_telegram_id"
        user_service.get_by_telegram_id.assert_awaited_once_with(555000111)

    @pytest.mark.asyncio
    async def test_plain_username(self, user_service, mock_session):
        assert await search_user_by_input("bob", mock_session) == "by_username"

    @pytest.mark.asyncio
    async def test_empty(self, user_service, mock_session):
        assert await search_user_by_input("  ", mock_session) is None


def _keyboard_texts(markup) -> set[str]:
    return {button.text for row in markup.keyboard for button in row}


class TestMainMenuKeyboard:
    """Test main menu variants."""

    def test_unregistered(self):
        texts = _keyboard_texts(main_menu_reply_keyboard(None))

        assert MainMenuButtons.INVEST in texts
        assert MainMenuButtons.REGISTER in texts
        assert MainMenuButtons.DASHBOARD not in texts
        assert MainMenuButtons.ADMIN_PANEL not in texts

    def test_registered(self, make_user):
        texts = _keyboard_texts(main_menu_reply_keyboard(make_user()))

        assert MainMenuButtons.DASHBOARD in texts
        assert MainMenuButtons.WITHDRAW in texts
        assert MainMenuButtons.REGISTER not in texts
        assert MainMenuButtons.INVEST not in texts

    def test_admin(self, make_user):
        texts = _keyboard_texts(
            main_menu_reply_keyboard(make_user(), is_admin=True)
        )

        assert MainMenuButtons.ADMIN_PANEL in texts
