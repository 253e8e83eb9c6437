"""
Unit tests for bot middlewares.

Tests cover:
- AdminAuthMiddleware gating
- DatabaseMiddleware commit and rollback
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from aiogram.dispatcher.event.bases import SkipHandler
from aiogram.types import CallbackQuery, Message
from sqlalchemy.exc import OperationalError

from bot.messages.user_messages import DATABASE_ERROR
from bot.middlewares.admin_auth_middleware import AdminAuthMiddleware
from bot.middlewares.database import DatabaseMiddleware


def make_event(event_class):
    """Mock aiogram event that passes isinstance checks."""
    event = MagicMock(spec=event_class)
    event.answer = AsyncMock()
    return event


class TestAdminAuthMiddleware:
    """Test admin gating."""

    @pytest.mark.asyncio
    async def test_admin_passes(self):
        """Admins reach the handler."""
        handler = AsyncMock(return_value="done")
        event = make_event(Message)

        result = await AdminAuthMiddleware()(handler, event, {"is_admin": True})

        assert result == "done"
        handler.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_non_admin_message_skipped(self):
        """Non-admin messages fall through to the user routers."""
        handler = AsyncMock()
        event = make_event(Message)
        data = {"is_admin": False, "event_from_user": MagicMock(id=5)}

        with pytest.raises(SkipHandler):
            await AdminAuthMiddleware()(handler, event, data)

        handler.assert_not_awaited()
        event.answer.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_non_admin_callback_refused(self):
        """Non-admin callbacks get an alert and never reach the handler."""
        handler = AsyncMock()
        event = make_event(CallbackQuery)
        data = {"event_from_user": MagicMock(id=5)}

        result = await AdminAuthMiddleware()(handler, event, data)

        assert result is None
        handler.assert_not_awaited()
        event.answer.assert_awaited_once()
        assert event.answer.call_args.kwargs["show_alert"] is True


class TestDatabaseMiddleware:
    """Test per-update sessions."""

    @pytest.fixture
    def session(self, mock_session):
        return mock_session

    @pytest.fixture
    def middleware(self, session):
        pool = MagicMock()
        pool.return_value.__aenter__ = AsyncMock(return_value=session)
        pool.return_value.__aexit__ = AsyncMock(return_value=False)
        return DatabaseMiddleware(pool)

    @pytest.mark.asyncio
    async def test_commits_on_success(self, middleware, session):
        """Handler gets the session and its work is committed."""
        data = {}

        async def handler(event, data):
            assert data["session"] is session
            return "ok"

        result = await middleware(handler, make_event(Message), data)

        assert result == "ok"
        session.commit.assert_awaited_once()
        session.rollback.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_database_error_rolls_back(self, middleware, session):
        """Database failures roll back and tell the user."""
        handler = AsyncMock(
            side_effect=OperationalError("SELECT 1", {}, Exception("down"))
        )
        event = make_event(Message)

        result = await middleware(handler, event, {})

        assert result is None
        session.rollback.assert_awaited_once()
        session.commit.assert_not_awaited()
        event.answer.assert_awaited_once_with(DATABASE_ERROR)

    @pytest.mark.asyncio
    async def test_database_error_on_callback(self, middleware, session):
        """Callback users get the error as an alert."""
        handler = AsyncMock(
            side_effect=OperationalError("SELECT 1", {}, Exception("down"))
        )
        event = make_event(CallbackQuery)

        await middleware(handler, event, {})

        event.answer.assert_awaited_once_with(DATABASE_ERROR, show_alert=True)

    @pytest.mark.asyncio
    async def test_other_errors_propagate(self, middleware, session):
        """Non-database errors roll back and reach the error handler."""
        handler = AsyncMock(side_effect=ValueError("bug"))

        with pytest.raises(ValueError):
            await middleware(handler, make_event(Message), {})

        session.rollback.assert_awaited_once()
