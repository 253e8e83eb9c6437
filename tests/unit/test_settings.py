"""
Unit tests for Settings validation.
"""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from app.config.settings import Settings

VALID_TOKEN = "123456789:ABCdefGHIjklMNOpqrsTUVwxyz123456789"
VALID_DB = "postgresql+asyncpg://u:p@localhost/envo"


def make_settings(**overrides) -> Settings:
    """Build Settings without reading a .env file."""
    fields = {
        "telegram_bot_token": VALID_TOKEN,
        "database_url": VALID_DB,
        "environment": "test",
    }
    fields.update(overrides)
    return Settings(_env_file=None, **fields)


class TestSettingsValidation:
    """Test field and model validators."""

    def test_defaults(self):
        settings = make_settings()
        assert settings.min_withdrawal_amount <= settings.max_withdrawal_amount
        assert settings.accrual_timezone

    def test_invalid_token(self):
        with pytest.raises(ValidationError):
            make_settings(telegram_bot_token="not-a-token")

    def test_invalid_database_url(self):
        with pytest.raises(ValidationError):
            make_settings(database_url="sqlite:///db.sqlite3")

    def test_invalid_timezone(self):
        with pytest.raises(ValidationError):
            make_settings(accrual_timezone="Mars/Olympus")

    def test_withdrawal_bounds(self):
        with pytest.raises(ValidationError):
            make_settings(
                min_withdrawal_amount=Decimal("2000"),
                max_withdrawal_amount=Decimal("1000"),
            )

    def test_debug_forbidden_in_production(self):
        with pytest.raises(ValidationError):
            make_settings(environment="production", debug=True)


class TestAdminIds:
    """Test admin ID parsing."""

    def test_parse(self):
        settings = make_settings(admin_telegram_ids="1, 2,,x,3")
        assert settings.get_admin_ids() == [1, 2, 3]

    def test_empty(self):
        assert make_settings(admin_telegram_ids="").get_admin_ids() == []

    def test_is_admin(self):
        settings = make_settings(admin_telegram_ids="42")
        assert settings.is_admin(42)
        assert not settings.is_admin(43)
