"""
Application settings.

Loads configuration from environment variables using pydantic-settings.
"""

import re
from decimal import Decimal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from loguru import logger
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Telegram Bot
    telegram_bot_token: str
    telegram_bot_username: str | None = None

    # Database
    database_url: str
    database_echo: bool = False

    # Admin
    admin_telegram_ids: str = ""  # Comma-separated list

    # Redis (for FSM storage and Dramatiq)
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_password: str | None = None
    redis_db: int = 0

    # Application
    environment: str = "production"
    debug: bool = False
    log_level: str = "INFO"

    # Accrual
    accrual_timezone: str = Field(
        default="Asia/Karachi",
        description="IANA timezone used to cut calendar days for daily returns",
    )

    # Business amounts (PKR)
    investment_amount: Decimal = Field(
        default=Decimal("6000"), gt=0,
        description="Fixed investment assigned to an approved user",
    )
    daily_return_amount: Decimal = Field(
        default=Decimal("200"), gt=0,
        description="Amount credited for every elapsed day",
    )
    referral_bonus_amount: Decimal = Field(
        default=Decimal("200"), gt=0,
        description="Bonus credited to a referrer per referred user",
    )
    min_withdrawal_amount: Decimal = Field(
        default=Decimal("600"), gt=0,
        description="Minimum withdrawal amount (inclusive)",
    )
    max_withdrawal_amount: Decimal = Field(
        default=Decimal("1600"), gt=0,
        description="Maximum withdrawal amount (inclusive)",
    )
    min_referrals_for_withdrawal: int = Field(
        default=2, ge=0,
        description="Referrals required before withdrawals unlock",
    )
    payment_review_window_seconds: int = Field(
        default=600, gt=0,
        description="Expected admin review time for a payment proof",
    )

    # Where users send the investment
    payment_platform: str = "Easypaisa"
    payment_account_number: str = "03130306344"

    # Emergency stop
    emergency_stop_withdrawals: bool = Field(
        default=False,
        description="Emergency stop for all withdrawal requests",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @model_validator(mode="after")
    def validate_withdrawal_bounds(self) -> "Settings":
        """Validate that withdrawal bounds form a non-empty range."""
        if self.min_withdrawal_amount > self.max_withdrawal_amount:
            raise ValueError(
                "MIN_WITHDRAWAL_AMOUNT must not exceed MAX_WITHDRAWAL_AMOUNT"
            )
        return self

    @model_validator(mode="after")
    def validate_production(self) -> "Settings":
        """Validate production-specific requirements."""
        if self.environment == "production":
            if self.debug:
                raise ValueError(
                    "DEBUG must be False in production environment. "
                    "Set DEBUG=false in your .env file."
                )
            if not self.get_admin_ids():
                logger.warning(
                    "ADMIN_TELEGRAM_IDS is empty: nobody can review payments "
                    "or withdrawals."
                )
        return self

    @field_validator("telegram_bot_token")
    @classmethod
    def validate_bot_token(cls, v: str) -> str:
        """Validate Telegram bot token format."""
        pattern = r"^\d+:[A-Za-z0-9_-]{35}$"
        if not re.match(pattern, v):
            raise ValueError(
                "Invalid Telegram bot token format. "
                "Expected format: 123456789:ABCdefGHIjklMNOpqrsTUVwxyz"
            )
        return v

    @field_validator("database_url")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        """Validate database URL."""
        if not v.startswith(("postgresql://", "postgresql+asyncpg://")):
            raise ValueError(
                "DATABASE_URL must start with postgresql:// or postgresql+asyncpg://"
            )
        return v

    @field_validator("accrual_timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Validate IANA timezone name."""
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown timezone: {v}") from exc
        return v

    def get_admin_ids(self) -> list[int]:
        """Parse admin IDs from comma-separated string with error handling."""
        if not self.admin_telegram_ids:
            return []

        result = []
        for id_ in self.admin_telegram_ids.split(","):
            id_stripped = id_.strip()
            if not id_stripped:
                continue
            try:
                result.append(int(id_stripped))
            except ValueError:
                logger.warning(f"Invalid admin ID: {id_stripped}")
                continue
        return result

    def is_admin(self, telegram_id: int) -> bool:
        """Check whether a Telegram user is a configured admin."""
        return telegram_id in self.get_admin_ids()


# Global settings instance
settings = Settings()
