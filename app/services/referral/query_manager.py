"""
Referral query management module.

Handles referral queries and invite link helpers.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from app.config.business_constants import (
    REFERRAL_BONUS_AMOUNT,
    REFERRAL_LINK_PREFIX,
)
from app.config.settings import settings
from app.repositories.referral_repository import ReferralRepository


@dataclass
class ReferralEntry:
    """A referred user as shown in the referral list."""

    username: str
    joined_at: datetime


def build_referral_link(username: str, bot_username: str | None = None) -> str:
    """
    Build the invite deep link for a user.

    Args:
        username: Referrer username
        bot_username: Bot username (defaults to configured one)

    Returns:
        Link like https://t.me/<bot>?start=ref_<username>
    """
    bot_name = (bot_username or settings.telegram_bot_username or "").lstrip("@")
    return f"https://t.me/{bot_name}?start={REFERRAL_LINK_PREFIX}{username}"


def parse_referral_code(start_payload: str | None) -> str | None:
    """
    Extract the referrer username from a /start payload.

    Args:
        start_payload: Deep link argument, e.g. "ref_alice"

    Returns:
        Referrer username or None
    """
    if not start_payload:
        return None
    payload = start_payload.strip()
    if not payload.startswith(REFERRAL_LINK_PREFIX):
        return None
    code = payload[len(REFERRAL_LINK_PREFIX):]
    return code or None


class ReferralQueryManager:
    """Manages referral queries."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize query manager."""
        self.session = session
        self.referral_repo = ReferralRepository(session)

    async def get_referrals(self, user_id: int) -> list[ReferralEntry]:
        """
        Get the users referred by a user, oldest first.

        Args:
            user_id: Referrer user ID

        Returns:
            List of referral entries
        """
        rows = await self.referral_repo.get_referees(user_id)
        return [
            ReferralEntry(username=username, joined_at=referral.created_at)
            for username, referral in rows
        ]

    async def count_referrals(self, user_id: int) -> int:
        """Count direct referrals."""
        return await self.referral_repo.count_by_referrer(user_id)

    async def get_total_bonus(self, user_id: int) -> Decimal:
        """Total referral bonus earned: referral count times bonus."""
        count = await self.count_referrals(user_id)
        return REFERRAL_BONUS_AMOUNT * count

    async def get_all_pairs(self) -> list[tuple[str, str]]:
        """All (referrer, referee) username pairs, newest first."""
        return await self.referral_repo.get_all_pairs()
