"""
Payout details functionality.

Stores the account the user wants withdrawals sent to.
"""

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from app.config.business_constants import PAYOUT_PLATFORMS
from app.models.user import User
from app.repositories.user_repository import UserRepository
from app.utils.validation import normalize_platform, validate_account_number


class UserPayoutMixin:
    """Mixin for payout details management."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize payout mixin."""
        self.session = session
        self.user_repo = UserRepository(session)

    async def save_payout_info(
        self,
        user_id: int,
        platform: str | None,
        account_holder: str | None,
        account_number: str | None,
    ) -> tuple[User | None, str | None]:
        """
        Save payout platform, account holder and account number.

        Args:
            user_id: User ID
            platform: Easypaisa or JazzCash
            account_holder: Account holder name
            account_number: Account number

        Returns:
            Tuple of (user, error_message)
        """
        canonical_platform = normalize_platform(platform)
        holder = (account_holder or "").strip()
        number = (account_number or "").strip()

        if not canonical_platform:
            return None, (
                f"Platform must be one of: {', '.join(PAYOUT_PLATFORMS)}."
            )
        if not holder:
            return None, "Account holder name is required."
        if not number or not validate_account_number(number):
            return None, "Please enter a valid account number."

        user = await self.user_repo.update(
            user_id,
            payout_platform=canonical_platform,
            payout_account_holder=holder,
            payout_account_number=number,
        )
        if not user:
            return None, "User not found"

        await self.session.commit()

        logger.info(
            "Payout info saved",
            extra={"user_id": user_id, "platform": canonical_platform},
        )
        return user, None
