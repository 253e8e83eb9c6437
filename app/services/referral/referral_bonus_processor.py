"""
Referral bonus processor.

Links a newly registered user to the referrer named by the referral code
and credits the fixed referral bonus. Runs inside the registration
transaction and does not commit.
"""

from dataclasses import dataclass
from decimal import Decimal

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from app.config.business_constants import REFERRAL_BONUS_AMOUNT
from app.models.enums import EarningType
from app.models.user import User
from app.repositories.earning_repository import EarningRepository
from app.repositories.referral_repository import ReferralRepository
from app.repositories.user_repository import UserRepository
from app.utils.datetime_utils import utc_now


@dataclass
class BonusResult:
    """Result of applying a referral code."""

    applied: bool
    referrer: User | None = None
    amount: Decimal = Decimal("0")
    reason: str | None = None


class ReferralBonusProcessor:
    """Applies referral bonuses on registration."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize processor."""
        self.session = session
        self.user_repo = UserRepository(session)
        self.referral_repo = ReferralRepository(session)
        self.earning_repo = EarningRepository(session)

    async def apply_referral(
        self, new_user: User, referral_code: str | None
    ) -> BonusResult:
        """
        Apply a referral code for a newly registered user.

        Unknown codes, self referral and already referred users are
        ignored, registration is not affected.

        Args:
            new_user: Newly created user (flushed)
            referral_code: Referrer username from the invite link

        Returns:
            BonusResult
        """
        if not referral_code:
            return BonusResult(applied=False, reason="no_code")

        referrer = await self.user_repo.get_by_username(referral_code)
        if not referrer:
            logger.info(
                "Referral code ignored: unknown referrer",
                extra={"code": referral_code, "user_id": new_user.id},
            )
            return BonusResult(applied=False, reason="unknown_referrer")

        if referrer.id == new_user.id:
            logger.info(
                "Referral code ignored: self referral",
                extra={"user_id": new_user.id},
            )
            return BonusResult(applied=False, reason="self_referral")

        if await self.referral_repo.is_referred(new_user.id):
            logger.info(
                "Referral code ignored: user already referred",
                extra={"user_id": new_user.id},
            )
            return BonusResult(applied=False, reason="already_referred")

        # Lock referrer to serialize concurrent bonus credits
        referrer = await self.user_repo.get_for_update(referrer.id)
        if not referrer:
            return BonusResult(applied=False, reason="unknown_referrer")

        await self.referral_repo.create(
            referrer_id=referrer.id,
            referral_id=new_user.id,
        )
        new_user.referred_by_id = referrer.id

        referrer.balance = referrer.balance + REFERRAL_BONUS_AMOUNT
        await self.earning_repo.create(
            user_id=referrer.id,
            amount=REFERRAL_BONUS_AMOUNT,
            type=EarningType.REFERRAL_BONUS.value,
            earned_at=utc_now(),
        )

        logger.info(
            "Referral bonus credited",
            extra={
                "referrer_id": referrer.id,
                "referral_id": new_user.id,
                "amount": str(REFERRAL_BONUS_AMOUNT),
            },
        )
        return BonusResult(
            applied=True, referrer=referrer, amount=REFERRAL_BONUS_AMOUNT
        )
