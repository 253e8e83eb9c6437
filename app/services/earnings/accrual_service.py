"""
Accrual service.

Credits due daily returns to a user. Called when the dashboard is opened
and from the daily background job; the user row lock makes concurrent
runs credit each day only once.
"""

from datetime import datetime

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config.business_constants import DAILY_RETURN_AMOUNT
from app.models.earning import Earning
from app.models.enums import EarningType
from app.repositories.earning_repository import EarningRepository
from app.repositories.user_repository import UserRepository
from app.services.earnings.accrual_calculator import (
    AccrualResult,
    calculate_accrual,
)
from app.utils.datetime_utils import accrual_zone, utc_now


class AccrualService:
    """Applies daily return accrual to users."""

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize accrual service.

        Args:
            session: Database session
        """
        self.session = session
        self.user_repo = UserRepository(session)
        self.earning_repo = EarningRepository(session)

    async def accrue_for_user(
        self, user_id: int, now: datetime | None = None
    ) -> tuple[AccrualResult | None, str | None]:
        """
        Credit all daily returns due to a user.

        Args:
            user_id: User ID
            now: Current moment (defaults to utc_now)

        Returns:
            Tuple of (accrual result, error_message)
        """
        now = now or utc_now()
        try:
            user = await self.user_repo.get_for_update(user_id)
            if not user:
                return None, "User not found"

            if user.is_banned or user.investment <= 0:
                await self.session.commit()
                return AccrualResult(days=0, daily_amount=DAILY_RETURN_AMOUNT), None

            anchor = user.last_earning_date or user.registration_date
            result = calculate_accrual(
                anchor, now, DAILY_RETURN_AMOUNT, accrual_zone()
            )

            if result.is_empty:
                # Release the row lock
                await self.session.commit()
                return result, None

            self.earning_repo.add_many(
                [
                    Earning(
                        user_id=user.id,
                        amount=result.daily_amount,
                        type=EarningType.DAILY_RETURN.value,
                        earned_at=entry_date,
                    )
                    for entry_date in result.entry_dates
                ]
            )
            user.balance = user.balance + result.total
            user.last_earning_date = result.new_anchor

            await self.session.commit()

            logger.info(
                "Daily returns credited",
                extra={
                    "user_id": user_id,
                    "days": result.days,
                    "amount": str(result.total),
                },
            )
            return result, None

        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(
                "Failed to accrue daily returns",
                extra={"user_id": user_id, "error": str(e)},
                exc_info=True,
            )
            return None, "Failed to update earnings. Please try again later."

    async def accrue_all(self, now: datetime | None = None) -> dict[str, int]:
        """
        Run accrual for every invested, non-banned user.

        Returns:
            Stats dict: processed, credited_users, credited_days, failed
        """
        now = now or utc_now()
        stats = {
            "processed": 0,
            "credited_users": 0,
            "credited_days": 0,
            "failed": 0,
        }

        user_ids = await self.user_repo.get_accrual_candidate_ids()
        for user_id in user_ids:
            result, error = await self.accrue_for_user(user_id, now)
            stats["processed"] += 1
            if error:
                stats["failed"] += 1
                continue
            if result and not result.is_empty:
                stats["credited_users"] += 1
                stats["credited_days"] += result.days

        logger.info("Daily accrual run finished", extra=stats)
        return stats
