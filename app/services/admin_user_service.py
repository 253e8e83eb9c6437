"""
Admin user management service.

User list, detail view, balance edit, withdrawal override, deletion and
JSON export for the admin panel.
"""

import json
from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.earning import Earning
from app.models.enums import EarningType
from app.models.user import User
from app.repositories.earning_repository import EarningRepository
from app.repositories.referral_repository import ReferralRepository
from app.repositories.user_repository import UserRepository
from app.repositories.withdrawal_repository import WithdrawalRepository
from app.services.base_service import BaseService, transaction
from app.utils.datetime_utils import utc_now
from app.utils.validation import parse_amount


@dataclass
class UserDetail:
    """Everything the admin sees about one user."""

    user: User
    referral_count: int
    referrer_username: str | None
    recent_earnings: list[Earning]
    withdrawals_count: int


def _user_to_dict(user: User, referral_count: int) -> dict:
    return {
        "id": user.id,
        "telegram_id": user.telegram_id,
        "username": user.username,
        "email": user.email,
        "investment": str(user.investment),
        "total_earnings": str(user.balance),
        "referral_count": referral_count,
        "can_withdraw_override": user.can_withdraw_override,
        "is_banned": user.is_banned,
        "payout_platform": user.payout_platform,
        "payout_account_holder": user.payout_account_holder,
        "payout_account_number": user.payout_account_number,
        "registration_date": (
            user.registration_date.isoformat() if user.registration_date else None
        ),
        "last_earning_date": (
            user.last_earning_date.isoformat() if user.last_earning_date else None
        ),
    }


class AdminUserService(BaseService):
    """Admin operations on user profiles."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize admin user service."""
        super().__init__(session)
        self.user_repo = UserRepository(session)
        self.earning_repo = EarningRepository(session)
        self.referral_repo = ReferralRepository(session)
        self.withdrawal_repo = WithdrawalRepository(session)

    async def list_users(self) -> list[User]:
        """All users, newest first."""
        return await self.user_repo.get_all_ordered()

    async def list_accounts(self) -> list[tuple[int, str, str | None]]:
        """(id, username, email) of every user."""
        users = await self.user_repo.get_all_ordered()
        return [(u.id, u.username, u.email) for u in users]

    async def list_referral_pairs(self) -> list[tuple[str, str]]:
        """Every (referrer, referee) username pair."""
        return await self.referral_repo.get_all_pairs()

    async def get_user_detail(self, user_id: int) -> UserDetail | None:
        """
        Get full detail of a user.

        Args:
            user_id: User ID

        Returns:
            UserDetail or None if the user does not exist
        """
        user = await self.user_repo.get_by_id(user_id)
        if not user:
            return None

        referrer_username = None
        if user.referred_by_id:
            referrer = await self.user_repo.get_by_id(user.referred_by_id)
            referrer_username = referrer.username if referrer else None

        return UserDetail(
            user=user,
            referral_count=await self.referral_repo.count_by_referrer(user.id),
            referrer_username=referrer_username,
            recent_earnings=await self.earning_repo.get_by_user(user.id, limit=5),
            withdrawals_count=await self.withdrawal_repo.count(user_id=user.id),
        )

    @transaction
    async def set_balance(
        self,
        user_id: int,
        new_balance: Decimal | str,
        admin_telegram_id: int | None = None,
    ) -> tuple[User | None, str | None]:
        """
        Set a user's balance to an absolute value.

        The value is rounded to cents first. A positive change is recorded
        as an admin adjustment earning.

        Args:
            user_id: User ID
            new_balance: New balance (non-negative)
            admin_telegram_id: Acting admin

        Returns:
            Tuple of (user, error_message)
        """
        new_balance = parse_amount(new_balance)
        if new_balance is None or new_balance < 0:
            return None, "Balance must be a non-negative number."

        user = await self.user_repo.get_for_update(user_id)
        if not user:
            return None, "User not found"

        delta = new_balance - user.balance
        user.balance = new_balance
        if delta > 0:
            await self.earning_repo.create(
                user_id=user.id,
                amount=delta,
                type=EarningType.ADMIN_ADJUSTMENT.value,
                earned_at=utc_now(),
            )

        self.logger.info(
            "Balance set by admin",
            extra={
                "user_id": user_id,
                "delta": str(delta),
                "new_balance": str(new_balance),
                "admin_id": admin_telegram_id,
            },
        )
        return user, None

    @transaction
    async def toggle_withdraw_override(
        self, user_id: int, admin_telegram_id: int | None = None
    ) -> tuple[User | None, str | None]:
        """Flip the referral-gating override of a user."""
        user = await self.user_repo.get_for_update(user_id)
        if not user:
            return None, "User not found"

        user.can_withdraw_override = not user.can_withdraw_override

        self.logger.info(
            "Withdraw override toggled",
            extra={
                "user_id": user_id,
                "override": user.can_withdraw_override,
                "admin_id": admin_telegram_id,
            },
        )
        return user, None

    @transaction
    async def delete_user(
        self, user_id: int, admin_telegram_id: int | None = None
    ) -> tuple[bool, str | None]:
        """
        Delete a user with earnings, referrals and withdrawals.

        Returns:
            Tuple of (deleted, error_message)
        """
        deleted = await self.user_repo.delete(user_id)
        if not deleted:
            return False, "User not found"

        self.logger.warning(
            "User deleted by admin",
            extra={"user_id": user_id, "admin_id": admin_telegram_id},
        )
        return True, None

    async def export_users_json(self) -> str:
        """
        Export all users as a JSON array.

        Returns:
            Pretty-printed JSON string
        """
        users = await self.user_repo.get_all_ordered()
        data = []
        for user in users:
            count = await self.referral_repo.count_by_referrer(user.id)
            data.append(_user_to_dict(user, count))
        return json.dumps(data, indent=2, ensure_ascii=False)
