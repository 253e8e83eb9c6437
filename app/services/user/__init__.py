"""
User service module.

Provides user management functionality including registration, payout
details and dashboard statistics.

Structure:
- core.py: Core user retrieval
- registration.py: Registration with referral support
- payout.py: Payout details
- statistics.py: Dashboard summary

Usage:
    from app.services.user import UserService

    user_service = UserService(session)
    user, error = await user_service.register_user(telegram_id, username, email)
    user, error = await user_service.save_payout_info(user.id, "Easypaisa", name, number)
"""

from sqlalchemy.ext.asyncio import AsyncSession

from app.services.user.core import UserServiceCore
from app.services.user.payout import UserPayoutMixin
from app.services.user.registration import UserRegistrationMixin
from app.services.user.statistics import (
    DashboardSummary,
    UserStatisticsMixin,
)


class UserService(
    UserServiceCore,
    UserRegistrationMixin,
    UserPayoutMixin,
    UserStatisticsMixin,
):
    """
    Combined user service.

    Inherits from all user service mixins to provide complete functionality.
    """

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize user service with all mixins.

        Args:
            session: Database session
        """
        UserServiceCore.__init__(self, session)
        UserRegistrationMixin.__init__(self, session)
        UserPayoutMixin.__init__(self, session)
        UserStatisticsMixin.__init__(self, session)


__all__ = ["DashboardSummary", "UserService"]
