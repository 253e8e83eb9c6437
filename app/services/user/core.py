"""
Core user service functionality.

Handles basic user retrieval operations.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.earning import Earning
from app.models.user import User
from app.repositories.earning_repository import EarningRepository
from app.repositories.user_repository import UserRepository


class UserServiceCore:
    """
    Core user service.

    Provides basic user retrieval methods.
    """

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize user service core.

        Args:
            session: Database session
        """
        self.session = session
        self.user_repo = UserRepository(session)
        self.earning_repo = EarningRepository(session)

    async def get_by_id(self, user_id: int) -> User | None:
        """Get user by ID."""
        return await self.user_repo.get_by_id(user_id)

    async def get_by_telegram_id(self, telegram_id: int) -> User | None:
        """Get user by Telegram ID."""
        return await self.user_repo.get_by_telegram_id(telegram_id)

    async def get_by_username(self, username: str) -> User | None:
        """Get user by username (case-insensitive, @ ignored)."""
        return await self.user_repo.get_by_username(username)

    async def get_by_email(self, email: str) -> User | None:
        """Get user by email."""
        return await self.user_repo.get_by_email(email)

    async def username_exists(self, username: str) -> bool:
        """Check if a username is taken."""
        return await self.user_repo.get_by_username(username) is not None

    async def get_earnings(
        self, user_id: int, limit: int | None = None
    ) -> list[Earning]:
        """
        Get user's earnings log.

        Args:
            user_id: User ID
            limit: Max entries

        Returns:
            Earnings, newest first
        """
        return await self.earning_repo.get_by_user(user_id, limit=limit)
