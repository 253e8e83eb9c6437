"""
User repository.

Data access layer for User model.
"""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.user import User
from app.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """User repository with specific queries."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize user repository."""
        super().__init__(User, session)

    async def get_by_telegram_id(self, telegram_id: int) -> User | None:
        """
        Get user by Telegram ID.

        Args:
            telegram_id: Telegram user ID

        Returns:
            User or None
        """
        return await self.get_by(telegram_id=telegram_id)

    async def get_by_username(self, username: str) -> User | None:
        """
        Get user by username (case-insensitive).

        Args:
            username: Username (leading @ is ignored)

        Returns:
            User or None
        """
        if not username:
            return None
        clean_username = username.lstrip("@").lower()
        stmt = select(User).where(func.lower(User.username) == clean_username)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> User | None:
        """Get user by email (case-insensitive)."""
        if not email:
            return None
        stmt = select(User).where(func.lower(User.email) == email.strip().lower())
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_all_ordered(self) -> list[User]:
        """Get all users, newest registration first."""
        stmt = select(User).order_by(User.registration_date.desc())
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_accrual_candidate_ids(self) -> list[int]:
        """
        Get IDs of users eligible for daily accrual.

        Returns:
            IDs of invested, non-banned users
        """
        stmt = (
            select(User.id)
            .where(
                User.investment > 0,
                User.is_banned == False,  # noqa: E712
            )
            .order_by(User.id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
