"""
User Search Utilities.

Centralized user lookup supporting multiple input formats:
- @username
- Telegram ID (numeric)
- ID:internal_id (database primary key)
"""

from typing import TYPE_CHECKING

from sqlalchemy.ext.asyncio import AsyncSession

from app.services.user import UserService

if TYPE_CHECKING:
    from app.models.user import User


async def search_user_by_input(
    user_input: str,
    session: AsyncSession,
) -> "User | None":
    """
    Universal user search supporting multiple formats.

    Args:
        user_input: @username, Telegram ID, or ID:internal_id
        session: Database session

    Returns:
        User object or None if not found
    """
    user_input = (user_input or "").strip()
    if not user_input:
        return None

    user_service = UserService(session)

    # Format: @username
    if user_input.startswith("@"):
        return await user_service.get_by_username(user_input[1:])

    # Format: ID:internal_id
    if user_input.upper().startswith("ID:"):
        try:
            user_id = int(user_input[3:])
        except ValueError:
            return None
        return await user_service.get_by_id(user_id)

    # Format: numeric telegram_id
    if user_input.isdigit():
        return await user_service.get_by_telegram_id(int(user_input))

    # Fallback: try as username without @
    return await user_service.get_by_username(user_input)
