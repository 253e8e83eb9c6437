"""
User registration functionality.

Creates the investor profile once the payment proof is approved and
applies the referral bonus in the same transaction.
"""

from loguru import logger
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config.business_constants import INVESTMENT_AMOUNT
from app.models.user import User
from app.repositories.payment_repository import PaymentRepository
from app.repositories.user_repository import UserRepository
from app.services.notification_service import NotificationService
from app.services.referral.referral_bonus_processor import (
    ReferralBonusProcessor,
)
from app.services.referral.referral_notifications import notify_new_referral
from app.utils.datetime_utils import utc_now
from app.utils.validation import (
    normalize_username,
    validate_email,
    validate_username,
)


class UserRegistrationMixin:
    """
    Mixin for user registration functionality.

    Handles new user registration with referral support.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize user registration mixin."""
        self.session = session
        self.user_repo = UserRepository(session)
        self.payment_repo = PaymentRepository(session)
        self.bonus_processor = ReferralBonusProcessor(session)

    async def validate_registration(
        self, telegram_id: int, username: str | None, email: str | None
    ) -> str | None:
        """
        Check registration preconditions and inputs.

        Args:
            telegram_id: Telegram user ID
            username: Requested username
            email: Email address

        Returns:
            Error message or None if registration may proceed
        """
        if await self.user_repo.get_by_telegram_id(telegram_id):
            return "You are already registered."

        approved = await self.payment_repo.get_approved_by_telegram_id(
            telegram_id
        )
        if not approved:
            return "Your payment must be approved before you can register."

        if not validate_username(username):
            return (
                "Username must be 3-32 characters: letters, digits "
                "and underscore."
            )
        if await self.user_repo.get_by_username(normalize_username(username)):
            return "This username is already taken."

        if not validate_email(email):
            return "Please enter a valid email address."
        if await self.user_repo.get_by_email(email):
            return "This email is already registered."

        return None

    async def register_user(
        self,
        telegram_id: int,
        username: str,
        email: str,
        referral_code: str | None = None,
        notifier: NotificationService | None = None,
    ) -> tuple[User | None, str | None]:
        """
        Register new user with referral support.

        Args:
            telegram_id: Telegram user ID
            username: Chosen username
            email: Email address
            referral_code: Referrer username from the invite link
            notifier: Notification service for the referrer notice

        Returns:
            Tuple of (user, error_message)
        """
        error = await self.validate_registration(telegram_id, username, email)
        if error:
            return None, error

        clean_username = normalize_username(username)
        clean_email = email.strip().lower()

        try:
            now = utc_now()
            user = await self.user_repo.create(
                telegram_id=telegram_id,
                username=clean_username,
                email=clean_email,
                investment=INVESTMENT_AMOUNT,
                registration_date=now,
                last_earning_date=now,
                can_withdraw_override=False,
            )

            payment = await self.payment_repo.get_approved_by_telegram_id(
                telegram_id
            )
            if payment:
                payment.user_id = user.id

            bonus = await self.bonus_processor.apply_referral(
                user, referral_code
            )

            await self.session.commit()

        except IntegrityError:
            await self.session.rollback()
            logger.warning(
                "Registration conflict on unique field",
                extra={"telegram_id": telegram_id, "username": clean_username},
            )
            return None, "This username or email is already taken."
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(
                "Failed to register user",
                extra={"telegram_id": telegram_id, "error": str(e)},
                exc_info=True,
            )
            return None, "Registration failed. Please try again later."

        logger.info(
            "User registered",
            extra={
                "user_id": user.id,
                "telegram_id": telegram_id,
                "referral_applied": bonus.applied,
            },
        )

        if bonus.applied and bonus.referrer:
            await notify_new_referral(
                notifier or NotificationService(),
                bonus.referrer.telegram_id,
                user.username,
                bonus.amount,
            )

        return user, None
