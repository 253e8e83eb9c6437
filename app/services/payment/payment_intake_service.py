"""
Payment intake service.

Records payment proofs (account holder, account number and screenshot)
submitted after sending the investment to the payment account.
"""

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.enums import PaymentStatus
from app.models.payment_request import PaymentRequest
from app.repositories.payment_repository import PaymentRepository
from app.repositories.user_repository import UserRepository
from app.utils.validation import validate_account_number


def is_image_mime_type(mime_type: str | None) -> bool:
    """Check that an uploaded document is an image."""
    return bool(mime_type) and mime_type.lower().startswith("image/")


class PaymentIntakeService:
    """Payment proof submission and queries."""

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize payment intake service.

        Args:
            session: Database session
        """
        self.session = session
        self.payment_repo = PaymentRepository(session)
        self.user_repo = UserRepository(session)

    async def submit_payment(
        self,
        telegram_id: int,
        account_holder_name: str | None,
        account_number: str | None,
        screenshot_file_id: str | None,
    ) -> tuple[PaymentRequest | None, str | None]:
        """
        Submit a payment proof for admin review.

        Args:
            telegram_id: Submitter Telegram ID
            account_holder_name: Name on the sending account
            account_number: Sending account number
            screenshot_file_id: Telegram file_id of the screenshot

        Returns:
            Tuple of (payment request, error_message)
        """
        holder = (account_holder_name or "").strip()
        number = (account_number or "").strip()

        if not holder or not number or not screenshot_file_id:
            return None, "Please provide account holder name, account number and a screenshot."

        if not validate_account_number(number):
            return None, "Invalid account number."

        try:
            user = await self.user_repo.get_by_telegram_id(telegram_id)
            if user and user.is_invested:
                return None, "Your investment is already active."

            pending = await self.payment_repo.get_pending_by_telegram_id(
                telegram_id
            )
            if pending:
                return None, (
                    "You already have a payment under review. "
                    "Please wait for the admin decision."
                )

            payment = await self.payment_repo.create(
                telegram_id=telegram_id,
                user_id=user.id if user else None,
                account_holder_name=holder,
                account_number=number,
                screenshot_file_id=screenshot_file_id,
                status=PaymentStatus.PENDING.value,
            )
            await self.session.commit()

            logger.info(
                "Payment proof submitted",
                extra={"payment_id": payment.id, "telegram_id": telegram_id},
            )
            return payment, None

        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(
                "Failed to submit payment proof",
                extra={"telegram_id": telegram_id, "error": str(e)},
                exc_info=True,
            )
            return None, "Failed to submit payment. Please try again later."

    async def get_latest_payment(
        self, telegram_id: int
    ) -> PaymentRequest | None:
        """Most recent payment request of a submitter."""
        return await self.payment_repo.get_latest_by_telegram_id(telegram_id)

    async def has_approved_payment(self, telegram_id: int) -> bool:
        """Check whether the submitter has an approved payment."""
        payment = await self.payment_repo.get_approved_by_telegram_id(
            telegram_id
        )
        return payment is not None

    async def list_pending(self) -> list[PaymentRequest]:
        """Pending requests, oldest first."""
        return await self.payment_repo.get_pending()
