"""
Payment request model.

Investment payment proof submitted by a prospective user for admin review.
"""

from datetime import UTC, datetime

from sqlalchemy import (
    BigInteger,
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    String,
)
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base
from app.models.enums import PaymentStatus


class PaymentRequest(Base):
    """Payment request model - screenshot + sender account info."""

    __tablename__ = "payment_requests"
    __table_args__ = (
        Index('idx_payment_submitter_status', 'telegram_id', 'status'),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    # Submitter (the profile may not exist yet)
    telegram_id: Mapped[int] = mapped_column(
        BigInteger, nullable=False, index=True
    )
    user_id: Mapped[int | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    account_holder_name: Mapped[str] = mapped_column(
        String(255), nullable=False
    )
    account_number: Mapped[str] = mapped_column(String(64), nullable=False)
    # Telegram file_id of the uploaded screenshot
    screenshot_file_id: Mapped[str] = mapped_column(
        String(255), nullable=False
    )

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=PaymentStatus.PENDING.value,
        index=True,
    )
    timeout_notified: Mapped[bool] = mapped_column(
        Boolean, default=False, nullable=False
    )

    submitted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False
    )
    reviewed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    reviewed_by: Mapped[int | None] = mapped_column(
        BigInteger, nullable=True
    )

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"<PaymentRequest(id={self.id}, telegram_id={self.telegram_id}, "
            f"status={self.status})>"
        )

    @property
    def is_pending(self) -> bool:
        """Check if the request still awaits review."""
        return self.status == PaymentStatus.PENDING.value
