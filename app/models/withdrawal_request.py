"""
Withdrawal request model.

A user's request to withdraw part of the balance to a payout account.
"""

from datetime import UTC, datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import (
    BigInteger,
    CheckConstraint,
    DateTime,
    ForeignKey,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base
from app.models.enums import WithdrawalStatus
from app.models.types import MoneyType

if TYPE_CHECKING:
    from app.models.user import User


class WithdrawalRequest(Base):
    """Withdrawal request model."""

    __tablename__ = "withdrawal_requests"
    __table_args__ = (
        CheckConstraint(
            'amount > 0', name='check_withdrawal_amount_positive'
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    amount: Mapped[Decimal] = mapped_column(MoneyType, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=WithdrawalStatus.PROCESSING.value,
        index=True,
    )

    # Payout info snapshot at request time
    payout_platform: Mapped[str] = mapped_column(String(32), nullable=False)
    payout_account_holder: Mapped[str] = mapped_column(
        String(255), nullable=False
    )
    payout_account_number: Mapped[str] = mapped_column(
        String(64), nullable=False
    )

    submitted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False
    )
    processed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    processed_by: Mapped[int | None] = mapped_column(
        BigInteger, nullable=True
    )
    reject_reason: Mapped[str | None] = mapped_column(Text, nullable=True)

    user: Mapped["User"] = relationship("User", back_populates="withdrawals")

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"<WithdrawalRequest(id={self.id}, user_id={self.user_id}, "
            f"amount={self.amount}, status={self.status})>"
        )
