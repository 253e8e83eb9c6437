"""
Earning model.

One entry of a user's earnings log (daily return, referral bonus, adjustment).
"""

from datetime import UTC, datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base
from app.models.enums import EarningType
from app.models.types import MoneyType

if TYPE_CHECKING:
    from app.models.user import User


class Earning(Base):
    """Earning model - credits to a user's balance."""

    __tablename__ = "earnings"
    __table_args__ = (
        CheckConstraint('amount > 0', name='check_earning_amount_positive'),
        Index('idx_earning_user_date', 'user_id', 'earned_at'),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    amount: Mapped[Decimal] = mapped_column(MoneyType, nullable=False)
    type: Mapped[str] = mapped_column(
        String(32), nullable=False, default=EarningType.DAILY_RETURN.value
    )
    earned_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False
    )

    user: Mapped["User"] = relationship("User", back_populates="earnings")

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"<Earning(id={self.id}, user_id={self.user_id}, "
            f"amount={self.amount}, type={self.type})>"
        )

    @property
    def type_label(self) -> str:
        """Human-readable type."""
        try:
            return EarningType(self.type).label
        except ValueError:
            return self.type
