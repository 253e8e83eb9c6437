"""
User model.

Represents a registered investor profile.
"""

from datetime import UTC, datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import (
    BigInteger,
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base
from app.models.types import MoneyType

if TYPE_CHECKING:
    from app.models.earning import Earning
    from app.models.referral import Referral
    from app.models.withdrawal_request import WithdrawalRequest


class User(Base):
    """User model - registered investors."""

    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint(
            'balance >= 0', name='check_user_balance_non_negative'
        ),
        CheckConstraint(
            'investment >= 0', name='check_user_investment_non_negative'
        ),
    )

    # Primary key
    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True
    )

    # Identity
    telegram_id: Mapped[int] = mapped_column(
        BigInteger, unique=True, index=True, nullable=False
    )
    # Unique case-insensitively, see the lower() indexes below
    username: Mapped[str] = mapped_column(String(32), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # Balances
    investment: Mapped[Decimal] = mapped_column(
        MoneyType, default=Decimal("0"), nullable=False
    )
    # Withdrawable balance ("total earnings" in the UI)
    balance: Mapped[Decimal] = mapped_column(
        MoneyType, default=Decimal("0"), nullable=False
    )

    # Referral
    referred_by_id: Mapped[int | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    # Flags
    can_withdraw_override: Mapped[bool] = mapped_column(
        Boolean, default=False, nullable=False
    )
    is_banned: Mapped[bool] = mapped_column(
        Boolean, default=False, nullable=False
    )

    # Payout info
    payout_platform: Mapped[str | None] = mapped_column(
        String(32), nullable=True
    )
    payout_account_holder: Mapped[str | None] = mapped_column(
        String(255), nullable=True
    )
    payout_account_number: Mapped[str | None] = mapped_column(
        String(64), nullable=True
    )

    # Accrual anchors
    registration_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False
    )
    last_earning_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
        nullable=False,
    )

    # Relationships
    referrer: Mapped["User | None"] = relationship(
        "User",
        remote_side="User.id",
        foreign_keys=[referred_by_id],
    )
    earnings: Mapped[list["Earning"]] = relationship(
        "Earning",
        back_populates="user",
        cascade="all, delete-orphan",
        order_by="Earning.earned_at.desc()",
    )
    referrals_as_referrer: Mapped[list["Referral"]] = relationship(
        "Referral",
        foreign_keys="Referral.referrer_id",
        back_populates="referrer",
        cascade="all, delete-orphan",
    )
    withdrawals: Mapped[list["WithdrawalRequest"]] = relationship(
        "WithdrawalRequest",
        back_populates="user",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"<User(id={self.id}, telegram_id={self.telegram_id}, "
            f"username={self.username!r}, balance={self.balance})>"
        )

    @property
    def has_payout_info(self) -> bool:
        """Check if all payout fields are filled."""
        return bool(
            self.payout_platform
            and self.payout_account_holder
            and self.payout_account_number
        )

    @property
    def is_invested(self) -> bool:
        """Check if the investment has been confirmed."""
        return self.investment > 0


# Case-insensitive uniqueness, matching the lower() lookups
Index("uq_users_username_lower", func.lower(User.username), unique=True)
Index("uq_users_email_lower", func.lower(User.email), unique=True)
