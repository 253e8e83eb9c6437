"""
Model enums.

String enums stored in status/type columns.
"""

from enum import StrEnum


class PaymentStatus(StrEnum):
    """Payment proof review status."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class WithdrawalStatus(StrEnum):
    """Withdrawal request status."""

    PROCESSING = "processing"
    APPROVED = "approved"
    REJECTED = "rejected"


class EarningType(StrEnum):
    """Kind of credit recorded in the earnings log."""

    DAILY_RETURN = "daily_return"
    REFERRAL_BONUS = "referral_bonus"
    ADMIN_ADJUSTMENT = "admin_adjustment"

    @property
    def label(self) -> str:
        """Human-readable label."""
        return {
            EarningType.DAILY_RETURN: "Daily Return",
            EarningType.REFERRAL_BONUS: "Referral Bonus",
            EarningType.ADMIN_ADJUSTMENT: "Admin Adjustment",
        }[self]
