"""
Database models.

Exports all SQLAlchemy models for easy imports.
"""

from app.models.base import Base
from app.models.earning import Earning
from app.models.enums import EarningType, PaymentStatus, WithdrawalStatus
from app.models.payment_request import PaymentRequest
from app.models.referral import Referral
from app.models.user import User
from app.models.withdrawal_request import WithdrawalRequest

__all__ = [
    # Base
    "Base",
    # Enums
    "EarningType",
    "PaymentStatus",
    "WithdrawalStatus",
    # Core Models
    "User",
    "Earning",
    "Referral",
    "PaymentRequest",
    "WithdrawalRequest",
]
