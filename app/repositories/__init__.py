"""
Repositories.

Data access layer for all models.
"""

from app.repositories.earning_repository import EarningRepository
from app.repositories.payment_repository import PaymentRepository
from app.repositories.referral_repository import ReferralRepository
from app.repositories.user_repository import UserRepository
from app.repositories.withdrawal_repository import WithdrawalRepository

__all__ = [
    "EarningRepository",
    "PaymentRepository",
    "ReferralRepository",
    "UserRepository",
    "WithdrawalRepository",
]
