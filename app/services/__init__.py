"""
Services.

Business logic layer.
"""

from app.services.admin_user_service import AdminUserService
from app.services.base_service import BaseService, transaction
from app.services.earnings import AccrualService
from app.services.notification_service import NotificationService
from app.services.payment import PaymentApprovalService, PaymentIntakeService
from app.services.user import UserService
from app.services.withdrawal_service import WithdrawalService

__all__ = [
    # Base
    "BaseService",
    "transaction",
    # Core Services
    "AccrualService",
    "PaymentIntakeService",
    "PaymentApprovalService",
    "UserService",
    "WithdrawalService",
    # Support & Admin Services
    "AdminUserService",
    "NotificationService",
]
