"""
Payment services package.

- payment_intake_service: payment proof submission and status queries
- payment_approval_service: admin review and stale-request notices
"""

from app.services.payment.payment_approval_service import (
    PaymentApprovalService,
)
from app.services.payment.payment_intake_service import PaymentIntakeService

__all__ = [
    "PaymentApprovalService",
    "PaymentIntakeService",
]
