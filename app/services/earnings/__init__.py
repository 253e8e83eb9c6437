"""
Earnings services package.

- accrual_calculator: pure daily-return arithmetic
- accrual_service: applies accrual to a user under a row lock
"""

from app.services.earnings.accrual_calculator import (
    AccrualResult,
    calculate_accrual,
)
from app.services.earnings.accrual_service import AccrualService

__all__ = [
    "AccrualResult",
    "AccrualService",
    "calculate_accrual",
]
