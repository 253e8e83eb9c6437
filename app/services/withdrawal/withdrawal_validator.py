"""
Withdrawal validation service.

Facade re-exporting the validator and its result type.
"""

from app.services.withdrawal.withdrawal_validator_core import (
    ValidationResult,
    WithdrawalValidator,
)

__all__ = [
    "ValidationResult",
    "WithdrawalValidator",
]
