"""
Withdrawal services package.

This package provides modular withdrawal management functionality:
- withdrawal_validator: Validation logic for withdrawal requests
  - withdrawal_validator_core: Main validation logic
  - withdrawal_basic_checks: Eligibility checks
- withdrawal_balance_manager: Balance deduction and restoration
- withdrawal_request_handler: Withdrawal request creation
- withdrawal_lifecycle_handler: Approval and rejection
- withdrawal_query_service: Queries, history and eligibility

All components are re-exported for easy importing.
"""

from app.services.withdrawal.withdrawal_balance_manager import (
    WithdrawalBalanceManager,
)
from app.services.withdrawal.withdrawal_lifecycle_handler import (
    WithdrawalLifecycleHandler,
)
from app.services.withdrawal.withdrawal_query_service import (
    WithdrawalEligibility,
    WithdrawalQueryService,
)
from app.services.withdrawal.withdrawal_request_handler import (
    WithdrawalRequestHandler,
)
from app.services.withdrawal.withdrawal_validator import (
    ValidationResult,
    WithdrawalValidator,
)


__all__ = [
    "WithdrawalBalanceManager",
    "WithdrawalValidator",
    "ValidationResult",
    "WithdrawalRequestHandler",
    "WithdrawalLifecycleHandler",
    "WithdrawalQueryService",
    "WithdrawalEligibility",
]
