"""
Withdrawal FSM states.

States for payout details and withdrawal requests.
"""

from aiogram.fsm.state import State, StatesGroup


class PayoutInfoStates(StatesGroup):
    """Payout details input."""

    choosing_platform = State()
    entering_holder_name = State()
    entering_account_number = State()


class WithdrawalStates(StatesGroup):
    """Withdrawal request."""

    entering_amount = State()
    confirming = State()
