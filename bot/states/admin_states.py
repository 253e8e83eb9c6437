"""Admin FSM states."""

from aiogram.fsm.state import State, StatesGroup


class AdminStates(StatesGroup):
    """Admin input steps."""

    # Reason for a withdrawal rejection
    entering_reject_reason = State()

    # New absolute balance for a user
    entering_balance = State()

    # Username / Telegram ID lookup
    entering_user_search = State()
