"""FSM states."""

from bot.states.admin_states import AdminStates
from bot.states.invest import InvestStates
from bot.states.registration import RegistrationStates
from bot.states.withdrawal import PayoutInfoStates, WithdrawalStates

__all__ = [
    "AdminStates",
    "InvestStates",
    "PayoutInfoStates",
    "RegistrationStates",
    "WithdrawalStates",
]
