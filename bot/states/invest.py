"""
Invest FSM states.

States for the payment proof submission flow.
"""

from aiogram.fsm.state import State, StatesGroup


class InvestStates(StatesGroup):
    """Payment proof submission."""

    # Name on the sending account
    entering_holder_name = State()

    # Sending account number
    entering_account_number = State()

    # Screenshot of the transfer
    waiting_for_screenshot = State()
