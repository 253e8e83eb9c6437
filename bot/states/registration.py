"""Registration FSM states."""

from aiogram.fsm.state import State, StatesGroup


class RegistrationStates(StatesGroup):
    """Profile creation after payment approval."""

    entering_username = State()
    entering_email = State()
