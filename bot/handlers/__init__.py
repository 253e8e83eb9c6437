"""
Bot handlers.

Routers in registration order. Menu buttons and commands are matched
before FSM state handlers so they always interrupt an input flow.
"""

from aiogram import Router

from bot.handlers import (
    admin,
    common,
    dashboard,
    invest,
    referral,
    registration,
    start,
    withdrawal,
)


def get_routers() -> list[Router]:
    """Routers in the order they must be included."""
    return [
        start.router,
        common.router,
        admin.router,
        invest.router,
        registration.router,
        dashboard.router,
        referral.router,
        withdrawal.router,
    ]


__all__ = ["get_routers"]
