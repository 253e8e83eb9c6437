"""
Withdrawal handlers package.

Sub-routers:
- handlers: withdrawal menu
- payout_info: payout details FSM
- processors: amount entry and confirmation
- history: withdrawal history
"""

from aiogram import Router

from bot.handlers.withdrawal import handlers, history, payout_info, processors

router = Router(name="withdrawal")
router.include_router(handlers.router)
router.include_router(payout_info.router)
router.include_router(processors.router)
router.include_router(history.router)

__all__ = ["router"]
