"""
Admin handlers package.

Sub-routers:
- panel: admin panel entry
- payments: payment proof review
- withdrawals: withdrawal review with rejection reason
- users: user list, search, balance, override and deletion
- reports: accounts, referral pairs and JSON export

Every sub-router is guarded by AdminAuthMiddleware.
"""

from aiogram import Router

from bot.handlers.admin import panel, payments, reports, users, withdrawals
from bot.middlewares.admin_auth_middleware import AdminAuthMiddleware

router = Router(name="admin")
router.message.middleware(AdminAuthMiddleware())
router.callback_query.middleware(AdminAuthMiddleware())

router.include_router(panel.router)
router.include_router(payments.router)
router.include_router(withdrawals.router)
router.include_router(users.router)
router.include_router(reports.router)

__all__ = ["router"]
