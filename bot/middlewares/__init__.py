"""
Middlewares.

Bot middlewares for request processing.
"""

from bot.middlewares.admin_auth_middleware import AdminAuthMiddleware
from bot.middlewares.auth import AuthMiddleware
from bot.middlewares.ban_middleware import BanMiddleware
from bot.middlewares.database import DatabaseMiddleware
from bot.middlewares.error_handler import ErrorHandlerMiddleware


__all__ = [
    "AdminAuthMiddleware",
    "AuthMiddleware",
    "BanMiddleware",
    "DatabaseMiddleware",
    "ErrorHandlerMiddleware",
]
