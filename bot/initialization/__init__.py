"""
Bot Initialization Module.

Initialization logic split into focused modules:
- logging: Logger configuration
- storage: FSM storage setup (Redis with in-memory fallback)
- middlewares: Middleware registration
- handlers: Handler registration
- shutdown: Graceful shutdown handler
"""

__all__ = []
