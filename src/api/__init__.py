from .routes import pnl_router, token_router
from .error_handlers import register_error_handlers

__all__ = [
    "pnl_router",
    "token_router",
    "register_error_handlers",
]
