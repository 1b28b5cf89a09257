"""
API package for Lunchly.
Contains all API route modules.
"""

from .customers import router as customers_router
from .errors import register_exception_handlers

# Export all routers
__all__ = [
    "customers_router",
    "register_exception_handlers",
]
