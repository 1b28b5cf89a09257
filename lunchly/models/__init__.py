"""
SQLAlchemy table definitions for the reservation store.
"""

from .customer import CustomerTable
from .reservation import ReservationTable

# Export all models
__all__ = [
    "CustomerTable",
    "ReservationTable",
]
