"""
Repositories mapping entities to rows in the backing store.
"""

from .customer import CustomerRepository
from .reservation import ReservationRepository

__all__ = [
    "CustomerRepository",
    "ReservationRepository",
]
