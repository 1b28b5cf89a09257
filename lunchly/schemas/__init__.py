"""
Pydantic entities and API request/response schemas.
"""

from .customer import (
    Customer,
    CustomerCreate,
    CustomerUpdate,
    CustomerResponse,
    CustomerWithReservations,
)
from .reservation import Reservation

# Export all schemas
__all__ = [
    "Customer",
    "CustomerCreate",
    "CustomerUpdate",
    "CustomerResponse",
    "CustomerWithReservations",
    "Reservation",
]
