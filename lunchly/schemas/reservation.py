from datetime import datetime
from typing import Optional

from .base import RowModel


class Reservation(RowModel):
    """A reservation as seen by the customer layer."""
    id: int
    customer_id: int
    start_at: datetime
    num_guests: int
    notes: Optional[str] = None
