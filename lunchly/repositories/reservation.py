import logging
from typing import List

from lunchly.repositories.base import Repository
from lunchly.schemas.reservation import Reservation

logger = logging.getLogger(__name__)


class ReservationRepository(Repository):
    """Read access to reservations, looked up by owning customer."""

    async def get_for_customer(self, customer_id: int) -> List[Reservation]:
        """Reservations whose customer_id matches, earliest first."""
        query = """
            SELECT id,
                   customer_id,
                   start_at,
                   num_guests,
                   notes
            FROM reservations
            WHERE customer_id = :customer_id
            ORDER BY start_at
        """
        async with self._store_call("reservation lookup"):
            rows = await self.db.fetch_all(query, {"customer_id": customer_id})
        logger.debug(f"Found {len(rows)} reservations for customer {customer_id}")
        return [Reservation.from_row(row) for row in rows]
