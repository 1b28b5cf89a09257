"""
Customer persistence: create/read/update plus name search and the
top-ten-by-reservations ranking.

Every call issues a single parameterized statement against the injected
store. Saves are last-writer-wins; nothing here locks or versions rows.
"""

import logging
from typing import List, Optional

from lunchly.errors import NotFoundError, UnsavedCustomerError
from lunchly.repositories.base import Repository
from lunchly.repositories.reservation import ReservationRepository
from lunchly.schemas.customer import Customer
from lunchly.schemas.reservation import Reservation

logger = logging.getLogger(__name__)

CUSTOMER_COLUMNS = """
    id,
    first_name,
    last_name,
    phone,
    notes
"""

TOP_CUSTOMERS_LIMIT = 10


def _name_matches(column: str, param: str) -> str:
    return (
        f"(lower({column}) = :{param}_folded"
        f" OR {column} = :{param}_capitalized"
        f" OR {column} = :{param}_exact)"
    )


def _name_forms(param: str, word: str) -> dict:
    return {
        f"{param}_folded": word.lower(),
        f"{param}_capitalized": word[:1].upper() + word[1:].lower(),
        f"{param}_exact": word,
    }


class CustomerRepository(Repository):
    """Repository for restaurant customers."""

    def __init__(self, db, reservations: Optional[ReservationRepository] = None):
        super().__init__(db)
        self.reservations = reservations or ReservationRepository(db)

    async def all(self) -> List[Customer]:
        """All customers, ordered by last name then first name."""
        query = f"""
            SELECT {CUSTOMER_COLUMNS}
            FROM customers
            ORDER BY last_name, first_name
        """
        async with self._store_call("list customers"):
            rows = await self.db.fetch_all(query)
        return [Customer.from_row(row) for row in rows]

    async def get(self, customer_id: int) -> Customer:
        """Get a customer by id; raises NotFoundError if there is none."""
        query = f"""
            SELECT {CUSTOMER_COLUMNS}
            FROM customers
            WHERE id = :id
        """
        async with self._store_call("get customer"):
            row = await self.db.fetch_one(query, {"id": customer_id})

        if row is None:
            raise NotFoundError(f"No such customer: {customer_id}")

        return Customer.from_row(row)

    async def get_reservations(self, customer: Customer) -> List[Reservation]:
        """All reservations for this customer."""
        if not customer.is_persisted:
            raise UnsavedCustomerError(
                f"Customer {customer.full_name} has not been saved and has no reservations"
            )
        return await self.reservations.get_for_customer(customer.id)

    async def save(self, customer: Customer) -> None:
        """
        Insert the customer if it has no id yet, otherwise update its row.

        On insert the store-generated id is assigned to ``customer.id``.
        An update whose id no longer matches a row changes nothing.
        """
        values = {
            "first_name": customer.first_name,
            "last_name": customer.last_name,
            "phone": customer.phone,
            "notes": customer.notes,
        }

        if not customer.is_persisted:
            query = """
                INSERT INTO customers (first_name, last_name, phone, notes)
                VALUES (:first_name, :last_name, :phone, :notes)
                RETURNING id
            """
            async with self._store_call("insert customer"):
                new_id = await self.db.fetch_val(query, values)
            customer.id = new_id
            logger.info(f"Created customer {customer.id}")
        else:
            query = """
                UPDATE customers
                SET first_name = :first_name,
                    last_name = :last_name,
                    phone = :phone,
                    notes = :notes
                WHERE id = :id
            """
            async with self._store_call("update customer"):
                await self.db.execute(query, {**values, "id": customer.id})
            logger.info(f"Updated customer {customer.id}")

    async def search(self, query: str) -> List[Customer]:
        """
        Search customers by name.

        One word matches customers whose first OR last name equals it,
        so "Robert" finds both "Robert Smith" and "Hannah Robert".
        Two words match first AND last name ("robert smith"); anything
        past the second word is ignored.

        A word matches a stored name when the store's lower() of the name
        equals the lower-cased word, or when the name equals the word as
        typed or capitalized. sqlite's lower() only folds ASCII, so the
        last two forms are what find names like "Émile" or "Ödön".

        Raises NotFoundError when nothing matches.
        """
        words = query.split()

        if not words:
            raise NotFoundError(f"Could not find customer(s) by {query}")

        if len(words) == 1:
            sql = f"""
                SELECT {CUSTOMER_COLUMNS}
                FROM customers
                WHERE {_name_matches("first_name", "name")}
                   OR {_name_matches("last_name", "name")}
            """
            values = _name_forms("name", words[0])
        else:
            if len(words) > 2:
                logger.debug(f"Search only uses first and last name, ignoring {words[2:]}")
            sql = f"""
                SELECT {CUSTOMER_COLUMNS}
                FROM customers
                WHERE {_name_matches("first_name", "first")}
                  AND {_name_matches("last_name", "last")}
            """
            values = {**_name_forms("first", words[0]), **_name_forms("last", words[1])}

        async with self._store_call("search customers"):
            rows = await self.db.fetch_all(sql, values)

        if not rows:
            raise NotFoundError(f"Could not find customer(s) by {query}")

        return [Customer.from_row(row) for row in rows]

    async def top_ten(self) -> List[Customer]:
        """
        Up to ten customers with the most reservations, most first.

        Customers without reservations never appear. Ties are broken by
        last name, first name, then id.
        """
        query = f"""
            SELECT c.id,
                   c.first_name,
                   c.last_name,
                   c.phone,
                   c.notes
            FROM customers AS c
                JOIN reservations AS r
                    ON c.id = r.customer_id
            GROUP BY c.id, c.first_name, c.last_name, c.phone, c.notes
            ORDER BY COUNT(r.id) DESC, c.last_name, c.first_name, c.id
            LIMIT {TOP_CUSTOMERS_LIMIT}
        """
        async with self._store_call("top customers"):
            rows = await self.db.fetch_all(query)
        return [Customer.from_row(row) for row in rows]
