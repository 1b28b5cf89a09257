"""
Exception types raised by the data-access layer.

NotFoundError signals an expected absence (bad id, empty search).
StoreError wraps any failure coming out of the backing store.
"""
from typing import Optional


class LunchlyError(Exception):
    """Base application exception."""

    status_code: int = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class NotFoundError(LunchlyError):
    """Requested record does not exist."""

    status_code = 404


class StoreError(LunchlyError):
    """The backing store failed (connectivity, constraint violation, bad query)."""

    status_code = 500


class UnsavedCustomerError(LunchlyError):
    """Operation needs a persisted customer but the customer has no id yet."""

    status_code = 400
