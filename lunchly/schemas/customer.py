from typing import Optional, List
from pydantic import BaseModel, Field, validator

from .base import RowModel
from .reservation import Reservation


def _clean_name(v):
    v = v.strip()
    if not v:
        raise ValueError("Name must not be blank")
    return v


def _clean_phone(v):
    if v is not None:
        v = v.strip()
        if any(not (c.isdigit() or c in "+-() .") for c in v):
            raise ValueError("Phone number may only contain digits, spaces and +-().")
    return v


class Customer(RowModel):
    """
    Customer of the restaurant.

    ``id`` stays ``None`` until the customer is saved; the store assigns it
    exactly once on insert.
    """
    id: Optional[int] = None
    first_name: str
    last_name: str
    phone: Optional[str] = None
    notes: Optional[str] = None

    @property
    def full_name(self) -> str:
        """Customer's first and last name."""
        return f"{self.first_name} {self.last_name}"

    @property
    def is_persisted(self) -> bool:
        return self.id is not None


class CustomerCreate(BaseModel):
    """Schema for creating a new customer."""
    first_name: str = Field(..., min_length=1, max_length=255)
    last_name: str = Field(..., min_length=1, max_length=255)
    phone: Optional[str] = Field(None, max_length=32)
    notes: Optional[str] = None

    @validator("first_name", "last_name")
    def validate_names(cls, v):
        return _clean_name(v)

    @validator("phone")
    def validate_phone(cls, v):
        return _clean_phone(v)


class CustomerUpdate(BaseModel):
    """Schema for updating customer information; omitted fields keep their value."""
    first_name: Optional[str] = Field(None, min_length=1, max_length=255)
    last_name: Optional[str] = Field(None, min_length=1, max_length=255)
    phone: Optional[str] = Field(None, max_length=32)
    notes: Optional[str] = None

    @validator("first_name", "last_name")
    def validate_names(cls, v):
        # only runs for fields present in the payload
        if v is None:
            raise ValueError("Name cannot be cleared")
        return _clean_name(v)

    @validator("phone")
    def validate_phone(cls, v):
        return _clean_phone(v)


class CustomerResponse(BaseModel):
    """Schema for customer API responses."""
    id: int
    first_name: str
    last_name: str
    full_name: str
    phone: Optional[str] = None
    notes: Optional[str] = None

    @classmethod
    def from_customer(cls, customer: Customer) -> "CustomerResponse":
        return cls(full_name=customer.full_name, **customer.model_dump())


class CustomerWithReservations(CustomerResponse):
    """Schema for a customer together with their reservations."""
    reservations: List[Reservation] = []
