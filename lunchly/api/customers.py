"""
Customer endpoints. Thin wrappers over CustomerRepository; errors raised
by the repository are rendered by the handlers in lunchly.api.errors.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from lunchly.db.connection import get_db
from lunchly.repositories.customer import CustomerRepository
from lunchly.schemas import (
    Customer,
    CustomerCreate,
    CustomerUpdate,
    CustomerResponse,
    CustomerWithReservations,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/customers", tags=["customers"])


def get_customer_repository(db=Depends(get_db)) -> CustomerRepository:
    """FastAPI dependency building a repository on the request's store handle."""
    return CustomerRepository(db)


@router.get("", response_model=List[CustomerResponse])
async def list_customers(
    search: Optional[str] = Query(None, description="First name, last name, or 'first last'"),
    repo: CustomerRepository = Depends(get_customer_repository),
):
    """List all customers, or the ones matching a name search."""
    if search is not None:
        customers = await repo.search(search)
    else:
        customers = await repo.all()
    return [CustomerResponse.from_customer(c) for c in customers]


@router.get("/top", response_model=List[CustomerResponse])
async def top_customers(repo: CustomerRepository = Depends(get_customer_repository)):
    """Ten customers with the most reservations."""
    customers = await repo.top_ten()
    return [CustomerResponse.from_customer(c) for c in customers]


@router.get("/{customer_id}", response_model=CustomerWithReservations)
async def get_customer(customer_id: int, repo: CustomerRepository = Depends(get_customer_repository)):
    """Show a customer with their reservations."""
    customer = await repo.get(customer_id)
    reservations = await repo.get_reservations(customer)
    return CustomerWithReservations(
        full_name=customer.full_name,
        reservations=reservations,
        **customer.model_dump(),
    )


@router.post("", response_model=CustomerResponse, status_code=status.HTTP_201_CREATED)
async def create_customer(
    payload: CustomerCreate,
    repo: CustomerRepository = Depends(get_customer_repository),
):
    """Add a new customer."""
    customer = Customer(**payload.model_dump())
    await repo.save(customer)
    return CustomerResponse.from_customer(customer)


@router.put("/{customer_id}", response_model=CustomerResponse)
async def update_customer(
    customer_id: int,
    payload: CustomerUpdate,
    repo: CustomerRepository = Depends(get_customer_repository),
):
    """Edit an existing customer; fields left out of the payload are kept."""
    customer = await repo.get(customer_id)
    for field, value in payload.model_dump(exclude_unset=True).items():
        setattr(customer, field, value)
    await repo.save(customer)
    return CustomerResponse.from_customer(customer)
