from sqlalchemy import Column, Integer, String, Text
from sqlalchemy.orm import relationship
from lunchly.db.connection import Base


class CustomerTable(Base):
    """Customers of the restaurant."""

    __tablename__ = "customers"

    id = Column(Integer, primary_key=True, autoincrement=True)

    # Customer information
    first_name = Column(Text, nullable=False, index=True)
    last_name = Column(Text, nullable=False, index=True)
    phone = Column(String(32), nullable=True)
    notes = Column(Text, nullable=True)

    # Relationships
    reservations = relationship("ReservationTable", back_populates="customer", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<CustomerTable(id={self.id}, first_name='{self.first_name}', last_name='{self.last_name}')>"
