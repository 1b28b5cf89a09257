from sqlalchemy import Column, Integer, Text, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from lunchly.db.connection import Base


class ReservationTable(Base):
    """A table booking made by a customer."""

    __tablename__ = "reservations"
    __table_args__ = (
        CheckConstraint("num_guests >= 1", name="ck_reservations_num_guests"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)

    # Foreign keys
    customer_id = Column(Integer, ForeignKey("customers.id"), nullable=False, index=True)

    # Booking details
    start_at = Column(DateTime, nullable=False)
    num_guests = Column(Integer, nullable=False)
    notes = Column(Text, nullable=True)

    # Relationships
    customer = relationship("CustomerTable", back_populates="reservations")

    def __repr__(self):
        return f"<ReservationTable(id={self.id}, customer_id={self.customer_id}, start_at='{self.start_at}')>"
