"""Reservation models"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, Integer, Date, DateTime, ForeignKey, Text, Index, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
import enum

from app.database import Base


class ReservationStatus(str, enum.Enum):
    PENDING = "Pending"
    CONFIRMED = "Confirmed"
    CANCELLED = "Cancelled"
    COMPLETED = "Completed"


# Statuses that hold capacity in their slot
ACTIVE_STATUSES = (ReservationStatus.PENDING.value, ReservationStatus.CONFIRMED.value)


class Reservation(Base):
    """Table reservations"""
    __tablename__ = "reservations"
    __table_args__ = (Index("ix_reservations_slot", "reservation_date", "reservation_time"),)

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    confirmation_code = Column(String(32), unique=True, nullable=False, index=True)
    customer_id = Column(UUID(as_uuid=True), ForeignKey("customers.id"))

    # Customer information
    name = Column(String(255), nullable=False)
    email = Column(String(255), index=True)
    phone = Column(String(20))

    # Reservation details
    reservation_date = Column(Date, nullable=False)
    reservation_time = Column(String(5), nullable=False)  # HH:MM
    guests = Column(Integer, nullable=False)
    notes = Column(Text)

    # Status
    status = Column(String(20), nullable=False, default=ReservationStatus.PENDING.value)
    table_number = Column(String(20))
    payment_status = Column(String(20))  # pending, completed, failed, refunded, unpaid

    # Lifecycle
    expires_at = Column(DateTime)
    confirmation_sent = Column(DateTime)
    cancelled_at = Column(DateTime)

    # Metadata
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    customer = relationship("Customer", back_populates="reservations")

    @property
    def is_active(self) -> bool:
        return self.status in ACTIVE_STATUSES


class ReservationSlot(Base):
    """Guests booked per (date, time) slot"""
    __tablename__ = "reservation_slots"
    __table_args__ = (UniqueConstraint("slot_date", "slot_time", name="uq_reservation_slot"),)

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    slot_date = Column(Date, nullable=False)
    slot_time = Column(String(5), nullable=False)
    booked_guests = Column(Integer, nullable=False, default=0)

    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
