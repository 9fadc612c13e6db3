"""Reservation schemas"""

from datetime import date, datetime
from typing import Optional, List, Literal
from uuid import UUID
from pydantic import BaseModel, Field

from app.models.reservation import ReservationStatus

TIME_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class ReservationCreate(BaseModel):
    """Create reservation request"""
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    reservation_date: date
    reservation_time: str = Field(pattern=TIME_PATTERN)
    # Range checked by the booking workflow so it can answer with its own error code
    guests: int
    notes: Optional[str] = None
    customer_id: Optional[UUID] = None
    hold_for_deposit: bool = False


class ReservationStatusUpdate(BaseModel):
    """Staff status change"""
    status: ReservationStatus
    actor_email: Optional[str] = None


class TableAssignment(BaseModel):
    table_number: Optional[str] = None


class PaymentStatusUpdate(BaseModel):
    payment_status: Literal["pending", "completed", "failed", "refunded", "unpaid"]


class ReservationResponse(BaseModel):
    """Reservation response"""
    id: UUID
    confirmation_code: str
    customer_id: Optional[UUID]
    name: str
    email: Optional[str]
    phone: Optional[str]
    reservation_date: date
    reservation_time: str
    guests: int
    notes: Optional[str]
    status: str
    table_number: Optional[str]
    payment_status: Optional[str]
    expires_at: Optional[datetime]
    confirmation_sent: Optional[datetime]
    cancelled_at: Optional[datetime]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ReservationCreatedResponse(BaseModel):
    """Booking result with the code the customer keeps"""
    message: str = "Reservation confirmed"
    confirmation_code: str
    reservation: ReservationResponse


class ReservationListResponse(BaseModel):
    items: List[ReservationResponse]
    total: int


class AvailabilityResponse(BaseModel):
    """Availability check response"""
    reservation_date: date
    reservation_time: str
    party_size: Optional[int] = None
    available: bool
    booked_guests: int
    available_slots: int
    max_capacity: int
