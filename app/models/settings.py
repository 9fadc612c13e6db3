"""Restaurant settings model"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, Integer, Boolean, DateTime
from sqlalchemy.dialects.postgresql import UUID

from app.database import Base


class RestaurantSettings(Base):
    """Operational settings, a single mutable record"""
    __tablename__ = "restaurant_settings"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)

    # Reservation settings
    max_table_capacity = Column(Integer, nullable=False, default=50)
    deposit_amount_cents = Column(Integer, nullable=False, default=2500)
    reservation_duration_minutes = Column(Integer, nullable=False, default=120)
    cancellation_hours = Column(Integer, nullable=False, default=2)  # hours before reservation
    pending_hold_hours = Column(Integer, nullable=False, default=24)

    # Operating hours
    operating_hours_open = Column(String(5), nullable=False, default="11:00")
    operating_hours_close = Column(String(5), nullable=False, default="22:00")
    rest_days_open = Column(Boolean, nullable=False, default=True)

    # Storefront
    show_promo_section = Column(Boolean, nullable=False, default=True)

    updated_by = Column(String(255))
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
