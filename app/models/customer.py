"""Customer model with loyalty standing"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, Integer, DateTime
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
import enum

from app.database import Base


class MembershipTier(str, enum.Enum):
    """Loyalty tiers, lowest first"""
    BRONZE = "Bronze"
    SILVER = "Silver"
    GOLD = "Gold"


class Customer(Base):
    """Diners who place orders and earn points"""
    __tablename__ = "customers"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)

    # Profile
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False)
    phone = Column(String(20))

    # Loyalty; tier is derived from loyalty_points and rewritten with every point change
    loyalty_points = Column(Integer, nullable=False, default=0)
    tier = Column(String(20), nullable=False, default=MembershipTier.BRONZE.value)
    member_since = Column(String(4), default=lambda: str(datetime.utcnow().year))

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    orders = relationship("Order", back_populates="customer", order_by="Order.created_at.desc()")
    reservations = relationship("Reservation", back_populates="customer")
