"""Order model"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, ForeignKey, JSON, Text, Integer, Boolean
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
import enum

from app.database import Base


class OrderStatus(str, enum.Enum):
    """Order lifecycle, in the order an order moves through it"""
    CONFIRMED = "Confirmed"
    PREPARING = "Preparing"
    QUALITY_CHECK = "Quality Check"
    PACKING = "Packing"
    PACKED_AND_READY = "Packed & Ready"
    ASSIGNED = "Assigned"
    PICKED_UP = "Picked Up"
    OUT_FOR_DELIVERY = "Out for Delivery"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"


class PaymentMethod(str, enum.Enum):
    STRIPE = "stripe"
    COD = "cod"


class Order(Base):
    """Customer orders placed at checkout"""
    __tablename__ = "orders"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    order_number = Column(String(40), unique=True, nullable=False, index=True)
    customer_id = Column(UUID(as_uuid=True), ForeignKey("customers.id"), nullable=False)

    # Order details
    # [{"item_id": "...", "name": "...", "quantity": 1, "price_cents": 1500}, ...]
    items_json = Column(JSON, nullable=False)
    total_cents = Column(Integer, nullable=False)
    points_earned = Column(Integer, nullable=False, default=0)

    # Status
    status = Column(String(50), nullable=False, default=OrderStatus.CONFIRMED.value)

    # Payment
    payment_method = Column(String(20), nullable=False, default=PaymentMethod.STRIPE.value)
    payment_reference = Column(String(255), nullable=False)
    payment_status = Column(String(20), nullable=False, default="Paid")  # Pending, Paid

    # Delivery
    # {"street": "...", "city": "...", "postal_code": "...", "phone": "..."}
    delivery_address_json = Column(JSON)
    delivery_notes = Column(Text)

    # Feedback
    has_feedback = Column(Boolean, nullable=False, default=False)
    feedback_submitted_at = Column(DateTime)

    # Metadata
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    customer = relationship("Customer", back_populates="orders")
