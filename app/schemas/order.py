"""Order schemas"""

from datetime import datetime
from typing import Optional, List
from uuid import UUID
from pydantic import BaseModel, Field

from app.models.customer import MembershipTier
from app.models.order import OrderStatus, PaymentMethod


class OrderItemCreate(BaseModel):
    """Create order item"""
    item_id: Optional[str] = None
    name: str
    quantity: int = Field(1, ge=1)
    price_cents: int = Field(0, ge=0)


class DeliveryAddress(BaseModel):
    street: str
    city: str
    postal_code: Optional[str] = None
    phone: Optional[str] = None


class OrderCreate(BaseModel):
    """Checkout request; payment has already been verified upstream"""
    customer_id: Optional[UUID] = None
    items: List[OrderItemCreate] = []
    total_cents: int
    payment_reference: Optional[str] = None
    payment_method: PaymentMethod = PaymentMethod.STRIPE
    delivery_address: Optional[DeliveryAddress] = None
    delivery_notes: Optional[str] = None
    requester_email: Optional[str] = None


class OrderStatusUpdate(BaseModel):
    """Update order status request"""
    status: OrderStatus
    requester_email: Optional[str] = None


class OrderItemResponse(BaseModel):
    """Order item in response"""
    item_id: Optional[str] = None
    name: str
    quantity: int
    price_cents: int


class OrderResponse(BaseModel):
    """Order response"""
    id: UUID
    order_number: str
    customer_id: UUID
    items: List[OrderItemResponse]
    total_cents: int
    points_earned: int
    status: str
    payment_method: str
    payment_status: str
    delivery_address: Optional[DeliveryAddress]
    delivery_notes: Optional[str]
    has_feedback: bool
    feedback_submitted_at: Optional[datetime]
    created_at: datetime
    updated_at: datetime


class OrderCreatedResponse(BaseModel):
    """Finalized order with the loyalty outcome"""
    order: OrderResponse
    points_earned: int
    user_tier: MembershipTier


class OrderListResponse(BaseModel):
    """Order list"""
    items: List[OrderResponse]
    total: int


class QuoteRequest(BaseModel):
    """Price a cart before checkout"""
    customer_id: Optional[UUID] = None
    items: List[OrderItemCreate]
    promo_code: Optional[str] = None


class QuoteResponse(BaseModel):
    subtotal_cents: int
    discount_cents: int
    final_total_cents: int
    applied_percent: int
    discount_source: str
    tier: MembershipTier
    promo_code: Optional[str] = None
