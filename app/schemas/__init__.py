"""Pydantic schemas for request/response validation"""

from app.schemas.customer import (
    CustomerCreate,
    CustomerResponse,
    TierResponse,
)
from app.schemas.order import (
    OrderCreate,
    OrderCreatedResponse,
    OrderItemCreate,
    OrderResponse,
    OrderStatusUpdate,
    QuoteRequest,
    QuoteResponse,
)
from app.schemas.reservation import (
    AvailabilityResponse,
    ReservationCreate,
    ReservationCreatedResponse,
    ReservationResponse,
    ReservationStatusUpdate,
)
from app.schemas.promo import (
    PromoCreate,
    PromoUpdate,
    PromoResponse,
)
from app.schemas.settings import (
    RestaurantSettingsUpdate,
    RestaurantSettingsResponse,
)

__all__ = [
    "CustomerCreate",
    "CustomerResponse",
    "TierResponse",
    "OrderCreate",
    "OrderCreatedResponse",
    "OrderItemCreate",
    "OrderResponse",
    "OrderStatusUpdate",
    "QuoteRequest",
    "QuoteResponse",
    "AvailabilityResponse",
    "ReservationCreate",
    "ReservationCreatedResponse",
    "ReservationResponse",
    "ReservationStatusUpdate",
    "PromoCreate",
    "PromoUpdate",
    "PromoResponse",
    "RestaurantSettingsUpdate",
    "RestaurantSettingsResponse",
]
