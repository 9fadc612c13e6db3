"""Database models"""

from app.models.customer import Customer, MembershipTier
from app.models.order import Order, OrderStatus, PaymentMethod
from app.models.reservation import Reservation, ReservationSlot, ReservationStatus
from app.models.promo import Promo
from app.models.settings import RestaurantSettings
from app.models.activity import ActivityLog

__all__ = [
    "Customer",
    "MembershipTier",
    "Order",
    "OrderStatus",
    "PaymentMethod",
    "Reservation",
    "ReservationSlot",
    "ReservationStatus",
    "Promo",
    "RestaurantSettings",
    "ActivityLog",
]
