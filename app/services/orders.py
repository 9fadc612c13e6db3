"""Order finalization, loyalty award and order lifecycle"""

import secrets
import time
from datetime import datetime
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from app.models.customer import Customer, MembershipTier
from app.models.order import Order, OrderStatus, PaymentMethod
from app.schemas.order import OrderCreate, QuoteRequest
from app.services.errors import (
    EmptyItemsError,
    InvalidStatusTransitionError,
    InvalidTotalError,
    MissingCustomerError,
    MissingPaymentProofError,
    NotFoundError,
)
from app.services.events import EventDispatcher
from app.services.loyalty import DiscountResult, compute_tier, points_for_total, resolve_discount
from app.services.promos import PromoService

logger = structlog.get_logger()

# Forward-only sequence; Cancelled sits outside it
ORDER_SEQUENCE = [
    OrderStatus.CONFIRMED.value,
    OrderStatus.PREPARING.value,
    OrderStatus.QUALITY_CHECK.value,
    OrderStatus.PACKING.value,
    OrderStatus.PACKED_AND_READY.value,
    OrderStatus.ASSIGNED.value,
    OrderStatus.PICKED_UP.value,
    OrderStatus.OUT_FOR_DELIVERY.value,
    OrderStatus.DELIVERED.value,
]
TERMINAL_STATUSES = {OrderStatus.DELIVERED.value, OrderStatus.CANCELLED.value}


def generate_order_number() -> str:
    """Millisecond timestamp plus a random suffix"""
    return f"ORD-{int(time.time() * 1000)}-{secrets.randbelow(10000):04d}"


def can_transition(current: str, new: str) -> bool:
    if current in TERMINAL_STATUSES:
        return False
    if new == OrderStatus.CANCELLED.value:
        return True
    return ORDER_SEQUENCE.index(new) > ORDER_SEQUENCE.index(current)


class OrderService:
    """Checkout and order management"""

    def __init__(self, db: AsyncSession, dispatcher: EventDispatcher):
        self.db = db
        self.dispatcher = dispatcher

    async def _get_customer(self, customer_id: UUID) -> Customer:
        result = await self.db.execute(select(Customer).where(Customer.id == customer_id))
        customer = result.scalar_one_or_none()

        if not customer:
            raise NotFoundError("Customer not found")

        return customer

    async def finalize_order(self, order_data: OrderCreate) -> Tuple[Order, int, MembershipTier]:
        """Persist a paid order and award loyalty points

        Returns the order, the points it earned and the customer's tier after
        the award.
        """
        if not order_data.customer_id:
            raise MissingCustomerError("User must be logged in to place an order")

        if not order_data.items:
            raise EmptyItemsError("Order must contain at least one item")

        if order_data.total_cents <= 0:
            raise InvalidTotalError("Order total must be greater than zero")

        if not (order_data.payment_reference or "").strip():
            raise MissingPaymentProofError("Payment must be completed before the order is placed")

        customer = await self._get_customer(order_data.customer_id)

        points_earned = points_for_total(order_data.total_cents)

        order = Order(
            order_number=generate_order_number(),
            customer_id=customer.id,
            items_json=[item.model_dump() for item in order_data.items],
            total_cents=order_data.total_cents,
            points_earned=points_earned,
            status=OrderStatus.CONFIRMED.value,
            payment_method=order_data.payment_method.value,
            payment_reference=order_data.payment_reference.strip(),
            payment_status="Pending" if order_data.payment_method == PaymentMethod.COD else "Paid",
            delivery_address_json=(
                order_data.delivery_address.model_dump() if order_data.delivery_address else None
            ),
            delivery_notes=order_data.delivery_notes,
        )
        self.db.add(order)

        # Increment in SQL and derive the tier from the value it returns
        result = await self.db.execute(
            update(Customer)
            .where(Customer.id == customer.id)
            .values(loyalty_points=Customer.loyalty_points + points_earned)
            .returning(Customer.loyalty_points)
        )
        new_points = result.scalar_one()
        tier = compute_tier(new_points)

        await self.db.execute(
            update(Customer).where(Customer.id == customer.id).values(tier=tier.value)
        )

        await self.db.commit()
        await self.db.refresh(order)
        await self.db.refresh(customer)

        logger.info(
            "Order finalized",
            order_number=order.order_number,
            customer_id=str(customer.id),
            total_cents=order.total_cents,
            points_earned=points_earned,
            loyalty_points=new_points,
            tier=tier.value,
        )

        self.dispatcher.activity(
            order_data.requester_email or customer.email,
            "Add Order",
            f"Created order {order.order_number}: {points_earned} points earned, tier {tier.value}",
            "order",
            str(order.id),
        )

        return order, points_earned, tier

    async def quote(self, request: QuoteRequest) -> Tuple[DiscountResult, MembershipTier, Optional[str]]:
        """Price a cart with the better of tier and promo discount"""
        tier = MembershipTier.BRONZE
        if request.customer_id:
            customer = await self._get_customer(request.customer_id)
            tier = MembershipTier(customer.tier)

        promo_percent = None
        promo_code = None
        if request.promo_code:
            promo = await PromoService(self.db).validate(request.promo_code)
            promo_percent = promo.discount_percent
            promo_code = promo.code

        subtotal = sum(item.price_cents * item.quantity for item in request.items)
        return resolve_discount(subtotal, tier, promo_percent), tier, promo_code

    async def get_order(self, identifier: str) -> Order:
        """Look up by order number, then by internal id"""
        result = await self.db.execute(select(Order).where(Order.order_number == identifier))
        order = result.scalar_one_or_none()

        if order is None:
            try:
                order_id = UUID(identifier)
            except ValueError:
                order_id = None
            if order_id is not None:
                result = await self.db.execute(select(Order).where(Order.id == order_id))
                order = result.scalar_one_or_none()

        if not order:
            raise NotFoundError("Order not found")

        return order

    async def list_orders(self, status: Optional[str] = None) -> List[Order]:
        query = select(Order)
        if status:
            query = query.where(Order.status == status)

        result = await self.db.execute(query.order_by(Order.created_at.desc()))
        return list(result.scalars().all())

    async def list_customer_orders(self, customer_id: UUID) -> List[Order]:
        await self._get_customer(customer_id)

        result = await self.db.execute(
            select(Order).where(Order.customer_id == customer_id).order_by(Order.created_at.desc())
        )
        return list(result.scalars().all())

    async def update_status(
        self,
        identifier: str,
        status: OrderStatus,
        requester_email: Optional[str] = None,
    ) -> Order:
        order = await self.get_order(identifier)
        new_status = OrderStatus(status).value

        if not can_transition(order.status, new_status):
            raise InvalidStatusTransitionError(
                f"Cannot move order from {order.status} to {new_status}"
            )

        order.status = new_status
        await self.db.commit()
        await self.db.refresh(order)

        logger.info("Order status updated", order_number=order.order_number, status=new_status)

        if requester_email:
            self.dispatcher.activity(
                requester_email,
                "Update Order",
                f"Order {order.order_number} status changed to {new_status}",
                "order",
                str(order.id),
            )

        return order

    async def mark_feedback_submitted(self, identifier: str) -> Order:
        order = await self.get_order(identifier)

        if not order.has_feedback:
            order.has_feedback = True
            order.feedback_submitted_at = datetime.utcnow()
            await self.db.commit()
            await self.db.refresh(order)

        return order
