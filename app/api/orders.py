"""Order API endpoints"""

from typing import Optional

from fastapi import APIRouter, Depends

from app.api.deps import get_order_service, http_error
from app.models.order import Order
from app.schemas.order import (
    OrderCreate,
    OrderCreatedResponse,
    OrderListResponse,
    OrderResponse,
    OrderStatusUpdate,
    QuoteRequest,
    QuoteResponse,
)
from app.services.errors import ServiceError
from app.services.orders import OrderService

router = APIRouter()


def to_order_response(order: Order) -> OrderResponse:
    return OrderResponse(
        id=order.id,
        order_number=order.order_number,
        customer_id=order.customer_id,
        items=order.items_json or [],
        total_cents=order.total_cents,
        points_earned=order.points_earned,
        status=order.status,
        payment_method=order.payment_method,
        payment_status=order.payment_status,
        delivery_address=order.delivery_address_json,
        delivery_notes=order.delivery_notes,
        has_feedback=order.has_feedback,
        feedback_submitted_at=order.feedback_submitted_at,
        created_at=order.created_at,
        updated_at=order.updated_at,
    )


@router.post("", response_model=OrderCreatedResponse, status_code=201)
async def create_order(
    order_data: OrderCreate,
    service: OrderService = Depends(get_order_service),
):
    """Finalize a paid order and award loyalty points"""
    try:
        order, points_earned, tier = await service.finalize_order(order_data)
    except ServiceError as e:
        raise http_error(e)

    return OrderCreatedResponse(
        order=to_order_response(order),
        points_earned=points_earned,
        user_tier=tier,
    )


@router.post("/quote", response_model=QuoteResponse)
async def quote_order(
    request: QuoteRequest,
    service: OrderService = Depends(get_order_service),
):
    """Price a cart with the customer's best available discount"""
    try:
        result, tier, promo_code = await service.quote(request)
    except ServiceError as e:
        raise http_error(e)

    return QuoteResponse(
        subtotal_cents=result.subtotal_cents,
        discount_cents=result.discount_cents,
        final_total_cents=result.final_total_cents,
        applied_percent=result.applied_percent,
        discount_source=result.source,
        tier=tier,
        promo_code=promo_code,
    )


@router.get("", response_model=OrderListResponse)
async def list_orders(
    status: Optional[str] = None,
    service: OrderService = Depends(get_order_service),
):
    """List orders, newest first"""
    orders = await service.list_orders(status)
    return OrderListResponse(items=[to_order_response(o) for o in orders], total=len(orders))


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(
    order_id: str,
    service: OrderService = Depends(get_order_service),
):
    """Get an order by order number or id"""
    try:
        order = await service.get_order(order_id)
    except ServiceError as e:
        raise http_error(e)

    return to_order_response(order)


@router.put("/{order_id}/status", response_model=OrderResponse)
async def update_order_status(
    order_id: str,
    update: OrderStatusUpdate,
    service: OrderService = Depends(get_order_service),
):
    """Move an order forward in its lifecycle"""
    try:
        order = await service.update_status(order_id, update.status, update.requester_email)
    except ServiceError as e:
        raise http_error(e)

    return to_order_response(order)


@router.post("/{order_id}/feedback", response_model=OrderResponse)
async def mark_feedback(
    order_id: str,
    service: OrderService = Depends(get_order_service),
):
    """Flag that the customer has left feedback"""
    try:
        order = await service.mark_feedback_submitted(order_id)
    except ServiceError as e:
        raise http_error(e)

    return to_order_response(order)
