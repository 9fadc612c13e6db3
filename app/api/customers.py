"""Customer API endpoints"""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_order_service, http_error
from app.api.orders import to_order_response
from app.database import get_db
from app.schemas.customer import CustomerCreate, CustomerResponse
from app.schemas.order import OrderListResponse
from app.services import customers
from app.services.errors import ServiceError
from app.services.orders import OrderService

router = APIRouter()


@router.post("", response_model=CustomerResponse, status_code=201)
async def create_customer(
    customer_data: CustomerCreate,
    db: AsyncSession = Depends(get_db),
):
    """Register a customer"""
    try:
        return await customers.create_customer(db, customer_data)
    except ServiceError as e:
        raise http_error(e)


@router.get("/{customer_id}", response_model=CustomerResponse)
async def get_customer(
    customer_id: UUID,
    db: AsyncSession = Depends(get_db),
):
    """Get a customer with points and tier"""
    try:
        return await customers.get_customer(db, customer_id)
    except ServiceError as e:
        raise http_error(e)


@router.get("/{customer_id}/orders", response_model=OrderListResponse)
async def list_customer_orders(
    customer_id: UUID,
    service: OrderService = Depends(get_order_service),
):
    """Order history, newest first"""
    try:
        orders = await service.list_customer_orders(customer_id)
    except ServiceError as e:
        raise http_error(e)

    return OrderListResponse(items=[to_order_response(o) for o in orders], total=len(orders))
