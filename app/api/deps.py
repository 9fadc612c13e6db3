"""Shared router dependencies"""

from fastapi import Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.services.errors import ServiceError
from app.services.events import EventDispatcher
from app.services.orders import OrderService
from app.services.reservations import ReservationService
from app.services.settings import ReservationPolicy, load_reservation_policy


def get_dispatcher() -> EventDispatcher:
    """Background task dispatcher (overridden in tests)"""
    return EventDispatcher()


async def get_reservation_policy(db: AsyncSession = Depends(get_db)) -> ReservationPolicy:
    """Settings snapshot, loaded once per request"""
    return await load_reservation_policy(db)


async def get_reservation_service(
    db: AsyncSession = Depends(get_db),
    policy: ReservationPolicy = Depends(get_reservation_policy),
    dispatcher: EventDispatcher = Depends(get_dispatcher),
) -> ReservationService:
    return ReservationService(db, policy, dispatcher)


async def get_order_service(
    db: AsyncSession = Depends(get_db),
    dispatcher: EventDispatcher = Depends(get_dispatcher),
) -> OrderService:
    return OrderService(db, dispatcher)


def http_error(error: ServiceError) -> HTTPException:
    """Translate a domain error into an HTTP response"""
    return HTTPException(status_code=error.status_code, detail=error.as_detail())
