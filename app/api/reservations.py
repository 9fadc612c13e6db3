"""Reservation API endpoints"""

from datetime import date
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from app.api.deps import get_reservation_service, http_error
from app.models.reservation import ReservationStatus
from app.schemas.reservation import (
    AvailabilityResponse,
    PaymentStatusUpdate,
    ReservationCreate,
    ReservationCreatedResponse,
    ReservationListResponse,
    ReservationResponse,
    ReservationStatusUpdate,
    TableAssignment,
    TIME_PATTERN,
)
from app.services.errors import ServiceError
from app.services.reservations import ReservationService

router = APIRouter()


@router.get("/availability", response_model=AvailabilityResponse)
async def check_availability(
    reservation_date: date = Query(..., alias="date"),
    reservation_time: str = Query(..., alias="time", pattern=TIME_PATTERN),
    party_size: Optional[int] = Query(None, ge=1),
    exclude_id: Optional[UUID] = None,
    service: ReservationService = Depends(get_reservation_service),
):
    """Check remaining capacity for a slot"""
    availability = await service.availability.check(
        reservation_date,
        reservation_time,
        party_size=party_size,
        exclude_id=exclude_id,
    )

    return AvailabilityResponse(
        reservation_date=reservation_date,
        reservation_time=reservation_time,
        party_size=party_size,
        available=availability.available,
        booked_guests=availability.booked_guests,
        available_slots=availability.available_slots,
        max_capacity=availability.max_capacity,
    )


@router.post("", response_model=ReservationCreatedResponse, status_code=201)
async def create_reservation(
    reservation_data: ReservationCreate,
    service: ReservationService = Depends(get_reservation_service),
):
    """Book a table"""
    try:
        reservation = await service.create_reservation(reservation_data)
    except ServiceError as e:
        raise http_error(e)

    return ReservationCreatedResponse(
        message=(
            "Reservation confirmed"
            if reservation.status == ReservationStatus.CONFIRMED.value
            else "Reservation held pending deposit"
        ),
        confirmation_code=reservation.confirmation_code,
        reservation=ReservationResponse.model_validate(reservation),
    )


@router.get("", response_model=ReservationListResponse)
async def list_reservations(
    email: Optional[str] = None,
    status: Optional[str] = None,
    reservation_date: Optional[date] = Query(None, alias="date"),
    service: ReservationService = Depends(get_reservation_service),
):
    """List reservations ordered by date and time"""
    reservations = await service.list_reservations(email, status, reservation_date)
    return ReservationListResponse(
        items=[ReservationResponse.model_validate(r) for r in reservations],
        total=len(reservations),
    )


@router.get("/code/{confirmation_code}", response_model=ReservationResponse)
async def get_reservation_by_code(
    confirmation_code: str,
    service: ReservationService = Depends(get_reservation_service),
):
    """Look up a reservation by its confirmation code"""
    try:
        return await service.get_by_code(confirmation_code)
    except ServiceError as e:
        raise http_error(e)


@router.delete("/code/{confirmation_code}", response_model=ReservationResponse)
async def cancel_reservation(
    confirmation_code: str,
    service: ReservationService = Depends(get_reservation_service),
):
    """Cancel a reservation by its confirmation code"""
    try:
        return await service.cancel_reservation(confirmation_code)
    except ServiceError as e:
        raise http_error(e)


@router.get("/{reservation_id}", response_model=ReservationResponse)
async def get_reservation(
    reservation_id: UUID,
    service: ReservationService = Depends(get_reservation_service),
):
    """Get reservation details"""
    try:
        return await service.get(reservation_id)
    except ServiceError as e:
        raise http_error(e)


@router.put("/{reservation_id}/status", response_model=ReservationResponse)
async def update_reservation_status(
    reservation_id: UUID,
    update: ReservationStatusUpdate,
    service: ReservationService = Depends(get_reservation_service),
):
    """Confirm, complete or cancel a reservation (staff)"""
    try:
        return await service.update_status(reservation_id, update.status, update.actor_email)
    except ServiceError as e:
        raise http_error(e)


@router.put("/{reservation_id}/table", response_model=ReservationResponse)
async def assign_table(
    reservation_id: UUID,
    assignment: TableAssignment,
    service: ReservationService = Depends(get_reservation_service),
):
    """Assign or clear a table"""
    try:
        return await service.assign_table(reservation_id, assignment.table_number)
    except ServiceError as e:
        raise http_error(e)


@router.put("/{reservation_id}/payment-status", response_model=ReservationResponse)
async def set_payment_status(
    reservation_id: UUID,
    update: PaymentStatusUpdate,
    service: ReservationService = Depends(get_reservation_service),
):
    """Record the deposit outcome reported by the payment processor"""
    try:
        return await service.set_payment_status(reservation_id, update.payment_status)
    except ServiceError as e:
        raise http_error(e)
