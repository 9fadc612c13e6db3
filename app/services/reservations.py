"""Reservation confirmation, cancellation and staff updates"""

import secrets
from datetime import date, datetime, timedelta
from typing import Callable, List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from app.config import settings
from app.models.reservation import Reservation, ReservationStatus, ACTIVE_STATUSES
from app.schemas.reservation import ReservationCreate
from app.services.availability import AvailabilityChecker, SlotLedger
from app.services.errors import (
    InsufficientCapacityError,
    InvalidPartySizeError,
    InvalidStatusTransitionError,
    NotFoundError,
    PastDateError,
)
from app.services.events import EventDispatcher
from app.services.settings import ReservationPolicy

logger = structlog.get_logger()

# No 0/O or 1/I so codes survive being read over the phone
CODE_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
CODE_LENGTH = 8

ALLOWED_TRANSITIONS = {
    ReservationStatus.PENDING.value: {ReservationStatus.CONFIRMED.value, ReservationStatus.CANCELLED.value},
    ReservationStatus.CONFIRMED.value: {ReservationStatus.COMPLETED.value, ReservationStatus.CANCELLED.value},
    ReservationStatus.CANCELLED.value: set(),
    ReservationStatus.COMPLETED.value: set(),
}


def generate_confirmation_code(length: int = CODE_LENGTH) -> str:
    return "".join(secrets.choice(CODE_ALPHABET) for _ in range(length))


def generate_fallback_code() -> str:
    """16 hex characters, used once the short codes keep colliding"""
    return secrets.token_hex(8).upper()


class ReservationService:
    """Books, cancels and updates reservations against a settings snapshot"""

    def __init__(
        self,
        db: AsyncSession,
        policy: ReservationPolicy,
        dispatcher: EventDispatcher,
        today: Callable[[], date] = date.today,
        code_generator: Callable[[], str] = generate_confirmation_code,
    ):
        self.db = db
        self.policy = policy
        self.dispatcher = dispatcher
        self.today = today
        self.code_generator = code_generator
        self.availability = AvailabilityChecker(db, policy)
        self.ledger = SlotLedger(db)

    async def _code_in_use(self, code: str) -> bool:
        result = await self.db.execute(
            select(Reservation.id).where(Reservation.confirmation_code == code)
        )
        return result.scalar_one_or_none() is not None

    async def _unique_code(self) -> str:
        for _ in range(settings.confirmation_code_attempts):
            code = self.code_generator()
            if not await self._code_in_use(code):
                return code

        logger.warning(
            "Confirmation code attempts exhausted, using long code",
            attempts=settings.confirmation_code_attempts,
        )
        return generate_fallback_code()

    async def create_reservation(self, details: ReservationCreate) -> Reservation:
        """Validate, reserve capacity and persist a confirmed booking"""
        if details.reservation_date < self.today():
            raise PastDateError("Reservation date cannot be in the past")

        if details.guests < 1:
            raise InvalidPartySizeError("Party size must be at least 1")

        availability = await self.availability.check(
            details.reservation_date,
            details.reservation_time,
            party_size=details.guests,
        )
        if not availability.available:
            raise InsufficientCapacityError(availability.available_slots)

        code = await self._unique_code()

        reserved = await self.ledger.reserve(
            details.reservation_date,
            details.reservation_time,
            details.guests,
            self.policy.max_table_capacity,
        )
        if not reserved:
            remaining = await self.ledger.remaining(
                details.reservation_date,
                details.reservation_time,
                self.policy.max_table_capacity,
            )
            await self.db.rollback()
            raise InsufficientCapacityError(min(remaining, availability.available_slots))

        # Deposit holds stay Pending until the payment clears or the hold expires
        status = (
            ReservationStatus.PENDING.value
            if details.hold_for_deposit
            else ReservationStatus.CONFIRMED.value
        )

        reservation = Reservation(
            confirmation_code=code,
            customer_id=details.customer_id,
            name=details.name,
            email=details.email,
            phone=details.phone,
            reservation_date=details.reservation_date,
            reservation_time=details.reservation_time,
            guests=details.guests,
            notes=details.notes,
            status=status,
            payment_status="pending" if details.hold_for_deposit else None,
            expires_at=datetime.utcnow() + timedelta(hours=self.policy.pending_hold_hours),
        )

        self.db.add(reservation)
        await self.db.commit()
        await self.db.refresh(reservation)

        logger.info(
            "Reservation created",
            reservation_id=str(reservation.id),
            status=reservation.status,
            confirmation_code=code,
            guests=reservation.guests,
            slot=f"{reservation.reservation_date} {reservation.reservation_time}",
        )

        self.dispatcher.reservation_confirmed(str(reservation.id))
        self.dispatcher.activity(
            reservation.email or "guest",
            "Create Reservation",
            f"Reservation {code} for {reservation.guests} on "
            f"{reservation.reservation_date} at {reservation.reservation_time}",
            "reservation",
            str(reservation.id),
        )

        return reservation

    async def get_by_code(self, confirmation_code: str) -> Reservation:
        result = await self.db.execute(
            select(Reservation).where(
                Reservation.confirmation_code == confirmation_code.strip().upper()
            )
        )
        reservation = result.scalar_one_or_none()

        if not reservation:
            raise NotFoundError("Reservation not found")

        return reservation

    async def get(self, reservation_id: UUID) -> Reservation:
        result = await self.db.execute(select(Reservation).where(Reservation.id == reservation_id))
        reservation = result.scalar_one_or_none()

        if not reservation:
            raise NotFoundError("Reservation not found")

        return reservation

    async def list_reservations(
        self,
        email: Optional[str] = None,
        status: Optional[str] = None,
        reservation_date: Optional[date] = None,
    ) -> List[Reservation]:
        query = select(Reservation)

        if email:
            query = query.where(Reservation.email == email)
        if status:
            query = query.where(Reservation.status == status)
        if reservation_date:
            query = query.where(Reservation.reservation_date == reservation_date)

        query = query.order_by(Reservation.reservation_date, Reservation.reservation_time)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def _release(self, reservation: Reservation) -> None:
        await self.ledger.release(
            reservation.reservation_date,
            reservation.reservation_time,
            reservation.guests,
        )

    async def cancel_reservation(self, confirmation_code: str) -> Reservation:
        """Cancel by the code the customer holds"""
        reservation = await self.get_by_code(confirmation_code)

        if reservation.status == ReservationStatus.CANCELLED.value:
            return reservation

        if reservation.status == ReservationStatus.COMPLETED.value:
            raise InvalidStatusTransitionError("Completed reservations cannot be cancelled")

        if reservation.is_active:
            await self._release(reservation)

        reservation.status = ReservationStatus.CANCELLED.value
        reservation.cancelled_at = datetime.utcnow()
        await self.db.commit()
        await self.db.refresh(reservation)

        logger.info(
            "Reservation cancelled",
            reservation_id=str(reservation.id),
            confirmation_code=reservation.confirmation_code,
        )

        self.dispatcher.reservation_cancelled(str(reservation.id))
        self.dispatcher.activity(
            reservation.email or "guest",
            "Cancel Reservation",
            f"Reservation {reservation.confirmation_code} cancelled",
            "reservation",
            str(reservation.id),
        )

        return reservation

    async def update_status(
        self,
        reservation_id: UUID,
        status: ReservationStatus,
        actor_email: Optional[str] = None,
    ) -> Reservation:
        """Staff status change, forward moves only"""
        reservation = await self.get(reservation_id)
        new_status = ReservationStatus(status).value

        if new_status not in ALLOWED_TRANSITIONS.get(reservation.status, set()):
            raise InvalidStatusTransitionError(
                f"Cannot move reservation from {reservation.status} to {new_status}"
            )

        was_active = reservation.is_active
        reservation.status = new_status
        if was_active and new_status not in ACTIVE_STATUSES:
            await self._release(reservation)
        if new_status == ReservationStatus.CANCELLED.value:
            reservation.cancelled_at = datetime.utcnow()

        await self.db.commit()
        await self.db.refresh(reservation)

        if new_status == ReservationStatus.CANCELLED.value:
            self.dispatcher.reservation_cancelled(str(reservation.id))
        if actor_email:
            self.dispatcher.activity(
                actor_email,
                "Update Reservation",
                f"Reservation {reservation.confirmation_code} status changed to {new_status}",
                "reservation",
                str(reservation.id),
            )

        return reservation

    async def assign_table(self, reservation_id: UUID, table_number: Optional[str]) -> Reservation:
        reservation = await self.get(reservation_id)
        reservation.table_number = table_number
        await self.db.commit()
        await self.db.refresh(reservation)
        return reservation

    async def set_payment_status(self, reservation_id: UUID, payment_status: str) -> Reservation:
        reservation = await self.get(reservation_id)
        reservation.payment_status = payment_status
        if payment_status == "completed" and reservation.status == ReservationStatus.PENDING.value:
            reservation.status = ReservationStatus.CONFIRMED.value
            reservation.expires_at = None
        await self.db.commit()
        await self.db.refresh(reservation)
        return reservation


async def expire_stale_reservations(db: AsyncSession, now: Optional[datetime] = None) -> int:
    """Cancel Pending reservations whose hold ran out and free their seats"""
    now = now or datetime.utcnow()
    result = await db.execute(
        select(Reservation).where(
            Reservation.status == ReservationStatus.PENDING.value,
            Reservation.expires_at.is_not(None),
            Reservation.expires_at < now,
        )
    )
    stale = result.scalars().all()

    ledger = SlotLedger(db)
    for reservation in stale:
        await ledger.release(reservation.reservation_date, reservation.reservation_time, reservation.guests)
        reservation.status = ReservationStatus.CANCELLED.value
        reservation.cancelled_at = now

    await db.commit()
    return len(stale)
