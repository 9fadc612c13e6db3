"""Slot availability and the per-slot capacity counter"""

import uuid
from dataclasses import dataclass
from datetime import date
from typing import Optional
from uuid import UUID

from sqlalchemy import select, update, func, case
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from app.models.reservation import Reservation, ReservationSlot, ACTIVE_STATUSES
from app.services.settings import ReservationPolicy

logger = structlog.get_logger()


@dataclass(frozen=True)
class Availability:
    available: bool
    booked_guests: int
    available_slots: int
    max_capacity: int


class AvailabilityChecker:
    """Compares guests already booked in a slot against the capacity ceiling"""

    def __init__(self, db: AsyncSession, policy: ReservationPolicy):
        self.db = db
        self.policy = policy

    async def booked_guests(
        self,
        reservation_date: date,
        reservation_time: str,
        exclude_id: Optional[UUID] = None,
    ) -> int:
        query = select(func.coalesce(func.sum(Reservation.guests), 0)).where(
            Reservation.reservation_date == reservation_date,
            Reservation.reservation_time == reservation_time,
            Reservation.status.in_(ACTIVE_STATUSES),
        )
        if exclude_id is not None:
            query = query.where(Reservation.id != exclude_id)

        result = await self.db.execute(query)
        return int(result.scalar() or 0)

    async def check(
        self,
        reservation_date: date,
        reservation_time: str,
        party_size: Optional[int] = None,
        exclude_id: Optional[UUID] = None,
    ) -> Availability:
        """Without a party size, available means at least one slot is left"""
        capacity = self.policy.max_table_capacity
        booked = await self.booked_guests(reservation_date, reservation_time, exclude_id)
        remaining = max(0, capacity - booked)
        needed = party_size if party_size is not None else 1

        return Availability(
            available=needed <= remaining,
            booked_guests=booked,
            available_slots=remaining,
            max_capacity=capacity,
        )


class SlotLedger:
    """Atomic guest counter per (date, time) slot

    Acceptance is decided by a conditional UPDATE, so two bookings racing for
    the last seats cannot both succeed.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    def _insert(self):
        if self.db.get_bind().dialect.name == "postgresql":
            return pg_insert(ReservationSlot)
        return sqlite_insert(ReservationSlot)

    async def _ensure_row(self, slot_date: date, slot_time: str) -> None:
        await self.db.execute(
            self._insert()
            .values(id=uuid.uuid4(), slot_date=slot_date, slot_time=slot_time, booked_guests=0)
            .on_conflict_do_nothing(index_elements=["slot_date", "slot_time"])
        )

    async def reserve(self, slot_date: date, slot_time: str, guests: int, capacity: int) -> bool:
        await self._ensure_row(slot_date, slot_time)

        result = await self.db.execute(
            update(ReservationSlot)
            .where(
                ReservationSlot.slot_date == slot_date,
                ReservationSlot.slot_time == slot_time,
                ReservationSlot.booked_guests + guests <= capacity,
            )
            .values(booked_guests=ReservationSlot.booked_guests + guests)
            .execution_options(synchronize_session=False)
        )
        accepted = result.rowcount == 1
        if not accepted:
            logger.info("Slot full", slot_date=str(slot_date), slot_time=slot_time, guests=guests)
        return accepted

    async def release(self, slot_date: date, slot_time: str, guests: int) -> None:
        remaining = ReservationSlot.booked_guests - guests
        await self.db.execute(
            update(ReservationSlot)
            .where(
                ReservationSlot.slot_date == slot_date,
                ReservationSlot.slot_time == slot_time,
            )
            .values(booked_guests=case((remaining < 0, 0), else_=remaining))
            .execution_options(synchronize_session=False)
        )

    async def remaining(self, slot_date: date, slot_time: str, capacity: int) -> int:
        result = await self.db.execute(
            select(ReservationSlot.booked_guests).where(
                ReservationSlot.slot_date == slot_date,
                ReservationSlot.slot_time == slot_time,
            )
        )
        booked = result.scalar_one_or_none() or 0
        return max(0, capacity - booked)
