"""Tests for availability and the reservation workflow"""

from datetime import date, datetime, timedelta

import pytest
from sqlalchemy import select, func

from app.models.reservation import Reservation, ReservationSlot, ReservationStatus
from app.schemas.reservation import ReservationCreate
from app.services.availability import AvailabilityChecker, SlotLedger
from app.services.errors import (
    InsufficientCapacityError,
    InvalidPartySizeError,
    InvalidStatusTransitionError,
    NotFoundError,
    PastDateError,
)
from app.services.reservations import (
    CODE_ALPHABET,
    CODE_LENGTH,
    ReservationService,
    expire_stale_reservations,
    generate_confirmation_code,
)
from app.services.settings import ReservationPolicy


def booking(day, time="19:00", guests=2, **kwargs):
    return ReservationCreate(
        name=kwargs.pop("name", "Grace Guest"),
        email=kwargs.pop("email", "grace@example.com"),
        phone=kwargs.pop("phone", "+15559876543"),
        reservation_date=day,
        reservation_time=time,
        guests=guests,
        **kwargs,
    )


async def add_existing(db, day, time, guests, status=ReservationStatus.CONFIRMED.value, code=None):
    reservation = Reservation(
        confirmation_code=code or generate_confirmation_code(),
        name="Existing Party",
        reservation_date=day,
        reservation_time=time,
        guests=guests,
        status=status,
    )
    db.add(reservation)
    await db.commit()
    return reservation


@pytest.mark.asyncio
async def test_availability_sums_active_reservations(test_db, policy, tomorrow):
    await add_existing(test_db, tomorrow, "19:00", 10)
    await add_existing(test_db, tomorrow, "19:00", 5, status=ReservationStatus.PENDING.value)
    await add_existing(test_db, tomorrow, "19:00", 20, status=ReservationStatus.CANCELLED.value)
    await add_existing(test_db, tomorrow, "19:00", 8, status=ReservationStatus.COMPLETED.value)
    await add_existing(test_db, tomorrow, "20:00", 30)

    availability = await AvailabilityChecker(test_db, policy).check(tomorrow, "19:00")

    assert availability.booked_guests == 15
    assert availability.available_slots == 35
    assert availability.max_capacity == 50
    assert availability.available is True


@pytest.mark.asyncio
async def test_availability_is_idempotent(test_db, policy, tomorrow):
    await add_existing(test_db, tomorrow, "19:00", 12)
    checker = AvailabilityChecker(test_db, policy)

    first = await checker.check(tomorrow, "19:00", party_size=4)
    second = await checker.check(tomorrow, "19:00", party_size=4)

    assert first == second


@pytest.mark.asyncio
async def test_availability_excludes_reservation_being_edited(test_db, policy, tomorrow):
    existing = await add_existing(test_db, tomorrow, "19:00", 40)
    checker = AvailabilityChecker(test_db, policy)

    assert (await checker.check(tomorrow, "19:00", party_size=20)).available is False
    edited = await checker.check(tomorrow, "19:00", party_size=20, exclude_id=existing.id)
    assert edited.available is True
    assert edited.booked_guests == 0


@pytest.mark.asyncio
async def test_availability_uses_configured_capacity(test_db, tomorrow):
    await add_existing(test_db, tomorrow, "19:00", 10)

    availability = await AvailabilityChecker(
        test_db, ReservationPolicy(max_table_capacity=12)
    ).check(tomorrow, "19:00", party_size=3)

    assert availability.available is False
    assert availability.available_slots == 2


@pytest.mark.asyncio
async def test_create_reservation_confirms_and_dispatches(test_db, policy, dispatcher, sender, tomorrow):
    service = ReservationService(test_db, policy, dispatcher)

    reservation = await service.create_reservation(booking(tomorrow, guests=4))

    assert reservation.status == ReservationStatus.CONFIRMED.value
    assert len(reservation.confirmation_code) == CODE_LENGTH
    assert set(reservation.confirmation_code) <= set(CODE_ALPHABET)
    assert reservation.expires_at > datetime.utcnow() + timedelta(hours=23)
    assert sender.names() == ["notify_reservation_confirmed", "record_activity"]
    assert sender.sent[0][1] == [str(reservation.id)]


@pytest.mark.asyncio
async def test_create_reservation_rejects_zero_guests(test_db, policy, dispatcher, tomorrow):
    service = ReservationService(test_db, policy, dispatcher)

    with pytest.raises(InvalidPartySizeError):
        await service.create_reservation(booking(tomorrow, guests=0))

    count = await test_db.execute(select(func.count(Reservation.id)))
    assert count.scalar() == 0


@pytest.mark.asyncio
async def test_create_reservation_rejects_past_date(test_db, policy, dispatcher):
    service = ReservationService(test_db, policy, dispatcher, today=lambda: date(2024, 6, 15))

    with pytest.raises(PastDateError):
        await service.create_reservation(booking(date(2024, 6, 14), guests=2))


@pytest.mark.asyncio
async def test_create_reservation_allows_today(test_db, policy, dispatcher):
    service = ReservationService(test_db, policy, dispatcher, today=lambda: date(2024, 6, 15))

    reservation = await service.create_reservation(booking(date(2024, 6, 15), time="09:00"))

    assert reservation.status == ReservationStatus.CONFIRMED.value


@pytest.mark.asyncio
async def test_past_date_checked_before_party_size(test_db, policy, dispatcher):
    service = ReservationService(test_db, policy, dispatcher, today=lambda: date(2024, 6, 15))

    with pytest.raises(PastDateError):
        await service.create_reservation(booking(date(2024, 6, 1), guests=0))


@pytest.mark.asyncio
async def test_capacity_scenario_48_booked(test_db, policy, dispatcher, tomorrow):
    await add_existing(test_db, tomorrow, "19:00", 30)
    await add_existing(test_db, tomorrow, "19:00", 18)
    service = ReservationService(test_db, policy, dispatcher)

    with pytest.raises(InsufficientCapacityError) as exc_info:
        await service.create_reservation(booking(tomorrow, guests=3))

    assert exc_info.value.available_slots == 2
    assert "2 slots left" in exc_info.value.message

    reservation = await service.create_reservation(booking(tomorrow, guests=2))
    assert reservation.guests == 2

    availability = await service.availability.check(tomorrow, "19:00")
    assert availability.booked_guests == 50
    assert availability.available is False


@pytest.mark.asyncio
async def test_slot_counter_blocks_overbooking(test_db, policy, tomorrow):
    ledger = SlotLedger(test_db)

    assert await ledger.reserve(tomorrow, "19:00", 45, 50) is True
    assert await ledger.reserve(tomorrow, "19:00", 6, 50) is False
    assert await ledger.reserve(tomorrow, "19:00", 5, 50) is True
    assert await ledger.remaining(tomorrow, "19:00", 50) == 0

    await ledger.release(tomorrow, "19:00", 10)
    assert await ledger.remaining(tomorrow, "19:00", 50) == 10

    rows = await test_db.execute(select(func.count(ReservationSlot.id)))
    assert rows.scalar() == 1


@pytest.mark.asyncio
async def test_slot_counter_never_goes_negative(test_db, tomorrow):
    ledger = SlotLedger(test_db)
    await ledger.reserve(tomorrow, "19:00", 2, 50)

    await ledger.release(tomorrow, "19:00", 5)

    assert await ledger.remaining(tomorrow, "19:00", 50) == 50


@pytest.mark.asyncio
async def test_counter_rejects_booking_the_sum_check_missed(test_db, dispatcher, tomorrow):
    # A concurrent booking already took the seats in the counter but its row
    # is not visible to this request's availability read
    await SlotLedger(test_db).reserve(tomorrow, "19:00", 9, 10)
    await test_db.commit()
    service = ReservationService(test_db, ReservationPolicy(max_table_capacity=10), dispatcher)

    with pytest.raises(InsufficientCapacityError) as exc_info:
        await service.create_reservation(booking(tomorrow, guests=2))

    assert exc_info.value.available_slots == 1
    count = await test_db.execute(select(func.count(Reservation.id)))
    assert count.scalar() == 0


@pytest.mark.asyncio
async def test_confirmation_code_retries_on_collision(test_db, policy, dispatcher, tomorrow):
    await add_existing(test_db, tomorrow, "18:00", 2, code="TAKEN234")
    codes = iter(["TAKEN234", "TAKEN234", "FRESH567"])
    service = ReservationService(test_db, policy, dispatcher, code_generator=lambda: next(codes))

    reservation = await service.create_reservation(booking(tomorrow))

    assert reservation.confirmation_code == "FRESH567"


@pytest.mark.asyncio
async def test_confirmation_code_falls_back_after_bounded_attempts(test_db, policy, dispatcher, tomorrow):
    await add_existing(test_db, tomorrow, "18:00", 2, code="TAKEN234")
    service = ReservationService(test_db, policy, dispatcher, code_generator=lambda: "TAKEN234")

    reservation = await service.create_reservation(booking(tomorrow))

    assert reservation.confirmation_code != "TAKEN234"
    assert len(reservation.confirmation_code) == 16


@pytest.mark.asyncio
async def test_dispatch_failure_keeps_reservation(test_db, policy, failing_dispatcher, tomorrow):
    service = ReservationService(test_db, policy, failing_dispatcher)

    reservation = await service.create_reservation(booking(tomorrow))

    stored = await test_db.execute(select(Reservation).where(Reservation.id == reservation.id))
    assert stored.scalar_one().status == ReservationStatus.CONFIRMED.value


@pytest.mark.asyncio
async def test_cancel_by_code_releases_capacity(test_db, policy, dispatcher, sender, tomorrow):
    service = ReservationService(test_db, ReservationPolicy(max_table_capacity=4), dispatcher)
    reservation = await service.create_reservation(booking(tomorrow, guests=4))

    cancelled = await service.cancel_reservation(reservation.confirmation_code.lower())

    assert cancelled.status == ReservationStatus.CANCELLED.value
    assert cancelled.cancelled_at is not None
    assert "notify_reservation_cancelled" in sender.names()

    again = await service.create_reservation(booking(tomorrow, guests=4, email="next@example.com"))
    assert again.status == ReservationStatus.CONFIRMED.value


@pytest.mark.asyncio
async def test_cancel_twice_releases_once(test_db, dispatcher, tomorrow):
    service = ReservationService(test_db, ReservationPolicy(max_table_capacity=6), dispatcher)
    first = await service.create_reservation(booking(tomorrow, guests=3))
    await service.create_reservation(booking(tomorrow, guests=3))

    await service.cancel_reservation(first.confirmation_code)
    await service.cancel_reservation(first.confirmation_code)

    assert await service.ledger.remaining(tomorrow, "19:00", 6) == 3


@pytest.mark.asyncio
async def test_cancel_unknown_code_touches_nothing(test_db, policy, dispatcher, sender, tomorrow):
    service = ReservationService(test_db, policy, dispatcher)
    existing = await service.create_reservation(booking(tomorrow))
    sender.sent.clear()

    with pytest.raises(NotFoundError):
        await service.cancel_reservation("NOPE0000")

    await test_db.refresh(existing)
    assert existing.status == ReservationStatus.CONFIRMED.value
    assert sender.sent == []


@pytest.mark.asyncio
async def test_status_transitions(test_db, policy, dispatcher, tomorrow):
    service = ReservationService(test_db, policy, dispatcher)
    reservation = await service.create_reservation(booking(tomorrow, guests=5))

    completed = await service.update_status(reservation.id, ReservationStatus.COMPLETED, "staff@example.com")
    assert completed.status == ReservationStatus.COMPLETED.value
    assert await service.ledger.remaining(tomorrow, "19:00", 50) == 50

    with pytest.raises(InvalidStatusTransitionError):
        await service.update_status(reservation.id, ReservationStatus.CONFIRMED)


@pytest.mark.asyncio
async def test_deposit_hold_confirms_on_payment(test_db, policy, dispatcher, tomorrow):
    service = ReservationService(test_db, policy, dispatcher)
    reservation = await service.create_reservation(booking(tomorrow, hold_for_deposit=True))

    assert reservation.status == ReservationStatus.PENDING.value
    assert reservation.payment_status == "pending"

    paid = await service.set_payment_status(reservation.id, "completed")
    assert paid.status == ReservationStatus.CONFIRMED.value
    assert paid.expires_at is None


@pytest.mark.asyncio
async def test_expire_stale_reservations_only_touches_pending(test_db, policy, dispatcher, tomorrow):
    service = ReservationService(test_db, ReservationPolicy(max_table_capacity=10), dispatcher)
    held = await service.create_reservation(booking(tomorrow, guests=6, hold_for_deposit=True))
    confirmed = await service.create_reservation(booking(tomorrow, guests=4))

    expired = await expire_stale_reservations(test_db, now=datetime.utcnow() + timedelta(hours=25))

    assert expired == 1
    await test_db.refresh(held)
    await test_db.refresh(confirmed)
    assert held.status == ReservationStatus.CANCELLED.value
    assert confirmed.status == ReservationStatus.CONFIRMED.value
    assert await service.ledger.remaining(tomorrow, "19:00", 10) == 6


@pytest.mark.asyncio
async def test_assign_table(test_db, policy, dispatcher, tomorrow):
    service = ReservationService(test_db, policy, dispatcher)
    reservation = await service.create_reservation(booking(tomorrow))

    updated = await service.assign_table(reservation.id, "T12")

    assert updated.table_number == "T12"


@pytest.mark.asyncio
async def test_cancel_completed_reservation_rejected(test_db, policy, dispatcher, sender, tomorrow):
    service = ReservationService(test_db, policy, dispatcher)
    reservation = await service.create_reservation(booking(tomorrow))
    await service.update_status(reservation.id, ReservationStatus.COMPLETED)
    sender.sent.clear()

    with pytest.raises(InvalidStatusTransitionError):
        await service.cancel_reservation(reservation.confirmation_code)

    await test_db.refresh(reservation)
    assert reservation.status == ReservationStatus.COMPLETED.value
    assert reservation.cancelled_at is None
    assert sender.sent == []
