"""Tests for promo codes and restaurant settings"""

from datetime import datetime, timedelta

import pytest

from app.schemas.promo import PromoCreate, PromoUpdate
from app.services.errors import DuplicatePromoCodeError, InvalidPromoCodeError, NotFoundError
from app.services.promos import PromoService
from app.services.settings import (
    ReservationPolicy,
    get_restaurant_settings,
    load_reservation_policy,
    update_restaurant_settings,
)


def promo(code="WELCOME10", percent=10, days=7, active=True):
    return PromoCreate(
        code=code,
        discount_percent=percent,
        expiry_date=datetime.utcnow() + timedelta(days=days),
        active=active,
    )


@pytest.mark.asyncio
async def test_create_normalizes_code(test_db):
    service = PromoService(test_db)

    created = await service.create(promo(code="  welcome10 "))

    assert created.code == "WELCOME10"
    assert (await service.validate("Welcome10")).id == created.id


@pytest.mark.asyncio
async def test_duplicate_code_rejected(test_db):
    service = PromoService(test_db)
    await service.create(promo())

    with pytest.raises(DuplicatePromoCodeError):
        await service.create(promo(code="welcome10", percent=25))


@pytest.mark.asyncio
async def test_validate_rejects_inactive_expired_and_unknown(test_db):
    service = PromoService(test_db)
    await service.create(promo(code="PAUSED", active=False))
    await service.create(promo(code="GONE", days=-1))

    for code in ("PAUSED", "GONE", "NEVER"):
        with pytest.raises(InvalidPromoCodeError):
            await service.validate(code)


@pytest.mark.asyncio
async def test_list_active_filters(test_db):
    service = PromoService(test_db)
    await service.create(promo(code="LIVE"))
    await service.create(promo(code="PAUSED", active=False))
    await service.create(promo(code="GONE", days=-1))

    assert [p.code for p in await service.list_active()] == ["LIVE"]
    assert len(await service.list_all()) == 3


@pytest.mark.asyncio
async def test_update_toggle_and_delete(test_db):
    service = PromoService(test_db)
    created = await service.create(promo())
    await service.create(promo(code="TAKEN"))

    updated = await service.update(created.id, PromoUpdate(discount_percent=30))
    assert updated.discount_percent == 30
    assert updated.code == "WELCOME10"

    with pytest.raises(DuplicatePromoCodeError):
        await service.update(created.id, PromoUpdate(code="taken"))

    toggled = await service.toggle(created.id)
    assert toggled.active is False

    await service.delete(created.id)
    with pytest.raises(NotFoundError):
        await service.get(created.id)


@pytest.mark.asyncio
async def test_policy_defaults_without_record(test_db):
    policy = await load_reservation_policy(test_db)

    assert policy == ReservationPolicy()
    assert policy.max_table_capacity == 50


@pytest.mark.asyncio
async def test_settings_created_on_first_read_and_updated(test_db):
    record = await get_restaurant_settings(test_db)
    assert record.max_table_capacity == 50
    assert record.operating_hours_open == "11:00"

    updated = await update_restaurant_settings(
        test_db, {"max_table_capacity": 30}, "owner@example.com"
    )
    assert updated.id == record.id
    assert updated.updated_by == "owner@example.com"
    assert updated.deposit_amount_cents == 2500

    policy = await load_reservation_policy(test_db)
    assert policy.max_table_capacity == 30
    assert policy.pending_hold_hours == 24
    assert set(ReservationPolicy.model_fields) == {"max_table_capacity", "pending_hold_hours"}
