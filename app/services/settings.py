"""Restaurant settings store"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from app.config import settings as app_settings
from app.models.settings import RestaurantSettings

logger = structlog.get_logger()


class ReservationPolicy(BaseModel):
    """Snapshot of the settings a booking request works against"""
    model_config = ConfigDict(frozen=True)

    max_table_capacity: int = app_settings.default_max_capacity
    pending_hold_hours: int = 24


async def _load(db: AsyncSession) -> Optional[RestaurantSettings]:
    result = await db.execute(
        select(RestaurantSettings).order_by(RestaurantSettings.created_at).limit(1)
    )
    return result.scalar_one_or_none()


async def load_reservation_policy(db: AsyncSession) -> ReservationPolicy:
    """Read the current policy, falling back to defaults when no record exists"""
    record = await _load(db)
    if record is None:
        return ReservationPolicy()

    return ReservationPolicy(
        max_table_capacity=record.max_table_capacity,
        pending_hold_hours=record.pending_hold_hours,
    )


async def get_restaurant_settings(db: AsyncSession) -> RestaurantSettings:
    """Return the settings record, creating it with defaults on first read"""
    record = await _load(db)
    if record is None:
        record = RestaurantSettings(max_table_capacity=app_settings.default_max_capacity)
        db.add(record)
        await db.commit()
        await db.refresh(record)
        logger.info("Created default restaurant settings")
    return record


async def update_restaurant_settings(
    db: AsyncSession,
    changes: Dict[str, Any],
    updated_by: Optional[str] = None,
) -> RestaurantSettings:
    """Apply only the provided fields"""
    record = await get_restaurant_settings(db)

    for field, value in changes.items():
        setattr(record, field, value)
    record.updated_by = updated_by or "admin"

    await db.commit()
    await db.refresh(record)

    logger.info("Updated restaurant settings", fields=sorted(changes), updated_by=record.updated_by)
    return record
