"""Restaurant settings API endpoints"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_dispatcher
from app.database import get_db
from app.schemas.settings import RestaurantSettingsResponse, RestaurantSettingsUpdate
from app.services.events import EventDispatcher
from app.services.settings import get_restaurant_settings, update_restaurant_settings

router = APIRouter()


@router.get("", response_model=RestaurantSettingsResponse)
async def get_settings(db: AsyncSession = Depends(get_db)):
    """Current settings, created with defaults on first read"""
    return await get_restaurant_settings(db)


@router.put("", response_model=RestaurantSettingsResponse)
async def update_settings(
    update: RestaurantSettingsUpdate,
    db: AsyncSession = Depends(get_db),
    dispatcher: EventDispatcher = Depends(get_dispatcher),
):
    """Update only the provided fields"""
    changes = update.model_dump(exclude_unset=True, exclude_none=True)
    admin_email = changes.pop("admin_email", None)

    record = await update_restaurant_settings(db, changes, admin_email)

    dispatcher.activity(
        record.updated_by,
        "Update Settings",
        f"Changed {', '.join(sorted(changes)) or 'nothing'}",
        "settings",
        str(record.id),
    )
    return record
