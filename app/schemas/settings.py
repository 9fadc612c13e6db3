"""Restaurant settings schemas"""

from datetime import datetime
from typing import Optional
from uuid import UUID
from pydantic import BaseModel, Field

from app.schemas.reservation import TIME_PATTERN


class RestaurantSettingsUpdate(BaseModel):
    """Update restaurant settings"""
    max_table_capacity: Optional[int] = Field(None, ge=0)
    deposit_amount_cents: Optional[int] = Field(None, ge=0)
    reservation_duration_minutes: Optional[int] = Field(None, ge=1)
    cancellation_hours: Optional[int] = Field(None, ge=0)
    pending_hold_hours: Optional[int] = Field(None, ge=1)
    operating_hours_open: Optional[str] = Field(None, pattern=TIME_PATTERN)
    operating_hours_close: Optional[str] = Field(None, pattern=TIME_PATTERN)
    rest_days_open: Optional[bool] = None
    show_promo_section: Optional[bool] = None
    admin_email: Optional[str] = None


class RestaurantSettingsResponse(BaseModel):
    """Restaurant settings response"""
    id: UUID
    max_table_capacity: int
    deposit_amount_cents: int
    reservation_duration_minutes: int
    cancellation_hours: int
    pending_hold_hours: int
    operating_hours_open: str
    operating_hours_close: str
    rest_days_open: bool
    show_promo_section: bool
    updated_by: Optional[str]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
