"""Promo code schemas"""

from datetime import datetime
from typing import Optional
from uuid import UUID
from pydantic import BaseModel, Field


class PromoCreate(BaseModel):
    """Create promo request"""
    code: str = Field(min_length=1, max_length=50)
    discount_percent: int = Field(ge=0, le=100)
    expiry_date: datetime
    active: bool = True


class PromoUpdate(BaseModel):
    """Update promo request"""
    code: Optional[str] = Field(None, min_length=1, max_length=50)
    discount_percent: Optional[int] = Field(None, ge=0, le=100)
    expiry_date: Optional[datetime] = None
    active: Optional[bool] = None


class PromoResponse(BaseModel):
    """Promo response"""
    id: UUID
    code: str
    discount_percent: int
    expiry_date: datetime
    active: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
