"""Customer schemas"""

from datetime import datetime
from typing import Optional
from uuid import UUID
from pydantic import BaseModel

from app.models.customer import MembershipTier


class CustomerCreate(BaseModel):
    """Create customer request"""
    name: str
    email: str
    phone: Optional[str] = None


class CustomerResponse(BaseModel):
    """Customer with loyalty standing"""
    id: UUID
    name: str
    email: str
    phone: Optional[str]
    loyalty_points: int
    tier: MembershipTier
    member_since: Optional[str]
    created_at: datetime

    class Config:
        from_attributes = True


class TierResponse(BaseModel):
    points: int
    tier: MembershipTier
