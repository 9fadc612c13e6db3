"""Promo code model"""

import uuid
from datetime import datetime
from typing import Optional
from sqlalchemy import Column, String, Integer, Boolean, DateTime
from sqlalchemy.dialects.postgresql import UUID

from app.database import Base


class Promo(Base):
    """Promotional discount codes"""
    __tablename__ = "promos"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    code = Column(String(50), unique=True, nullable=False, index=True)  # stored upper-case
    discount_percent = Column(Integer, nullable=False)
    expiry_date = Column(DateTime, nullable=False)
    active = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def is_valid(self, now: Optional[datetime] = None) -> bool:
        """Active and not past its expiry"""
        now = now or datetime.utcnow()
        return bool(self.active) and now <= self.expiry_date
