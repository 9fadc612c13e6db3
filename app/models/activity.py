"""Activity log model"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Text
from sqlalchemy.dialects.postgresql import UUID

from app.database import Base


class ActivityLog(Base):
    """Append-only record of who did what"""
    __tablename__ = "activity_logs"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)

    # Actor information
    actor_email = Column(String(255), nullable=False)  # customer/staff email or "system"

    # Action details
    action = Column(String(100), nullable=False)  # Add Order, Create Reservation, etc.
    details = Column(Text)
    resource_type = Column(String(50))  # order, reservation, promo, settings
    resource_id = Column(String(64))

    created_at = Column(DateTime, default=datetime.utcnow, index=True)
