"""Promo code management and validation"""

from datetime import datetime
from typing import List
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from app.models.promo import Promo
from app.schemas.promo import PromoCreate, PromoUpdate
from app.services.errors import DuplicatePromoCodeError, InvalidPromoCodeError, NotFoundError

logger = structlog.get_logger()


def normalize_code(code: str) -> str:
    return code.strip().upper()


class PromoService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _find_by_code(self, code: str):
        result = await self.db.execute(select(Promo).where(Promo.code == normalize_code(code)))
        return result.scalar_one_or_none()

    async def get(self, promo_id: UUID) -> Promo:
        result = await self.db.execute(select(Promo).where(Promo.id == promo_id))
        promo = result.scalar_one_or_none()

        if not promo:
            raise NotFoundError("Promo not found")

        return promo

    async def list_active(self) -> List[Promo]:
        result = await self.db.execute(
            select(Promo)
            .where(Promo.active == True, Promo.expiry_date >= datetime.utcnow())
            .order_by(Promo.created_at.desc())
        )
        return list(result.scalars().all())

    async def list_all(self) -> List[Promo]:
        result = await self.db.execute(select(Promo).order_by(Promo.created_at.desc()))
        return list(result.scalars().all())

    async def validate(self, code: str) -> Promo:
        """Return the promo if it can be applied right now"""
        promo = await self._find_by_code(code)

        if promo is None or not promo.is_valid():
            raise InvalidPromoCodeError("Promo code is invalid or expired")

        return promo

    async def create(self, promo_data: PromoCreate) -> Promo:
        code = normalize_code(promo_data.code)
        if await self._find_by_code(code):
            raise DuplicatePromoCodeError("Promo code already exists")

        promo = Promo(
            code=code,
            discount_percent=promo_data.discount_percent,
            expiry_date=promo_data.expiry_date,
            active=promo_data.active,
        )
        self.db.add(promo)
        await self.db.commit()
        await self.db.refresh(promo)

        logger.info("Promo created", code=code, discount_percent=promo.discount_percent)
        return promo

    async def update(self, promo_id: UUID, promo_data: PromoUpdate) -> Promo:
        promo = await self.get(promo_id)
        changes = promo_data.model_dump(exclude_unset=True, exclude_none=True)

        code = changes.pop("code", None)
        if code:
            code = normalize_code(code)
            if code != promo.code and await self._find_by_code(code):
                raise DuplicatePromoCodeError("Promo code already exists")
            promo.code = code

        for field, value in changes.items():
            setattr(promo, field, value)

        await self.db.commit()
        await self.db.refresh(promo)
        return promo

    async def toggle(self, promo_id: UUID) -> Promo:
        promo = await self.get(promo_id)
        promo.active = not promo.active
        await self.db.commit()
        await self.db.refresh(promo)
        return promo

    async def delete(self, promo_id: UUID) -> None:
        promo = await self.get(promo_id)
        await self.db.delete(promo)
        await self.db.commit()
        logger.info("Promo deleted", code=promo.code)
