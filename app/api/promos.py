"""Promo code API endpoints"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import http_error
from app.database import get_db
from app.schemas.promo import PromoCreate, PromoResponse, PromoUpdate
from app.services.errors import ServiceError
from app.services.promos import PromoService

router = APIRouter()


@router.get("", response_model=List[PromoResponse])
async def list_active_promos(db: AsyncSession = Depends(get_db)):
    """Active, unexpired promos"""
    return await PromoService(db).list_active()


@router.get("/admin/all", response_model=List[PromoResponse])
async def list_all_promos(db: AsyncSession = Depends(get_db)):
    """All promos, including inactive and expired"""
    return await PromoService(db).list_all()


@router.get("/validate/{code}", response_model=PromoResponse)
async def validate_promo(code: str, db: AsyncSession = Depends(get_db)):
    """Check that a code can be applied now"""
    try:
        return await PromoService(db).validate(code)
    except ServiceError as e:
        raise http_error(e)


@router.post("", response_model=PromoResponse, status_code=201)
async def create_promo(promo_data: PromoCreate, db: AsyncSession = Depends(get_db)):
    """Create a promo code"""
    try:
        return await PromoService(db).create(promo_data)
    except ServiceError as e:
        raise http_error(e)


@router.put("/{promo_id}", response_model=PromoResponse)
async def update_promo(promo_id: UUID, promo_data: PromoUpdate, db: AsyncSession = Depends(get_db)):
    """Update a promo code"""
    try:
        return await PromoService(db).update(promo_id, promo_data)
    except ServiceError as e:
        raise http_error(e)


@router.patch("/{promo_id}/toggle", response_model=PromoResponse)
async def toggle_promo(promo_id: UUID, db: AsyncSession = Depends(get_db)):
    """Flip a promo's active flag"""
    try:
        return await PromoService(db).toggle(promo_id)
    except ServiceError as e:
        raise http_error(e)


@router.delete("/{promo_id}", status_code=204)
async def delete_promo(promo_id: UUID, db: AsyncSession = Depends(get_db)):
    """Delete a promo code"""
    try:
        await PromoService(db).delete(promo_id)
    except ServiceError as e:
        raise http_error(e)
