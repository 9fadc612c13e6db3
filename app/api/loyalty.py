"""Loyalty API endpoints"""

from fastapi import APIRouter, Query

from app.schemas.customer import TierResponse
from app.services.loyalty import compute_tier

router = APIRouter()


@router.get("/tier", response_model=TierResponse)
async def get_tier(points: int = Query(..., ge=0)):
    """Tier a point total maps to"""
    return TierResponse(points=points, tier=compute_tier(points))
