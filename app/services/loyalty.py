"""Loyalty rules: points, membership tiers and discounts

Tier benefits and promo codes are alternative rewards. When both apply, the
customer gets whichever is worth more, never both.
"""

from dataclasses import dataclass
from typing import Optional, Union

from app.models.customer import MembershipTier

SILVER_THRESHOLD = 500
GOLD_THRESHOLD = 1500

# Points per dollar spent
POINTS_PER_DOLLAR = 10

TIER_DISCOUNT_PERCENT = {
    MembershipTier.GOLD: 20,
    MembershipTier.SILVER: 10,
    MembershipTier.BRONZE: 0,
}


def compute_tier(points: int) -> MembershipTier:
    """Map a point total to its membership tier"""
    if points >= GOLD_THRESHOLD:
        return MembershipTier.GOLD
    if points >= SILVER_THRESHOLD:
        return MembershipTier.SILVER
    return MembershipTier.BRONZE


def points_for_total(total_cents: int) -> int:
    """floor(total_dollars * 10), computed on integer cents"""
    if total_cents <= 0:
        return 0
    return total_cents * POINTS_PER_DOLLAR // 100


def tier_discount_percent(tier: Union[MembershipTier, str]) -> int:
    return TIER_DISCOUNT_PERCENT[MembershipTier(tier)]


@dataclass(frozen=True)
class DiscountResult:
    subtotal_cents: int
    discount_cents: int
    final_total_cents: int
    applied_percent: int
    source: str  # "tier", "promo" or "none"


def _percent_of(amount_cents: int, percent: int) -> int:
    # Half-up rounding to the cent
    return (amount_cents * percent + 50) // 100


def resolve_discount(
    subtotal_cents: int,
    tier: Union[MembershipTier, str],
    promo_percent: Optional[int] = None,
) -> DiscountResult:
    """Apply the better of the tier discount and the promo discount"""
    tier_percent = tier_discount_percent(tier)
    promo_percent = promo_percent or 0

    if subtotal_cents <= 0:
        return DiscountResult(
            subtotal_cents=subtotal_cents,
            discount_cents=0,
            final_total_cents=0,
            applied_percent=0,
            source="none",
        )

    tier_discount = _percent_of(subtotal_cents, tier_percent)
    promo_discount = _percent_of(subtotal_cents, promo_percent)

    if promo_discount > tier_discount:
        discount, percent, source = promo_discount, promo_percent, "promo"
    elif tier_discount > 0:
        discount, percent, source = tier_discount, tier_percent, "tier"
    else:
        discount, percent, source = 0, 0, "none"

    return DiscountResult(
        subtotal_cents=subtotal_cents,
        discount_cents=discount,
        final_total_cents=max(0, subtotal_cents - discount),
        applied_percent=percent,
        source=source,
    )
