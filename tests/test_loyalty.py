"""Tests for tier, points and discount rules"""

import pytest

from app.models.customer import MembershipTier
from app.services.loyalty import (
    compute_tier,
    points_for_total,
    resolve_discount,
    tier_discount_percent,
)


@pytest.mark.parametrize(
    "points,expected",
    [
        (0, MembershipTier.BRONZE),
        (499, MembershipTier.BRONZE),
        (500, MembershipTier.SILVER),
        (1000, MembershipTier.SILVER),
        (1499, MembershipTier.SILVER),
        (1500, MembershipTier.GOLD),
        (25000, MembershipTier.GOLD),
    ],
)
def test_compute_tier_thresholds(points, expected):
    assert compute_tier(points) == expected


def test_tier_values_match_stored_strings():
    assert compute_tier(1500).value == "Gold"
    assert compute_tier(500).value == "Silver"
    assert compute_tier(0).value == "Bronze"


@pytest.mark.parametrize(
    "total_cents,expected",
    [
        (10000, 1000),  # $100.00
        (10, 1),        # $0.10
        (9, 0),
        (1999, 199),    # $19.99 -> floor(199.9)
        (0, 0),
        (-500, 0),
    ],
)
def test_points_for_total(total_cents, expected):
    assert points_for_total(total_cents) == expected


def test_tier_discount_percent_accepts_strings():
    assert tier_discount_percent("Gold") == 20
    assert tier_discount_percent(MembershipTier.SILVER) == 10
    assert tier_discount_percent("Bronze") == 0


@pytest.mark.parametrize(
    "tier,promo,expected_percent,expected_source",
    [
        (MembershipTier.GOLD, None, 20, "tier"),
        (MembershipTier.GOLD, 15, 20, "tier"),
        (MembershipTier.GOLD, 30, 30, "promo"),
        (MembershipTier.SILVER, 5, 10, "tier"),
        (MembershipTier.SILVER, 25, 25, "promo"),
        (MembershipTier.BRONZE, 15, 15, "promo"),
        (MembershipTier.BRONZE, None, 0, "none"),
        (MembershipTier.BRONZE, 100, 100, "promo"),
    ],
)
def test_resolve_discount_takes_the_better_offer(tier, promo, expected_percent, expected_source):
    result = resolve_discount(10000, tier, promo)

    assert result.discount_cents == expected_percent * 10000 // 100
    assert result.final_total_cents == 10000 - result.discount_cents
    assert result.applied_percent == expected_percent
    assert result.source == expected_source


def test_resolve_discount_never_stacks():
    # Gold (20%) plus a 15% promo must not become 35%
    result = resolve_discount(20000, MembershipTier.GOLD, 15)

    assert result.discount_cents == 4000
    assert result.final_total_cents == 16000


def test_resolve_discount_equal_offers_report_tier():
    result = resolve_discount(5000, MembershipTier.SILVER, 10)

    assert result.discount_cents == 500
    assert result.source == "tier"


@pytest.mark.parametrize("subtotal", [0, -100])
def test_resolve_discount_non_positive_subtotal(subtotal):
    result = resolve_discount(subtotal, MembershipTier.GOLD, 50)

    assert result.discount_cents == 0
    assert result.final_total_cents == 0
    assert result.source == "none"


def test_resolve_discount_rounds_to_the_cent():
    # 10% of $0.15 is 1.5 cents
    result = resolve_discount(15, MembershipTier.SILVER)

    assert result.discount_cents == 2
    assert result.final_total_cents == 13
