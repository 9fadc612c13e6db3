#!/usr/bin/env python3
"""
Seed script to create demo settings, customers and promo codes
"""

import asyncio
import uuid
from datetime import datetime, timedelta


async def seed_demo_data():
    """Seed demo data for development"""
    from app.database import SessionLocal, engine, Base
    from app.models.customer import Customer
    from app.models.promo import Promo
    from app.models.settings import RestaurantSettings
    from app.services.loyalty import compute_tier

    # Create tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with SessionLocal() as db:
        # Check if demo data already exists
        from sqlalchemy import select
        result = await db.execute(
            select(Customer).where(Customer.email == "ada@example.com")
        )
        existing = result.scalar_one_or_none()

        if existing:
            print("Demo data already exists. Skipping...")
            return

        print("Creating restaurant settings...")

        settings = RestaurantSettings(
            id=uuid.uuid4(),
            max_table_capacity=50,
            deposit_amount_cents=2500,
            reservation_duration_minutes=120,
            cancellation_hours=2,
            pending_hold_hours=24,
            operating_hours_open="11:00",
            operating_hours_close="22:00",
            rest_days_open=True,
            show_promo_section=True,
            updated_by="seed",
        )
        db.add(settings)

        print("Creating customers...")

        # One customer per tier plus one a single point short of Gold
        customers = [
            {"name": "Ada Diner", "email": "ada@example.com", "phone": "+15551230001", "points": 0},
            {"name": "Sam Regular", "email": "sam@example.com", "phone": "+15551230002", "points": 720},
            {"name": "Noor Almost", "email": "noor@example.com", "phone": "+15551230003", "points": 1499},
            {"name": "Vera Gold", "email": "vera@example.com", "phone": "+15551230004", "points": 2310},
        ]

        for customer_data in customers:
            customer = Customer(
                id=uuid.uuid4(),
                name=customer_data["name"],
                email=customer_data["email"],
                phone=customer_data["phone"],
                loyalty_points=customer_data["points"],
                tier=compute_tier(customer_data["points"]).value,
            )
            db.add(customer)
            print(f"  {customer.name}: {customer.loyalty_points} points ({customer.tier})")

        print("Creating promo codes...")

        now = datetime.utcnow()
        promos = [
            {"code": "WELCOME10", "discount_percent": 10, "expiry_date": now + timedelta(days=90), "active": True},
            {"code": "FEAST25", "discount_percent": 25, "expiry_date": now + timedelta(days=14), "active": True},
            {"code": "SUMMER15", "discount_percent": 15, "expiry_date": now - timedelta(days=30), "active": True},
            {"code": "STAFF50", "discount_percent": 50, "expiry_date": now + timedelta(days=365), "active": False},
        ]

        for promo_data in promos:
            db.add(Promo(id=uuid.uuid4(), **promo_data))

        await db.commit()

        print(f"""
Demo data created successfully!

Settings:
  Capacity per slot: {settings.max_table_capacity} guests
  Deposit: {settings.deposit_amount_cents} cents

Promo codes:
  Active: WELCOME10, FEAST25
  Expired: SUMMER15
  Inactive: STAFF50

Customers: {len(customers)} created
  noor@example.com reaches Gold with any order of 10 cents or more.
""")


if __name__ == "__main__":
    asyncio.run(seed_demo_data())
