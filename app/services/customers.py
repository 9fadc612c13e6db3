"""Customer accounts"""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.customer import Customer, MembershipTier
from app.schemas.customer import CustomerCreate
from app.services.errors import DuplicateCustomerError, NotFoundError


async def create_customer(db: AsyncSession, customer_data: CustomerCreate) -> Customer:
    email = customer_data.email.strip().lower()

    result = await db.execute(select(Customer.id).where(Customer.email == email))
    if result.scalar_one_or_none() is not None:
        raise DuplicateCustomerError("User already exists")

    customer = Customer(
        name=customer_data.name,
        email=email,
        phone=customer_data.phone,
        loyalty_points=0,
        tier=MembershipTier.BRONZE.value,
    )
    db.add(customer)
    await db.commit()
    await db.refresh(customer)
    return customer


async def get_customer(db: AsyncSession, customer_id: UUID) -> Customer:
    result = await db.execute(select(Customer).where(Customer.id == customer_id))
    customer = result.scalar_one_or_none()

    if not customer:
        raise NotFoundError("Customer not found")

    return customer
