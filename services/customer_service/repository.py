from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from services.order_service.models import Order

from .models import Customer


class CustomerRepository:

    @staticmethod
    async def create(db: AsyncSession, customer: Customer) -> Customer:
        db.add(customer)
        await db.commit()
        await db.refresh(customer)
        return customer

    @staticmethod
    async def get_all(db: AsyncSession):
        result = await db.execute(select(Customer).order_by(Customer.id))
        return result.scalars().all()

    @staticmethod
    async def get_by_id(db: AsyncSession, customer_id: int) -> Optional[Customer]:
        result = await db.execute(select(Customer).where(Customer.id == customer_id))
        return result.scalars().first()

    @staticmethod
    async def exists(db: AsyncSession, customer_id: int) -> bool:
        result = await db.execute(select(Customer.id).where(Customer.id == customer_id))
        return result.first() is not None

    @staticmethod
    async def has_orders(db: AsyncSession, customer_id: int) -> bool:
        result = await db.execute(select(Order.id).where(Order.customer_id == customer_id).limit(1))
        return result.first() is not None

    @staticmethod
    async def update(db: AsyncSession, customer: Customer) -> Customer:
        db.add(customer)
        await db.commit()
        await db.refresh(customer)
        return customer

    @staticmethod
    async def delete(db: AsyncSession, customer_id: int):
        await db.execute(delete(Customer).where(Customer.id == customer_id))
        await db.commit()
