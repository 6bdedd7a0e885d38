from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from .models import Customer
from .repository import CustomerRepository
from .schemas import CustomerCreate


class CustomerService:

    @staticmethod
    async def create_customer(db: AsyncSession, data: CustomerCreate):
        customer = Customer(
            name=data.name,
            email=data.email,
            phone=data.phone,
            address=data.address,
        )
        return await CustomerRepository.create(db, customer)

    @staticmethod
    async def list_customers(db: AsyncSession):
        return await CustomerRepository.get_all(db)

    @staticmethod
    async def get_customer(db: AsyncSession, customer_id: int):
        return await CustomerRepository.get_by_id(db, customer_id)

    @staticmethod
    async def update_customer(db: AsyncSession, customer_id: int, data: CustomerCreate):
        customer = await CustomerRepository.get_by_id(db, customer_id)
        if not customer:
            return None

        customer.name = data.name
        customer.email = data.email
        customer.phone = data.phone
        customer.address = data.address
        return await CustomerRepository.update(db, customer)

    @staticmethod
    async def delete_customer(db: AsyncSession, customer_id: int) -> bool:
        if not await CustomerRepository.exists(db, customer_id):
            return False
        if await CustomerRepository.has_orders(db, customer_id):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Customer has orders and cannot be deleted",
            )
        try:
            await CustomerRepository.delete(db, customer_id)
        except IntegrityError:
            await db.rollback()
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Customer is still referenced and cannot be deleted",
            )
        return True
