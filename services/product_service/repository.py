from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import delete, select
from services.order_service.models import OrderItem
from .models import Product
from .schemas import ProductFilter

class ProductRepository:

    @staticmethod
    async def create_product(db: AsyncSession, product: Product):
        db.add(product)
        await db.flush()
        return product

    @staticmethod
    async def search_products(db: AsyncSession, filters: ProductFilter):
        stmt = select(Product)

        if filters.category:
            stmt = stmt.where(Product.category == filters.category)
        if filters.min_price is not None:
            stmt = stmt.where(Product.price >= filters.min_price)
        if filters.max_price is not None:
            stmt = stmt.where(Product.price <= filters.max_price)

        if filters.sort_by:
            column = getattr(Product, filters.sort_by)
            stmt = stmt.order_by(column.desc() if filters.sort_order.lower() == "desc" else column.asc())

        result = await db.execute(stmt)
        return result.scalars().all()

    @staticmethod
    async def get_product_by_id(db: AsyncSession, product_id: int):
        result = await db.execute(select(Product).where(Product.id == product_id))
        return result.scalars().first()

    @staticmethod
    async def get_product_for_order(db: AsyncSession, product_id: int):
        """Price/stock read used by order creation; the row stays locked until commit."""
        result = await db.execute(
            select(Product).where(Product.id == product_id).with_for_update()
        )
        return result.scalars().first()

    @staticmethod
    async def is_ordered(db: AsyncSession, product_id: int) -> bool:
        result = await db.execute(
            select(OrderItem.id).where(OrderItem.product_id == product_id).limit(1)
        )
        return result.first() is not None

    @staticmethod
    async def delete_product(db: AsyncSession, product_id: int):
        await db.execute(delete(Product).where(Product.id == product_id))
