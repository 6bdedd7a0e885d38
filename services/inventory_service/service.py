from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from services.product_service.models import Product

from .repository import InventoryRepository


class InventoryService:

    @staticmethod
    async def list_inventory(db: AsyncSession):
        return await InventoryRepository.get_all(db)

    @staticmethod
    async def list_low_stock(db: AsyncSession, threshold: int):
        return await InventoryRepository.get_low_stock(db, threshold)

    @staticmethod
    async def adjust_quantity(db: AsyncSession, product_id: int, quantity: int) -> bool:
        """Manual stock correction; keeps products.quantity in step."""
        if not await InventoryRepository.set_quantity(db, product_id, quantity):
            return False

        await db.execute(
            update(Product)
            .where(Product.id == product_id)
            .values(quantity=quantity)
            .execution_options(synchronize_session=False)
        )
        await db.commit()
        return True

    @staticmethod
    async def report(db: AsyncSession):
        rows = await InventoryRepository.category_report(db)
        return [
            {
                "category": row["category"],
                "total_products": row["total_products"],
                "total_quantity": int(row["total_quantity"] or 0),
                "average_quantity": float(row["average_quantity"] or 0),
            }
            for row in rows
        ]
