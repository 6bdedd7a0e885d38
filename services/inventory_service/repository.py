from typing import Optional

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from services.product_service.models import Product

from .models import Inventory


class InventoryRepository:

    @staticmethod
    async def create_record(db: AsyncSession, product_id: int, quantity: int) -> Inventory:
        record = Inventory(product_id=product_id, quantity=quantity)
        db.add(record)
        await db.flush()
        return record

    @staticmethod
    async def _stock_rows(db: AsyncSession, threshold: Optional[int] = None):
        stmt = (
            select(
                Inventory.id,
                Inventory.product_id,
                Inventory.quantity,
                Inventory.last_updated,
                Product.name.label("product_name"),
                Product.category,
            )
            .join(Product, Inventory.product_id == Product.id)
            .order_by(Inventory.quantity.asc())
        )
        if threshold is not None:
            stmt = stmt.where(Inventory.quantity < threshold)
        result = await db.execute(stmt)
        return [dict(row) for row in result.mappings().all()]

    @staticmethod
    async def get_all(db: AsyncSession):
        return await InventoryRepository._stock_rows(db)

    @staticmethod
    async def get_low_stock(db: AsyncSession, threshold: int):
        return await InventoryRepository._stock_rows(db, threshold)

    @staticmethod
    async def set_quantity(db: AsyncSession, product_id: int, quantity: int) -> bool:
        result = await db.execute(
            update(Inventory)
            .where(Inventory.product_id == product_id)
            .values(quantity=quantity)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount > 0

    @staticmethod
    async def decrement(db: AsyncSession, product_id: int, quantity: int) -> bool:
        """
        Takes `quantity` units of stock away from a product.

        Both the inventory row and the product's own quantity column move
        together. Returns False when the product has no inventory row, in
        which case nothing is changed.
        """
        result = await db.execute(
            update(Inventory)
            .where(Inventory.product_id == product_id)
            .values(quantity=Inventory.quantity - quantity)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            return False

        await db.execute(
            update(Product)
            .where(Product.id == product_id)
            .values(quantity=Product.quantity - quantity)
            .execution_options(synchronize_session=False)
        )
        return True

    @staticmethod
    async def delete_for_product(db: AsyncSession, product_id: int):
        await db.execute(delete(Inventory).where(Inventory.product_id == product_id))

    @staticmethod
    async def category_report(db: AsyncSession):
        result = await db.execute(
            select(
                Product.category,
                func.count().label("total_products"),
                func.sum(Inventory.quantity).label("total_quantity"),
                func.avg(Inventory.quantity).label("average_quantity"),
            )
            .join(Product, Inventory.product_id == Product.id)
            .group_by(Product.category)
            .order_by(Product.category)
        )
        return [dict(row) for row in result.mappings().all()]
