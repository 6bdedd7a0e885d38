from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from services.inventory_service.repository import InventoryRepository
from .models import Product
from .repository import ProductRepository
from .schemas import ProductCreate, ProductFilter

class ProductService:

    @staticmethod
    async def create_product(db: AsyncSession, data: ProductCreate):
        product = Product(
            name=data.name,
            description=data.description,
            price=data.price,
            category=data.category,
            quantity=data.quantity
        )
        await ProductRepository.create_product(db, product)
        # Every product gets its inventory row in the same commit
        await InventoryRepository.create_record(db, product.id, data.quantity)
        await db.commit()
        await db.refresh(product)
        return product

    @staticmethod
    async def list_products(db: AsyncSession, filters: ProductFilter):
        return await ProductRepository.search_products(db, filters)

    @staticmethod
    async def get_product_by_id(db: AsyncSession, product_id: int):
        return await ProductRepository.get_product_by_id(db, product_id)

    @staticmethod
    async def update_product(db: AsyncSession, product_id: int, data: ProductCreate):
        product = await ProductRepository.get_product_by_id(db, product_id)
        if not product:
            return None

        product.name = data.name
        product.description = data.description
        product.price = data.price
        product.category = data.category
        product.quantity = data.quantity
        await InventoryRepository.set_quantity(db, product_id, data.quantity)
        await db.commit()
        await db.refresh(product)
        return product

    @staticmethod
    async def delete_product(db: AsyncSession, product_id: int) -> bool:
        product = await ProductRepository.get_product_by_id(db, product_id)
        if not product:
            return False

        if await ProductRepository.is_ordered(db, product_id):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Product appears on orders and cannot be deleted",
            )

        # Inventory rows reference the product, remove them first
        try:
            await InventoryRepository.delete_for_product(db, product_id)
            await ProductRepository.delete_product(db, product_id)
            await db.commit()
        except IntegrityError:
            await db.rollback()
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Product is still referenced and cannot be deleted",
            )
        return True
