from decimal import Decimal
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update
from services.customer_service.models import Customer
from services.product_service.models import Product
from .models import Order, OrderItem, OrderStatus

class OrderRepository:
    @staticmethod
    async def create_order(db: AsyncSession, customer_id: int, shipping_address: str, total_amount: Decimal):
        """Inserts the order row inside the caller's transaction; no commit."""
        order = Order(
            customer_id=customer_id,
            shipping_address=shipping_address,
            total_amount=total_amount,
            status=OrderStatus.PENDING.value,
        )
        db.add(order)
        await db.flush()
        return order

    @staticmethod
    async def add_item(db: AsyncSession, order_id: int, product_id: int, quantity: int, price: Decimal):
        item = OrderItem(order_id=order_id, product_id=product_id, quantity=quantity, price=price)
        db.add(item)
        await db.flush()
        return item

    @staticmethod
    async def get_order(db: AsyncSession, order_id: int):
        result = await db.execute(
            select(Order, Customer.name, Customer.email)
            .join(Customer, Order.customer_id == Customer.id)
            .where(Order.id == order_id)
        )
        return result.first()

    @staticmethod
    async def get_order_items(db: AsyncSession, order_id: int):
        result = await db.execute(
            select(OrderItem, Product.name)
            .join(Product, OrderItem.product_id == Product.id)
            .where(OrderItem.order_id == order_id)
            .order_by(OrderItem.id)
        )
        return result.all()

    @staticmethod
    async def exists(db: AsyncSession, order_id: int) -> bool:
        result = await db.execute(select(Order.id).where(Order.id == order_id))
        return result.first() is not None

    @staticmethod
    async def update_status(db: AsyncSession, order_id: int, status: str, tracking_number: str | None):
        await db.execute(
            update(Order)
            .where(Order.id == order_id)
            .values(status=status, tracking_number=tracking_number)
            .execution_options(synchronize_session=False)
        )
        await db.commit()

    @staticmethod
    async def get_customer_orders(db: AsyncSession, customer_id: int):
        result = await db.execute(
            select(Order)
            .where(Order.customer_id == customer_id)
            .order_by(Order.created_at.desc(), Order.id.desc())
        )
        return result.scalars().all()
