import os
import tempfile
from decimal import Decimal

# Must be set before the app modules read their settings
_DB_PATH = os.path.join(tempfile.gettempdir(), f"retail_api_test_{os.getpid()}.db")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_DB_PATH}"
os.environ["TRACING_ENABLED"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"

import httpx
import pytest
from sqlalchemy import func, select

from main import app
from shared.config.database import AsyncSessionLocal, Base, engine
from services.customer_service.models import Customer
from services.inventory_service.models import Inventory
from services.order_service.models import Order, OrderItem
from services.product_service.models import Product


@pytest.fixture(autouse=True)
async def database():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    yield
    await engine.dispose()


@pytest.fixture
async def client():
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


async def add_customer(name="Ada Lovelace", email="ada@example.com"):
    async with AsyncSessionLocal() as db:
        customer = Customer(name=name, email=email, address="12 Analytical Row")
        db.add(customer)
        await db.commit()
        return customer.id


async def add_product(name, price, quantity, category="general", with_inventory=True):
    async with AsyncSessionLocal() as db:
        product = Product(name=name, price=Decimal(price), quantity=quantity, category=category)
        db.add(product)
        await db.flush()
        if with_inventory:
            db.add(Inventory(product_id=product.id, quantity=quantity))
        await db.commit()
        return product.id


async def stock_of(product_id):
    """(products.quantity, inventory.quantity) for one product."""
    async with AsyncSessionLocal() as db:
        product_qty = await db.scalar(select(Product.quantity).where(Product.id == product_id))
        inventory_qty = await db.scalar(select(Inventory.quantity).where(Inventory.product_id == product_id))
        return product_qty, inventory_qty


async def count_rows(model):
    async with AsyncSessionLocal() as db:
        return await db.scalar(select(func.count()).select_from(model))


async def order_counts():
    return await count_rows(Order), await count_rows(OrderItem)


@pytest.fixture
async def shop():
    """One customer, P (10.00 x5), R (5.00 x8)."""
    return {
        "customer_id": await add_customer(),
        "p": await add_product("Pen", "10.00", 5),
        "r": await add_product("Ruler", "5.00", 8),
    }
