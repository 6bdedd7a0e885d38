import time
from decimal import Decimal
from typing import List

import structlog
from pydantic import TypeAdapter, ValidationError
from opentelemetry import trace
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config.database import TransactionProvider
from shared.observability import (
    order_creation_duration_seconds,
    order_items_total,
    orders_created_total,
)
from services.customer_service.repository import CustomerRepository
from services.inventory_service.repository import InventoryRepository
from services.product_service.repository import ProductRepository

from .exceptions import (
    BusinessRuleError,
    CustomerNotFoundError,
    ErrorDetail,
    InputValidationError,
    OrderWorkflowError,
    PersistenceError,
)
from .models import OrderStatus
from .repository import OrderRepository
from .schemas import OrderCreate, OrderCreated, OrderLine, ValidatedOrder

logger = structlog.get_logger(__name__)
tracer = trace.get_tracer(__name__)

VALID_STATUSES = [s.value for s in OrderStatus]


_INT = TypeAdapter(int)
_DECIMAL = TypeAdapter(Decimal)


def _conforms(adapter: TypeAdapter, value) -> bool:
    if isinstance(value, bool):
        return False
    try:
        adapter.validate_python(value)
    except ValidationError:
        return False
    return True


def validate_order_input(data: OrderCreate) -> List[ErrorDetail]:
    """Collects every problem with the request body, wrong types included. Touches no data."""
    errors = []

    if data.customer_id is None:
        errors.append(ErrorDetail(field="customer_id", code="required", message="Customer ID is required"))
    elif not _conforms(_INT, data.customer_id):
        errors.append(ErrorDetail(field="customer_id", code="invalid_type", message="Customer ID must be an integer"))

    address = data.shipping_address
    if address is None or (isinstance(address, str) and not address.strip()):
        errors.append(ErrorDetail(field="shipping_address", code="required", message="Shipping address is required"))
    elif not isinstance(address, str):
        errors.append(ErrorDetail(field="shipping_address", code="invalid_type", message="Shipping address must be a string"))

    if data.items is None:
        errors.append(ErrorDetail(field="items", code="required", message="Order items are required"))
    elif not isinstance(data.items, list):
        errors.append(ErrorDetail(field="items", code="invalid_type", message="Items must be an array"))
    elif len(data.items) == 0:
        errors.append(ErrorDetail(field="items", code="empty", message="Order must contain at least one item"))
    else:
        for index, item in enumerate(data.items):
            if not isinstance(item, dict):
                errors.append(ErrorDetail(
                    field=f"items[{index}]",
                    code="invalid_type",
                    message=f"Item at index {index} must be an object",
                ))
                continue

            product_id = item.get("product_id")
            if product_id is None:
                errors.append(ErrorDetail(
                    field=f"items[{index}].product_id",
                    code="required",
                    message=f"Product ID is required for item at index {index}",
                ))
            elif not _conforms(_INT, product_id):
                errors.append(ErrorDetail(
                    field=f"items[{index}].product_id",
                    code="invalid_type",
                    message=f"Product ID must be an integer for item at index {index}",
                ))

            quantity = item.get("quantity")
            if quantity is None:
                code = "required"
            elif not _conforms(_INT, quantity):
                code = "invalid_type"
            elif _INT.validate_python(quantity) <= 0:
                code = "not_positive"
            else:
                code = None
            if code:
                errors.append(ErrorDetail(
                    field=f"items[{index}].quantity",
                    code=code,
                    message=f"Valid quantity is required for item at index {index}",
                ))

            price = item.get("price")
            if price is not None and not _conforms(_DECIMAL, price):
                errors.append(ErrorDetail(
                    field=f"items[{index}].price",
                    code="invalid_type",
                    message=f"Price must be a number for item at index {index}",
                ))

    return errors


class OrderService:

    @staticmethod
    async def create_order(provider: TransactionProvider, data: OrderCreate) -> OrderCreated:
        """
        Validate, price, and persist a new order with its items.

        Runs as a single transaction: the order row, every order item and
        every inventory decrement are committed together or not at all.
        Raises a subclass of OrderWorkflowError on any failure.
        """
        started = time.perf_counter()
        log = logger.bind(customer_id=data.customer_id)

        try:
            errors = validate_order_input(data)
            if errors:
                raise InputValidationError(errors)
            order = ValidatedOrder.model_validate(data.model_dump())

            try:
                async with provider.transaction() as db:
                    await OrderService._check_customer(db, order.customer_id)
                    total, prices = await OrderService._price_items(db, order.items)
                    created = await OrderService._persist(db, order, total, prices)
            except SQLAlchemyError as e:
                log.error("order_rolled_back", error=str(e))
                raise PersistenceError(
                    [ErrorDetail(code="persistence_failed", message=str(e))],
                    error=str(e),
                ) from e
        except PersistenceError:
            orders_created_total.labels(outcome="rolled_back").inc()
            raise
        except OrderWorkflowError as e:
            orders_created_total.labels(outcome="rejected").inc()
            log.info("order_rejected", reason=e.message, errors=[d.message for d in e.errors])
            raise
        except Exception:
            orders_created_total.labels(outcome="rolled_back").inc()
            raise
        finally:
            order_creation_duration_seconds.observe(time.perf_counter() - started)

        orders_created_total.labels(outcome="committed").inc()
        order_items_total.inc(len(order.items))
        log.info("order_created", order_id=created.order_id, total_amount=str(created.total_amount))
        return created

    @staticmethod
    async def _check_customer(db: AsyncSession, customer_id: int):
        with tracer.start_as_current_span("order.customer_check"):
            if not await CustomerRepository.exists(db, customer_id):
                raise CustomerNotFoundError(customer_id)

    @staticmethod
    async def _price_items(db: AsyncSession, items: List[OrderLine]):
        """
        Looks up every product, checks stock and sums the order total.

        Problems are collected across all items before giving up, so the
        caller sees every missing product and every shortfall at once.
        Returns the total and the unit price used for each product.
        """
        with tracer.start_as_current_span("order.pricing_and_stock"):
            total = Decimal("0")
            prices = {}
            requested = {}
            errors = []

            for index, item in enumerate(items):
                product = await ProductRepository.get_product_for_order(db, item.product_id)
                if product is None:
                    errors.append(ErrorDetail(
                        field=f"items[{index}].product_id",
                        code="not_found",
                        message=f"Product with ID {item.product_id} not found",
                    ))
                    continue

                # Repeated lines for one product draw on the same stock
                requested[product.id] = requested.get(product.id, 0) + item.quantity
                if product.quantity < requested[product.id]:
                    errors.append(ErrorDetail(
                        field=f"items[{index}].quantity",
                        code="insufficient_stock",
                        message=(
                            f"Insufficient inventory for {product.name}. "
                            f"Available: {product.quantity}, Requested: {requested[product.id]}"
                        ),
                    ))
                    continue

                price = Decimal(product.price)
                if item.price is not None and Decimal(item.price) != price:
                    logger.warning(
                        "client_price_ignored",
                        product_id=product.id,
                        client_price=str(item.price),
                        price=str(price),
                    )
                prices[product.id] = price
                total += price * item.quantity

            if errors:
                raise BusinessRuleError(errors)

            return total, prices

    @staticmethod
    async def _persist(db: AsyncSession, data: ValidatedOrder, total: Decimal, prices) -> OrderCreated:
        with tracer.start_as_current_span("order.persist"):
            order = await OrderRepository.create_order(db, data.customer_id, data.shipping_address, total)

            errors = []
            for item in data.items:
                try:
                    await OrderRepository.add_item(
                        db, order.id, item.product_id, item.quantity, prices[item.product_id]
                    )
                    if not await InventoryRepository.decrement(db, item.product_id, item.quantity):
                        errors.append(ErrorDetail(
                            field="items",
                            code="missing_inventory",
                            message=f"No inventory record for product {item.product_id}",
                        ))
                except SQLAlchemyError as e:
                    errors.append(ErrorDetail(
                        field="items",
                        code="persistence_failed",
                        message=f"Error processing order item for product {item.product_id}: {e}",
                    ))

            if errors:
                # Raising out of the transaction block rolls back the order
                # row together with every item and decrement written so far.
                logger.error("order_rolled_back", errors=[e.message for e in errors])
                raise PersistenceError(
                    errors,
                    error="Errors occurred while processing order items: "
                    + ", ".join(e.message for e in errors),
                )

            return OrderCreated(order_id=order.id, total_amount=total)

    @staticmethod
    async def get_order(db: AsyncSession, order_id: int):
        row = await OrderRepository.get_order(db, order_id)
        if row is None:
            return None

        order, customer_name, customer_email = row
        items = await OrderRepository.get_order_items(db, order_id)
        return {
            "id": order.id,
            "customer_id": order.customer_id,
            "shipping_address": order.shipping_address,
            "total_amount": order.total_amount,
            "status": order.status,
            "tracking_number": order.tracking_number,
            "created_at": order.created_at,
            "customer_name": customer_name,
            "customer_email": customer_email,
            "items": [
                {
                    "id": item.id,
                    "order_id": item.order_id,
                    "product_id": item.product_id,
                    "product_name": product_name,
                    "quantity": item.quantity,
                    "price": item.price,
                }
                for item, product_name in items
            ],
        }

    @staticmethod
    async def update_status(db: AsyncSession, order_id: int, status: str, tracking_number: str | None) -> bool:
        if not await OrderRepository.exists(db, order_id):
            return False
        await OrderRepository.update_status(db, order_id, status, tracking_number)
        return True

    @staticmethod
    async def get_customer_orders(db: AsyncSession, customer_id: int):
        if not await CustomerRepository.exists(db, customer_id):
            return None
        return await OrderRepository.get_customer_orders(db, customer_id)
