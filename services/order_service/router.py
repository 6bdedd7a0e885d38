import structlog
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession
from shared.config.database import TransactionProvider, get_db, get_transaction_provider
from .exceptions import OrderWorkflowError, PersistenceError
from .schemas import (
    CustomerOrdersEnvelope,
    OrderCreate,
    OrderCreatedResponse,
    OrderDetailEnvelope,
    OrderResponse,
    OrderStatusUpdate,
)
from .service import VALID_STATUSES, OrderService

logger = structlog.get_logger(__name__)

router = APIRouter()
public_router = APIRouter()  # For any public endpoints (e.g. health check)

@public_router.get("/health", include_in_schema=False)
async def health_check():
    return {"service": "order", "status": "running"}

@router.post("", response_model=OrderCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_order(
    order: OrderCreate,
    provider: TransactionProvider = Depends(get_transaction_provider),
):
    try:
        created = await OrderService.create_order(provider, order)
    except OrderWorkflowError:
        raise
    except Exception as e:
        logger.exception("order_creation_crashed")
        raise PersistenceError(error=str(e)) from e

    return OrderCreatedResponse(order_id=created.order_id, total_amount=float(created.total_amount))

def not_found(message: str, **ids) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"status": "error", "message": message, **ids},
    )

@router.get("/customer/{customer_id}", response_model=CustomerOrdersEnvelope)
async def get_customer_orders(customer_id: int, db: AsyncSession = Depends(get_db)):
    orders = await OrderService.get_customer_orders(db, customer_id)
    if orders is None:
        return not_found("Customer not found", customer_id=customer_id)
    return CustomerOrdersEnvelope(data=[OrderResponse.model_validate(o) for o in orders])

@router.get("/{order_id}", response_model=OrderDetailEnvelope)
async def get_order(order_id: int, db: AsyncSession = Depends(get_db)):
    order = await OrderService.get_order(db, order_id)
    if not order:
        return not_found("Order not found", order_id=order_id)
    return OrderDetailEnvelope(data=order)

@router.patch("/{order_id}/status")
async def update_order_status(
    order_id: int, payload: OrderStatusUpdate, db: AsyncSession = Depends(get_db)
):
    if payload.status not in VALID_STATUSES:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "status": "error",
                "message": "Invalid status",
                "valid_statuses": VALID_STATUSES,
            },
        )

    if not await OrderService.update_status(db, order_id, payload.status, payload.tracking_number):
        return not_found("Order not found", order_id=order_id)

    return {
        "status": "success",
        "message": "Order status updated successfully",
        "order_id": order_id,
        "new_status": payload.status,
    }
