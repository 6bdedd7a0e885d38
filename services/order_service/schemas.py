from datetime import datetime
from decimal import Decimal
from typing import Any, List, Optional

from pydantic import BaseModel

from .models import OrderStatus

class OrderCreate(BaseModel):
    # Left untyped so that validate_order_input can report wrong types and
    # missing fields in one list instead of stopping at the first bad type.
    customer_id: Any = None
    shipping_address: Any = None
    items: Any = None

class OrderLine(BaseModel):
    product_id: int
    quantity: int
    price: Optional[Decimal] = None # accepted but not trusted, see OrderService

class ValidatedOrder(BaseModel):
    customer_id: int
    shipping_address: str
    items: List[OrderLine]

class OrderCreated(BaseModel):
    order_id: int
    total_amount: Decimal

class OrderCreatedResponse(BaseModel):
    status: str = "success"
    message: str = "Order created successfully"
    order_id: int
    total_amount: float

class OrderStatusUpdate(BaseModel):
    status: str
    tracking_number: Optional[str] = None

class OrderItemResponse(BaseModel):
    id: int
    order_id: int
    product_id: int
    product_name: Optional[str] = None
    quantity: int
    price: float

class OrderResponse(BaseModel):
    id: int
    customer_id: int
    shipping_address: str
    total_amount: float
    status: OrderStatus
    tracking_number: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class OrderDetailResponse(OrderResponse):
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
    items: List[OrderItemResponse] = []

class OrderDetailEnvelope(BaseModel):
    status: str = "success"
    data: OrderDetailResponse

class CustomerOrdersEnvelope(BaseModel):
    status: str = "success"
    data: List[OrderResponse]
