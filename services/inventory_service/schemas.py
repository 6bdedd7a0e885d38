from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class InventoryUpdate(BaseModel):
    quantity: int = Field(ge=0)


class InventoryItemResponse(BaseModel):
    id: int
    product_id: int
    quantity: int
    last_updated: Optional[datetime] = None
    product_name: str
    category: Optional[str] = None


class CategoryReport(BaseModel):
    category: Optional[str]
    total_products: int
    total_quantity: int
    average_quantity: float
