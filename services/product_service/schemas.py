from decimal import Decimal
from typing import Literal, Optional

from pydantic import BaseModel, Field

class ProductCreate(BaseModel):
    name: str
    description: Optional[str] = None
    price: Decimal = Field(ge=0)
    category: Optional[str] = None
    quantity: int = Field(default=0, ge=0)

class ProductFilter(BaseModel):
    category: Optional[str] = None
    min_price: Optional[Decimal] = None
    max_price: Optional[Decimal] = None
    sort_by: Optional[Literal["id", "name", "price", "category", "quantity"]] = None
    sort_order: Literal["asc", "desc", "ASC", "DESC"] = "asc"

class ProductResponse(BaseModel):
    id: int
    name: str
    description: Optional[str]
    price: float
    category: Optional[str]
    quantity: int

    class Config:
        from_attributes = True
