from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config.database import get_db

from .schemas import CategoryReport, InventoryItemResponse, InventoryUpdate
from .service import InventoryService

router = APIRouter()
public_router = APIRouter()  # For any public endpoints (e.g. health check)

@public_router.get("/health", include_in_schema=False)
async def health_check():
    return {"service": "inventory", "status": "running"}


@router.get("/", response_model=list[InventoryItemResponse])
async def list_inventory(db: AsyncSession = Depends(get_db)):
    return await InventoryService.list_inventory(db)


@router.get("/low-stock", response_model=list[InventoryItemResponse])
async def list_low_stock(
    threshold: int = Query(default=10, ge=0),
    db: AsyncSession = Depends(get_db),
):
    return await InventoryService.list_low_stock(db, threshold)


@router.get("/report", response_model=list[CategoryReport])
async def inventory_report(db: AsyncSession = Depends(get_db)):
    return await InventoryService.report(db)


@router.patch("/{product_id}")
async def update_inventory(
    product_id: int, payload: InventoryUpdate, db: AsyncSession = Depends(get_db)
):
    if not await InventoryService.adjust_quantity(db, product_id, payload.quantity):
        raise HTTPException(status_code=404, detail="Inventory record not found")
    return {"message": "Inventory updated successfully"}
