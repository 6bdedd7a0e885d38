from fastapi import FastAPI

from .models import Inventory  # noqa: F401 — registers model with SQLAlchemy Base
from .router import router, public_router

inventory_app = FastAPI(title="Inventory Service", version="1.0.0")

inventory_app.include_router(public_router)
inventory_app.include_router(router)
