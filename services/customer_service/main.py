from fastapi import FastAPI

from .models import Customer  # noqa: F401 — registers model with SQLAlchemy Base
from .router import router, public_router

customer_app = FastAPI(title="Customer Service", version="1.0.0")

customer_app.include_router(public_router)
customer_app.include_router(router)
