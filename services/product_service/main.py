from fastapi import FastAPI
from .router import router, public_router
from .models import Product # Import to register with Base

product_app = FastAPI(
    title="Product Service",
    version="1.0.0"
)

product_app.include_router(public_router)
product_app.include_router(router)
