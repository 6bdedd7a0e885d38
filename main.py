from fastapi import FastAPI
from shared.config.database import create_tables
from shared.config.settings import SERVICE_NAME
from shared.observability import setup_observability

# IMPORTANT: import models so they register with Base
from services.customer_service import models as customer_models
from services.product_service import models as product_models
from services.inventory_service import models as inventory_models
from services.order_service import models as order_models

from services.customer_service.main import customer_app
from services.product_service.main import product_app
from services.inventory_service.main import inventory_app
from services.order_service.main import include_order_service

app = FastAPI(title="Retail Order API")

# --- OBSERVABILITY BOOTSTRAP ---
setup_observability(app, SERVICE_NAME)

@app.on_event("startup")
async def startup_event():
    await create_tables()

@app.get("/health")
async def health_check():
    return {"service": SERVICE_NAME, "status": "running"}

app.mount("/api/customers", customer_app)
app.mount("/api/products", product_app)
app.mount("/api/inventory", inventory_app)
include_order_service(app, prefix="/api/orders")
