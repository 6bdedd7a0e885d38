from .setup import setup_observability
from .metrics import (
    orders_created_total,
    order_creation_duration_seconds,
    order_items_total
)
