from prometheus_client import Counter, Histogram

# Business Metrics
orders_created_total = Counter(
    "orders_created_total",
    "Order creation attempts by outcome",
    ["outcome"] # Labels: 'committed', 'rejected', 'rolled_back'
)

order_creation_duration_seconds = Histogram(
    "order_creation_duration_seconds",
    "Order creation duration in seconds"
)

order_items_total = Counter(
    "order_items_total",
    "Order item rows committed"
)
