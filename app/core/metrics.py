"""Prometheus metrics for monitoring"""
from prometheus_client import Counter, Histogram, CollectorRegistry, generate_latest

registry = CollectorRegistry()

request_count = Counter(
    'http_requests_total',
    'Total HTTP requests',
    ['method', 'endpoint', 'status'],
    registry=registry
)

request_duration = Histogram(
    'http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'endpoint'],
    registry=registry
)

quotes_calculated = Counter(
    'quotes_calculated_total',
    'Total quotes calculated',
    ['transaction_type'],
    registry=registry
)

quote_failures = Counter(
    'quote_failures_total',
    'Total quote calculations that failed unexpectedly',
    registry=registry
)

webhook_deliveries = Counter(
    'webhook_deliveries_total',
    'Total enquiry webhook deliveries',
    ['status'],
    registry=registry
)

webhook_duration = Histogram(
    'webhook_delivery_duration_seconds',
    'Enquiry webhook delivery duration in seconds',
    ['status'],
    registry=registry
)


def get_metrics_text() -> str:
    """Generate Prometheus metrics in text format"""
    return generate_latest(registry).decode('utf-8')
