"""
Prometheus metrics for the brand catalog service.

Custom metrics for business logic and performance monitoring.
"""

from prometheus_client import Counter, Histogram

# HTTP metrics
http_requests_total = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status_code"],
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.0, 5.0, 10.0],
)

# Brand lifecycle metrics
brands_created_total = Counter(
    "brands_created_total",
    "Total brands created",
)

brands_updated_total = Counter(
    "brands_updated_total",
    "Total brands updated",
    ["mode"],
)

brands_deleted_total = Counter(
    "brands_deleted_total",
    "Total brands deleted",
)

brand_images_stored_total = Counter(
    "brand_images_stored_total",
    "Total brand images written to storage",
    ["type"],
)

# Cache metrics
cache_hits_total = Counter(
    "cache_hits_total",
    "Total cache hits",
    ["cache_key"],
)

cache_misses_total = Counter(
    "cache_misses_total",
    "Total cache misses",
    ["cache_key"],
)

# Error metrics
errors_total = Counter(
    "errors_total",
    "Total errors",
    ["error_type", "endpoint"],
)
