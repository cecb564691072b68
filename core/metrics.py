"""
Prometheus metrics for the license service.

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

# License metrics
licenses_provisioned_total = Counter(
    "licenses_provisioned_total",
    "Total licenses provisioned",
    ["product_id"],
)

license_validations_total = Counter(
    "license_validations_total",
    "Total license validation verdicts",
    ["result"],
)

notifications_failed_total = Counter(
    "notifications_failed_total",
    "Total customer notifications that could not be delivered",
)

# Error metrics
errors_total = Counter(
    "errors_total",
    "Total errors",
    ["error_type", "endpoint"],
)
