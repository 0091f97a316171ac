"""
Prometheus metrics for the card license service.

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

# Card metrics
card_verifications_total = Counter(
    "card_verifications_total",
    "Total card verification requests by outcome",
    ["outcome"],
)

cards_generated_total = Counter(
    "cards_generated_total",
    "Total cards generated",
)

cards_expired_total = Counter(
    "cards_expired_total",
    "Total cards moved to the expired status",
    ["source"],
)

cards_unbound_total = Counter(
    "cards_unbound_total",
    "Total cards released from their device",
)

card_background_write_failures_total = Counter(
    "card_background_write_failures_total",
    "Best-effort card writes that failed",
    ["operation"],
)

# Error metrics
errors_total = Counter(
    "errors_total",
    "Total errors",
    ["error_type", "endpoint"],
)
