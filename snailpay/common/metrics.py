"""Prometheus metric definitions for outbound Snail API calls."""

from prometheus_client import Counter, Histogram


snail_requests_total = Counter(
    "snail_requests_total",
    "Total requests sent to the Snail API",
    ["operation", "status_code"],
)
snail_request_duration_seconds = Histogram(
    "snail_request_duration_seconds",
    "Snail API request duration seconds",
    ["operation"],
)
snail_validation_failures_total = Counter(
    "snail_validation_failures_total",
    "Requests rejected locally before being sent",
    ["operation"],
)
