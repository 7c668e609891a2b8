"""Prometheus metric inventory.

Counters only go up (request totals, rejected payloads), gauges go up
and down (in-flight requests), histograms bucket observations so
Prometheus can compute percentiles:

  histogram_quantile(0.95, rate(http_request_duration_seconds_bucket[5m]))

All metrics live in the default registry and are exposed by GET /metrics.
"""

from __future__ import annotations

from prometheus_client import Counter, Gauge, Histogram

# ---------------------------------------------------------------------------
# HTTP metrics (populated by the MetricsMiddleware)
# ---------------------------------------------------------------------------

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total HTTP requests by method, endpoint, and status code",
    ["method", "endpoint", "status_code"],
)

REQUEST_DURATION = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    # Argon2 hashing dominates create/login latency, so the upper
    # buckets matter more here than for a pure CRUD service.
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)

ACTIVE_REQUESTS = Gauge(
    "http_active_requests",
    "Number of HTTP requests currently being processed",
)

# ---------------------------------------------------------------------------
# Domain metrics
# ---------------------------------------------------------------------------

USER_VALIDATION_FAILURES = Counter(
    "user_validation_failures_total",
    "User payloads rejected by the validation pipeline",
    ["reason"],  # error code, e.g. "InvalidCpfFormat", "DuplicateEmail"
)

LOGIN_ATTEMPTS = Counter(
    "login_attempts_total",
    "Login attempts by result",
    ["result"],  # "success" or "failure"
)
