"""Prometheus metric inventory.

All metrics live in the default registry and are exported by GET /metrics.
Modules import the metric they own and update it where the event happens.
"""

from __future__ import annotations

from prometheus_client import Counter, Gauge, Histogram

# --- HTTP traffic (MetricsMiddleware) ---

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total HTTP requests by method, endpoint, and status code",
    ["method", "endpoint", "status_code"],
)

REQUEST_DURATION = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)

ACTIVE_REQUESTS = Gauge(
    "http_active_requests",
    "Number of HTTP requests currently being processed",
)

# --- Application events ---

LOGIN_ATTEMPTS = Counter(
    "login_attempts_total",
    "Login attempts by outcome",
    ["result"],  # success|invalid_credentials|missing_fields
)

VIDEO_PROGRESS_UPDATES = Counter(
    "video_progress_updates_total",
    "Video progress upserts by outcome",
    ["result"],  # ok|error
)

RATE_LIMIT_HITS = Counter(
    "rate_limit_hits_total",
    "Requests rejected by rate limiting (429s)",
    ["key_type"],  # ip
)
