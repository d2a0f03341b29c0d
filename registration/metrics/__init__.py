# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Prometheus metrics — single source of truth for all metric objects.
Imported by services, repositories and middleware. Never instantiated in controllers.
"""

from prometheus_client import Counter, Histogram

# ── HTTP Metrics (used by middleware) ──
REQUEST_COUNT = Counter(
    "registration_requests_total",
    "Total HTTP requests to the registration service",
    ["method", "endpoint", "status"],
)
REQUEST_LATENCY = Histogram(
    "registration_request_duration_seconds",
    "Request latency in seconds",
    ["method", "endpoint"],
)
HTTP_ERRORS = Counter(
    "registration_http_errors_total",
    "Total HTTP error responses",
    ["method", "endpoint", "status"],
)

# ── Business Metrics (updated by service layer only) ──
REGISTRATIONS_TOTAL = Counter(
    "registration_submissions_total",
    "Registration submissions by outcome",
    ["outcome"],
)
CALL_STATUS_UPDATES = Counter(
    "registration_call_status_updates_total",
    "Call-campaign status updates by outcome",
    ["call_status", "outcome"],
)
LOGIN_ATTEMPTS = Counter(
    "registration_login_attempts_total",
    "Admin login attempts by outcome",
    ["outcome"],
)

# ── Row store ──
ROW_STORE_OPERATIONS = Counter(
    "registration_row_store_operations_total",
    "Row store calls by operation and outcome",
    ["operation", "outcome"],
)
ROW_STORE_LATENCY = Histogram(
    "registration_row_store_duration_seconds",
    "Row store call latency in seconds",
    ["operation"],
)
