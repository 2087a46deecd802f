"""
Prometheus metrics collection.
"""

from prometheus_client import Counter, Histogram

# ============================================================
# HTTP Metrics
# ============================================================

http_requests_total = Counter(
    "huissier_http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"],
)

http_request_duration_seconds = Histogram(
    "huissier_http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)

http_errors_total = Counter(
    "huissier_http_errors_total",
    "Total HTTP errors",
    ["method", "endpoint", "error_type"],
)

# ============================================================
# Authentication Metrics
# ============================================================

auth_attempts_total = Counter(
    "huissier_auth_attempts_total",
    "Request authentication attempts by outcome",
    ["outcome"],
)

authorization_lookups_total = Counter(
    "huissier_authorization_lookups_total",
    "Authorization lookups by result",
    ["result"],
)

role_gate_denials_total = Counter(
    "huissier_role_gate_denials_total",
    "Requests rejected for insufficient role",
    ["required_role"],
)
