"""
Prometheus metrics for the license service.

Custom metrics for business logic and performance monitoring.
"""

from prometheus_client import Counter, Histogram

# Issuance
licenses_issued_total = Counter(
    "viri_licenses_issued_total",
    "Total licenses issued",
    ["source"],
)

license_issuance_replays_total = Counter(
    "viri_license_issuance_replays_total",
    "Purchase events delivered again for an already issued license",
)

license_issuance_exhausted_total = Counter(
    "viri_license_issuance_exhausted_total",
    "Issuances that ran out of key generation attempts",
)

# Activation
license_validations_total = Counter(
    "viri_license_validations_total",
    "License validations by outcome",
    ["reason"],
)

license_bindings_total = Counter(
    "viri_license_bindings_total",
    "First-activation machine bindings",
)

license_resets_total = Counter(
    "viri_license_resets_total",
    "Owner-initiated license resets",
)

# Administration
identities_revoked_total = Counter(
    "viri_identities_revoked_total",
    "Identities fully revoked by an administrator",
)

revocations_incomplete_total = Counter(
    "viri_revocations_incomplete_total",
    "Revocations that stopped partway",
    ["failed_step"],
)

# HTTP
http_requests_total = Counter(
    "viri_http_requests_total",
    "HTTP requests by method, endpoint and status",
    ["method", "endpoint", "status_code"],
)

http_request_duration_seconds = Histogram(
    "viri_http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
)
