"""
Middleware Package

Contains Prometheus metrics for:
- Admin API requests
- Job reconciliation, deactivation and safety guard activity
"""

from jobboard.middleware.metrics import (
    PrometheusMiddleware,
    setup_metrics,
    REQUEST_LATENCY,
    REQUEST_COUNT,
    ACTIVE_REQUESTS,
    JOBS_RECONCILED,
    JOBS_DEACTIVATED,
    SAFETY_GUARD_TRIPS,
    BATCH_DURATION,
)

__all__ = [
    "PrometheusMiddleware",
    "setup_metrics",
    "REQUEST_LATENCY",
    "REQUEST_COUNT",
    "ACTIVE_REQUESTS",
    "JOBS_RECONCILED",
    "JOBS_DEACTIVATED",
    "SAFETY_GUARD_TRIPS",
    "BATCH_DURATION",
]
