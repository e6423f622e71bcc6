"""
Prometheus Metrics

Provides request and reconciliation metrics for monitoring:
- HTTP request latency and count for the admin API
- Jobs reconciled per action (created, updated, reactivated, error)
- Jobs deactivated per reason (not_found, expired, manual)
- Safety guard trips per employer
- Scrape batch duration

Usage:
    from jobboard.middleware.metrics import setup_metrics

    # In main.py
    app = FastAPI()
    setup_metrics(app)

Metrics Endpoint:
    GET /metrics - Prometheus-format metrics
"""

import time
import logging
from typing import Callable

from fastapi import FastAPI, Request, Response
from fastapi.responses import PlainTextResponse
from prometheus_client import (
    Counter,
    Gauge,
    Histogram,
    CONTENT_TYPE_LATEST,
    generate_latest,
    REGISTRY,
)
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.routing import Match

logger = logging.getLogger(__name__)

# ==================== Prometheus Metrics ====================

REQUEST_LATENCY = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency in seconds",
    ["method", "endpoint", "status"],
    buckets=[0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0]
)

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"]
)

ACTIVE_REQUESTS = Gauge(
    "http_requests_active",
    "Number of active HTTP requests",
    ["method", "endpoint"]
)

# Reconciliation metrics
JOBS_RECONCILED = Counter(
    "jobs_reconciled_total",
    "Scraped job records processed",
    ["action"]  # created, updated, reactivated, error
)

JOBS_DEACTIVATED = Counter(
    "jobs_deactivated_total",
    "Jobs deactivated",
    ["reason"]  # not_found, expired, manual
)

SAFETY_GUARD_TRIPS = Counter(
    "safety_guard_trips_total",
    "Scrape batches whose deactivation was skipped by the safety guard",
    ["employer"]
)

BATCH_DURATION = Histogram(
    "scrape_batch_duration_seconds",
    "Time to reconcile one scrape batch",
    buckets=[0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0, 120.0, 300.0]
)


class PrometheusMiddleware(BaseHTTPMiddleware):
    """
    FastAPI middleware for Prometheus metrics collection.

    Records:
    - Request latency
    - Request count by status code
    - Active request count
    """

    def __init__(self, app: FastAPI, app_name: str = "jobboard"):
        super().__init__(app)
        self.app_name = app_name

    async def dispatch(
        self,
        request: Request,
        call_next: Callable
    ) -> Response:
        """Process request and record metrics."""
        endpoint = self._get_endpoint(request)
        method = request.method

        if endpoint == "/metrics":
            return await call_next(request)

        ACTIVE_REQUESTS.labels(method=method, endpoint=endpoint).inc()
        start_time = time.perf_counter()

        try:
            response = await call_next(request)
            status = str(response.status_code)
        except Exception as e:
            status = "500"
            logger.error(f"Request error: {e}")
            raise
        finally:
            duration = time.perf_counter() - start_time

            REQUEST_LATENCY.labels(
                method=method,
                endpoint=endpoint,
                status=status
            ).observe(duration)

            REQUEST_COUNT.labels(
                method=method,
                endpoint=endpoint,
                status=status
            ).inc()

            ACTIVE_REQUESTS.labels(
                method=method,
                endpoint=endpoint
            ).dec()

        return response

    def _get_endpoint(self, request: Request) -> str:
        """
        Get normalized endpoint path from request.

        Uses route pattern (e.g., /api/jobs/{job_id}/deactivate) instead of
        actual path to avoid high cardinality.
        """
        for route in request.app.routes:
            match, _ = route.matches(request.scope)
            if match == Match.FULL:
                return route.path

        return request.url.path


def metrics_endpoint(request: Request) -> Response:
    """Endpoint handler for Prometheus metrics scraping."""
    return PlainTextResponse(
        content=generate_latest(REGISTRY),
        media_type=CONTENT_TYPE_LATEST
    )


def setup_metrics(app: FastAPI) -> None:
    """
    Configure Prometheus metrics for FastAPI app.

    Args:
        app: FastAPI application instance
    """
    app.add_middleware(PrometheusMiddleware, app_name="jobboard")
    app.add_route("/metrics", metrics_endpoint, methods=["GET"])

    logger.info("Prometheus metrics configured")


# ==================== Helper Functions ====================

def record_reconciled(action: str, count: int = 1) -> None:
    """Record processed job records for an action."""
    if count:
        JOBS_RECONCILED.labels(action=action).inc(count)


def record_deactivations(reason: str, count: int) -> None:
    """Record deactivated jobs for a reason."""
    if count:
        JOBS_DEACTIVATED.labels(reason=reason).inc(count)


def record_safety_guard_trip(employer: str) -> None:
    """Record a skipped deactivation."""
    SAFETY_GUARD_TRIPS.labels(employer=employer).inc()


def record_batch_duration(duration: float) -> None:
    """Record scrape batch reconciliation time."""
    BATCH_DURATION.observe(duration)
