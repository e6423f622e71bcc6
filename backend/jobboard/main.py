"""
Job Board Reconciliation Service - Main Application Entry Point

This module initializes the FastAPI admin application with:
- Database schema initialization
- Background scheduler for the periodic expiration sweep
- Prometheus metrics
- API router registration

Architecture:
    FastAPI App
    ├── Lifespan Management (startup/shutdown)
    ├── Prometheus Middleware (/metrics)
    └── API Router
        ├── /api/jobs - Expiration sweep, manual deactivation
        └── /api/stats - Catalog statistics

Scrape batches arrive through the Celery worker (jobboard.tasks.jobs),
not through this API.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from jobboard.database import init_db
from jobboard.api import api_router
from jobboard.middleware import setup_metrics
from jobboard.scheduler import start_scheduler, stop_scheduler

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifecycle events.

    Startup:
        1. Initialize database tables
        2. Start the expiration sweep scheduler

    Shutdown:
        1. Gracefully stop the scheduler
    """
    init_db()
    start_scheduler()
    yield
    stop_scheduler()


app = FastAPI(
    title="Job Board Reconciliation API",
    description="Admin surface for the job reconciliation engine",
    version="0.1.0",
    lifespan=lifespan,
)

setup_metrics(app)
app.include_router(api_router)


@app.get("/health")
async def health_check():
    return {"status": "healthy"}
