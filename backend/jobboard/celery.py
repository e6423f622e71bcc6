"""
Celery Application Configuration

Configures Celery for background processing with:
- Redis as message broker and result backend
- Task autodiscovery from jobboard.tasks module
- Separate queues for scrape batches and outbound notifications

Usage:
    # Start worker:
    celery -A jobboard.celery worker --loglevel=info

    # Enqueue a scrape batch:
    from jobboard.tasks.jobs import save_scraped_jobs
    save_scraped_jobs.delay(jobs, {"employerName": "Acme Health", "employerSlug": "acme-health"})
"""

from celery import Celery
from jobboard.config import get_settings

settings = get_settings()

celery_app = Celery(
    "jobboard",
    broker=settings.celery_broker_url,
    backend=settings.celery_result_backend,
)

celery_app.conf.update(
    # Task settings
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,

    # One batch at a time per worker process
    worker_prefetch_multiplier=1,
    worker_concurrency=4,

    # Result settings
    result_expires=3600,
    task_track_started=True,

    # Retry settings
    task_acks_late=True,
    task_reject_on_worker_lost=True,

    # Rate limiting
    worker_disable_rate_limits=False,

    task_routes={
        "jobboard.tasks.jobs.save_scraped_jobs": {"queue": "scrapes"},
        "jobboard.tasks.jobs.deactivate_expired_jobs": {"queue": "scrapes"},
        "jobboard.tasks.jobs.submit_to_indexnow": {"queue": "notifications"},
        "jobboard.tasks.jobs.send_low_job_count_alert": {"queue": "notifications"},
    },

    task_default_queue="default",
)

celery_app.autodiscover_tasks(["jobboard.tasks"])
