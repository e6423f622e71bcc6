"""
Background Tasks for Job Reconciliation

Celery tasks for:
- Reconciling a scraper's batch into the catalog
- Sweeping expired jobs
- Notifying IndexNow about removed job pages (rate-limited)
- E-mailing operators when the safety guard trips

Batch tasks retry on failures that abort the whole batch (employer
resolution, lost database connection). Per-job failures never reach the
task; they come back in the result's errorsDetails.
"""

import logging
import time
from typing import Any, Dict, List

from prometheus_client import Histogram, Counter

from jobboard.celery import celery_app
from jobboard.config import get_settings, ReconcilerConfig

logger = logging.getLogger(__name__)

# ==================== Prometheus Metrics ====================

TASK_DURATION = Histogram(
    "celery_task_duration_seconds",
    "Time spent executing Celery tasks",
    ["task_name"]
)

TASK_FAILURES = Counter(
    "celery_task_failures_total",
    "Number of Celery task failures",
    ["task_name"]
)


# ==================== Helper Functions ====================

def build_reconciler(session):
    """Reconciler wired for workers: settings-driven config, queued notifications."""
    from jobboard.repository import JobRepository
    from jobboard.services.notifications import CeleryNotifier
    from jobboard.services.reconciler import JobReconciler

    return JobReconciler(
        JobRepository(session),
        config=ReconcilerConfig.from_settings(get_settings()),
        notifier=CeleryNotifier(),
    )


def get_db_session():
    from jobboard.database import get_db_session as _get_db_session

    return _get_db_session()


def get_indexnow_client():
    from jobboard.services.indexnow import IndexNowClient

    return IndexNowClient.from_settings(get_settings())


def get_alert_sender():
    from jobboard.services.alerts import AlertSender

    return AlertSender(get_settings())


# ==================== Celery Tasks ====================

@celery_app.task(bind=True, max_retries=3, default_retry_delay=60)
def save_scraped_jobs(self, jobs: List[Dict[str, Any]], employer: Dict[str, Any]) -> dict:
    """
    Reconcile one employer's scrape batch.

    Args:
        jobs: Scraped job records (scraper contract, camelCase keys)
        employer: Employer descriptor (employerName, employerSlug, ...)

    Returns:
        Batch result dict (total, created, updated, reactivated, errors,
        errorsDetails, deactivated)
    """
    start_time = time.time()
    session = get_db_session()

    try:
        result = build_reconciler(session).save_jobs(jobs, employer)
        return result.model_dump(by_alias=True)

    except Exception as exc:
        TASK_FAILURES.labels(task_name="save_scraped_jobs").inc()
        logger.error(f"Scrape batch failed for {employer.get('employerName')}: {exc}")
        raise self.retry(exc=exc, countdown=60)

    finally:
        session.close()
        duration = time.time() - start_time
        TASK_DURATION.labels(task_name="save_scraped_jobs").observe(duration)


@celery_app.task(bind=True, max_retries=3)
def deactivate_expired_jobs(self) -> dict:
    """Deactivate every active job whose expiry has passed."""
    start_time = time.time()
    session = get_db_session()

    try:
        result = build_reconciler(session).deactivate_expired_jobs()
        return result.model_dump()

    except Exception as exc:
        TASK_FAILURES.labels(task_name="deactivate_expired_jobs").inc()
        raise self.retry(exc=exc, countdown=60)

    finally:
        session.close()
        duration = time.time() - start_time
        TASK_DURATION.labels(task_name="deactivate_expired_jobs").observe(duration)


@celery_app.task(bind=True, rate_limit="10/m", max_retries=3)
def submit_to_indexnow(self, slugs: List[str], action: str = "update") -> bool:
    """
    Notify IndexNow about changed job pages.

    Rate limited so a burst of deactivations does not get the site
    throttled by the search engines.

    Returns:
        True if at least one batch was accepted
    """
    start_time = time.time()

    try:
        return get_indexnow_client().submit_slugs(slugs, action)

    except Exception as exc:
        TASK_FAILURES.labels(task_name="submit_to_indexnow").inc()
        logger.error(f"IndexNow submission failed: {exc}")
        raise self.retry(exc=exc, countdown=300)

    finally:
        duration = time.time() - start_time
        TASK_DURATION.labels(task_name="submit_to_indexnow").observe(duration)


@celery_app.task(bind=True, max_retries=3)
def send_low_job_count_alert(self, employer_name: str, found_count: int, active_count: int) -> bool:
    """E-mail operators that the safety guard skipped deactivation."""
    start_time = time.time()

    try:
        return get_alert_sender().send_low_job_count_alert(employer_name, found_count, active_count)

    except Exception as exc:
        TASK_FAILURES.labels(task_name="send_low_job_count_alert").inc()
        raise self.retry(exc=exc, countdown=60)

    finally:
        duration = time.time() - start_time
        TASK_DURATION.labels(task_name="send_low_job_count_alert").observe(duration)
