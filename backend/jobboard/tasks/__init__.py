"""
Celery Task Modules

Background tasks for job reconciliation:
- jobs.py: Scrape batch intake, expiration sweeps, IndexNow and alert delivery
"""

from jobboard.tasks.jobs import (
    save_scraped_jobs,
    deactivate_expired_jobs,
    submit_to_indexnow,
    send_low_job_count_alert,
)

__all__ = [
    "save_scraped_jobs",
    "deactivate_expired_jobs",
    "submit_to_indexnow",
    "send_low_job_count_alert",
]
