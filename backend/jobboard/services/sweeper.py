import logging
from datetime import datetime
from typing import Callable

from jobboard.database import utcnow
from jobboard.middleware.metrics import record_deactivations
from jobboard.repository import JobRepository
from jobboard.schemas import DeactivatedJob, SweepResult
from jobboard.services.notifications import Notifier

logger = logging.getLogger(__name__)


class ExpirationSweeper:
    """
    Deactivates every active job, across all employers, whose explicit or
    calculated expiry has passed. Runs after every scrape batch and on its
    own schedule; it never activates anything.
    """

    def __init__(
        self,
        repository: JobRepository,
        notifier: Notifier,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.repository = repository
        self.notifier = notifier
        self.clock = clock

    def sweep(self) -> SweepResult:
        now = self.clock()
        expired = self.repository.find_expired_active_jobs(now)

        if not expired:
            logger.info("No expired jobs to deactivate")
            return SweepResult()

        count = self.repository.deactivate_jobs([job.id for job in expired])
        self.repository.commit()
        record_deactivations("expired", count)
        logger.info(f"Deactivated {count} expired jobs")

        self.notifier.notify_deleted(job.slug for job in expired)

        return SweepResult(
            count=count,
            jobs=[
                DeactivatedJob(id=job.id, title=job.title, source_url=job.source_url)
                for job in expired
            ],
        )
