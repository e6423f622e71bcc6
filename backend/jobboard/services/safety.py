"""
Active-Set Safety Guard - circuit breaker for "not found in source" deactivation

After a scrape, active jobs the scraper did not report are presumed
removed from the source. A scraper that silently broke (redesign, auth
wall, rate limiting) reports far too few jobs, and trusting it would wipe
out a healthy catalog. When the found set looks anomalous against the
current active set, deactivation is skipped and an operator is alerted.

Stale-but-present listings are preferred over mass false removal.
"""

import logging
from typing import Iterable

from jobboard.config import ReconcilerConfig
from jobboard.middleware.metrics import record_deactivations, record_safety_guard_trip
from jobboard.models import Employer
from jobboard.repository import JobRepository
from jobboard.schemas import DeactivatedJob, VerificationResult
from jobboard.services.notifications import Notifier

logger = logging.getLogger(__name__)

SAFETY_GUARD_REASON = "safety_guard"
EMPTY_SCRAPE_REASON = "empty_scrape"


class ActiveSetSafetyGuard:
    def __init__(self, repository: JobRepository, config: ReconcilerConfig, notifier: Notifier):
        self.repository = repository
        self.config = config
        self.notifier = notifier

    def should_skip(self, found_count: int, active_count: int) -> bool:
        """True when the scrape is too small to trust for deactivation."""
        if active_count <= self.config.safety_min_active_jobs:
            return False
        if found_count < self.config.safety_min_found_jobs:
            return True
        return found_count / active_count < self.config.safety_min_found_ratio

    def verify(self, found_source_urls: Iterable[str], employer: Employer) -> VerificationResult:
        """
        Deactivate the employer's active jobs missing from this scrape.

        Args:
            found_source_urls: Source URLs reported by the scraper this run
            employer: Employer the scrape belongs to

        Returns:
            VerificationResult; skipped=True with a reason when nothing was written
        """
        found_source_urls = [url for url in found_source_urls if url]
        found = set(found_source_urls)
        found_count = len(found_source_urls)
        active_count = self.repository.count_active_jobs(employer.id)

        if self.should_skip(found_count, active_count):
            logger.warning(
                f"Safety guard: {employer.name} scrape found {found_count} jobs "
                f"but {active_count} are active, skipping deactivation"
            )
            record_safety_guard_trip(employer.slug)
            self.notifier.alert_low_job_count(employer.name, found_count, active_count)
            return VerificationResult(
                skipped=True,
                reason=SAFETY_GUARD_REASON,
                found_count=found_count,
                active_count=active_count,
            )

        if not found:
            logger.info(f"No source URLs in scrape for {employer.name}, skipping verification")
            return VerificationResult(
                skipped=True,
                reason=EMPTY_SCRAPE_REASON,
                active_count=active_count,
            )

        missing = self.repository.find_active_jobs_missing_from(employer.id, found)
        if not missing:
            return VerificationResult(found_count=found_count, active_count=active_count)

        count = self.repository.deactivate_jobs([job.id for job in missing])
        self.repository.commit()
        record_deactivations("not_found", count)
        logger.info(f"Marked {count} jobs as inactive (not found in source)")

        self.notifier.notify_deleted(job.slug for job in missing)

        return VerificationResult(
            count=count,
            jobs=[
                DeactivatedJob(id=job.id, title=job.title, source_url=job.source_url)
                for job in missing
            ],
            found_count=found_count,
            active_count=active_count,
        )
