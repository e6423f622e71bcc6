"""
Job Reconciler - merges scrape batches into the job catalog

Processing Pipeline (one employer batch):
    1. Resolve the employer (get-or-create, fatal on failure)
    2. For each scraped record, in scraper order:
        a. Match identity (employer job ID first, then URL)
        b. Create, or update with expiry extension and content merge
        c. Commit, then resolve its location (advisory)
    3. Safety-guarded deactivation of jobs missing from the scrape
    4. Expiration sweep across all employers
    5. Touch the employer's last_scraped timestamp

One bad record never sinks the batch: its error is recorded in the
result and the loop moves on. New and content-upgraded jobs are left
unclassified (classified_at=None, inactive) for the classifier.
"""

import logging
import time
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from jobboard.config import ReconcilerConfig
from jobboard.database import utcnow
from jobboard.middleware.metrics import (
    record_batch_duration,
    record_deactivations,
    record_reconciled,
)
from jobboard.models import Employer, Job
from jobboard.repository import JobRepository
from jobboard.schemas import EmployerData, ErrorDetail, JobStats, SaveJobsResult, ScrapedJob
from jobboard.services.content import CompletenessPredicate, ContentMergePolicy, MarkerCompleteness
from jobboard.services.expiry import ExpiryPolicy
from jobboard.services.identity import IdentityMatcher
from jobboard.services.normalize import normalize_city, normalize_state
from jobboard.services.notifications import Notifier, NullNotifier
from jobboard.services.resolvers import EmployerResolver, LocationResolver
from jobboard.services.safety import ActiveSetSafetyGuard
from jobboard.services.sweeper import ExpirationSweeper

logger = logging.getLogger(__name__)

JobInput = Union[ScrapedJob, Dict[str, Any]]

# Set by the classifier once a job has been classified
CLASSIFIER_FIELDS = ("job_type", "shift_type", "specialty", "experience_level")


@dataclass
class SaveOutcome:
    job: Job
    is_new: bool
    was_reactivated: bool = False


def _field(item: Any, camel: str, snake: str) -> Optional[Any]:
    if isinstance(item, dict):
        return item.get(camel, item.get(snake))
    return getattr(item, snake, None)


class JobReconciler:
    """
    Reconciles scraped job batches against stored jobs.

    Attributes:
        repository: Storage access (owns the session/transaction)
        config: Freshness window, safety thresholds and completeness rules
        notifier: Fire-and-forget indexing/alert channel
        clock: Returns the current naive-UTC time
    """

    def __init__(
        self,
        repository: JobRepository,
        config: Optional[ReconcilerConfig] = None,
        notifier: Optional[Notifier] = None,
        clock: Callable[[], datetime] = utcnow,
        is_complete: Optional[CompletenessPredicate] = None,
    ):
        self.repository = repository
        self.config = config or ReconcilerConfig()
        self.notifier = notifier or NullNotifier()
        self.clock = clock

        self.employers = EmployerResolver(repository, clock)
        self.locations = LocationResolver(repository)
        self.matcher = IdentityMatcher(repository)
        self.expiry = ExpiryPolicy(self.config.freshness_window_days)
        self.content = ContentMergePolicy(
            is_complete
            or MarkerCompleteness(self.config.content_markers, self.config.content_min_length)
        )
        self.safety_guard = ActiveSetSafetyGuard(repository, self.config, self.notifier)
        self.sweeper = ExpirationSweeper(repository, self.notifier, clock)

    # ==================== Single job ====================

    def save_job(
        self,
        job_data: ScrapedJob,
        employer: Employer,
        is_complete: Optional[CompletenessPredicate] = None,
    ) -> SaveOutcome:
        """Create or update one job. Flushes but does not commit."""
        now = self.clock()
        existing = self.matcher.find_existing(
            job_data.source_url, job_data.source_job_id, employer.id
        )

        if existing is None:
            return self._create_job(job_data, employer, now)
        return self._update_job(existing, job_data, now, is_complete)

    def _structured_fields(self, job_data: ScrapedJob) -> Dict[str, Any]:
        return {
            "title": job_data.title,
            "location": job_data.location,
            "city": normalize_city(job_data.city),
            "state": normalize_state(job_data.state),
            "zip_code": job_data.zip_code,
            "is_remote": job_data.is_remote,
            "requirements": job_data.requirements,
            "responsibilities": job_data.responsibilities,
            "benefits": job_data.benefits,
            "department": job_data.department,
            "salary_min": job_data.salary_min,
            "salary_max": job_data.salary_max,
            "salary_currency": job_data.salary_currency,
            "salary_type": job_data.salary_type,
            "salary_min_hourly": job_data.salary_min_hourly,
            "salary_max_hourly": job_data.salary_max_hourly,
            "salary_min_annual": job_data.salary_min_annual,
            "salary_max_annual": job_data.salary_max_annual,
            "posted_date": job_data.posted_date,
            "meta_description": job_data.meta_description,
            "keywords": list(job_data.keywords),
        }

    def _create_job(self, job_data: ScrapedJob, employer: Employer, now: datetime) -> SaveOutcome:
        job = Job(
            employer_id=employer.id,
            slug=job_data.slug,
            source_url=job_data.source_url,
            source_job_id=job_data.source_job_id,
            description=job_data.description,
            raw_description=job_data.raw_content,
            # Pending until the classifier approves it
            is_active=False,
            classified_at=None,
            **{field: getattr(job_data, field) for field in CLASSIFIER_FIELDS},
            **self._structured_fields(job_data),
        )
        self.expiry.apply(job, self.expiry.calculate_expiry(job_data.expires_date, now))
        self.repository.add_job(job)

        logger.info(f"Created new job: {job_data.title}")
        return SaveOutcome(job=job, is_new=True)

    def _update_job(
        self,
        existing: Job,
        job_data: ScrapedJob,
        now: datetime,
        is_complete: Optional[CompletenessPredicate],
    ) -> SaveOutcome:
        expiry = self.expiry.extend_expiry_for_refound_job(now, existing)
        decision = self.content.decide(existing, job_data.raw_content, is_complete)
        should_reactivate = (
            not existing.is_active
            and existing.was_ever_active
            and existing.classified_at is not None
            and not decision.should_reclassify
        )

        for field, value in self._structured_fields(job_data).items():
            setattr(existing, field, value)
        if decision.overwrite_description:
            for field in CLASSIFIER_FIELDS:
                setattr(existing, field, getattr(job_data, field))

        # URLs may improve over time; the slug never changes
        existing.source_url = job_data.source_url
        if job_data.source_job_id:
            existing.source_job_id = job_data.source_job_id

        self.content.apply(existing, decision, job_data.description, job_data.raw_content)
        self.expiry.apply(existing, expiry)

        if decision.should_reclassify:
            existing.is_active = False
        elif should_reactivate:
            existing.is_active = True

        self.repository.flush()

        logger.info(
            f"Updated existing job: {job_data.title}"
            f"{' (reactivated)' if should_reactivate else ''}"
        )
        return SaveOutcome(job=existing, is_new=False, was_reactivated=should_reactivate)

    def _resolve_location(self, job_data: ScrapedJob) -> None:
        try:
            self.locations.resolve(job_data.city, job_data.state)
            self.repository.commit()
        except Exception as e:
            self.repository.rollback()
            logger.warning(f"Location lookup failed for {job_data.city}, {job_data.state}: {e}")

    # ==================== Batch ====================

    def save_jobs(
        self,
        jobs_data: Iterable[JobInput],
        employer_data: Union[EmployerData, Dict[str, Any]],
        verify_active_jobs: bool = True,
        is_complete: Optional[CompletenessPredicate] = None,
    ) -> SaveJobsResult:
        """
        Reconcile one employer's scrape batch.

        Args:
            jobs_data: Scraped records (ScrapedJob or raw dicts), in scraper order
            employer_data: Employer descriptor for the batch
            verify_active_jobs: Deactivate active jobs missing from this scrape
            is_complete: Source-specific completeness predicate override

        Returns:
            SaveJobsResult with created/updated/reactivated/errors/deactivated counts

        Raises:
            Any storage error while resolving or touching the employer
        """
        start_time = time.perf_counter()
        jobs_data = list(jobs_data)
        if not isinstance(employer_data, EmployerData):
            employer_data = EmployerData.model_validate(employer_data)

        logger.info(f"Saving {len(jobs_data)} jobs for {employer_data.employer_name}")

        employer = self.employers.resolve(employer_data)
        self.repository.commit()

        result = SaveJobsResult(total=len(jobs_data))
        found_source_urls: List[str] = [
            url for url in (_field(item, "sourceUrl", "source_url") for item in jobs_data) if url
        ]

        for item in jobs_data:
            try:
                job_data = item if isinstance(item, ScrapedJob) else ScrapedJob.model_validate(item)
                outcome = self.save_job(job_data, employer, is_complete)
                self.repository.commit()
            except Exception as e:
                self.repository.rollback()
                title = _field(item, "title", "title")
                result.errors += 1
                result.errors_details.append(ErrorDetail(title=title, error=str(e)))
                record_reconciled("error")
                logger.error(f"Failed to save job: {title} - {e}")
                continue

            if outcome.is_new:
                result.created += 1
            else:
                result.updated += 1
                if outcome.was_reactivated:
                    result.reactivated += 1

            self._resolve_location(job_data)

        record_reconciled("created", result.created)
        record_reconciled("updated", result.updated)
        record_reconciled("reactivated", result.reactivated)

        if verify_active_jobs:
            try:
                verification = self.safety_guard.verify(found_source_urls, employer)
                result.deactivated = verification.count
            except Exception as e:
                self.repository.rollback()
                logger.error(f"Error verifying active jobs: {e}")

        try:
            expired = self.sweeper.sweep()
            # Not additive: report the sweep only when verification removed nothing
            if result.deactivated == 0:
                result.deactivated = expired.count
        except Exception as e:
            self.repository.rollback()
            logger.error(f"Error deactivating expired jobs: {e}")

        self.repository.touch_employer(employer, self.clock())
        self.repository.commit()

        logger.info(
            f"Save results for {employer_data.employer_name}: total={result.total} "
            f"created={result.created} updated={result.updated} "
            f"reactivated={result.reactivated} deactivated={result.deactivated} "
            f"errors={result.errors}"
        )
        record_batch_duration(time.perf_counter() - start_time)
        return result

    # ==================== Maintenance ====================

    def deactivate_job(self, job_id: str, reason: str = "not_found") -> Job:
        """
        Deactivate a single job.

        Raises:
            JobNotFoundError: If no job has this ID
        """
        job = self.repository.get_job(job_id)
        job.is_active = False
        self.repository.commit()
        record_deactivations(reason, 1)
        logger.info(f"Deactivated job {job_id}: {reason}")

        self.notifier.notify_deleted([job.slug])
        return job

    def deactivate_expired_jobs(self):
        return self.sweeper.sweep()

    def get_job_stats(self) -> JobStats:
        return self.repository.job_stats()
