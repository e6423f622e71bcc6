"""
Expiry Policy - when a job stops being listed

Explicit dates from the source are authoritative and never renewed.
Jobs without one get a calculated date that is pushed forward every time
a scrape finds the job again.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from jobboard.models import Job


@dataclass
class ExpiryDates:
    expires_date: Optional[datetime]
    calculated_expires_date: Optional[datetime]
    scraped_at: datetime


class ExpiryPolicy:
    def __init__(self, freshness_window_days: int = 60):
        self.window = timedelta(days=freshness_window_days)

    def calculate_expiry(
        self, explicit_expiry: Optional[datetime], scraped_at: datetime
    ) -> ExpiryDates:
        """Expiry for a newly created job."""
        if explicit_expiry is not None:
            return ExpiryDates(
                expires_date=explicit_expiry,
                calculated_expires_date=None,
                scraped_at=scraped_at,
            )

        return ExpiryDates(
            expires_date=None,
            calculated_expires_date=scraped_at + self.window,
            scraped_at=scraped_at,
        )

    def extend_expiry_for_refound_job(self, now: datetime, existing_job: Job) -> ExpiryDates:
        """Expiry for a job seen again; only the calculated track is renewed."""
        if existing_job.expires_date is not None:
            return ExpiryDates(
                expires_date=existing_job.expires_date,
                calculated_expires_date=existing_job.calculated_expires_date,
                scraped_at=now,
            )

        return ExpiryDates(
            expires_date=None,
            calculated_expires_date=now + self.window,
            scraped_at=now,
        )

    def apply(self, job: Job, dates: ExpiryDates) -> None:
        job.expires_date = dates.expires_date
        job.calculated_expires_date = dates.calculated_expires_date
        job.scraped_at = dates.scraped_at
