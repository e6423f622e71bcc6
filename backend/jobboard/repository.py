"""
Job Repository - storage access for the reconciliation engine

Wraps a SQLAlchemy Session so the engine never touches a global client.
Tests hand it an in-memory SQLite session; workers hand it a session from
get_db_session().

Get-or-create paths (employers, locations) insert with ON CONFLICT DO
NOTHING and re-select, so two batches racing on the same employer or city
both end up with the same row instead of one failing.
"""

import logging
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy import select, update, func
from sqlalchemy.orm import Session

from jobboard.models import Employer, Location, Job
from jobboard.schemas import JobStats

logger = logging.getLogger(__name__)


class JobNotFoundError(LookupError):
    """Raised when a job ID does not exist."""


class JobRepository:
    """
    Storage operations used by the resolvers, matcher, guard and sweeper.

    Writes are flushed, never committed; the caller owns the transaction
    through commit() and rollback().
    """

    def __init__(self, session: Session):
        self.session = session

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()

    def flush(self) -> None:
        self.session.flush()

    def _insert_ignoring_conflicts(self, model, values: Dict[str, Any]) -> None:
        dialect = self.session.get_bind().dialect.name
        if dialect == "postgresql":
            from sqlalchemy.dialects.postgresql import insert
        elif dialect == "sqlite":
            from sqlalchemy.dialects.sqlite import insert
        else:
            self.session.add(model(**values))
            self.session.flush()
            return

        self.session.execute(insert(model).values(**values).on_conflict_do_nothing())

    # ==================== Employers ====================

    def get_employer_by_slug(self, slug: Optional[str]) -> Optional[Employer]:
        if not slug:
            return None
        return self.session.execute(
            select(Employer).where(Employer.slug == slug)
        ).scalar_one_or_none()

    def get_employer_by_name(self, name: Optional[str]) -> Optional[Employer]:
        if not name:
            return None
        return self.session.execute(
            select(Employer).where(Employer.name == name)
        ).scalar_one_or_none()

    def create_employer(
        self,
        name: str,
        slug: str,
        career_page_url: Optional[str],
        ats_platform: str,
    ) -> Employer:
        self._insert_ignoring_conflicts(
            Employer,
            {
                "name": name,
                "slug": slug,
                "career_page_url": career_page_url,
                "ats_platform": ats_platform,
                "is_active": True,
            },
        )
        employer = self.get_employer_by_slug(slug) or self.get_employer_by_name(name)
        if employer is None:
            raise RuntimeError(f"Employer {name!r} could not be created")
        return employer

    def touch_employer(self, employer: Employer, when: datetime) -> Employer:
        employer.last_scraped = when
        self.session.flush()
        return employer

    # ==================== Locations ====================

    def find_location(self, city: str, state: str) -> Optional[Location]:
        return self.session.execute(
            select(Location).where(Location.city == city, Location.state == state)
        ).scalars().first()

    def create_location(self, city: str, state: str, state_full: str) -> Location:
        self._insert_ignoring_conflicts(
            Location, {"city": city, "state": state, "state_full": state_full}
        )
        return self.find_location(city, state)

    # ==================== Jobs ====================

    def get_job(self, job_id: str) -> Job:
        job = self.session.get(Job, job_id)
        if job is None:
            raise JobNotFoundError(f"Job not found: {job_id}")
        return job

    def find_job_by_source_job_id(
        self, source_job_id: str, employer_id: Optional[str] = None
    ) -> Optional[Job]:
        query = select(Job).where(Job.source_job_id == source_job_id)
        if employer_id is not None:
            query = query.where(Job.employer_id == employer_id)
        return self.session.execute(query.order_by(Job.created_at)).scalars().first()

    def find_job_by_source_url(self, source_url: str) -> Optional[Job]:
        return self.session.execute(
            select(Job).where(Job.source_url == source_url)
        ).scalar_one_or_none()

    def add_job(self, job: Job) -> Job:
        self.session.add(job)
        self.session.flush()
        return job

    def count_active_jobs(self, employer_id: str) -> int:
        result = self.session.execute(
            select(func.count(Job.id)).where(
                Job.employer_id == employer_id,
                Job.is_active.is_(True),
            )
        )
        return result.scalar() or 0

    def find_active_jobs_missing_from(
        self, employer_id: str, found_source_urls: Iterable[str]
    ) -> List[Job]:
        return list(
            self.session.execute(
                select(Job).where(
                    Job.employer_id == employer_id,
                    Job.is_active.is_(True),
                    Job.source_url.notin_(list(found_source_urls)),
                )
            ).scalars()
        )

    def find_expired_active_jobs(self, now: datetime) -> List[Job]:
        return list(
            self.session.execute(
                select(Job).where(
                    Job.is_active.is_(True),
                    (Job.expires_date <= now) | (Job.calculated_expires_date <= now),
                )
            ).scalars()
        )

    def deactivate_jobs(self, job_ids: List[str]) -> int:
        """Set-based deactivation scoped to an explicit ID list."""
        if not job_ids:
            return 0
        result = self.session.execute(
            update(Job)
            .where(Job.id.in_(job_ids), Job.is_active.is_(True))
            .values(is_active=False)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount

    def job_stats(self) -> JobStats:
        total = self.session.execute(select(func.count(Job.id))).scalar() or 0
        active = self.session.execute(
            select(func.count(Job.id)).where(Job.is_active.is_(True))
        ).scalar() or 0

        # Single GROUP BY per dimension instead of N+1
        employer_rows = self.session.execute(
            select(Employer.slug, func.count(Job.id))
            .join(Employer, Employer.id == Job.employer_id)
            .where(Job.is_active.is_(True))
            .group_by(Employer.slug)
        ).all()
        state_rows = self.session.execute(
            select(Job.state, func.count(Job.id))
            .where(Job.is_active.is_(True), Job.state.is_not(None))
            .group_by(Job.state)
        ).all()
        specialty_rows = self.session.execute(
            select(Job.specialty, func.count(Job.id))
            .where(Job.is_active.is_(True), Job.specialty.is_not(None))
            .group_by(Job.specialty)
        ).all()

        return JobStats(
            total=total,
            active=active,
            by_employer={row[0]: row[1] for row in employer_rows},
            by_state={row[0]: row[1] for row in state_rows},
            by_specialty={row[0]: row[1] for row in specialty_rows},
        )
