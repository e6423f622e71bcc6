"""
Shared fixtures: an in-memory SQLite catalog behind the real JobRepository,
a controllable clock, and factories for scraped records.
"""

from datetime import datetime, timedelta
from unittest.mock import MagicMock

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import jobboard.models  # noqa: F401
from jobboard.database import Base
from jobboard.models import Employer, Job
from jobboard.repository import JobRepository
from jobboard.services.notifications import Notifier
from jobboard.services.reconciler import JobReconciler

ACME = {
    "employerName": "Acme Health",
    "employerSlug": "acme-health",
    "careerPageUrl": "https://acme.example/careers",
    "atsPlatform": "workday",
}

SKELETON_DESCRIPTION = "Registered Nurse - ICU. Apply online."

COMPLETE_DESCRIPTION = (
    "Duties & Responsibilities:\n"
    + "Provide direct patient care in a 24-bed intensive care unit. " * 10
    + "\nMinimum Qualifications:\nCurrent RN license, BLS and ACLS."
)


class FakeClock:
    """Callable clock that tests can move forward."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    session = sessionmaker(bind=engine, autoflush=False)()
    yield session
    session.close()


@pytest.fixture
def repository(session):
    return JobRepository(session)


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 3, 2, 9, 0, 0))


@pytest.fixture
def notifier():
    return MagicMock(spec=Notifier)


@pytest.fixture
def reconciler(repository, notifier, clock):
    return JobReconciler(repository, notifier=notifier, clock=clock)


@pytest.fixture
def job_data():
    """Factory for scraper records in the scrapers' camelCase contract."""

    def make(n: int = 1, **overrides):
        record = {
            "title": f"Registered Nurse {n}",
            "sourceUrl": f"https://acme.example/jobs/{n}",
            "sourceJobId": f"REQ-{n}",
            "slug": f"registered-nurse-{n}-acme-health",
            "description": SKELETON_DESCRIPTION,
            "city": "cleveland",
            "state": "Ohio",
            "jobType": "full-time",
        }
        record.update(overrides)
        return record

    return make


@pytest.fixture
def employer(repository):
    employer = repository.create_employer(
        name="Acme Health",
        slug="acme-health",
        career_page_url="https://acme.example/careers",
        ats_platform="workday",
    )
    repository.commit()
    return employer


@pytest.fixture
def seed_jobs(repository, clock):
    """Insert jobs directly, bypassing the reconciler."""

    def seed(employer: Employer, count: int, active: bool = True, prefix: str = "seed", **fields):
        jobs = []
        for i in range(count):
            job = Job(
                employer_id=employer.id,
                slug=f"{prefix}-{employer.slug}-{i}",
                source_url=f"https://{employer.slug}.example/{prefix}/{i}",
                source_job_id=f"{prefix.upper()}-{i}",
                title=f"{prefix.title()} Job {i}",
                description=SKELETON_DESCRIPTION,
                is_active=active,
                calculated_expires_date=clock() + timedelta(days=30),
                scraped_at=clock(),
                **fields,
            )
            repository.add_job(job)
            jobs.append(job)
        repository.commit()
        return jobs

    return seed
