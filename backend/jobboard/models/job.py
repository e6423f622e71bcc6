"""
Job Model - SQLAlchemy ORM model for scraped job postings

Stores every posting the scrapers have ever reported, reconciled so that a
posting rediscovered many times maps onto one row.

Lifecycle:
    created (inactive, unclassified) → classified → active
    active → inactive (expired, missing from source, or re-classification)
    inactive → active (reactivated, only if it was ever active before)

Expiry:
    expires_date is the source's explicit date and is authoritative.
    calculated_expires_date is the engine's fallback, renewed each time the
    job is seen again. Only one of them is set on a new row.
"""

from sqlalchemy import (
    Column,
    String,
    Integer,
    Float,
    Text,
    Boolean,
    DateTime,
    JSON,
    ForeignKey,
    UniqueConstraint,
)
from sqlalchemy.orm import validates
from sqlalchemy.sql import func
from jobboard.database import Base
import uuid


class Job(Base):
    """
    Job posting entity with lifecycle tracking.

    Attributes:
        id: UUID primary key
        employer_id: Owning employer
        slug: Public page identifier, immutable once assigned
        source_url: Posting URL (unique, may be upgraded over time)
        source_job_id: Employer-assigned requisition ID (preferred identity)
        description: Presentation copy, possibly rewritten by the classifier
        raw_description: Scraper output, only used to judge completeness
        is_active: Publicly listed (indexed)
        was_ever_active: Sticky flag, set the first time is_active is True
        classified_at: Set by the classifier; None means classification pending
        expires_date: Explicit expiry from the source
        calculated_expires_date: Fallback expiry computed on scrape
        scraped_at: Last time a scrape batch touched this row
    """

    __tablename__ = "jobs"
    __table_args__ = (
        UniqueConstraint("employer_id", "source_job_id", name="uq_jobs_employer_source_job_id"),
    )

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    employer_id = Column(String, ForeignKey("employers.id"), nullable=False, index=True)
    slug = Column(String(500), nullable=False, unique=True)
    source_url = Column(String(2000), nullable=False, unique=True)
    source_job_id = Column(String(255), nullable=True, index=True)

    title = Column(String(500), nullable=False)
    description = Column(Text, nullable=False, default="")
    raw_description = Column(Text, nullable=True)

    location = Column(String(500), nullable=True)
    city = Column(String(255), nullable=True)
    state = Column(String(2), nullable=True, index=True)
    zip_code = Column(String(20), nullable=True)
    is_remote = Column(Boolean, nullable=False, default=False)

    job_type = Column(String(50), nullable=True)
    shift_type = Column(String(50), nullable=True)
    specialty = Column(String(255), nullable=True, index=True)
    experience_level = Column(String(50), nullable=True)
    requirements = Column(Text, nullable=True)
    responsibilities = Column(Text, nullable=True)
    benefits = Column(Text, nullable=True)
    department = Column(String(255), nullable=True)

    salary_min = Column(Float, nullable=True)
    salary_max = Column(Float, nullable=True)
    salary_currency = Column(String(3), nullable=False, default="USD")
    salary_type = Column(String(20), nullable=True)
    salary_min_hourly = Column(Float, nullable=True)
    salary_max_hourly = Column(Float, nullable=True)
    salary_min_annual = Column(Integer, nullable=True)
    salary_max_annual = Column(Integer, nullable=True)

    meta_description = Column(Text, nullable=True)
    keywords = Column(JSON, nullable=False, default=list)

    posted_date = Column(DateTime, nullable=True)
    expires_date = Column(DateTime, nullable=True, index=True)
    calculated_expires_date = Column(DateTime, nullable=True, index=True)

    is_active = Column(Boolean, nullable=False, default=False, index=True)
    was_ever_active = Column(Boolean, nullable=False, default=False)
    classified_at = Column(DateTime, nullable=True)

    scraped_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    @validates("is_active")
    def _track_ever_active(self, key, value):
        if value:
            self.was_ever_active = True
        return value
