"""
Employer Model - hiring organizations whose career pages are scraped

One row per employer, created the first time a scrape batch names it and
touched (last_scraped) on every batch after that. Employers are never
deleted by the reconciliation engine.
"""

from sqlalchemy import Column, String, Boolean, DateTime
from sqlalchemy.sql import func
from jobboard.database import Base
import uuid


class Employer(Base):
    """
    Hiring organization.

    Attributes:
        id: UUID primary key
        slug: URL-friendly unique identifier (e.g. "cleveland-clinic")
        name: Unique display name
        career_page_url: Where the scraper starts
        ats_platform: Applicant tracking system tag ("workday", "custom", ...)
        is_active: Whether the employer is still being scraped
        last_scraped: Timestamp of the most recent scrape batch
    """

    __tablename__ = "employers"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    slug = Column(String(255), nullable=False, unique=True, index=True)
    name = Column(String(500), nullable=False, unique=True)
    career_page_url = Column(String(2000), nullable=True)
    ats_platform = Column(String(50), nullable=False, default="custom")
    is_active = Column(Boolean, nullable=False, default=True)
    last_scraped = Column(DateTime, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
