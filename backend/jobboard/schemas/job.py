from pydantic import BaseModel, field_validator
from pydantic.alias_generators import to_camel
from datetime import datetime, timezone
from typing import Optional


def _naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class EmployerData(BaseModel):
    """Employer descriptor sent with every scrape batch."""

    employer_name: str
    employer_slug: Optional[str] = None
    career_page_url: Optional[str] = None
    ats_platform: Optional[str] = None

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class ScrapedJob(BaseModel):
    """
    Normalized job record produced by a scraper.

    Accepts the scrapers' camelCase keys (sourceUrl, sourceJobId, ...)
    as well as snake_case field names.
    """

    title: str
    source_url: str
    slug: str
    description: str = ""
    source_job_id: Optional[str] = None
    raw_description: Optional[str] = None

    location: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    is_remote: bool = False

    job_type: Optional[str] = None
    shift_type: Optional[str] = None
    specialty: Optional[str] = None
    experience_level: Optional[str] = None
    requirements: Optional[str] = None
    responsibilities: Optional[str] = None
    benefits: Optional[str] = None
    department: Optional[str] = None

    salary_min: Optional[float] = None
    salary_max: Optional[float] = None
    salary_currency: str = "USD"
    salary_type: Optional[str] = None
    salary_min_hourly: Optional[float] = None
    salary_max_hourly: Optional[float] = None
    salary_min_annual: Optional[int] = None
    salary_max_annual: Optional[int] = None

    posted_date: Optional[datetime] = None
    expires_date: Optional[datetime] = None
    meta_description: Optional[str] = None
    keywords: list[str] = []

    class Config:
        alias_generator = to_camel
        populate_by_name = True

    @field_validator("posted_date", "expires_date")
    @classmethod
    def _to_naive_utc(cls, value):
        return _naive_utc(value)

    @field_validator("is_remote", "salary_currency", "keywords", mode="before")
    @classmethod
    def _null_means_default(cls, value, info):
        # Scrapers send null for fields they could not extract
        if value is None:
            return cls.model_fields[info.field_name].get_default(call_default_factory=True)
        return value

    @field_validator("source_job_id", mode="before")
    @classmethod
    def _normalize_source_job_id(cls, value):
        if value is None:
            return None
        value = str(value).strip()
        return value or None

    @property
    def raw_content(self) -> str:
        """The scraper output to judge completeness on."""
        return self.raw_description if self.raw_description is not None else self.description
