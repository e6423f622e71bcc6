from pydantic import BaseModel
from pydantic_settings import BaseSettings
from functools import lru_cache

DEFAULT_CONTENT_MARKERS = [
    "Duties & Responsibilities:",
    "Minimum Qualifications:",
]


class Settings(BaseSettings):
    database_url: str = "sqlite:///./data/jobs.db"

    # Reconciliation engine
    freshness_window_days: int = 60
    safety_min_active_jobs: int = 10
    safety_min_found_jobs: int = 10
    safety_min_found_ratio: float = 0.30
    content_min_length: int = 500
    content_markers: list[str] = DEFAULT_CONTENT_MARKERS

    # Expiration sweep schedule
    sweep_interval_hours: int = 6

    # Celery configuration
    celery_broker_url: str = "redis://localhost:6379/0"
    celery_result_backend: str = "redis://localhost:6379/0"

    # IndexNow (search engine notifications)
    site_url: str = "https://intelliresume.net"
    job_path_prefix: str = "/jobs/nursing"
    indexnow_api_url: str = "https://api.indexnow.org/indexnow"
    indexnow_key: str = ""
    indexnow_batch_size: int = 1000

    # Alert e-mails
    smtp_host: str = ""
    smtp_port: int = 587
    smtp_user: str = ""
    smtp_password: str = ""
    alert_email_to: str = ""
    alert_email_from: str = "noreply@intelliresume.net"

    class Config:
        env_file = ".env"


class ReconcilerConfig(BaseModel):
    """
    Tunables for the reconciliation engine.

    Attributes:
        freshness_window_days: Days a job stays live without an explicit
            expiry before it is presumed stale
        safety_min_active_jobs: The safety guard only applies when the
            employer has more active jobs than this
        safety_min_found_jobs: Scrapes finding fewer jobs than this trip the guard
        safety_min_found_ratio: Scrapes finding less than this share of the
            active set trip the guard
        content_min_length: Descriptions must be longer than this to count as complete
        content_markers: Section headers that prove a detail page was fetched
    """

    freshness_window_days: int = 60
    safety_min_active_jobs: int = 10
    safety_min_found_jobs: int = 10
    safety_min_found_ratio: float = 0.30
    content_min_length: int = 500
    content_markers: list[str] = DEFAULT_CONTENT_MARKERS

    @classmethod
    def from_settings(cls, settings: Settings) -> "ReconcilerConfig":
        return cls(
            freshness_window_days=settings.freshness_window_days,
            safety_min_active_jobs=settings.safety_min_active_jobs,
            safety_min_found_jobs=settings.safety_min_found_jobs,
            safety_min_found_ratio=settings.safety_min_found_ratio,
            content_min_length=settings.content_min_length,
            content_markers=list(settings.content_markers),
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
