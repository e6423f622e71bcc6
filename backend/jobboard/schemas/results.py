from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from typing import Optional


class ErrorDetail(BaseModel):
    title: Optional[str] = None
    error: str


class SaveJobsResult(BaseModel):
    """Counts returned from one scrape batch (serialized with camelCase keys)."""

    total: int = 0
    created: int = 0
    updated: int = 0
    reactivated: int = 0
    errors: int = 0
    errors_details: list[ErrorDetail] = []
    deactivated: int = 0

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class DeactivatedJob(BaseModel):
    id: str
    title: str
    source_url: Optional[str] = None


class VerificationResult(BaseModel):
    """Outcome of the active-set check; skipped results carry the reason."""

    count: int = 0
    jobs: list[DeactivatedJob] = []
    skipped: bool = False
    reason: Optional[str] = None
    found_count: int = 0
    active_count: int = 0


class SweepResult(BaseModel):
    count: int = 0
    jobs: list[DeactivatedJob] = []


class JobStats(BaseModel):
    total: int
    active: int
    by_employer: dict[str, int]
    by_state: dict[str, int]
    by_specialty: dict[str, int]
