from jobboard.schemas.job import EmployerData, ScrapedJob
from jobboard.schemas.results import (
    ErrorDetail,
    SaveJobsResult,
    DeactivatedJob,
    VerificationResult,
    SweepResult,
    JobStats,
)

__all__ = [
    "EmployerData",
    "ScrapedJob",
    "ErrorDetail",
    "SaveJobsResult",
    "DeactivatedJob",
    "VerificationResult",
    "SweepResult",
    "JobStats",
]
