from typing import Optional

from jobboard.models import Job
from jobboard.repository import JobRepository


class IdentityMatcher:
    """
    Finds the stored job an incoming record refers to.

    The employer's own job ID wins over the URL: sources upgrade URLs
    (search-result link to direct link) while the requisition ID stays put,
    so matching on URL first would duplicate the job on every upgrade.
    """

    def __init__(self, repository: JobRepository):
        self.repository = repository

    def find_existing(
        self,
        source_url: Optional[str],
        source_job_id: Optional[str] = None,
        employer_id: Optional[str] = None,
    ) -> Optional[Job]:
        if source_job_id:
            job = self.repository.find_job_by_source_job_id(source_job_id, employer_id)
            if job is not None:
                return job

        if source_url:
            return self.repository.find_job_by_source_url(source_url)

        return None
