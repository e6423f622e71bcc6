import logging
from datetime import datetime
from typing import Callable, Optional

from jobboard.database import utcnow
from jobboard.models import Employer, Location
from jobboard.repository import JobRepository
from jobboard.schemas import EmployerData
from jobboard.services.normalize import (
    normalize_city,
    normalize_state,
    state_full_name,
    generate_employer_slug,
)

logger = logging.getLogger(__name__)


class EmployerResolver:
    """Get-or-create employers, looked up by slug first, then by name."""

    def __init__(self, repository: JobRepository, clock: Callable[[], datetime] = utcnow):
        self.repository = repository
        self.clock = clock

    def resolve(self, employer_data: EmployerData) -> Employer:
        slug = employer_data.employer_slug or generate_employer_slug(employer_data.employer_name)

        employer = self.repository.get_employer_by_slug(slug)
        if employer is None:
            employer = self.repository.get_employer_by_name(employer_data.employer_name)

        if employer is None:
            employer = self.repository.create_employer(
                name=employer_data.employer_name,
                slug=slug,
                career_page_url=employer_data.career_page_url,
                ats_platform=employer_data.ats_platform or "custom",
            )
            logger.info(f"Created new employer: {employer.name}")
            return employer

        self.repository.touch_employer(employer, self.clock())
        logger.info(f"Found existing employer: {employer.name}")
        return employer


class LocationResolver:
    """
    Get-or-create normalized city/state records.

    Returns None when either part is blank; that just means there is
    nothing to index.
    """

    def __init__(self, repository: JobRepository):
        self.repository = repository

    def resolve(self, city: Optional[str], state: Optional[str]) -> Optional[Location]:
        normalized_city = normalize_city(city)
        normalized_state = normalize_state(state)
        if not normalized_city or not normalized_state:
            return None

        location = self.repository.find_location(normalized_city, normalized_state)
        if location is None:
            location = self.repository.create_location(
                normalized_city, normalized_state, state_full_name(normalized_state)
            )
            logger.info(f"Created new location: {normalized_city}, {normalized_state}")
        return location
