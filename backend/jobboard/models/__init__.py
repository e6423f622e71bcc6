from jobboard.models.employer import Employer
from jobboard.models.location import Location
from jobboard.models.job import Job

__all__ = ["Employer", "Location", "Job"]
