from fastapi import APIRouter
from jobboard.api import jobs, stats

api_router = APIRouter(prefix="/api")
api_router.include_router(jobs.router, prefix="/jobs", tags=["jobs"])
api_router.include_router(stats.router, prefix="/stats", tags=["stats"])
