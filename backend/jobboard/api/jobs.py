from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from jobboard.database import get_db
from jobboard.repository import JobRepository, JobNotFoundError
from jobboard.schemas import SweepResult
from jobboard.services.notifications import CeleryNotifier
from jobboard.services.reconciler import JobReconciler

router = APIRouter()


def get_reconciler(db: Session = Depends(get_db)) -> JobReconciler:
    return JobReconciler(JobRepository(db), notifier=CeleryNotifier())


@router.post("/sweep", response_model=SweepResult)
def sweep_expired_jobs(reconciler: JobReconciler = Depends(get_reconciler)):
    return reconciler.deactivate_expired_jobs()


@router.post("/{job_id}/deactivate")
def deactivate_job(
    job_id: str,
    reason: str = Query("manual"),
    reconciler: JobReconciler = Depends(get_reconciler),
):
    try:
        job = reconciler.deactivate_job(job_id, reason=reason)
    except JobNotFoundError:
        raise HTTPException(status_code=404, detail="Job not found")

    return {"id": job.id, "slug": job.slug, "is_active": job.is_active}
