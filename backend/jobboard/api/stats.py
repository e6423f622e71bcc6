from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from jobboard.database import get_db
from jobboard.repository import JobRepository
from jobboard.schemas import JobStats

router = APIRouter()


@router.get("", response_model=JobStats)
def get_stats(db: Session = Depends(get_db)):
    return JobRepository(db).job_stats()
