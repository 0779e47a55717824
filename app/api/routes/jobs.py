"""
Public job board endpoints.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.schemas.common import envelope
from app.services import job_service

router = APIRouter(prefix="/api/jobs", tags=["Jobs"])


@router.get("")
def list_jobs(db: Session = Depends(get_db)):
    """List every job posting with its company."""
    return envelope(jobs=job_service.list_jobs(db))


@router.get("/{job_id}")
def get_job(job_id: int, db: Session = Depends(get_db)):
    """Get a single job posting by ID."""
    return envelope(job=job_service.get_job(db, job_id))
