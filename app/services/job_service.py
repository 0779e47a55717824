"""
Public job board reads.
"""
from typing import List

from sqlalchemy.orm import Session, joinedload

from app.core.errors import JobNotFound
from app.db.models.job import Job
from app.schemas.job import PublicJobResponse


def list_jobs(db: Session) -> List[PublicJobResponse]:
    # Every job is listed; the visible flag is not applied here
    jobs = db.query(Job).options(joinedload(Job.company)).order_by(Job.date.desc()).all()
    return [PublicJobResponse.model_validate(job) for job in jobs]


def get_job(db: Session, job_id: int) -> PublicJobResponse:
    job = db.query(Job).options(joinedload(Job.company)).filter(Job.id == job_id).first()
    if not job:
        raise JobNotFound()
    return PublicJobResponse.model_validate(job)
