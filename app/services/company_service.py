"""
Company service: registration, login, job posting and applicant management.

Every operation after login is scoped to the authenticated company.
"""
import logging
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import UploadFile
from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from app.core.config import Settings
from app.core.errors import (
    DuplicateEmail,
    InvalidCredentials,
    JobNotFound,
    ValidationError,
)
from app.core.security import create_access_token, hash_password, verify_password
from app.db.models.application import JobApplication
from app.db.models.company import Company
from app.db.models.job import Job
from app.schemas.application import ApplicantResponse
from app.schemas.company import CompanyPublic
from app.schemas.job import JobCreate, JobResponse, PostedJobResponse
from app.services.media_storage import COMPANY_LOGOS_FOLDER, MediaStorage, intake_file

logger = logging.getLogger(__name__)


def issue_token(company: Company, settings: Settings) -> str:
    return create_access_token({"id": company.id}, settings)


def normalize_email(email: str) -> str:
    """Emails are stored and looked up trimmed and lowercased."""
    return email.strip().lower()


def register_company(
    db: Session,
    settings: Settings,
    storage: MediaStorage,
    name: Optional[str],
    email: Optional[str],
    password: Optional[str],
    image: Optional[UploadFile],
) -> dict:
    """
    Create a company account.

    The email check is read-then-write; two concurrent registrations with
    the same email can both succeed.

    Returns:
        {"company": CompanyPublic, "token": str}
    """
    email = normalize_email(email or "")
    if not name or not email or not password or image is None:
        raise ValidationError("All fields are required")

    if db.query(Company).filter(Company.email == email).first():
        raise DuplicateEmail()

    password_hash = hash_password(password)
    logo_url = intake_file(image, COMPANY_LOGOS_FOLDER, storage, settings.upload_dir)

    company = Company(
        name=name,
        email=email,
        password_hash=password_hash,
        image=logo_url,
    )
    try:
        db.add(company)
        db.commit()
        db.refresh(company)
    except Exception:
        db.rollback()
        raise

    logger.info(f"Company registered: company_id={company.id}")
    return {
        "company": CompanyPublic.model_validate(company),
        "token": issue_token(company, settings),
    }


def login_company(
    db: Session,
    settings: Settings,
    email: Optional[str],
    password: Optional[str],
) -> dict:
    """Check credentials and issue a fresh token. Never reveals which part was wrong."""
    email = normalize_email(email or "")
    if not email or not password:
        raise ValidationError("Email and password are required")

    company = db.query(Company).filter(Company.email == email).first()
    if not company or not verify_password(password, company.password_hash):
        logger.info("Company login failed")
        raise InvalidCredentials()

    logger.info(f"Company logged in: company_id={company.id}")
    return {
        "company": CompanyPublic.model_validate(company),
        "token": issue_token(company, settings),
    }


def post_job(db: Session, company: Company, job_data: JobCreate) -> JobResponse:
    job = Job(
        title=job_data.title,
        description=job_data.description,
        location=job_data.location,
        salary=job_data.salary,
        level=job_data.level,
        category=job_data.category,
        company_id=company.id,
        date=datetime.now(timezone.utc),
    )
    try:
        db.add(job)
        db.commit()
        db.refresh(job)
    except Exception:
        db.rollback()
        raise

    logger.info(f"Job posted: job_id={job.id}, company_id={company.id}")
    return JobResponse.model_validate(job)


def list_applicants(db: Session, company: Company) -> List[ApplicantResponse]:
    applications = (
        db.query(JobApplication)
        .options(joinedload(JobApplication.user), joinedload(JobApplication.job))
        .filter(JobApplication.company_id == company.id)
        .all()
    )
    return [ApplicantResponse.model_validate(application) for application in applications]


def list_posted_jobs(db: Session, company: Company) -> List[PostedJobResponse]:
    """The company's jobs, each with a live count of its applications."""
    jobs = db.query(Job).filter(Job.company_id == company.id).all()
    if not jobs:
        return []

    counts = dict(
        db.query(JobApplication.job_id, func.count(JobApplication.id))
        .filter(JobApplication.job_id.in_([job.id for job in jobs]))
        .group_by(JobApplication.job_id)
        .all()
    )

    return [
        PostedJobResponse(
            **JobResponse.model_validate(job).model_dump(),
            applicants=counts.get(job.id, 0),
        )
        for job in jobs
    ]


def set_application_status(db: Session, application_id: int, status: str) -> None:
    """
    Update an application's status by id.

    Ownership of the application's job is not checked, and an unknown id
    changes nothing.
    """
    try:
        updated = (
            db.query(JobApplication)
            .filter(JobApplication.id == application_id)
            .update({JobApplication.status: status}, synchronize_session=False)
        )
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(f"Application status set: application_id={application_id}, status={status}, updated={updated}")


def set_job_visibility(db: Session, company: Company, job_id: int) -> JobResponse:
    """
    Toggle a job's visibility if the caller owns it.

    A non-owner gets the unchanged job back and no error.
    """
    job = db.query(Job).filter(Job.id == job_id).first()
    if not job:
        raise JobNotFound()

    if job.company_id == company.id:
        job.visible = not job.visible
        try:
            db.commit()
            db.refresh(job)
        except Exception:
            db.rollback()
            raise
        logger.info(f"Job visibility toggled: job_id={job.id}, visible={job.visible}")
    else:
        logger.warning(f"Visibility change ignored, not owner: job_id={job.id}, company_id={company.id}")

    return JobResponse.model_validate(job)
