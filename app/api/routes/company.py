"""
Company endpoints: account, job posting and applicant review.

Everything except register/login requires `Authorization: Bearer <company token>`.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile, status
from sqlalchemy.orm import Session

from app.core.auth_dependency import get_current_company
from app.core.config import Settings, get_settings
from app.core.logging_config import sanitize_log_data
from app.core.providers import get_storage
from app.core.rate_limit import check_rate_limit
from app.db.models.company import Company
from app.db.session import get_db
from app.schemas.common import envelope
from app.schemas.company import (
    ChangeStatusRequest,
    ChangeVisibilityRequest,
    CompanyPublic,
    LoginRequest,
)
from app.schemas.job import JobCreate
from app.services import company_service
from app.services.media_storage import MediaStorage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/company", tags=["Company"])


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register_company(
    name: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    password: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
    storage: MediaStorage = Depends(get_storage),
):
    """Register a company (multipart: name, email, password, image)."""
    logger.debug(f"Register request: {sanitize_log_data({'email': email, 'password': password})}")
    result = company_service.register_company(db, settings, storage, name, email, password, image)
    return envelope(**result)


@router.post("/login")
def login_company(
    credentials: LoginRequest,
    request: Request,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    check_rate_limit(request, max_requests=10, window_seconds=60)
    result = company_service.login_company(db, settings, credentials.email, credentials.password)
    return envelope(**result)


@router.get("/company")
def get_company_data(company: Company = Depends(get_current_company)):
    return envelope(company=CompanyPublic.model_validate(company))


@router.post("/post-job")
def post_job(
    job_data: JobCreate,
    company: Company = Depends(get_current_company),
    db: Session = Depends(get_db),
):
    return envelope(message="Job Added", newJob=company_service.post_job(db, company, job_data))


@router.get("/applicants")
def list_applicants(
    company: Company = Depends(get_current_company),
    db: Session = Depends(get_db),
):
    """Applications to this company's jobs, with applicant and job details."""
    return envelope(applications=company_service.list_applicants(db, company))


@router.get("/list-jobs")
def list_posted_jobs(
    company: Company = Depends(get_current_company),
    db: Session = Depends(get_db),
):
    """This company's jobs, each with its applicant count."""
    return envelope(jobsData=company_service.list_posted_jobs(db, company))


@router.post("/change-status")
def change_application_status(
    body: ChangeStatusRequest,
    company: Company = Depends(get_current_company),
    db: Session = Depends(get_db),
):
    company_service.set_application_status(db, body.id, body.status)
    return envelope(message="Status Changed")


@router.post("/change-visibility")
def change_visibility(
    body: ChangeVisibilityRequest,
    company: Company = Depends(get_current_company),
    db: Session = Depends(get_db),
):
    return envelope(job=company_service.set_job_visibility(db, company, body.id))
