"""
Job seeker service: profile sync, applications and resume.
"""
import logging
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import UploadFile
from sqlalchemy.orm import Session, joinedload

from app.core.config import Settings
from app.core.errors import (
    DuplicateApplication,
    JobNotFound,
    MissingEmail,
    UserNotFound,
)
from app.db.models.application import JobApplication
from app.db.models.job import Job
from app.db.models.user import User
from app.schemas.application import ApplicationResponse, UserApplicationResponse
from app.schemas.user import UserResponse
from app.services.identity_provider import IdentityProvider, user_fields_from_profile
from app.services.media_storage import RESUMES_FOLDER, MediaStorage, intake_file

logger = logging.getLogger(__name__)


def get_or_create_user(db: Session, identity: IdentityProvider, user_id: str) -> UserResponse:
    """
    Return the local user, creating it from the identity provider profile on first sight.

    Raises:
        ProviderLookupFailed: The provider lookup failed
        MissingEmail: The provider has no email for this user
    """
    user = db.query(User).filter(User.id == user_id).first()
    if user:
        return UserResponse.model_validate(user)

    fields = user_fields_from_profile(identity.get_user(user_id))
    if not fields["email"]:
        raise MissingEmail()

    user = User(id=user_id, resume="", **fields)
    try:
        db.add(user)
        db.commit()
        db.refresh(user)
    except Exception:
        db.rollback()
        raise

    logger.info(f"User created from identity provider: user_id={user_id}")
    return UserResponse.model_validate(user)


def apply_for_job(db: Session, user_id: str, job_id: int) -> ApplicationResponse:
    """
    Record an application of user_id to job_id.

    The duplicate check is read-then-write; concurrent identical requests
    can both insert.
    """
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise UserNotFound()

    job = db.query(Job).filter(Job.id == job_id).first()
    if not job:
        raise JobNotFound()

    existing = (
        db.query(JobApplication)
        .filter(JobApplication.user_id == user_id, JobApplication.job_id == job_id)
        .first()
    )
    if existing:
        raise DuplicateApplication()

    application = JobApplication(
        user_id=user_id,
        job_id=job_id,
        company_id=job.company_id,
        status="pending",
        date=datetime.now(timezone.utc),
    )
    try:
        db.add(application)
        db.commit()
        db.refresh(application)
    except Exception:
        db.rollback()
        raise

    logger.info(f"Application created: application_id={application.id}, user_id={user_id}, job_id={job_id}")
    return ApplicationResponse.model_validate(application)


def list_user_applications(db: Session, user_id: str) -> List[UserApplicationResponse]:
    applications = (
        db.query(JobApplication)
        .options(joinedload(JobApplication.job), joinedload(JobApplication.company))
        .filter(JobApplication.user_id == user_id)
        .order_by(JobApplication.date.desc(), JobApplication.id.desc())
        .all()
    )
    return [UserApplicationResponse.model_validate(application) for application in applications]


def update_resume(
    db: Session,
    settings: Settings,
    storage: MediaStorage,
    user_id: str,
    resume: Optional[UploadFile],
) -> UserResponse:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise UserNotFound()

    user.resume = intake_file(
        resume,
        RESUMES_FOLDER,
        storage,
        settings.upload_dir,
        require_pdf=True,
    )
    try:
        db.commit()
        db.refresh(user)
    except Exception:
        db.rollback()
        raise

    logger.info(f"Resume updated: user_id={user_id}")
    return UserResponse.model_validate(user)
