"""
Job seeker endpoints. All require an identity provider session token.
"""
from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.orm import Session

from app.core.auth_dependency import get_current_user_id
from app.core.config import Settings, get_settings
from app.core.providers import get_identity_provider, get_storage
from app.db.session import get_db
from app.schemas.common import envelope
from app.services import user_service
from app.services.identity_provider import IdentityProvider
from app.services.media_storage import MediaStorage

router = APIRouter(prefix="/api/users", tags=["Users"])


@router.get("/user")
def get_user_data(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    identity: IdentityProvider = Depends(get_identity_provider),
):
    """Current user's profile, created from the identity provider on first call."""
    return envelope(user=user_service.get_or_create_user(db, identity, user_id))


@router.post("/apply/{job_id}")
def apply_for_job(
    job_id: int,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    application = user_service.apply_for_job(db, user_id, job_id)
    return envelope(message="Application submitted successfully", application=application)


@router.get("/applications")
def list_applications(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Current user's applications, newest first."""
    return envelope(applications=user_service.list_user_applications(db, user_id))


@router.post("/update-resume")
def update_resume(
    resume: Optional[UploadFile] = File(None),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
    storage: MediaStorage = Depends(get_storage),
):
    """Replace the current user's resume (multipart field `resume`, PDF only)."""
    user = user_service.update_resume(db, settings, storage, user_id, resume)
    return envelope(message="Resume updated successfully", user=user)
