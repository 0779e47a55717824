"""
Media storage and file intake.

Uploaded files are staged on local disk, forwarded to the hosted media service
(Cloudinary), and the staged copy is always removed afterwards.
"""
import logging
import os
import shutil
import uuid
from abc import ABC, abstractmethod
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

import cloudinary.exceptions
import cloudinary.uploader
from fastapi import UploadFile

from app.core.config import Settings
from app.core.errors import (
    InvalidFileType,
    JobPortalError,
    UploadFailed,
    ValidationError,
)

logger = logging.getLogger(__name__)

COMPANY_LOGOS_FOLDER = "company_logos"
RESUMES_FOLDER = "resumes"


class MediaStorage(ABC):
    """Abstract base class for hosted media storage."""

    @abstractmethod
    def upload(self, file_path: str, folder: str, *, pdf: bool = False) -> dict:
        """
        Upload a local file.

        Args:
            file_path: Path of the staged file on local disk
            folder: Logical folder on the storage service
            pdf: Store as a raw PDF document instead of an image

        Returns:
            Provider response; must contain "secure_url"
        """
        pass


class CloudinaryStorage(MediaStorage):
    """Cloudinary client configured per instance rather than through cloudinary.config()."""

    def __init__(self, cloud_name: str, api_key: str, api_secret: str):
        self.credentials = {
            "cloud_name": cloud_name,
            "api_key": api_key,
            "api_secret": api_secret,
        }

    @classmethod
    def from_settings(cls, settings: Settings) -> "CloudinaryStorage":
        if not settings.cloudinary_cloud_name:
            logger.warning("CLOUDINARY_CLOUD_NAME not configured - uploads will fail")
        return cls(
            cloud_name=settings.cloudinary_cloud_name,
            api_key=settings.cloudinary_api_key,
            api_secret=settings.cloudinary_api_secret,
        )

    def upload(self, file_path: str, folder: str, *, pdf: bool = False) -> dict:
        options = {"folder": folder, **self.credentials}
        if pdf:
            options.update(resource_type="raw", format="pdf")
        else:
            options.update(resource_type="image", use_filename=True)

        logger.info(f"Uploading to Cloudinary: folder={folder}, pdf={pdf}")
        try:
            return cloudinary.uploader.upload(file_path, **options)
        except cloudinary.exceptions.Error as e:
            logger.error(f"Cloudinary upload failed: folder={folder}, error={e}")
            raise UploadFailed(f"Failed to upload file to Cloudinary: {e}") from e


@contextmanager
def staged_upload(upload: UploadFile, upload_dir: str) -> Iterator[str]:
    """
    Stage an uploaded file on disk for the duration of the block.

    The staged file is removed exactly once when the block exits, whether it
    returns normally or raises.
    """
    directory = Path(upload_dir)
    directory.mkdir(parents=True, exist_ok=True)
    name = os.path.basename(upload.filename or "upload")
    path = directory / f"{uuid.uuid4().hex}-{name}"

    try:
        with open(path, "wb") as staged:
            upload.file.seek(0)
            shutil.copyfileobj(upload.file, staged)
        logger.debug(f"Staged upload: path={path}")
        yield str(path)
    finally:
        try:
            path.unlink()
            logger.debug(f"Removed staged upload: path={path}")
        except FileNotFoundError:
            pass


def intake_file(
    upload: Optional[UploadFile],
    folder: str,
    storage: MediaStorage,
    upload_dir: str,
    require_pdf: bool = False,
) -> str:
    """
    Accept one uploaded file, forward it to storage and return its durable URL.

    Raises:
        ValidationError: No file was sent
        InvalidFileType: require_pdf is set and the file is not a PDF
        UploadFailed: The storage provider failed or returned no URL
    """
    if upload is None or not upload.filename:
        raise ValidationError("Please upload a file")

    with staged_upload(upload, upload_dir) as path:
        if require_pdf and "pdf" not in (upload.content_type or ""):
            logger.info(f"Rejected upload with content_type={upload.content_type}")
            raise InvalidFileType()

        try:
            result = storage.upload(path, folder, pdf=require_pdf)
        except JobPortalError:
            raise
        except Exception as e:
            logger.error(f"Upload to {folder} failed: {e}", exc_info=True)
            raise UploadFailed(f"Failed to upload file: {e}") from e

        secure_url = (result or {}).get("secure_url")
        if not secure_url:
            raise UploadFailed("Failed to get secure URL from Cloudinary")
        return secure_url
