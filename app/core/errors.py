"""
Error taxonomy for the Job Portal API.

Services raise these; app.main turns them into `{"success": false, "message": ...}`
envelopes with the matching HTTP status.
"""
from fastapi import status


class JobPortalError(Exception):
    """Base class for every error rendered as a JSON envelope."""
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Something went wrong"

    def __init__(self, message: str = None):
        self.message = message or self.message
        super().__init__(self.message)


# ---- 400 ----

class ValidationError(JobPortalError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "All fields are required"


class InvalidFileType(ValidationError):
    message = "Please upload a PDF file"


class MissingEmail(ValidationError):
    message = "Email is required from Clerk user data"


class InvalidWebhook(ValidationError):
    message = "Webhook verification failed"


# ---- 401 ----

class Unauthenticated(JobPortalError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Not authorized. Please login."


class InvalidToken(Unauthenticated):
    message = "Invalid token. Please login again."


class PrincipalNotFound(Unauthenticated):
    message = "Company not found. Please login again."


class InvalidCredentials(Unauthenticated):
    message = "Invalid email or password"


# ---- 404 ----

class NotFound(JobPortalError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Not found"


class UserNotFound(NotFound):
    message = "User not found"


class JobNotFound(NotFound):
    message = "Job not found"


# ---- 409 ----

class Conflict(JobPortalError):
    status_code = status.HTTP_409_CONFLICT
    message = "Conflict"


class DuplicateEmail(Conflict):
    message = "Company Already Exists"


class DuplicateApplication(Conflict):
    message = "You have already applied for this job"


# ---- 429 ----

class TooManyRequests(JobPortalError):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    message = "Too many requests. Please try again later."


# ---- 5xx ----

class UpstreamFailure(JobPortalError):
    """A hosted provider (storage or identity) failed; its message is passed through."""
    status_code = status.HTTP_502_BAD_GATEWAY
    message = "Upstream provider error"


class UploadFailed(UpstreamFailure):
    message = "Failed to upload file"


class ProviderLookupFailed(UpstreamFailure):
    message = "Failed to fetch user data from Clerk"


class AuthError(JobPortalError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Authentication error"


class InternalError(JobPortalError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Something went wrong!"
