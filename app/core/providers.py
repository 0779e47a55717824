"""
Dependencies that hand out the hosted-provider clients.

Tests replace these through app.dependency_overrides.
"""
from functools import lru_cache

from fastapi import Depends

from app.core.config import Settings, get_settings
from app.services.identity_provider import ClerkIdentityProvider, IdentityProvider
from app.services.media_storage import CloudinaryStorage, MediaStorage


@lru_cache()
def _clerk_client(settings: Settings) -> ClerkIdentityProvider:
    # One client per settings object so fetched JWKS keys are reused
    return ClerkIdentityProvider.from_settings(settings)


def get_storage(settings: Settings = Depends(get_settings)) -> MediaStorage:
    return CloudinaryStorage.from_settings(settings)


def get_identity_provider(settings: Settings = Depends(get_settings)) -> IdentityProvider:
    return _clerk_client(settings)
