"""
Identity provider (Clerk) client for job seeker authentication and profiles.
"""
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import httpx
from jose import jwt, JWTError

from app.core.config import Settings
from app.core.errors import AuthError, ProviderLookupFailed, Unauthenticated

logger = logging.getLogger(__name__)

DEFAULT_AVATAR_URL = "https://res.cloudinary.com/dxq7q0yux/image/upload/v1710331234/default-avatar.png"


class IdentityProvider(ABC):
    """Abstract base class for the hosted identity provider."""

    @abstractmethod
    def verify_session_token(self, token: str) -> str:
        """
        Verify a session token issued by the provider.

        Returns:
            The verified external user id

        Raises:
            Unauthenticated: The token is invalid or expired
            AuthError: The provider could not be reached to verify it
        """
        pass

    @abstractmethod
    def get_user(self, user_id: str) -> Dict[str, Any]:
        """
        Fetch a user's profile.

        Raises:
            ProviderLookupFailed: The provider call failed
        """
        pass


def user_fields_from_profile(profile: Dict[str, Any]) -> Dict[str, str]:
    """Map a provider user object (API response or webhook payload) to local User fields."""
    first_name = profile.get("first_name")
    last_name = profile.get("last_name")
    if first_name and last_name:
        name = f"{first_name} {last_name}"
    else:
        name = profile.get("username") or "User"

    email_addresses = profile.get("email_addresses") or []
    email = email_addresses[0].get("email_address", "") if email_addresses else ""

    return {
        "name": name,
        "email": email,
        "image": profile.get("image_url") or DEFAULT_AVATAR_URL,
    }


class ClerkIdentityProvider(IdentityProvider):
    """Clerk Backend API client. Session tokens are RS256 JWTs."""

    def __init__(
        self,
        secret_key: Optional[str],
        api_url: str = "https://api.clerk.com/v1",
        jwt_key: Optional[str] = None,
        jwks_url: Optional[str] = None,
        timeout: float = 10.0,
    ):
        self.secret_key = secret_key
        self.api_url = api_url.rstrip("/")
        self.jwt_key = jwt_key
        self.jwks_url = jwks_url or f"{self.api_url}/jwks"
        self.timeout = timeout
        self._jwks: Optional[Dict[str, Any]] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "ClerkIdentityProvider":
        if not settings.clerk_secret_key:
            logger.warning("CLERK_SECRET_KEY not configured - job seeker routes will fail")
        return cls(
            secret_key=settings.clerk_secret_key,
            api_url=settings.clerk_api_url,
            jwt_key=settings.clerk_jwt_key,
            jwks_url=settings.clerk_jwks_url,
        )

    def _headers(self) -> Dict[str, str]:
        return {"Authorization": f"Bearer {self.secret_key}"}

    def _fetch_jwks(self) -> Dict[str, Any]:
        response = httpx.get(self.jwks_url, headers=self._headers(), timeout=self.timeout)
        response.raise_for_status()
        self._jwks = response.json()
        return self._jwks

    @staticmethod
    def _find_key(jwks: Dict[str, Any], kid: Optional[str]) -> Optional[Dict[str, Any]]:
        for key in jwks.get("keys", []):
            if key.get("kid") == kid:
                return key
        return None

    def _signing_key(self, token: str):
        if self.jwt_key:
            return self.jwt_key

        kid = jwt.get_unverified_header(token).get("kid")
        if self._jwks is not None:
            key = self._find_key(self._jwks, kid)
            if key is not None:
                return key
            # Unknown kid on a cached key set: the provider may have rotated keys
            logger.info(f"Refreshing Clerk JWKS for unknown kid={kid}")

        key = self._find_key(self._fetch_jwks(), kid)
        if key is None:
            raise JWTError(f"No signing key matches kid={kid}")
        return key

    def verify_session_token(self, token: str) -> str:
        try:
            claims = jwt.decode(
                token,
                self._signing_key(token),
                algorithms=["RS256"],
                options={"verify_aud": False},
            )
        except JWTError as e:
            logger.info(f"Clerk session token rejected: {e}")
            raise Unauthenticated("Authentication required") from e
        except httpx.HTTPError as e:
            logger.error(f"Clerk JWKS fetch failed: {e}")
            raise AuthError() from e

        user_id = claims.get("sub")
        if not user_id:
            raise Unauthenticated("Authentication required")
        return user_id

    def get_user(self, user_id: str) -> Dict[str, Any]:
        try:
            response = httpx.get(
                f"{self.api_url}/users/{user_id}",
                headers=self._headers(),
                timeout=self.timeout,
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"Clerk user lookup failed: user_id={user_id}, error={e}")
            raise ProviderLookupFailed(f"Failed to fetch user data from Clerk: {e}") from e
        return response.json()
