"""
Request authentication: resolve a bearer credential to a principal.

Two resolvers share the header parsing and differ in how the token is verified:
companies use JWTs this server issued, job seekers use identity provider sessions.
"""
import logging
from abc import ABC, abstractmethod
from typing import Any

from fastapi import Depends, Request
from jose import JWTError
from sqlalchemy.orm import Session

from app.core.config import Settings, get_settings
from app.core.errors import InvalidToken, PrincipalNotFound, Unauthenticated
from app.core.providers import get_identity_provider
from app.core.security import decode_access_token
from app.db.models.company import Company
from app.db.session import get_db
from app.services.identity_provider import IdentityProvider

logger = logging.getLogger(__name__)


def get_bearer_token(request: Request) -> str:
    """Extract the token from `Authorization: Bearer <token>`."""
    auth_header = request.headers.get("Authorization")
    if not auth_header or not auth_header.startswith("Bearer "):
        raise Unauthenticated()

    token = auth_header[len("Bearer "):].strip()
    if not token:
        raise Unauthenticated()
    return token


class PrincipalResolver(ABC):
    """FastAPI dependency resolving the request's bearer token to a principal."""

    @abstractmethod
    def resolve(
        self,
        token: str,
        db: Session,
        settings: Settings,
        identity: IdentityProvider,
    ) -> Any:
        pass

    def __call__(
        self,
        request: Request,
        db: Session = Depends(get_db),
        settings: Settings = Depends(get_settings),
        identity: IdentityProvider = Depends(get_identity_provider),
    ) -> Any:
        return self.resolve(get_bearer_token(request), db, settings, identity)


class CompanyTokenResolver(PrincipalResolver):
    """Verifies a server-issued company JWT and loads the Company."""

    def resolve(self, token, db, settings, identity) -> Company:
        try:
            payload = decode_access_token(token, settings)
        except JWTError as e:
            logger.info(f"Company token rejected: {e}")
            raise InvalidToken() from e

        company_id = payload.get("id")
        if company_id is None:
            raise InvalidToken()

        company = db.query(Company).filter(Company.id == company_id).first()
        if not company:
            raise PrincipalNotFound()
        return company


class IdentityProviderResolver(PrincipalResolver):
    """Delegates verification to the identity provider; yields the external user id."""

    def resolve(self, token, db, settings, identity) -> str:
        return identity.verify_session_token(token)


get_current_company = CompanyTokenResolver()
get_current_user_id = IdentityProviderResolver()
