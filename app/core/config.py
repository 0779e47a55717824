from functools import lru_cache
from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings

DEFAULT_CORS_ORIGINS = (
    "http://localhost:3000",
    "http://localhost:5173",
)


class Settings(BaseSettings):
    """Runtime configuration from environment variables (and .env, if present)."""

    # ✅ Database
    database_url: str = "sqlite:///./jobportal.db"

    # ✅ Security (company tokens)
    secret_key: str = Field("change-me", validation_alias=AliasChoices("secret_key", "jwt_secret"))
    algorithm: str = "HS256"
    access_token_expire_days: int = 30

    # ✅ Cloudinary
    cloudinary_cloud_name: Optional[str] = None
    cloudinary_api_key: Optional[str] = None
    cloudinary_api_secret: Optional[str] = None

    # ✅ Clerk
    clerk_secret_key: Optional[str] = None
    clerk_jwt_key: Optional[str] = None
    clerk_api_url: str = "https://api.clerk.com/v1"
    clerk_jwks_url: Optional[str] = None
    clerk_webhook_secret: Optional[str] = None

    # ✅ App
    upload_dir: str = "uploads"
    client_url: Optional[str] = None
    log_level: str = "INFO"
    run_migrations: bool = False

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"
        # Hashable, so providers can cache one client per settings object
        frozen = True

    @property
    def cors_origins(self) -> tuple:
        if self.client_url:
            return DEFAULT_CORS_ORIGINS + (self.client_url,)
        return DEFAULT_CORS_ORIGINS


@lru_cache()
def get_settings() -> Settings:
    """Settings dependency. Tests override this through app.dependency_overrides."""
    return Settings()
