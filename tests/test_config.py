"""
Tests for loading Settings from the environment and .env files.
"""
import pytest

from app.core.config import DEFAULT_CORS_ORIGINS, Settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("SECRET_KEY", "JWT_SECRET", "RUN_MIGRATIONS", "ACCESS_TOKEN_EXPIRE_DAYS", "CLIENT_URL", "DATABASE_URL"):
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    settings = Settings(_env_file=None)

    assert settings.secret_key == "change-me"
    assert settings.algorithm == "HS256"
    assert settings.access_token_expire_days == 30
    assert settings.run_migrations is False
    assert settings.cors_origins == DEFAULT_CORS_ORIGINS


def test_values_parsed_from_environment(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql://db/jobs")
    monkeypatch.setenv("RUN_MIGRATIONS", "1")
    monkeypatch.setenv("ACCESS_TOKEN_EXPIRE_DAYS", "7")

    settings = Settings(_env_file=None)

    assert settings.database_url == "postgresql://db/jobs"
    assert settings.run_migrations is True
    assert settings.access_token_expire_days == 7


def test_jwt_secret_is_accepted_for_secret_key(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "from-jwt-secret")

    assert Settings(_env_file=None).secret_key == "from-jwt-secret"


def test_secret_key_wins_over_jwt_secret(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", "from-jwt-secret")
    monkeypatch.setenv("SECRET_KEY", "from-secret-key")

    assert Settings(_env_file=None).secret_key == "from-secret-key"


def test_explicit_values_win_over_environment(monkeypatch):
    monkeypatch.setenv("SECRET_KEY", "from-env")

    assert Settings(_env_file=None, secret_key="explicit").secret_key == "explicit"


def test_client_url_is_added_to_cors_origins(monkeypatch):
    monkeypatch.setenv("CLIENT_URL", "https://jobs.example.com")

    settings = Settings(_env_file=None)

    assert settings.cors_origins == DEFAULT_CORS_ORIGINS + ("https://jobs.example.com",)


def test_env_file_is_read(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("JWT_SECRET=dotenv-secret\nRUN_MIGRATIONS=true\nUNRELATED_VALUE=ignored\n")

    settings = Settings(_env_file=str(env_file))

    assert settings.secret_key == "dotenv-secret"
    assert settings.run_migrations is True


def test_settings_are_hashable():
    first = Settings(_env_file=None, secret_key="same")
    second = Settings(_env_file=None, secret_key="same")

    assert hash(first) == hash(second)
    assert len({first, second}) == 1
