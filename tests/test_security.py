"""
Unit tests for password hashing and company tokens.
"""
from datetime import timedelta

import pytest
from jose import JWTError

from app.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)


def test_hash_and_verify_password():
    hashed = hash_password("acme-pass-123")

    assert hashed != "acme-pass-123"
    assert verify_password("acme-pass-123", hashed) is True
    assert verify_password("wrong", hashed) is False


def test_hash_is_salted():
    assert hash_password("same-password") != hash_password("same-password")


def test_verify_password_with_garbage_hash():
    assert verify_password("anything", "not-a-bcrypt-hash") is False


def test_token_roundtrip(settings):
    token = create_access_token({"id": 7}, settings)

    payload = decode_access_token(token, settings)

    assert payload["id"] == 7
    assert "exp" in payload


def test_expired_token_rejected(settings):
    token = create_access_token({"id": 7}, settings, expires_delta=timedelta(seconds=-10))

    with pytest.raises(JWTError):
        decode_access_token(token, settings)


def test_token_signed_with_other_secret_rejected(settings):
    other = settings.__class__(secret_key="another-secret")
    token = create_access_token({"id": 7}, other)

    with pytest.raises(JWTError):
        decode_access_token(token, settings)
