"""Tests for session token issuing and validation."""
from datetime import UTC, datetime, timedelta

import jwt
import pytest
from fastapi import HTTPException
from starlette.requests import Request

from core.auth import (
    DEV_USER,
    create_session_token,
    decode_session_token,
    get_current_user,
)
from core.config import Settings

SECRET = "unit-test-secret-that-is-long-enough-for-hs256"


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        database_url="postgresql://test",
        SESSION_SECRET=SECRET,
        DEV_MODE="false",
    )


def _request(cookies: dict[str, str] | None = None) -> Request:
    headers = []
    if cookies:
        cookie_header = "; ".join(f"{k}={v}" for k, v in cookies.items())
        headers.append((b"cookie", cookie_header.encode()))
    return Request({"type": "http", "method": "GET", "path": "/", "headers": headers})


def test_token_round_trip(settings: Settings) -> None:
    """A freshly issued token decodes to the same subject and email."""
    token = create_session_token("uid-1", "a@example.com", settings)
    payload = decode_session_token(token, settings)
    assert payload["sub"] == "uid-1"
    assert payload["email"] == "a@example.com"
    assert payload["exp"] - payload["iat"] == settings.session_max_age


def test_expired_token(settings: Settings) -> None:
    """Expired tokens are a 401 with a specific message."""
    past = datetime.now(UTC) - timedelta(days=2)
    token = jwt.encode(
        {"sub": "uid-1", "iat": past, "exp": past + timedelta(days=1)},
        SECRET,
        algorithm="HS256",
    )
    with pytest.raises(HTTPException) as exc_info:
        decode_session_token(token, settings)
    assert exc_info.value.status_code == 401
    assert exc_info.value.detail == "Session has expired"


def test_token_signed_with_other_secret(settings: Settings) -> None:
    """Tokens signed with a different secret are rejected."""
    token = jwt.encode(
        {"sub": "uid-1", "exp": datetime.now(UTC) + timedelta(hours=1)},
        "some-other-secret-that-is-also-long-enough",
        algorithm="HS256",
    )
    with pytest.raises(HTTPException) as exc_info:
        decode_session_token(token, settings)
    assert exc_info.value.status_code == 401
    assert exc_info.value.detail == "Invalid session"


def test_missing_secret_is_service_unavailable() -> None:
    """Without a signing secret, sessions cannot be issued."""
    settings = Settings(_env_file=None, database_url="postgresql://test", SESSION_SECRET="")
    with pytest.raises(HTTPException) as exc_info:
        create_session_token("uid-1", None, settings)
    assert exc_info.value.status_code == 503


async def test_get_current_user_from_cookie(settings: Settings) -> None:
    """The session cookie is used when there is no bearer token."""
    token = create_session_token("uid-7", "c@example.com", settings)
    user = await get_current_user(_request({"session": token}), None, settings)
    assert user.user_id == "uid-7"
    assert user.email == "c@example.com"


async def test_get_current_user_without_credentials(settings: Settings) -> None:
    """No token at all is a 401."""
    with pytest.raises(HTTPException) as exc_info:
        await get_current_user(_request(), None, settings)
    assert exc_info.value.status_code == 401
    assert exc_info.value.detail == "Unauthorized"


async def test_get_current_user_missing_subject(settings: Settings) -> None:
    """A valid signature without a subject is still rejected."""
    token = jwt.encode(
        {"email": "x@example.com", "exp": datetime.now(UTC) + timedelta(hours=1)},
        SECRET,
        algorithm="HS256",
    )
    with pytest.raises(HTTPException) as exc_info:
        await get_current_user(_request({"session": token}), None, settings)
    assert exc_info.value.status_code == 401


async def test_dev_mode_bypasses_auth() -> None:
    """DEV_MODE returns the development user without a token."""
    settings = Settings(
        _env_file=None, database_url="sqlite+aiosqlite:///:memory:", DEV_MODE="true",
    )
    user = await get_current_user(_request(), None, settings)
    assert user == DEV_USER
