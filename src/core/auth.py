"""Session tokens: issuing and validating the signed session that identifies a user."""
import logging
from datetime import UTC, datetime, timedelta

import jwt
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from core.config import Settings, get_settings
from schemas.auth import SessionUser

logger = logging.getLogger(__name__)


# HTTP Bearer token scheme; the session cookie is accepted as a fallback
security = HTTPBearer(auto_error=False)

SESSION_ALGORITHM = "HS256"

DEV_USER = SessionUser(user_id="dev|local-development-user", email="dev@localhost")


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _require_secret(settings: Settings) -> str:
    if not settings.session_secret:
        logger.error("SESSION_SECRET is not configured; sessions cannot be signed or verified")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Could not validate credentials",
        )
    return settings.session_secret


def create_session_token(user_id: str, email: str | None, settings: Settings) -> str:
    """Issue a signed session token for an authenticated user."""
    secret = _require_secret(settings)
    issued_at = datetime.now(UTC)
    payload = {
        "sub": user_id,
        "email": email,
        "iat": issued_at,
        "exp": issued_at + timedelta(seconds=settings.session_max_age),
    }
    return jwt.encode(payload, secret, algorithm=SESSION_ALGORITHM)


def decode_session_token(token: str, settings: Settings) -> dict:
    """
    Verify a session token's signature and expiry.

    Raises:
        HTTPException: 401 if the token is invalid or expired, 503 if no signing
            secret is configured.
    """
    secret = _require_secret(settings)
    try:
        return jwt.decode(token, secret, algorithms=[SESSION_ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise _unauthorized("Session has expired")
    except jwt.PyJWTError as e:
        # Log full details for debugging (server-side only)
        logger.warning("Session token validation failed: %s", e)
        raise _unauthorized("Invalid session")


def _extract_token(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None,
    settings: Settings,
) -> str | None:
    if credentials is not None:
        return credentials.credentials
    return request.cookies.get(settings.session_cookie_name)


def _resolve_user(token: str, settings: Settings) -> SessionUser:
    payload = decode_session_token(token, settings)
    user_id = payload.get("sub")
    if not user_id:
        raise _unauthorized("Invalid session: missing subject")
    return SessionUser(user_id=str(user_id), email=payload.get("email"))


async def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    settings: Settings = Depends(get_settings),
) -> SessionUser:
    """
    Dependency that validates the session and returns the current user.

    The token is taken from the Authorization header, or from the session cookie when
    no header is sent. In DEV_MODE, bypasses auth and returns a fixed development user.
    """
    if settings.dev_mode:
        return DEV_USER

    token = _extract_token(request, credentials, settings)
    if not token:
        raise _unauthorized("Unauthorized")
    return _resolve_user(token, settings)
