"""
Client for the hosted identity service (Supabase GoTrue REST API).

Email/password verification and account creation are delegated entirely to this
service. Sign-in failures are collapsed into a single "no user" result so callers
cannot tell an unknown email from a wrong password or an outage.
"""
import logging
from collections.abc import AsyncGenerator
from dataclasses import dataclass
from typing import Any

import httpx
from fastapi import Depends

from core.config import Settings, get_settings
from services.exceptions import EmailAlreadyRegisteredError, IdentityServiceError

logger = logging.getLogger(__name__)

ALREADY_REGISTERED_MARKER = "User already registered"


@dataclass(frozen=True)
class IdentityUser:
    """User record returned by the identity service."""

    id: str
    email: str | None


def _parse_user(payload: dict[str, Any]) -> IdentityUser | None:
    """
    Extract the user from a GoTrue response body.

    Token responses nest the user under "user"; signup responses may return the user
    object at the top level when email confirmation is enabled.
    """
    user = payload.get("user") if isinstance(payload.get("user"), dict) else payload
    user_id = user.get("id")
    if not user_id:
        return None
    return IdentityUser(id=str(user_id), email=user.get("email"))


def _error_message(response: httpx.Response) -> str:
    """Best-effort extraction of an error message from a GoTrue error body."""
    try:
        body = response.json()
    except ValueError:
        return response.text
    if not isinstance(body, dict):
        return str(body)
    for key in ("msg", "message", "error_description", "error"):
        value = body.get(key)
        if isinstance(value, str) and value:
            return value
    return str(body)


async def sign_in_with_password(
    client: httpx.AsyncClient,
    email: str,
    password: str,
) -> IdentityUser | None:
    """
    Verify credentials with the identity service.

    Returns:
        The authenticated user, or None on any failure (bad credentials, unexpected
        response, transport error). The cause is logged server-side only.
    """
    try:
        response = await client.post(
            "/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
        )
    except httpx.HTTPError as e:
        logger.error("Identity service sign-in request failed: %s", e, exc_info=True)
        return None

    if response.is_error:
        logger.warning(
            "Identity service sign-in rejected (%s): %s",
            response.status_code,
            _error_message(response),
        )
        return None

    try:
        payload = response.json()
    except ValueError:
        logger.error("Identity service returned a non-JSON sign-in response")
        return None

    user = _parse_user(payload) if isinstance(payload, dict) else None
    if user is None:
        logger.error("No user data returned from identity service")
    return user


async def sign_up(
    client: httpx.AsyncClient,
    email: str,
    password: str,
) -> IdentityUser:
    """
    Create an account with the identity service.

    Raises:
        EmailAlreadyRegisteredError: If the email already has an account.
        IdentityServiceError: For any other failure.
    """
    try:
        response = await client.post("/signup", json={"email": email, "password": password})
    except httpx.HTTPError as e:
        logger.error("Identity service signup request failed: %s", e, exc_info=True)
        raise IdentityServiceError("Signup request failed") from e

    if response.is_error:
        message = _error_message(response)
        if ALREADY_REGISTERED_MARKER.lower() in message.lower():
            raise EmailAlreadyRegisteredError(email)
        logger.warning("Identity service signup rejected (%s): %s", response.status_code, message)
        raise IdentityServiceError(message)

    try:
        payload = response.json()
    except ValueError as e:
        raise IdentityServiceError("Identity service returned a non-JSON response") from e

    user = _parse_user(payload) if isinstance(payload, dict) else None
    if user is None:
        raise IdentityServiceError("No user data returned from identity service")
    return user


async def get_identity_client(
    settings: Settings = Depends(get_settings),
) -> AsyncGenerator[httpx.AsyncClient]:
    """Yield an HTTP client bound to the identity service for the current request."""
    async with httpx.AsyncClient(
        base_url=settings.identity_base_url,
        headers={"apikey": settings.supabase_anon_key},
        timeout=settings.identity_timeout,
    ) as client:
        yield client
