"""HTTP client helpers for calling the bookmark API."""

import os
from dataclasses import dataclass
from typing import Any

import httpx

GENERIC_SIGN_IN_ERROR = "Check your email and password."
MALFORMED_RESPONSE = "Malformed response body"


class BookmarkClientError(Exception):
    """Base class for failures talking to the bookmark API."""


class BookmarkApiError(BookmarkClientError):
    """
    The API answered with a non-success status.

    `message` is the server's `error` field when the body could be parsed, else None.
    """

    def __init__(self, status_code: int, message: str | None) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"API request failed ({status_code}): {message or 'no details'}")


class NetworkError(BookmarkClientError):
    """The request never produced a response (connection, timeout, protocol error)."""


class InvalidCredentialsError(BookmarkClientError):
    """Sign-in failed. The message never says why."""

    def __init__(self) -> None:
        super().__init__(GENERIC_SIGN_IN_ERROR)


@dataclass(frozen=True)
class SessionIdentity:
    """An authenticated user as seen by the client."""

    user_id: str
    email: str | None
    token: str


def get_api_base_url() -> str:
    """Get the API base URL from environment."""
    return os.getenv("HOBBY_API_URL", "http://localhost:8000")


def get_default_timeout() -> float:
    """Get the default request timeout."""
    return float(os.getenv("HOBBY_API_TIMEOUT", "30.0"))


def create_client(base_url: str | None = None) -> httpx.AsyncClient:
    """Create an AsyncClient pointed at the API."""
    return httpx.AsyncClient(
        base_url=base_url or get_api_base_url(),
        timeout=get_default_timeout(),
    )


def _get_headers(token: str) -> dict[str, str]:
    """Get common headers for API requests."""
    return {"Authorization": f"Bearer {token}"}


def _error_message(response: httpx.Response) -> str | None:
    """Pull the `error` field out of an error response, if there is one."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and isinstance(body.get("error"), str):
        return body["error"]
    return None


async def _send(
    client: httpx.AsyncClient,
    method: str,
    path: str,
    token: str | None = None,
    json: dict[str, Any] | None = None,
) -> httpx.Response:
    """Send a request and translate failures into BookmarkClientError subclasses."""
    headers = _get_headers(token) if token else None
    try:
        response = await client.request(method, path, json=json, headers=headers)
    except httpx.TransportError as e:
        raise NetworkError(str(e)) from e

    if response.is_error:
        raise BookmarkApiError(response.status_code, _error_message(response))
    return response


def _json_object(response: httpx.Response) -> dict[str, Any]:
    """Parse a success body that must be a JSON object."""
    try:
        body = response.json()
    except ValueError as e:
        raise BookmarkApiError(response.status_code, MALFORMED_RESPONSE) from e
    if not isinstance(body, dict):
        raise BookmarkApiError(response.status_code, MALFORMED_RESPONSE)
    return body


async def fetch_bookmarks(client: httpx.AsyncClient, token: str) -> list[str]:
    """
    Fetch the authenticated user's bookmarked hobby ids.

    Raises:
        BookmarkApiError: On an error status, or a body that is not `{"hobbyIds": [str, ...]}`.
        NetworkError: If the API could not be reached.
    """
    response = await _send(client, "GET", "/bookmarks", token)
    hobby_ids = _json_object(response).get("hobbyIds")
    if not isinstance(hobby_ids, list) or not all(isinstance(i, str) for i in hobby_ids):
        raise BookmarkApiError(response.status_code, MALFORMED_RESPONSE)
    return hobby_ids


async def add_bookmark(client: httpx.AsyncClient, token: str, hobby_id: str) -> None:
    """Bookmark a hobby."""
    await _send(client, "POST", "/bookmarks", token, json={"hobbyId": hobby_id})


async def remove_bookmark(client: httpx.AsyncClient, token: str, hobby_id: str) -> None:
    """Remove a bookmark."""
    await _send(client, "DELETE", "/bookmarks", token, json={"hobbyId": hobby_id})


async def sign_in(client: httpx.AsyncClient, email: str, password: str) -> SessionIdentity:
    """
    Exchange credentials for a session.

    Raises:
        InvalidCredentialsError: For any rejected sign-in, whatever the cause.
        BookmarkApiError: If the sign-in succeeded but the body has no token or user.
        NetworkError: If the API could not be reached.
    """
    try:
        response = await _send(
            client, "POST", "/auth/login", json={"email": email, "password": password},
        )
    except BookmarkApiError as e:
        raise InvalidCredentialsError from e

    data = _json_object(response)
    token = data.get("token")
    user = data.get("user")
    if (
        not isinstance(token, str)
        or not isinstance(user, dict)
        or not isinstance(user.get("userId"), str)
    ):
        raise BookmarkApiError(response.status_code, MALFORMED_RESPONSE)
    return SessionIdentity(user_id=user["userId"], email=user.get("email"), token=token)
