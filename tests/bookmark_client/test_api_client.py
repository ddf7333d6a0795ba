"""Tests for the bookmark API client helpers."""
import json
from collections.abc import Generator

import httpx
import pytest
import respx
from httpx import Response

from bookmark_client.api_client import (
    GENERIC_SIGN_IN_ERROR,
    MALFORMED_RESPONSE,
    BookmarkApiError,
    InvalidCredentialsError,
    NetworkError,
    add_bookmark,
    create_client,
    fetch_bookmarks,
    remove_bookmark,
    sign_in,
)

BASE_URL = "http://test-api"


@pytest.fixture
def mock_api() -> Generator[respx.MockRouter]:
    """Context manager for mocking API responses."""
    with respx.mock(base_url=BASE_URL) as respx_mock:
        yield respx_mock


async def test__fetch_bookmarks__returns_ids_and_sends_token(mock_api: respx.MockRouter) -> None:
    """The listing is returned as a list and the session token is sent as a Bearer header."""
    mock_api.get("/bookmarks").mock(
        return_value=Response(200, json={"hobbyIds": ["yoga", "chess"]}),
    )

    async with httpx.AsyncClient(base_url=BASE_URL) as client:
        hobby_ids = await fetch_bookmarks(client, "session-token-123")

    assert hobby_ids == ["yoga", "chess"]
    assert mock_api.calls[0].request.headers["authorization"] == "Bearer session-token-123"


async def test__add_bookmark__posts_hobby_id(mock_api: respx.MockRouter) -> None:
    """Adding sends the hobby id as JSON."""
    route = mock_api.post("/bookmarks").mock(return_value=Response(200, json={"ok": True}))

    async with httpx.AsyncClient(base_url=BASE_URL) as client:
        await add_bookmark(client, "session-token", "yoga")

    assert json.loads(route.calls[0].request.content) == {"hobbyId": "yoga"}


async def test__remove_bookmark__sends_delete_with_body(mock_api: respx.MockRouter) -> None:
    """Removing uses DELETE with the hobby id in the body."""
    route = mock_api.delete("/bookmarks").mock(return_value=Response(200, json={"ok": True}))

    async with httpx.AsyncClient(base_url=BASE_URL) as client:
        await remove_bookmark(client, "session-token", "chess")

    request = route.calls[0].request
    assert request.method == "DELETE"
    assert json.loads(request.content) == {"hobbyId": "chess"}


async def test__add_bookmark__error_body_message(mock_api: respx.MockRouter) -> None:
    """A non-2xx response raises BookmarkApiError carrying the server's error message."""
    mock_api.post("/bookmarks").mock(
        return_value=Response(500, json={"error": "Failed to add bookmark"}),
    )

    async with httpx.AsyncClient(base_url=BASE_URL) as client:
        with pytest.raises(BookmarkApiError) as exc_info:
            await add_bookmark(client, "session-token", "yoga")

    assert exc_info.value.status_code == 500
    assert exc_info.value.message == "Failed to add bookmark"


async def test__fetch_bookmarks__unparseable_error_body(mock_api: respx.MockRouter) -> None:
    """An error body without an `error` field leaves the message empty."""
    mock_api.get("/bookmarks").mock(return_value=Response(502, text="<html>Bad Gateway</html>"))

    async with httpx.AsyncClient(base_url=BASE_URL) as client:
        with pytest.raises(BookmarkApiError) as exc_info:
            await fetch_bookmarks(client, "session-token")

    assert exc_info.value.status_code == 502
    assert exc_info.value.message is None


async def test__fetch_bookmarks__transport_error(mock_api: respx.MockRouter) -> None:
    """Connection failures surface as NetworkError."""
    mock_api.get("/bookmarks").mock(side_effect=httpx.ConnectError("connection refused"))

    async with httpx.AsyncClient(base_url=BASE_URL) as client:
        with pytest.raises(NetworkError):
            await fetch_bookmarks(client, "session-token")


@pytest.mark.parametrize(
    "body",
    [
        ["yoga", "chess"],
        {"items": ["yoga"]},
        {"hobbyIds": "yoga"},
        {"hobbyIds": ["yoga", 7]},
    ],
)
async def test__fetch_bookmarks__malformed_success_body(
    mock_api: respx.MockRouter, body: object,
) -> None:
    """A 2xx body that is not a list of hobby ids raises BookmarkApiError."""
    mock_api.get("/bookmarks").mock(return_value=Response(200, json=body))

    async with httpx.AsyncClient(base_url=BASE_URL) as client:
        with pytest.raises(BookmarkApiError) as exc_info:
            await fetch_bookmarks(client, "session-token")

    assert exc_info.value.status_code == 200
    assert exc_info.value.message == MALFORMED_RESPONSE


async def test__sign_in__returns_identity(mock_api: respx.MockRouter) -> None:
    """A successful login yields the session identity."""
    route = mock_api.post("/auth/login").mock(
        return_value=Response(
            200,
            json={"token": "jwt-token", "user": {"userId": "uid-1", "email": "a@example.com"}},
        ),
    )

    async with httpx.AsyncClient(base_url=BASE_URL) as client:
        identity = await sign_in(client, "a@example.com", "hunter22")

    assert identity.user_id == "uid-1"
    assert identity.email == "a@example.com"
    assert identity.token == "jwt-token"
    assert "authorization" not in route.calls[0].request.headers


@pytest.mark.parametrize(
    "response",
    [
        Response(401, json={"error": "Invalid email or password"}),
        Response(400, json={"error": "Enter a valid email address."}),
        Response(500, text="boom"),
    ],
)
async def test__sign_in__failures_are_generic(
    mock_api: respx.MockRouter, response: Response,
) -> None:
    """Every rejected sign-in raises the same generic error."""
    mock_api.post("/auth/login").mock(return_value=response)

    async with httpx.AsyncClient(base_url=BASE_URL) as client:
        with pytest.raises(InvalidCredentialsError) as exc_info:
            await sign_in(client, "a@example.com", "wrong")

    assert str(exc_info.value) == GENERIC_SIGN_IN_ERROR


async def test__create_client__uses_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """The base URL and timeout come from the environment."""
    monkeypatch.setenv("HOBBY_API_URL", "http://api.example.com")
    monkeypatch.setenv("HOBBY_API_TIMEOUT", "5")

    async with create_client() as client:
        assert client.base_url.host == "api.example.com"
        assert client.timeout.read == 5.0


@pytest.mark.parametrize(
    "body",
    [
        {"user": {"userId": "uid-1"}},
        {"token": "jwt-token"},
        {"token": "jwt-token", "user": {"email": "a@example.com"}},
        ["jwt-token"],
    ],
)
async def test__sign_in__malformed_success_body(
    mock_api: respx.MockRouter, body: object,
) -> None:
    """A 2xx login body without a token and user id raises BookmarkApiError."""
    mock_api.post("/auth/login").mock(return_value=Response(200, json=body))

    async with httpx.AsyncClient(base_url=BASE_URL) as client:
        with pytest.raises(BookmarkApiError) as exc_info:
            await sign_in(client, "a@example.com", "hunter22")

    assert exc_info.value.message == MALFORMED_RESPONSE
