"""Async client for the bookmark API with optimistic client-side state."""

from bookmark_client.api_client import (
    BookmarkApiError,
    BookmarkClientError,
    InvalidCredentialsError,
    NetworkError,
    SessionIdentity,
    create_client,
    sign_in,
)
from bookmark_client.bookmark_state import (
    BookmarkState,
    Notification,
    SessionStatus,
    ToggleStatus,
)

__all__ = [
    "BookmarkApiError",
    "BookmarkClientError",
    "BookmarkState",
    "InvalidCredentialsError",
    "NetworkError",
    "Notification",
    "SessionIdentity",
    "SessionStatus",
    "ToggleStatus",
    "create_client",
    "sign_in",
]
