"""
Client-side bookmark state with optimistic toggles.

`BookmarkState` holds the set of hobby ids the current user has bookmarked. A toggle
updates the set immediately, calls the API, then replaces the set with a fresh server
listing. If the call fails, only the toggled hobby is rolled back.

Racing calls are ordered with counters rather than cancellation:

- a session generation, bumped on every identity change or teardown, so results for a
  previous identity are dropped;
- a per-hobby generation, so only the latest toggle of a hobby may roll it back or
  mark it settled;
- a reconciliation sequence number, so an older listing never overwrites a newer one.
"""
import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum

import httpx

from bookmark_client import api_client
from bookmark_client.api_client import (
    BookmarkApiError,
    BookmarkClientError,
    SessionIdentity,
)

logger = logging.getLogger(__name__)

GENERIC_FAILURE_DESCRIPTION = "Please try again in a moment."


class SessionStatus(StrEnum):
    """Where the state is in its per-identity lifecycle."""

    UNAUTHENTICATED = "unauthenticated"
    LOADING = "loading"
    SYNCED = "synced"


class ToggleStatus(StrEnum):
    """Per-hobby toggle progress."""

    IDLE = "idle"
    PENDING = "pending"  # mutation request in flight
    RECONCILING = "reconciling"  # mutation accepted, re-fetching the list


@dataclass(frozen=True)
class Notification:
    """A transient user-facing message."""

    title: str
    description: str


SIGN_IN_REQUIRED = Notification(
    title="Sign in required",
    description="Bookmarks are available after you sign in.",
)


@dataclass
class _KeyState:
    status: ToggleStatus = ToggleStatus.IDLE
    generation: int = 0
    # Membership requested by the latest toggle
    target: bool = False
    # Last membership the server is known to have accepted; the rollback value
    confirmed: bool = False


class BookmarkState:
    """
    Bookmark membership for one signed-in user, kept in sync with the API.

    The identity is passed in explicitly with `set_identity`; nothing is read from
    ambient session state. Subscribers are called after every change so a view can
    re-render, and `notify` receives user-facing messages (they are also kept in
    `notifications`).
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        notify: Callable[[Notification], None] | None = None,
    ) -> None:
        self._client = client
        self._notify = notify
        self._identity: SessionIdentity | None = None
        self._status = SessionStatus.UNAUTHENTICATED
        self._ids: set[str] = set()
        self._keys: dict[str, _KeyState] = {}
        self._session_generation = 0
        self._reconcile_issued = 0
        self._reconcile_applied = 0
        self._subscribers: list[Callable[[BookmarkState], None]] = []
        self.notifications: list[Notification] = []

    @property
    def identity(self) -> SessionIdentity | None:
        """The identity the state is currently scoped to."""
        return self._identity

    @property
    def status(self) -> SessionStatus:
        """Current lifecycle status."""
        return self._status

    @property
    def is_loading(self) -> bool:
        """True while the initial listing for an identity is in flight."""
        return self._status is SessionStatus.LOADING

    @property
    def bookmarked_ids(self) -> frozenset[str]:
        """Snapshot of the bookmarked hobby ids."""
        return frozenset(self._ids)

    def is_bookmarked(self, hobby_id: str) -> bool:
        """Membership check against the current (possibly optimistic) set."""
        return hobby_id in self._ids

    def key_status(self, hobby_id: str) -> ToggleStatus:
        """Toggle progress for a hobby."""
        key = self._keys.get(hobby_id)
        return key.status if key is not None else ToggleStatus.IDLE

    def subscribe(self, callback: Callable[["BookmarkState"], None]) -> Callable[[], None]:
        """Register a change callback. Returns a function that unregisters it."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    async def set_identity(self, identity: SessionIdentity | None) -> None:
        """
        Scope the state to a new identity, or to none on sign-out.

        Setting the same identity again does nothing. Otherwise the set is cleared and,
        for a signed-in identity, reloaded from the API. A failed load leaves the set
        empty; it is logged but not shown to the user.
        """
        if identity == self._identity:
            return

        self._reset(identity)
        if identity is None:
            self._emit()
            return

        self._status = SessionStatus.LOADING
        self._emit()

        session_generation = self._session_generation
        seq = self._next_reconcile_seq()
        try:
            hobby_ids = await api_client.fetch_bookmarks(self._client, identity.token)
        except BookmarkClientError as e:
            logger.error("Failed to fetch bookmarks: %s", e)
            hobby_ids = []

        if self._is_stale(session_generation):
            logger.debug("Discarding bookmark listing for a previous identity")
            return

        self._apply_server_ids(hobby_ids, seq)
        self._status = SessionStatus.SYNCED
        self._emit()

    async def toggle(self, hobby_id: str) -> bool:
        """
        Flip a hobby's bookmark, optimistically.

        Returns the hobby's membership once the call settles. Without an identity, a
        sign-in notification is recorded and no request is made.
        """
        identity = self._identity
        if identity is None:
            self._push_notification(SIGN_IN_REQUIRED)
            return False

        session_generation = self._session_generation
        currently = hobby_id in self._ids

        key = self._keys.setdefault(hobby_id, _KeyState())
        if key.status is ToggleStatus.IDLE:
            key.confirmed = currently
        key.generation += 1
        generation = key.generation
        key.status = ToggleStatus.PENDING
        key.target = not currently

        self._set_member(hobby_id, key.target)
        self._emit()

        try:
            if currently:
                await api_client.remove_bookmark(self._client, identity.token, hobby_id)
            else:
                await api_client.add_bookmark(self._client, identity.token, hobby_id)
        except BookmarkClientError as e:
            action = "remove" if currently else "add"
            logger.error("Failed to %s bookmark %s: %s", action, hobby_id, e)
            if self._is_stale(session_generation):
                return False
            self._rollback(hobby_id, key, generation)
            self._push_notification(_failure_notification(e))
            return self.is_bookmarked(hobby_id)

        if self._is_stale(session_generation):
            return False

        key.confirmed = not currently
        if key.generation == generation:
            key.status = ToggleStatus.RECONCILING

        seq = self._next_reconcile_seq()
        try:
            hobby_ids = await api_client.fetch_bookmarks(self._client, identity.token)
        except BookmarkClientError as e:
            # Keep the optimistic value; the mutation itself succeeded
            logger.warning("Failed to refresh bookmarks after toggling %s: %s", hobby_id, e)
            if not self._is_stale(session_generation) and key.generation == generation:
                key.status = ToggleStatus.IDLE
                self._emit()
            return self.is_bookmarked(hobby_id)

        if self._is_stale(session_generation):
            return False

        # A newer toggle of this hobby keeps ownership of its status, and its optimistic
        # value survives the listing below until it settles itself
        if key.generation == generation:
            key.status = ToggleStatus.IDLE
        self._apply_server_ids(hobby_ids, seq)
        self._emit()
        return self.is_bookmarked(hobby_id)

    def close(self) -> None:
        """Tear down: drop the set and make in-flight results stale."""
        self._reset(None)
        self._subscribers.clear()

    def _reset(self, identity: SessionIdentity | None) -> None:
        self._session_generation += 1
        self._identity = identity
        self._status = SessionStatus.UNAUTHENTICATED
        self._ids = set()
        self._keys = {}

    def _is_stale(self, session_generation: int) -> bool:
        return session_generation != self._session_generation

    def _next_reconcile_seq(self) -> int:
        self._reconcile_issued += 1
        return self._reconcile_issued

    def _set_member(self, hobby_id: str, member: bool) -> None:
        if member:
            self._ids.add(hobby_id)
        else:
            self._ids.discard(hobby_id)

    def _rollback(self, hobby_id: str, key: _KeyState, generation: int) -> None:
        """Restore one hobby to its last confirmed membership, unless a newer toggle owns it."""
        if key.generation != generation:
            return
        key.status = ToggleStatus.IDLE
        key.target = key.confirmed
        self._set_member(hobby_id, key.confirmed)
        self._emit()

    def _apply_server_ids(self, hobby_ids: list[str], seq: int) -> None:
        """
        Replace the set with a server listing.

        A listing older than one already applied is ignored. Hobbies with a toggle still
        in progress keep their optimistic value, since the listing may predate it.
        """
        if seq <= self._reconcile_applied:
            logger.debug("Ignoring out-of-order bookmark listing %s", seq)
            return
        self._reconcile_applied = seq

        ids = set(hobby_ids)
        for hobby_id, key in self._keys.items():
            if key.status is not ToggleStatus.IDLE:
                if key.target:
                    ids.add(hobby_id)
                else:
                    ids.discard(hobby_id)
        self._ids = ids

    def _push_notification(self, notification: Notification) -> None:
        self.notifications.append(notification)
        if self._notify is not None:
            self._notify(notification)

    def _emit(self) -> None:
        for callback in list(self._subscribers):
            callback(self)


def _failure_notification(error: BookmarkClientError) -> Notification:
    if isinstance(error, BookmarkApiError):
        return Notification(
            title="Couldn't update bookmark",
            description=error.message or GENERIC_FAILURE_DESCRIPTION,
        )
    return Notification(title="Network error", description=GENERIC_FAILURE_DESCRIPTION)
