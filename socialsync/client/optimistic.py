"""Optimistic like/follow toggling with rollback to the last confirmed state."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable
from uuid import UUID

from .api import RemoteCallError, SocialApiClient
from .notify import Notifier
from .state import MutationResult, ToggleViewState

logger = logging.getLogger(__name__)

RemoteToggle = Callable[[str], Awaitable[MutationResult]]
StateListener = Callable[[ToggleViewState], None]

LIKE_FAILURE_MESSAGE = "Failed to update like"
FOLLOW_FAILURE_MESSAGE = "Failed to update follow status"


class ToggleOutcome(str, Enum):
    APPLIED = "applied"
    ROLLED_BACK = "rolled_back"
    IGNORED = "ignored"
    SIGN_IN_REQUIRED = "sign_in_required"


@dataclass(slots=True)
class _Entry:
    confirmed: ToggleViewState
    current: ToggleViewState
    in_flight: bool = False


class OptimisticToggleController:
    """Keeps the visible flag/counter of toggle-able entities in step with user intent.

    A toggle flips the local state before the remote call is awaited. At most
    one call per entity is outstanding; toggles issued meanwhile are dropped.
    A failed call resets the entity to its confirmed state, which is why the
    single in-flight rule matters: nothing else can have moved the state since.
    A successful call makes the optimistic state the new confirmed state
    without reading the response body.
    """

    def __init__(
        self,
        remote: RemoteToggle,
        *,
        notifier: Notifier,
        failure_message: str,
        is_authenticated: Callable[[], bool],
        on_sign_in_required: Callable[[], None] | None = None,
        on_change: StateListener | None = None,
    ) -> None:
        self._remote = remote
        self._notifier = notifier
        self._failure_message = failure_message
        self._is_authenticated = is_authenticated
        self._on_sign_in_required = on_sign_in_required
        self._on_change = on_change
        self._entries: dict[str, _Entry] = {}

    def track(self, entity_id: UUID | str, active: bool, count: int) -> ToggleViewState:
        """Register the rendered flag/count of an entity as its confirmed state.

        Re-tracking an idle entity rebases it on the new payload; while a call
        is in flight the existing state is kept.
        """

        key = str(entity_id)
        entry = self._entries.get(key)
        if entry is not None and entry.in_flight:
            return entry.current
        state = ToggleViewState(entity_id=key, active=bool(active), count=int(count))
        self._entries[key] = _Entry(confirmed=state, current=state)
        return state

    def discard(self, entity_id: UUID | str) -> None:
        """Forget an entity that left the view."""
        self._entries.pop(str(entity_id), None)

    def state(self, entity_id: UUID | str) -> ToggleViewState:
        return self._entry(str(entity_id)).current

    def is_in_flight(self, entity_id: UUID | str) -> bool:
        return self._entry(str(entity_id)).in_flight

    def _entry(self, key: str) -> _Entry:
        try:
            return self._entries[key]
        except KeyError:
            raise KeyError(f"Entity {key} is not tracked") from None

    def _publish(self, state: ToggleViewState) -> None:
        if self._on_change is not None:
            self._on_change(state)

    async def toggle(self, entity_id: UUID | str) -> ToggleOutcome:
        if not self._is_authenticated():
            if self._on_sign_in_required is not None:
                self._on_sign_in_required()
            return ToggleOutcome.SIGN_IN_REQUIRED

        key = str(entity_id)
        entry = self._entry(key)
        if entry.in_flight:
            logger.debug("Toggle for %s ignored; previous call still in flight", key)
            return ToggleOutcome.IGNORED

        entry.in_flight = True
        entry.current = entry.current.flipped()
        self._publish(entry.current)

        try:
            result = await self._remote(key)
        except RemoteCallError:
            logger.warning("Remote toggle for %s failed", key, exc_info=True)
            return self._settle(key, entry, succeeded=False)
        except BaseException:
            self._settle(key, entry, succeeded=False, notify=False)
            raise

        if not result.success:
            logger.warning("Remote toggle for %s reported failure", key)
        return self._settle(key, entry, succeeded=bool(result.success))

    def _settle(self, key: str, entry: _Entry, *, succeeded: bool, notify: bool = True) -> ToggleOutcome:
        entry.in_flight = False
        outcome = ToggleOutcome.APPLIED if succeeded else ToggleOutcome.ROLLED_BACK
        # Entities discarded mid-flight keep no state.
        if self._entries.get(key) is not entry:
            return outcome

        if succeeded:
            entry.confirmed = entry.current
            return outcome

        entry.current = entry.confirmed
        self._publish(entry.current)
        if notify:
            self._notifier.error(self._failure_message)
        return outcome


def like_controller(
    api: SocialApiClient,
    *,
    notifier: Notifier,
    on_sign_in_required: Callable[[], None] | None = None,
    on_change: StateListener | None = None,
) -> OptimisticToggleController:
    """Controller for "viewer liked this post" flags and like counts."""
    return OptimisticToggleController(
        api.toggle_like,
        notifier=notifier,
        failure_message=LIKE_FAILURE_MESSAGE,
        is_authenticated=lambda: api.authenticated,
        on_sign_in_required=on_sign_in_required,
        on_change=on_change,
    )


def follow_controller(
    api: SocialApiClient,
    *,
    notifier: Notifier,
    on_sign_in_required: Callable[[], None] | None = None,
    on_change: StateListener | None = None,
) -> OptimisticToggleController:
    """Controller for "viewer follows this user" flags and follower counts."""
    return OptimisticToggleController(
        api.toggle_follow,
        notifier=notifier,
        failure_message=FOLLOW_FAILURE_MESSAGE,
        is_authenticated=lambda: api.authenticated,
        on_sign_in_required=on_sign_in_required,
        on_change=on_change,
    )


__all__ = [
    "FOLLOW_FAILURE_MESSAGE",
    "LIKE_FAILURE_MESSAGE",
    "OptimisticToggleController",
    "ToggleOutcome",
    "follow_controller",
    "like_controller",
]
