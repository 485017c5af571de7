"""On-demand loading of follower, following and liker lists."""
from __future__ import annotations

import logging
from typing import Awaitable, Callable, Sequence
from uuid import UUID

from .presentation import ListRender, liked_by_text, render_relation_list
from .state import RelationKind, RelationLink, RelationListPhase

logger = logging.getLogger(__name__)

RelationFetcher = Callable[[RelationKind, str], Awaitable[Sequence[RelationLink]]]


class RelationListView:
    """State of one relation-list container (dialog, panel) owned by a single view.

    ``closed -> loading -> populated | empty | errored-empty``, back to
    ``closed`` on dismissal. Every ``open`` performs exactly one fetch; nothing
    is cached between openings. Fetch failures leave the list empty and are
    only logged.
    """

    def __init__(self, fetch: RelationFetcher, *, viewer_id: UUID | str | None = None) -> None:
        self._fetch = fetch
        self._viewer_id = str(viewer_id) if viewer_id is not None else None
        self._phase = RelationListPhase.CLOSED
        self._kind: RelationKind | None = None
        self._owner_id: str | None = None
        self._items: tuple[RelationLink, ...] = ()
        # Bumped on every open/close so late responses can be recognised.
        self._generation = 0

    @property
    def phase(self) -> RelationListPhase:
        return self._phase

    @property
    def kind(self) -> RelationKind | None:
        return self._kind

    @property
    def owner_id(self) -> str | None:
        return self._owner_id

    @property
    def items(self) -> tuple[RelationLink, ...]:
        return self._items

    @property
    def is_open(self) -> bool:
        return self._phase is not RelationListPhase.CLOSED

    @property
    def loading(self) -> bool:
        return self._phase is RelationListPhase.LOADING

    async def open(self, kind: RelationKind, owner_id: UUID | str) -> RelationListPhase:
        kind = RelationKind(kind)
        owner = str(owner_id)
        self._generation += 1
        generation = self._generation
        self._kind = kind
        self._owner_id = owner
        self._items = ()
        self._phase = RelationListPhase.LOADING

        try:
            links = await self._fetch(kind, owner)
        except Exception:
            logger.exception("Error fetching %s for %s", kind.value, owner)
            if generation == self._generation:
                self._phase = RelationListPhase.ERRORED_EMPTY
            return self._phase

        if generation != self._generation:
            logger.debug("Dropping stale %s response for %s", kind.value, owner)
            return self._phase

        self._items = self._visible(kind, links)
        self._phase = RelationListPhase.POPULATED if self._items else RelationListPhase.EMPTY
        return self._phase

    def close(self) -> None:
        self._generation += 1
        self._phase = RelationListPhase.CLOSED
        self._kind = None
        self._owner_id = None
        self._items = ()

    def _visible(self, kind: RelationKind, links: Sequence[RelationLink]) -> tuple[RelationLink, ...]:
        # Liker lists never show the viewer; follow lists are shown as fetched.
        if kind is RelationKind.LIKERS and self._viewer_id is not None:
            return tuple(link for link in links if link.id != self._viewer_id)
        return tuple(links)

    def render(self) -> ListRender:
        return render_relation_list(self._kind, self._phase, self._items)

    def liked_by_text(self) -> str:
        if self._kind is not RelationKind.LIKERS:
            return ""
        return liked_by_text(self._items)


__all__ = ["RelationFetcher", "RelationListView"]
