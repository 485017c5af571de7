"""Client-side view-state records for entities and relation lists."""
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Mapping


class RelationKind(str, Enum):
    FOLLOWERS = "followers"
    FOLLOWING = "following"
    LIKERS = "likers"


class RelationListPhase(str, Enum):
    CLOSED = "closed"
    LOADING = "loading"
    POPULATED = "populated"
    EMPTY = "empty"
    ERRORED_EMPTY = "errored-empty"


@dataclass(frozen=True, slots=True)
class ToggleViewState:
    """Visible flag and counter of one toggle-able relationship.

    ``active`` is "viewer liked this post" or "viewer follows this user";
    ``count`` is the matching like or follower count.
    """

    entity_id: str
    active: bool
    count: int

    def flipped(self) -> "ToggleViewState":
        return replace(self, active=not self.active, count=self.count + (-1 if self.active else 1))


@dataclass(frozen=True, slots=True)
class RelationLink:
    """Summary of a user at the other end of a relation edge."""

    id: str
    username: str
    name: str | None = None
    avatar_url: str | None = None

    @property
    def display_name(self) -> str:
        # Display name first, handle as fallback.
        name = (self.name or "").strip()
        return name or self.username

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "RelationLink":
        return cls(
            id=str(payload["id"]),
            username=str(payload["username"]),
            name=payload.get("name"),
            avatar_url=payload.get("avatar_url"),
        )


@dataclass(frozen=True, slots=True)
class MutationResult:
    success: bool
    payload: Mapping[str, Any] | None = None


__all__ = [
    "MutationResult",
    "RelationKind",
    "RelationLink",
    "RelationListPhase",
    "ToggleViewState",
]
