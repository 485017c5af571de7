"""Render models and display text for relation lists and search results."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .state import RelationKind, RelationLink, RelationListPhase

DEFAULT_AVATAR_URL = "/avatar.png"
SEARCH_EMPTY_MESSAGE = "Search for more Users"

EMPTY_MESSAGES: dict[RelationKind, str] = {
    RelationKind.FOLLOWERS: "No followers found.",
    RelationKind.FOLLOWING: "No following users found.",
    RelationKind.LIKERS: "No likes yet.",
}

LIST_TITLES: dict[RelationKind, str] = {
    RelationKind.FOLLOWERS: "Followers",
    RelationKind.FOLLOWING: "Following",
    RelationKind.LIKERS: "Liked By",
}


@dataclass(frozen=True, slots=True)
class UserItemView:
    id: str
    display_name: str
    handle: str
    avatar_url: str
    href: str


@dataclass(frozen=True, slots=True)
class ListRender:
    """What a list container should show: a placeholder, an empty message, or items."""

    title: str
    placeholder: bool = False
    empty_message: str | None = None
    items: tuple[UserItemView, ...] = ()


def profile_href(username: str) -> str:
    return f"/profile/{username}"


def user_item_view(link: RelationLink) -> UserItemView:
    return UserItemView(
        id=link.id,
        display_name=link.display_name,
        handle=f"@{link.username}",
        avatar_url=link.avatar_url or DEFAULT_AVATAR_URL,
        href=profile_href(link.username),
    )


def render_relation_list(
    kind: RelationKind | None,
    phase: RelationListPhase,
    items: Sequence[RelationLink],
) -> ListRender:
    title = LIST_TITLES.get(kind, "") if kind is not None else ""
    if phase is RelationListPhase.CLOSED:
        return ListRender(title=title)
    if phase is RelationListPhase.LOADING:
        return ListRender(title=title, placeholder=True)
    if phase in (RelationListPhase.EMPTY, RelationListPhase.ERRORED_EMPTY) or not items:
        return ListRender(title=title, empty_message=EMPTY_MESSAGES.get(kind, "Nothing to show.") if kind else None)
    return ListRender(title=title, items=tuple(user_item_view(link) for link in items))


def liked_by_text(users: Sequence[RelationLink]) -> str:
    """Summary line shown under a post, e.g. ``"Ann, Bob and 3 others liked this post.."``."""

    if not users:
        return ""
    if len(users) == 1:
        return f"{users[0].display_name} liked this post"
    if len(users) == 2:
        return f"{users[0].display_name} and {users[1].display_name} liked this post"
    return f"{users[0].display_name}, {users[1].display_name} and {len(users) - 2} others liked this post.."


__all__ = [
    "DEFAULT_AVATAR_URL",
    "EMPTY_MESSAGES",
    "LIST_TITLES",
    "SEARCH_EMPTY_MESSAGE",
    "ListRender",
    "UserItemView",
    "liked_by_text",
    "profile_href",
    "render_relation_list",
    "user_item_view",
]
