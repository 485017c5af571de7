"""Tests for list rendering and liked-by summaries."""
from __future__ import annotations

from socialsync.client import RelationKind, RelationLink, RelationListPhase
from socialsync.client.presentation import (
    DEFAULT_AVATAR_URL,
    liked_by_text,
    render_relation_list,
    user_item_view,
)


def _link(username: str, name: str | None = None) -> RelationLink:
    return RelationLink(id=f"id-{username}", username=username, name=name)


def test_display_name_falls_back_to_username() -> None:
    assert _link("ann", "Ann Lee").display_name == "Ann Lee"
    assert _link("ben").display_name == "ben"
    assert _link("cat", "   ").display_name == "cat"


def test_user_item_view_fields() -> None:
    view = user_item_view(_link("ann", "Ann"))
    assert view.handle == "@ann"
    assert view.href == "/profile/ann"
    assert view.avatar_url == DEFAULT_AVATAR_URL


def test_liked_by_text_variants() -> None:
    ann, ben, cat, dan = _link("ann", "Ann"), _link("ben"), _link("cat", "Cat"), _link("dan")

    assert liked_by_text([]) == ""
    assert liked_by_text([ann]) == "Ann liked this post"
    assert liked_by_text([ann, ben]) == "Ann and ben liked this post"
    assert liked_by_text([ann, ben, cat, dan]) == "Ann, ben and 2 others liked this post.."


def test_closed_list_renders_nothing() -> None:
    rendered = render_relation_list(None, RelationListPhase.CLOSED, ())
    assert rendered.items == ()
    assert rendered.empty_message is None
    assert not rendered.placeholder


def test_likers_title_and_empty_message() -> None:
    rendered = render_relation_list(RelationKind.LIKERS, RelationListPhase.EMPTY, ())
    assert rendered.title == "Liked By"
    assert rendered.empty_message == "No likes yet."
