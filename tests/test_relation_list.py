"""Tests for on-demand follower, following and liker lists."""
from __future__ import annotations

import asyncio

from socialsync.client import (
    RelationKind,
    RelationLink,
    RelationListPhase,
    RelationListView,
    RemoteCallError,
)
from socialsync.client.presentation import EMPTY_MESSAGES

ANN = RelationLink(id="a", username="ann", name="Ann")
BEN = RelationLink(id="b", username="ben")
CAT = RelationLink(id="c", username="cat", name="Cat", avatar_url="https://cdn.example.com/cat.png")


class StubFetcher:
    def __init__(self, *responses) -> None:
        self.responses = list(responses)
        self.calls: list[tuple[RelationKind, str]] = []
        self.gate: asyncio.Event | None = None

    async def __call__(self, kind: RelationKind, owner_id: str):
        self.calls.append((kind, owner_id))
        if self.gate is not None:
            await self.gate.wait()
        response = self.responses.pop(0) if self.responses else []
        if isinstance(response, Exception):
            raise response
        return response


def test_each_open_fetches_once() -> None:
    fetcher = StubFetcher([ANN, BEN], [ANN])
    view = RelationListView(fetcher)

    async def scenario() -> None:
        assert view.phase is RelationListPhase.CLOSED
        assert await view.open(RelationKind.FOLLOWERS, "owner") is RelationListPhase.POPULATED
        assert view.items == (ANN, BEN)
        view.close()
        assert await view.open(RelationKind.FOLLOWERS, "owner") is RelationListPhase.POPULATED
        assert view.items == (ANN,)

    asyncio.run(scenario())
    assert fetcher.calls == [(RelationKind.FOLLOWERS, "owner"), (RelationKind.FOLLOWERS, "owner")]


def test_loading_then_populated_render() -> None:
    fetcher = StubFetcher([ANN, CAT])
    view = RelationListView(fetcher)

    async def scenario() -> None:
        fetcher.gate = asyncio.Event()
        pending = asyncio.create_task(view.open(RelationKind.FOLLOWING, "owner"))
        await asyncio.sleep(0)
        assert view.loading
        assert view.render().placeholder
        fetcher.gate.set()
        await pending

    asyncio.run(scenario())
    rendered = view.render()
    assert rendered.title == "Following"
    assert not rendered.placeholder
    assert [item.display_name for item in rendered.items] == ["Ann", "Cat"]
    assert rendered.items[0].avatar_url == "/avatar.png"
    assert rendered.items[1].href == "/profile/cat"


def test_empty_result_shows_kind_message() -> None:
    view = RelationListView(StubFetcher([]))

    assert asyncio.run(view.open(RelationKind.FOLLOWING, "owner")) is RelationListPhase.EMPTY
    rendered = view.render()
    assert rendered.items == ()
    assert rendered.empty_message == EMPTY_MESSAGES[RelationKind.FOLLOWING]


def test_fetch_failure_renders_empty_without_raising() -> None:
    view = RelationListView(StubFetcher(RemoteCallError("down", status_code=503)))

    assert asyncio.run(view.open(RelationKind.FOLLOWERS, "owner")) is RelationListPhase.ERRORED_EMPTY
    assert view.items == ()
    assert view.render().empty_message == "No followers found."


def test_likers_exclude_the_viewer() -> None:
    view = RelationListView(StubFetcher([ANN, BEN, CAT]), viewer_id="b")

    asyncio.run(view.open(RelationKind.LIKERS, "post-1"))

    assert view.items == (ANN, CAT)
    assert view.liked_by_text() == "Ann and Cat liked this post"


def test_follow_lists_keep_the_viewer() -> None:
    view = RelationListView(StubFetcher([ANN, BEN]), viewer_id="b")

    asyncio.run(view.open(RelationKind.FOLLOWERS, "owner"))

    assert view.items == (ANN, BEN)
    assert view.liked_by_text() == ""


def test_only_viewer_liked_shows_empty_list() -> None:
    view = RelationListView(StubFetcher([BEN]), viewer_id="b")

    assert asyncio.run(view.open(RelationKind.LIKERS, "post-1")) is RelationListPhase.EMPTY
    assert view.render().empty_message == "No likes yet."


def test_response_after_close_is_dropped() -> None:
    fetcher = StubFetcher([ANN])
    view = RelationListView(fetcher)

    async def scenario() -> None:
        fetcher.gate = asyncio.Event()
        pending = asyncio.create_task(view.open(RelationKind.FOLLOWERS, "owner"))
        await asyncio.sleep(0)
        view.close()
        fetcher.gate.set()
        await pending

    asyncio.run(scenario())
    assert view.phase is RelationListPhase.CLOSED
    assert view.items == ()


def test_superseded_open_keeps_latest_list() -> None:
    fetcher = StubFetcher([ANN], [CAT])
    view = RelationListView(fetcher)

    async def scenario() -> None:
        fetcher.gate = asyncio.Event()
        first = asyncio.create_task(view.open(RelationKind.FOLLOWERS, "owner"))
        await asyncio.sleep(0)
        second = asyncio.create_task(view.open(RelationKind.FOLLOWING, "owner"))
        await asyncio.sleep(0)
        fetcher.gate.set()
        await asyncio.gather(first, second)

    asyncio.run(scenario())
    assert view.kind is RelationKind.FOLLOWING
    assert view.items == (CAT,)


def test_unexpected_fetch_error_leaves_loading_state() -> None:
    view = RelationListView(StubFetcher(ValueError("bad payload")))

    assert asyncio.run(view.open(RelationKind.FOLLOWERS, "owner")) is RelationListPhase.ERRORED_EMPTY
    assert not view.loading
    assert view.render().empty_message == "No followers found."
