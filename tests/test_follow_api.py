"""Integration tests covering follow toggling and follower/following lists."""
from __future__ import annotations

import os
from typing import Callable, Iterator
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import delete

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///./test_socialsync.db")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")

from socialsync.database import Base, SessionLocal, engine  # noqa: E402
from socialsync.main import app  # noqa: E402
from socialsync.models import Follow, User  # noqa: E402
from socialsync.services import get_current_user, get_optional_user  # noqa: E402


@pytest.fixture(scope="module", autouse=True)
def _create_schema() -> Iterator[None]:
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def _clean_database() -> Iterator[None]:
    with SessionLocal() as session:
        session.execute(delete(Follow))
        session.execute(delete(User))
        session.commit()
    yield


@pytest.fixture
def user_factory() -> Callable[..., User]:
    def _factory(username: str, display_name: str | None = None) -> User:
        with SessionLocal() as session:
            user = User(username=username, display_name=display_name, hashed_password="test-hash")
            session.add(user)
            session.commit()
            session.refresh(user)
            return user
    return _factory


@pytest.fixture
def authed_client() -> Iterator[Callable[[User], TestClient]]:
    with TestClient(app) as client:
        def _with_user(user: User) -> TestClient:
            app.dependency_overrides[get_current_user] = lambda: user
            app.dependency_overrides[get_optional_user] = lambda: user
            return client
        yield _with_user
    app.dependency_overrides.clear()


def test_toggle_follow_creates_then_removes_edge(user_factory, authed_client) -> None:
    alice = user_factory("alice")
    bob = user_factory("bob")
    client = authed_client(alice)

    first = client.post(f"/follows/{bob.id}/toggle")
    assert first.status_code == 200, first.text
    body = first.json()
    assert body["success"] is True
    assert body["status"] == "followed"
    assert body["is_following"] is True
    assert body["followers_count"] == 1

    second = client.post(f"/follows/{bob.id}/toggle")
    assert second.status_code == 200, second.text
    body = second.json()
    assert body["status"] == "unfollowed"
    assert body["is_following"] is False
    assert body["followers_count"] == 0

    with SessionLocal() as session:
        assert session.query(Follow).count() == 0


def test_toggle_follow_rejects_self_follow(user_factory, authed_client) -> None:
    alice = user_factory("alice")
    client = authed_client(alice)

    response = client.post(f"/follows/{alice.id}/toggle")
    assert response.status_code == 400


def test_toggle_follow_unknown_user_returns_404(user_factory, authed_client) -> None:
    alice = user_factory("alice")
    client = authed_client(alice)

    response = client.post(f"/follows/{uuid4()}/toggle")
    assert response.status_code == 404


def test_toggle_follow_requires_authentication(user_factory) -> None:
    bob = user_factory("bob")
    with TestClient(app) as client:
        response = client.post(f"/follows/{bob.id}/toggle")
    assert response.status_code == 401


def test_follow_is_unique_per_pair(user_factory, authed_client) -> None:
    alice = user_factory("alice")
    bob = user_factory("bob")
    client = authed_client(alice)

    assert client.post(f"/follows/{bob.id}").json()["status"] == "followed"
    repeat = client.post(f"/follows/{bob.id}")
    assert repeat.json()["status"] == "noop"
    assert repeat.json()["followers_count"] == 1


def test_followers_and_following_lists_are_ordered_by_follow_time(user_factory, authed_client) -> None:
    target = user_factory("target", "Target User")
    carol = user_factory("carol", "Carol")
    dave = user_factory("dave")

    authed_client(dave).post(f"/follows/{target.id}/toggle")
    client = authed_client(carol)
    client.post(f"/follows/{target.id}/toggle")
    client.post(f"/follows/{dave.id}/toggle")

    followers = client.get(f"/follows/{target.id}/followers")
    assert followers.status_code == 200, followers.text
    payload = followers.json()
    assert payload["kind"] == "followers"
    assert [item["username"] for item in payload["items"]] == ["dave", "carol"]
    assert payload["items"][1]["name"] == "Carol"
    assert payload["items"][0]["name"] is None

    following = client.get(f"/follows/{carol.id}/following")
    assert [item["username"] for item in following.json()["items"]] == ["target", "dave"]


def test_relation_list_for_unknown_user_returns_404(authed_client, user_factory) -> None:
    client = authed_client(user_factory("alice"))
    assert client.get(f"/follows/{uuid4()}/followers").status_code == 404


def test_follow_stats_report_viewer_relationship(user_factory, authed_client) -> None:
    alice = user_factory("alice")
    bob = user_factory("bob")
    client = authed_client(alice)
    client.post(f"/follows/{bob.id}/toggle")

    stats = client.get(f"/follows/stats/{bob.id}").json()
    assert stats["followers_count"] == 1
    assert stats["following_count"] == 0
    assert stats["is_following"] is True
