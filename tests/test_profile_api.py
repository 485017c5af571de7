"""Integration tests for registration, profile cards and user search."""
from __future__ import annotations

import os
from typing import Callable, Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import delete

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///./test_socialsync.db")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")

from socialsync.database import Base, SessionLocal, engine  # noqa: E402
from socialsync.main import app  # noqa: E402
from socialsync.models import Follow, Post, User  # noqa: E402
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
        session.execute(delete(Post))
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
def client() -> Iterator[TestClient]:
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def _act_as(user: User) -> None:
    app.dependency_overrides[get_current_user] = lambda: user
    app.dependency_overrides[get_optional_user] = lambda: user


def test_register_login_and_me(client: TestClient) -> None:
    registered = client.post(
        "/auth/register",
        json={"username": "newbie", "password": "secret-pass", "display_name": "New Bie"},
    )
    assert registered.status_code == 201, registered.text
    assert registered.json()["token_type"] == "bearer"

    duplicate = client.post("/auth/register", json={"username": "newbie", "password": "secret-pass"})
    assert duplicate.status_code == 409

    assert client.post("/auth/login", json={"username": "newbie", "password": "wrong"}).status_code == 401

    login = client.post("/auth/login", json={"username": "newbie", "password": "secret-pass"})
    assert login.status_code == 200, login.text
    token = login.json()["access_token"]

    me = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200, me.text
    assert me.json()["username"] == "newbie"
    assert me.json()["display_name"] == "New Bie"


def test_profile_counts_and_follow_flag(client: TestClient, user_factory) -> None:
    owner = user_factory("owner", "Owner")
    viewer = user_factory("viewer")
    other = user_factory("other")

    with SessionLocal() as session:
        session.add_all(
            [
                Follow(follower_id=viewer.id, following_id=owner.id),
                Follow(follower_id=owner.id, following_id=other.id),
                Post(user_id=owner.id, content="first"),
            ]
        )
        session.commit()

    anonymous = client.get("/profiles/owner")
    assert anonymous.status_code == 200, anonymous.text
    body = anonymous.json()
    assert body["followers_count"] == 1
    assert body["following_count"] == 1
    assert body["posts_count"] == 1
    assert body["is_following"] is False

    _act_as(viewer)
    assert client.get("/profiles/owner").json()["is_following"] is True


def test_unknown_profile_returns_404(client: TestClient) -> None:
    assert client.get("/profiles/ghost").status_code == 404


def test_update_profile_clears_blank_fields_and_keeps_avatar(client: TestClient, user_factory) -> None:
    user = user_factory("editor", "Editor")
    with SessionLocal() as session:
        stored = session.get(User, user.id)
        stored.avatar_url = "https://cdn.example.com/a.png"
        stored.bio = "old bio"
        session.commit()

    _act_as(user)
    response = client.put(
        "/profiles/me",
        json={"display_name": "  Edited  ", "bio": "   ", "avatar_url": ""},
    )
    assert response.status_code == 200, response.text
    body = response.json()
    assert body["display_name"] == "Edited"
    assert body["bio"] is None
    assert body["avatar_url"] == "https://cdn.example.com/a.png"


def test_search_matches_username_and_display_name(client: TestClient, user_factory) -> None:
    user_factory("alice", "Alice Liddell")
    user_factory("bob", "Bobby Tables")
    user_factory("carol", "Caroline ALICE")

    response = client.get("/users/search", params={"q": "  alice "})
    assert response.status_code == 200, response.text
    body = response.json()
    assert body["query"] == "alice"
    assert [item["username"] for item in body["results"]] == ["alice", "carol"]
    assert body["results"][0]["name"] == "Alice Liddell"


def test_blank_search_returns_no_results(client: TestClient, user_factory) -> None:
    user_factory("alice")
    assert client.get("/users/search", params={"q": "   "}).json()["results"] == []


def test_search_treats_wildcards_literally(client: TestClient, user_factory) -> None:
    user_factory("snake_case")
    user_factory("plainuser", "Plain 100% User")

    underscore = client.get("/users/search", params={"q": "_"}).json()["results"]
    assert [item["username"] for item in underscore] == ["snake_case"]

    percent = client.get("/users/search", params={"q": "%"}).json()["results"]
    assert [item["username"] for item in percent] == ["plainuser"]
