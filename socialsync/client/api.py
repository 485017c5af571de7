"""Async HTTP client for the remote social operations used by the interaction layer."""
from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

import httpx

from ..config import get_client_settings
from .state import MutationResult, RelationKind, RelationLink

logger = logging.getLogger(__name__)

_RELATION_PATHS: dict[RelationKind, str] = {
    RelationKind.FOLLOWERS: "/follows/{owner_id}/followers",
    RelationKind.FOLLOWING: "/follows/{owner_id}/following",
    RelationKind.LIKERS: "/posts/{owner_id}/likes",
}


class RemoteCallError(RuntimeError):
    """Raised when a remote call fails at the transport or HTTP level."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class SocialApiClient:
    """Thin wrapper over :class:`httpx.AsyncClient` speaking the SocialSync API.

    Every method either returns a parsed result or raises
    :class:`RemoteCallError`; callers decide how failures surface.
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        token: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        settings = get_client_settings()
        headers = {"Authorization": f"Bearer {token}"} if token else {}
        self._token = token
        self._client = httpx.AsyncClient(
            base_url=(base_url or settings.api_base_url).rstrip("/"),
            timeout=timeout or settings.api_timeout,
            headers=headers,
            transport=transport,
        )

    @property
    def authenticated(self) -> bool:
        return bool(self._token)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "SocialApiClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            response = await self._client.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status_code = exc.response.status_code
            logger.warning("%s %s failed with HTTP %s", method, path, status_code)
            raise RemoteCallError(f"{method} {path} returned {status_code}", status_code=status_code) from exc
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            raise RemoteCallError(f"{method} {path} failed") from exc

        try:
            return response.json()
        except ValueError as exc:
            raise RemoteCallError(f"{method} {path} returned invalid JSON") from exc

    async def _mutation(self, method: str, path: str, **kwargs: Any) -> MutationResult:
        data = await self._request(method, path, **kwargs)
        if not isinstance(data, dict):
            raise RemoteCallError(f"{method} {path} returned an unexpected payload")
        return MutationResult(success=bool(data.get("success", False)), payload=data)

    async def toggle_follow(self, user_id: UUID | str) -> MutationResult:
        return await self._mutation("POST", f"/follows/{user_id}/toggle")

    async def toggle_like(self, post_id: UUID | str) -> MutationResult:
        return await self._mutation("POST", f"/posts/{post_id}/likes/toggle")

    async def fetch_relation_links(self, kind: RelationKind, owner_id: UUID | str) -> list[RelationLink]:
        path = _RELATION_PATHS[RelationKind(kind)].format(owner_id=owner_id)
        data = await self._request("GET", path)
        try:
            return [RelationLink.from_payload(item) for item in data["items"]]
        except (KeyError, TypeError) as exc:
            raise RemoteCallError(f"GET {path} returned an unexpected payload") from exc

    async def search_users(self, query: str) -> list[RelationLink]:
        data = await self._request("GET", "/users/search", params={"q": query})
        try:
            return [RelationLink.from_payload(item) for item in data["results"]]
        except (KeyError, TypeError) as exc:
            raise RemoteCallError("GET /users/search returned an unexpected payload") from exc

    async def submit_comment(self, post_id: UUID | str, text: str) -> MutationResult:
        data = await self._request("POST", f"/posts/{post_id}/comments", json={"content": text})
        # The create endpoint answers with the comment itself.
        return MutationResult(success=isinstance(data, dict) and "id" in data, payload=data)

    async def delete_comment(self, comment_id: UUID | str) -> MutationResult:
        return await self._mutation("DELETE", f"/posts/comments/{comment_id}")

    async def delete_post(self, post_id: UUID | str) -> MutationResult:
        return await self._mutation("DELETE", f"/posts/{post_id}")


__all__ = ["RemoteCallError", "SocialApiClient"]
