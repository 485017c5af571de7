"""Comment, delete and search interactions with their notification policies."""
from __future__ import annotations

import logging
from typing import Awaitable, Callable, Sequence
from uuid import UUID

from .api import RemoteCallError
from .notify import Notifier
from .presentation import SEARCH_EMPTY_MESSAGE, ListRender, user_item_view
from .state import MutationResult, RelationLink

logger = logging.getLogger(__name__)

RemoteMutation = Callable[[str], Awaitable[MutationResult]]
RemoteCommentSubmit = Callable[[str, str], Awaitable[MutationResult]]
RemoteSearch = Callable[[str], Awaitable[Sequence[RelationLink]]]


class CommentComposer:
    """Draft comment for one post.

    Submitting is only possible with non-blank text and no submission pending.
    """

    def __init__(self, post_id: UUID | str, submit: RemoteCommentSubmit, *, notifier: Notifier) -> None:
        self.post_id = str(post_id)
        self._submit = submit
        self._notifier = notifier
        self.draft = ""
        self._submitting = False

    @property
    def submitting(self) -> bool:
        return self._submitting

    @property
    def can_submit(self) -> bool:
        return bool(self.draft.strip()) and not self._submitting

    def edit(self, text: str) -> None:
        self.draft = text

    async def submit(self) -> bool:
        if not self.can_submit:
            return False

        self._submitting = True
        try:
            result = await self._submit(self.post_id, self.draft)
        except RemoteCallError:
            logger.warning("Adding a comment to %s failed", self.post_id, exc_info=True)
            self._notifier.error("Failed to add comment")
            return False
        finally:
            self._submitting = False

        if not result.success:
            self._notifier.error("Failed to add comment")
            return False
        self._notifier.success("Comment posted successfully")
        self.draft = ""
        return True


class PostActions:
    """Author-only destructive actions available on a post card."""

    def __init__(
        self,
        *,
        delete_post: RemoteMutation,
        delete_comment: RemoteMutation,
        notifier: Notifier,
    ) -> None:
        self._delete_post = delete_post
        self._delete_comment = delete_comment
        self._notifier = notifier
        self._deleting: set[str] = set()

    def is_deleting(self, post_id: UUID | str) -> bool:
        return str(post_id) in self._deleting

    async def delete_post(self, post_id: UUID | str) -> bool:
        key = str(post_id)
        if key in self._deleting:
            return False

        self._deleting.add(key)
        try:
            result = await self._delete_post(key)
        except RemoteCallError:
            logger.warning("Deleting post %s failed", key, exc_info=True)
            result = MutationResult(success=False)
        finally:
            self._deleting.discard(key)

        if result.success:
            self._notifier.success("Post deleted successfully")
            return True
        self._notifier.error("Failed to delete post")
        return False

    async def delete_comment(self, comment_id: UUID | str) -> bool:
        key = str(comment_id)
        try:
            result = await self._delete_comment(key)
        except RemoteCallError:
            logger.warning("Deleting comment %s failed", key, exc_info=True)
            result = MutationResult(success=False)

        if result.success:
            self._notifier.success("Comment deleted")
            return True
        self._notifier.error("Unable to delete comment")
        return False


class UserSearch:
    """Search-as-you-type over the user directory.

    Each query change triggers one lookup; an empty query clears results
    without a lookup. Failures are logged and keep the previous results.
    """

    def __init__(self, search: RemoteSearch) -> None:
        self._search = search
        self.query = ""
        self.results: tuple[RelationLink, ...] = ()
        self.loading = False
        self._generation = 0

    async def update_query(self, raw: str) -> tuple[RelationLink, ...]:
        query = (raw or "").strip()
        self.query = query
        self._generation += 1
        generation = self._generation

        if not query:
            self.results = ()
            self.loading = False
            return self.results

        self.loading = True
        try:
            found = await self._search(query)
        except Exception:
            logger.exception("Error searching users for %r", query)
            if generation == self._generation:
                self.loading = False
            return self.results

        # A newer query owns the state now.
        if generation != self._generation:
            return self.results

        self.results = tuple(found)
        self.loading = False
        return self.results

    def render(self) -> ListRender:
        if self.loading:
            return ListRender(title="Search", placeholder=True)
        if not self.results:
            return ListRender(title="Search", empty_message=SEARCH_EMPTY_MESSAGE)
        return ListRender(title="Search", items=tuple(user_item_view(link) for link in self.results))


__all__ = ["CommentComposer", "PostActions", "UserSearch"]
