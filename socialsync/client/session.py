"""Per-viewer wiring of the interaction controllers around one API client."""
from __future__ import annotations

from typing import Callable
from uuid import UUID

from .actions import CommentComposer, PostActions, UserSearch
from .api import SocialApiClient
from .notify import Notifier, ToastQueue
from .optimistic import OptimisticToggleController, follow_controller, like_controller
from .relations import RelationListView


class ViewerSession:
    """Everything a rendered page needs to act on behalf of one viewer.

    ``viewer_id`` is ``None`` for anonymous visitors; their toggles trigger
    ``on_sign_in_required`` instead of a remote call.
    """

    def __init__(
        self,
        api: SocialApiClient,
        *,
        viewer_id: UUID | str | None = None,
        notifier: Notifier | None = None,
        on_sign_in_required: Callable[[], None] | None = None,
    ) -> None:
        self.api = api
        self.viewer_id = str(viewer_id) if viewer_id is not None else None
        self.notifier: Notifier = notifier if notifier is not None else ToastQueue()
        self.likes: OptimisticToggleController = like_controller(
            api, notifier=self.notifier, on_sign_in_required=on_sign_in_required
        )
        self.follows: OptimisticToggleController = follow_controller(
            api, notifier=self.notifier, on_sign_in_required=on_sign_in_required
        )
        self.posts = PostActions(
            delete_post=api.delete_post,
            delete_comment=api.delete_comment,
            notifier=self.notifier,
        )

    def relation_view(self) -> RelationListView:
        return RelationListView(self.api.fetch_relation_links, viewer_id=self.viewer_id)

    def comment_composer(self, post_id: UUID | str) -> CommentComposer:
        return CommentComposer(post_id, self.api.submit_comment, notifier=self.notifier)

    def user_search(self) -> UserSearch:
        return UserSearch(self.api.search_users)


__all__ = ["ViewerSession"]
