"""Client-side interaction layer: optimistic toggles, relation lists and actions."""
from .actions import CommentComposer, PostActions, UserSearch
from .api import RemoteCallError, SocialApiClient
from .notify import Notifier, Toast, ToastLevel, ToastQueue
from .optimistic import OptimisticToggleController, ToggleOutcome, follow_controller, like_controller
from .presentation import ListRender, UserItemView, liked_by_text, render_relation_list
from .relations import RelationListView
from .session import ViewerSession
from .state import MutationResult, RelationKind, RelationLink, RelationListPhase, ToggleViewState

__all__ = [
    "CommentComposer",
    "PostActions",
    "UserSearch",
    "RemoteCallError",
    "SocialApiClient",
    "Notifier",
    "Toast",
    "ToastLevel",
    "ToastQueue",
    "OptimisticToggleController",
    "ToggleOutcome",
    "follow_controller",
    "like_controller",
    "ListRender",
    "UserItemView",
    "liked_by_text",
    "render_relation_list",
    "RelationListView",
    "ViewerSession",
    "MutationResult",
    "RelationKind",
    "RelationLink",
    "RelationListPhase",
    "ToggleViewState",
]
