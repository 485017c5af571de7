"""Convenience exports for service layer."""
from .auth_service import (
    authenticate_user,
    create_access_token,
    decode_access_token,
    get_current_user,
    get_optional_user,
    register_user,
)
from .follow_service import (
    FollowStats,
    follow_user,
    get_follow_stats,
    list_follow_relations,
    toggle_follow,
    unfollow_user,
    user_summary,
)
from .post_service import (
    create_post_comment,
    create_post_record,
    delete_post_comment,
    delete_post_record,
    list_feed_records,
    list_liking_users,
    list_post_comments,
    toggle_post_like,
)
from .profile_service import get_profile, get_user_by_username, search_users, update_profile

__all__ = [
    "authenticate_user",
    "register_user",
    "create_access_token",
    "decode_access_token",
    "get_current_user",
    "get_optional_user",
    "FollowStats",
    "follow_user",
    "unfollow_user",
    "toggle_follow",
    "get_follow_stats",
    "list_follow_relations",
    "user_summary",
    "create_post_comment",
    "create_post_record",
    "delete_post_comment",
    "delete_post_record",
    "list_feed_records",
    "list_liking_users",
    "list_post_comments",
    "toggle_post_like",
    "get_profile",
    "get_user_by_username",
    "search_users",
    "update_profile",
]
