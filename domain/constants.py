"""
This module contains centralized constants used throughout the application,
ensuring a single source of truth for collection names, routes and the
per-collection table settings every list page is built from.
"""
from domain.models import CollectionSpec

# Collection used for the post-login allow-list lookup
ADMINS_TABLE = "admins"

# Tables counted on the landing dashboard, in display order
DASHBOARD_TABLES = [
    "users", "messages", "likes", "comments",
    "reels", "profiles", "search_profiles", "user_favs",
]

# Weekday labels in display order (Sunday=0)
WEEKDAY_LABELS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
WEEKDAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday",
                 "Thursday", "Friday", "Saturday"]

ACCESS_DENIED_MESSAGE = "Access denied! You are not an admin."

# Collection -> route of the page listing it (dashboard stat cards link here)
TABLE_ROUTES = {
    "users": "users",
    "messages": "chats",
    "likes": "matches",
    "comments": "comments",
    "reels": "reels",
    "profiles": "profiles",
    "search_profiles": "search-profiles",
    "user_favs": "user-favs",
}

TABLE_ICONS = {
    "users": "👥",
    "messages": "💬",
    "likes": "❤️",
    "comments": "🗨️",
    "reels": "🎬",
    "profiles": "👤",
    "search_profiles": "🔍",
    "user_favs": "⭐",
}

COLLECTIONS = {
    "users": CollectionSpec(
        name="users",
        label="All Registered Users",
        route="users",
        order_by="created_at",
        ascending=False,
        search_fields=("username", "email", "city", "country", "number"),
        columns=("username", "email", "age", "city",
                 "country", "number", "created_at"),
        required_fields=("username", "email"),
        can_delete=True,
        can_insert=True,
        noun="user",
        icon="👥",
    ),
    "chats": CollectionSpec(
        name="messages",
        label="Chats",
        route="chats",
        order_by="created_at",
        ascending=True,
        search_fields=("username", "text", "user_id"),
        columns=("username", "text", "user_id", "created_at"),
        can_delete=True,
        noun="message",
        icon="💬",
    ),
    "matches": CollectionSpec(
        name="likes",
        label="Likes & Matches",
        route="matches",
        order_by="created_at",
        ascending=True,
        search_fields=("user_id", "target_id"),
        columns=("user_id", "target_id", "created_at"),
        noun="like",
        icon="❤️",
    ),
    "comments": CollectionSpec(
        name="comments",
        label="User Comments",
        route="comments",
        order_by="created_at",
        ascending=True,
        select="id,created_at,user_id,reel_id,comment_text",
        search_fields=("comment_text", "user_id", "reel_id"),
        columns=("user_id", "reel_id", "comment_text", "created_at"),
        noun="comment",
        icon="🗨️",
        column_labels={"user_id": "User ID", "reel_id": "Reel ID",
                       "comment_text": "Comment", "created_at": "Created At"},
    ),
    # Reel comment moderation: same collection as /comments, with edit/delete
    "reels": CollectionSpec(
        name="comments",
        label="Reels",
        route="reels",
        order_by="created_at",
        ascending=True,
        select="id,created_at,user_id,reel_id,comment_text",
        search_fields=("comment_text", "user_id", "reel_id"),
        columns=("user_id", "reel_id", "comment_text", "created_at"),
        editable_field="comment_text",
        can_delete=True,
        noun="comment",
        icon="🎬",
        column_labels={"user_id": "User ID", "reel_id": "Reel ID",
                       "comment_text": "Comment", "created_at": "Created At"},
    ),
    "profiles": CollectionSpec(
        name="profiles",
        label="Profiles",
        route="profiles",
        order_by="username",
        ascending=True,
        search_fields=("username", "bio", "city", "country"),
        columns=("username", "bio", "city", "country"),
        noun="profile",
        icon="👤",
    ),
    "search-profiles": CollectionSpec(
        name="search_profiles",
        label="Search Profiles",
        route="search-profiles",
        order_by="username",
        ascending=True,
        select="id,username,bio,image_url,is_verified,city,country",
        search_fields=("username", "bio", "city", "country"),
        columns=("username", "is_verified", "city", "country", "bio"),
        noun="profile",
        icon="🔍",
    ),
    "user-favs": CollectionSpec(
        name="user_favs",
        label="User Favorites",
        route="user-favs",
        order_by="created_at",
        ascending=False,
        search_fields=("user_id", "target_id"),
        columns=("user_id", "target_id", "created_at"),
        noun="favorite",
        icon="⭐",
        column_labels={"user_id": "User ID", "target_id": "Target ID",
                       "created_at": "Created At"},
    ),
}
