"""Domain services."""

from .auth_service import AuthService, IdentityVerifier
from .base import Service
from .like_service import LikeResult, LikeService
from .post_service import (
    AuthorPostStats,
    PostChanges,
    PostDraft,
    PostService,
    validate_post_fields,
)
from .stats_service import CategoryCount, SiteStats, StatsService
from .user_service import UserService

__all__ = [
    "AuthService",
    "AuthorPostStats",
    "CategoryCount",
    "IdentityVerifier",
    "LikeResult",
    "LikeService",
    "PostChanges",
    "PostDraft",
    "PostService",
    "Service",
    "SiteStats",
    "StatsService",
    "UserService",
    "validate_post_fields",
]
