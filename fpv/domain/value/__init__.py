"""Domain value objects for Project FPV."""

from fpv.domain.value.identifiers import PostId, UserId
from fpv.domain.value.types import (
    EMAIL_MAX_LENGTH,
    EXCERPT_MAX_LENGTH,
    NAME_MAX_LENGTH,
    AuthProvider,
    Category,
    FieldError,
    PostStatus,
    VerifiedIdentity,
    estimate_read_time,
)

__all__ = [
    # Identifiers
    "UserId",
    "PostId",
    # Types
    "AuthProvider",
    "Category",
    "FieldError",
    "PostStatus",
    "VerifiedIdentity",
    # Rules
    "EMAIL_MAX_LENGTH",
    "EXCERPT_MAX_LENGTH",
    "NAME_MAX_LENGTH",
    "estimate_read_time",
]
