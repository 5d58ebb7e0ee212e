"""Repository interfaces for the Project FPV domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from fpv.domain.repository.post import (
    EDITABLE_FIELDS,
    PostFilter,
    PostRepository,
    PostSortOrder,
)
from fpv.domain.repository.user import UserRepository

__all__ = [
    "UserRepository",
    "PostRepository",
    "PostFilter",
    "PostSortOrder",
    "EDITABLE_FIELDS",
]
