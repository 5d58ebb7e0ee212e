"""Domain model entities for Project FPV."""

from fpv.domain.model.post import Post
from fpv.domain.model.user import User

__all__ = [
    "User",
    "Post",
]
