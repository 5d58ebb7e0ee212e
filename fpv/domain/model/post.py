"""Post aggregate root.

Blog posts about FPV flying, owned by their author. Only the author edits or
deletes a post; the system itself bumps the view counter and toggles likes.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from fpv.domain.model.common import DomainModel, utcnow
from fpv.domain.value import (
    EXCERPT_MAX_LENGTH,
    Category,
    PostId,
    PostStatus,
    UserId,
)


class Post(DomainModel):
    """Post aggregate root.

    `likes` is the like set: each user appears at most once, in the order
    they liked the post.
    """

    id: PostId
    author_id: UserId
    title: str = Field(min_length=1)
    excerpt: str = Field(min_length=1, max_length=EXCERPT_MAX_LENGTH)
    content: str = Field(min_length=1)
    category: Category
    tags: list[str] = Field(default_factory=list)
    featured_image: Optional[str] = None
    read_time: int = Field(default=1, ge=1)
    view_count: int = Field(default=0, ge=0)
    likes: list[UserId] = Field(default_factory=list)
    status: PostStatus = PostStatus.PUBLISHED
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @field_validator("likes")
    @classmethod
    def validate_unique_likes(cls, v: list[UserId]) -> list[UserId]:
        """A user may like a post at most once."""
        if len(set(v)) != len(v):
            raise ValueError("A user can appear only once in the like set")
        return v

    @property
    def like_count(self) -> int:
        """Size of the like set."""
        return len(self.likes)

    @property
    def is_published(self) -> bool:
        return self.status == PostStatus.PUBLISHED

    def is_liked_by(self, user_id: UserId) -> bool:
        return user_id in self.likes
