"""Response models shared by the use cases.

All of them serialize with camelCase keys (`featuredImage`, `likeCount`, ...),
which is the shape the web client reads.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from fpv.domain.model import Post, User
from fpv.domain.value import VerifiedIdentity


class CamelModel(BaseModel):
    """Base model exposing camelCase aliases while accepting field names too."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UserInfo(CamelModel):
    """Stored user record as returned to its owner."""

    id: str
    firebase_uid: str
    email: str
    name: str
    image: Optional[str]
    provider: str
    created_at: datetime
    last_login_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserInfo":
        return cls(
            id=str(user.id),
            firebase_uid=user.external_id,
            email=user.email,
            name=user.name,
            image=user.image,
            provider=user.provider,
            created_at=user.created_at,
            last_login_at=user.last_login_at,
        )


class IdentityInfo(CamelModel):
    """Claims of a verified token."""

    firebase_uid: str
    email: Optional[str]
    name: Optional[str]
    image: Optional[str]
    provider: str

    @classmethod
    def from_identity(cls, identity: VerifiedIdentity) -> "IdentityInfo":
        return cls(
            firebase_uid=identity.external_id,
            email=identity.email,
            name=identity.display_name,
            image=identity.avatar_url,
            provider=identity.provider,
        )


class AuthorSummary(CamelModel):
    """Public view of a post's author."""

    id: str
    name: str
    email: str
    image: Optional[str]

    @classmethod
    def from_user(cls, user: User) -> "AuthorSummary":
        return cls(id=str(user.id), name=user.name, email=user.email, image=user.image)


class BlogInfo(CamelModel):
    """A post with its like count and resolved author."""

    id: str
    author_id: str
    author: Optional[AuthorSummary]
    title: str
    excerpt: str
    content: str
    category: str
    tags: list[str]
    featured_image: Optional[str]
    read_time: int
    view_count: int
    likes: list[str]
    like_count: int
    comment_count: int = 0  # Comments are not implemented
    status: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_post(cls, post: Post, author: Optional[User]) -> "BlogInfo":
        return cls(
            id=str(post.id),
            author_id=str(post.author_id),
            author=AuthorSummary.from_user(author) if author else None,
            title=post.title,
            excerpt=post.excerpt,
            content=post.content,
            category=post.category.value,
            tags=list(post.tags),
            featured_image=post.featured_image,
            read_time=post.read_time,
            view_count=post.view_count,
            likes=[str(user_id) for user_id in post.likes],
            like_count=post.like_count,
            status=post.status.value,
            created_at=post.created_at,
            updated_at=post.updated_at,
        )
