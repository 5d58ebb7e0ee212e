"""Helpers shared by the post use cases."""

from uuid import UUID

from fpv.application.usecase.dto import BlogInfo
from fpv.domain.error import NotFoundError
from fpv.domain.model import Post
from fpv.domain.service import UserService
from fpv.domain.value import PostId


def parse_post_id(value: str) -> PostId:
    """Parse a post ID from a path segment.

    A malformed ID can't name an existing post, so it is reported as not found.

    Raises:
        NotFoundError: If `value` is not a UUID
    """
    try:
        return PostId(UUID(value))
    except (TypeError, ValueError) as e:
        raise NotFoundError("Blog post", value, message="Blog post not found") from e


async def blogs_with_authors(
    posts: list[Post], user_service: UserService
) -> list[BlogInfo]:
    """Resolve authors for a batch of posts with one lookup."""
    authors = await user_service.get_authors(post.author_id for post in posts)
    return [BlogInfo.from_post(post, authors.get(post.author_id)) for post in posts]


async def blog_with_author(post: Post, user_service: UserService) -> BlogInfo:
    blogs = await blogs_with_authors([post], user_service)
    return blogs[0]
