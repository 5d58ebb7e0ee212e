"""Post repository interface."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel

from fpv.domain.model.post import Post
from fpv.domain.value import Category, PostId, PostStatus, UserId


class PostSortOrder(str, Enum):
    """Sort order for post listings."""

    LATEST = "latest"  # Sort by created_at DESC
    MOST_LIKED = "mostLiked"  # Sort by like count DESC
    MOST_VIEWED = "mostViewed"  # Sort by view_count DESC

    @classmethod
    def _missing_(cls, value):
        # Values sent by the original web client
        aliases = {"likes": cls.MOST_LIKED, "views": cls.MOST_VIEWED}
        if isinstance(value, str):
            return aliases.get(value)
        return None


# Columns an author can change; view_count and likes are only ever changed
# by increment_view_count and toggle_like
EDITABLE_FIELDS = frozenset(
    {
        "title",
        "excerpt",
        "content",
        "category",
        "tags",
        "featured_image",
        "read_time",
        "status",
        "updated_at",
    }
)


class PostFilter(BaseModel):
    """Filters for post listings.

    No pagination: the whole filtered result set is returned.
    """

    search: Optional[str] = None  # Case-insensitive substring of title/excerpt/content
    category: Optional[Category] = None  # None means all categories
    status: PostStatus = PostStatus.PUBLISHED
    sort: PostSortOrder = PostSortOrder.LATEST


class PostRepository(ABC):
    """Repository for Post aggregate.

    Defines the contract for post persistence operations.
    Implementations live in the persistence layer.
    """

    @abstractmethod
    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID.

        Args:
            post_id: The post's unique identifier

        Returns:
            The post if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all(self, post_filter: PostFilter) -> List[Post]:
        """Find posts matching a filter, sorted as requested.

        Ties in the requested order fall back to newest first.

        Args:
            post_filter: Search, category, status and sort options

        Returns:
            Every matching post
        """
        pass

    @abstractmethod
    async def find_by_author(self, author_id: UserId) -> List[Post]:
        """Find all posts by an author (any status), newest first.

        Args:
            author_id: The author's user ID

        Returns:
            List of posts by the author
        """
        pass

    @abstractmethod
    async def save(self, post: Post) -> Post:
        """Save a post (create or update).

        A new post is stored with its like set. For an existing post only
        EDITABLE_FIELDS are written; the stored view count and likes stay.

        Args:
            post: The post to save

        Returns:
            The saved post
        """
        pass

    @abstractmethod
    async def update_fields(
        self, post_id: PostId, fields: dict[str, Any]
    ) -> Optional[Post]:
        """Overwrite the given editable columns of one post.

        Args:
            post_id: The post ID
            fields: Subset of EDITABLE_FIELDS to new values

        Returns:
            The post as stored after the write, or None if it doesn't exist

        Raises:
            ValueError: If a field outside EDITABLE_FIELDS is given
        """
        pass

    @abstractmethod
    async def delete(self, post_id: PostId) -> bool:
        """Delete a post and its likes (hard delete).

        Args:
            post_id: The post ID to delete

        Returns:
            True if a post was deleted, False if none existed
        """
        pass

    @abstractmethod
    async def increment_view_count(self, post_id: PostId) -> Optional[Post]:
        """Atomically increment view_count by 1.

        Args:
            post_id: The post ID

        Returns:
            The updated post, or None if the post doesn't exist
        """
        pass

    @abstractmethod
    async def toggle_like(
        self, post_id: PostId, user_id: UserId
    ) -> Optional[tuple[bool, int]]:
        """Add the user to the like set, or remove them if already present.

        Toggles on the same post are applied one after another.

        Args:
            post_id: The post ID
            user_id: The liking user's ID

        Returns:
            (liked, like_count) after the toggle, or None if the post doesn't exist
        """
        pass

    @abstractmethod
    async def count(self, status: Optional[PostStatus] = None) -> int:
        """Count posts, optionally restricted to one status.

        Args:
            status: Status to count (None for all)

        Returns:
            Number of posts
        """
        pass

    @abstractmethod
    async def sum_likes(self, status: Optional[PostStatus] = None) -> int:
        """Sum like-set sizes across posts (full scan).

        Args:
            status: Status to include (None for all)

        Returns:
            Total number of likes
        """
        pass

    @abstractmethod
    async def count_by_category(
        self, status: Optional[PostStatus] = None
    ) -> List[tuple[Category, int]]:
        """Count posts per category, highest count first.

        Categories without posts are omitted.

        Args:
            status: Status to include (None for all)

        Returns:
            List of (category, count) pairs
        """
        pass
