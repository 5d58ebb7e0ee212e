"""In-memory post repository for testing."""

from collections import Counter
from typing import Any, Optional

from fpv.domain.model.post import Post
from fpv.domain.repository.post import (
    EDITABLE_FIELDS,
    PostFilter,
    PostRepository,
    PostSortOrder,
)
from fpv.domain.value import Category, PostId, PostStatus, UserId

from .store import InMemoryStore


def _matches_search(post: Post, search: str) -> bool:
    needle = search.casefold()
    return any(
        needle in text.casefold() for text in (post.title, post.excerpt, post.content)
    )


class InMemoryPostRepository(PostRepository):
    """In-memory implementation of PostRepository for testing."""

    def __init__(self, store: InMemoryStore | None = None) -> None:
        self._store = store or InMemoryStore()

    @property
    def _posts(self) -> dict[PostId, Post]:
        return self._store.posts

    async def find_by_id(self, post_id: PostId) -> Optional[Post]:
        """Find a post by ID."""
        return self._posts.get(post_id)

    async def find_all(self, post_filter: PostFilter) -> list[Post]:
        """Find posts matching a filter."""
        posts = [p for p in self._posts.values() if p.status == post_filter.status]

        # Filter by category
        if post_filter.category is not None:
            posts = [p for p in posts if p.category == post_filter.category]

        # Filter by search text
        if post_filter.search:
            posts = [p for p in posts if _matches_search(p, post_filter.search)]

        # Newest first, then a stable sort on the requested key keeps that
        # order among ties
        posts.sort(key=lambda p: p.created_at, reverse=True)
        if post_filter.sort == PostSortOrder.MOST_LIKED:
            posts.sort(key=lambda p: p.like_count, reverse=True)
        elif post_filter.sort == PostSortOrder.MOST_VIEWED:
            posts.sort(key=lambda p: p.view_count, reverse=True)

        return posts

    async def find_by_author(self, author_id: UserId) -> list[Post]:
        """Find posts by a specific author (any status)."""
        posts = [p for p in self._posts.values() if p.author_id == author_id]

        # Sort by recent
        posts.sort(key=lambda p: p.created_at, reverse=True)
        return posts

    async def save(self, post: Post) -> Post:
        """Save a new post, or overwrite an existing post's editable fields."""
        if post.id in self._posts:
            updated = await self.update_fields(
                post.id, post.model_dump(include=set(EDITABLE_FIELDS))
            )
            return updated or post

        self._posts[post.id] = post
        return post

    async def update_fields(
        self, post_id: PostId, fields: dict[str, Any]
    ) -> Optional[Post]:
        """Overwrite editable fields on the currently stored post."""
        unknown = set(fields) - EDITABLE_FIELDS
        if unknown:
            raise ValueError(f"Not editable: {sorted(unknown)}")

        post = self._posts.get(post_id)
        if post is None:
            return None

        updated_post = post.model_copy(update=fields)
        self._posts[post_id] = updated_post
        return updated_post

    async def delete(self, post_id: PostId) -> bool:
        """Delete a post."""
        return self._posts.pop(post_id, None) is not None

    async def increment_view_count(self, post_id: PostId) -> Optional[Post]:
        """Increment view_count by 1."""
        post = self._posts.get(post_id)
        if post is None:
            return None

        updated_post = post.model_copy(update={"view_count": post.view_count + 1})
        self._posts[post_id] = updated_post
        return updated_post

    async def toggle_like(
        self, post_id: PostId, user_id: UserId
    ) -> Optional[tuple[bool, int]]:
        """Toggle a like (no await between read and write, so it can't interleave)."""
        post = self._posts.get(post_id)
        if post is None:
            return None

        if post.is_liked_by(user_id):
            likes = [uid for uid in post.likes if uid != user_id]
        else:
            likes = [*post.likes, user_id]

        updated_post = post.model_copy(update={"likes": likes})
        self._posts[post_id] = updated_post
        return updated_post.is_liked_by(user_id), updated_post.like_count

    async def count(self, status: Optional[PostStatus] = None) -> int:
        """Count posts, optionally restricted to one status."""
        return len(
            [p for p in self._posts.values() if status is None or p.status == status]
        )

    async def sum_likes(self, status: Optional[PostStatus] = None) -> int:
        """Sum like-set sizes across posts."""
        return sum(
            p.like_count
            for p in self._posts.values()
            if status is None or p.status == status
        )

    async def count_by_category(
        self, status: Optional[PostStatus] = None
    ) -> list[tuple[Category, int]]:
        """Count posts per category, highest count first."""
        counts = Counter(
            p.category
            for p in self._posts.values()
            if status is None or p.status == status
        )
        return sorted(counts.items(), key=lambda pair: (-pair[1], pair[0].value))
