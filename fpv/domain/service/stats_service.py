"""Aggregate statistics service."""

import logfire
from pydantic import BaseModel, Field

from fpv.domain.repository import PostRepository, UserRepository
from fpv.domain.value import Category, PostStatus

from .base import Service


class SiteStats(BaseModel):
    """Site-wide totals.

    Recomputed on every request; nothing is cached or kept incrementally.
    """

    total_posts: int = Field(ge=0)
    total_users: int = Field(ge=0)
    total_likes: int = Field(ge=0)
    categories: int = Field(ge=0)


class CategoryCount(BaseModel):
    """Number of published posts in one category."""

    category: Category
    count: int = Field(ge=1)


class StatsService(Service):
    """Domain service computing read-only aggregates."""

    def __init__(
        self, post_repository: PostRepository, user_repository: UserRepository
    ) -> None:
        """Initialize stats service.

        Args:
            post_repository: Post repository
            user_repository: User repository
        """
        self.post_repository = post_repository
        self.user_repository = user_repository

    async def get_stats(self) -> SiteStats:
        """Compute totals over published posts and all users.

        Returns:
            Published post count, user count, likes summed over published
            posts, and the number of categories
        """
        with logfire.span("stats_service.get_stats"):
            total_posts = await self.post_repository.count(PostStatus.PUBLISHED)
            total_users = await self.user_repository.count()
            total_likes = await self.post_repository.sum_likes(PostStatus.PUBLISHED)

            stats = SiteStats(
                total_posts=total_posts,
                total_users=total_users,
                total_likes=total_likes,
                categories=len(Category),
            )
            logfire.info("Stats computed", **stats.model_dump())
            return stats

    async def get_category_counts(self) -> list[CategoryCount]:
        """Count published posts per category.

        Returns:
            Non-empty categories, highest count first (ties by name)
        """
        with logfire.span("stats_service.get_category_counts"):
            counts = await self.post_repository.count_by_category(PostStatus.PUBLISHED)
            result = [
                CategoryCount(category=category, count=count)
                for category, count in sorted(
                    counts, key=lambda pair: (-pair[1], pair[0].value)
                )
                if count > 0
            ]
            logfire.info("Category counts computed", categories=len(result))
            return result
